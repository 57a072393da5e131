from collections import abc
from typing import TypeVar

from sacursor import exc


T = TypeVar('T')


def batched(items: abc.Iterable[T], size: int) -> abc.Iterator[list[T]]:
    """ Regroup a sequence into lists of `size` items. The last one holds the remainder.

    An empty sequence gives no batches at all.

    Raises:
        exc.ConfigurationError: 'invalid batch size'
    """
    if size < 1:
        raise exc.ConfigurationError('invalid batch size', f'batch size must be at least 1, got {size!r}')

    return _batched(items, size)


def _batched(items: abc.Iterable[T], size: int) -> abc.Iterator[list[T]]:
    batch: list[T] = []
    for item in items:
        batch.append(item)
        if len(batch) >= size:
            yield batch
            batch = []

    if batch:
        yield batch
