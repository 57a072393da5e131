import pytest

from sacursor import exc, CursorIterator, SequenceQuery
from sacursor.batch import batched

from .util.recording import RecordingQuery


@pytest.mark.parametrize(('items', 'size', 'expected'), [
    ([], 3, []),
    ([1], 3, [[1]]),
    ([1, 2, 3], 3, [[1, 2, 3]]),
    ([1, 2, 3, 4], 3, [[1, 2, 3], [4]]),
    ([1, 2, 3], 1, [[1], [2], [3]]),
])
def test_batched(items: list, size: int, expected: list):
    assert list(batched(items, size)) == expected


def test_batched_invalid_size():
    for size in (0, -1):
        with pytest.raises(exc.ConfigurationError) as e:
            batched([1, 2, 3], size)
        assert e.value.reason == 'invalid batch size'


@pytest.mark.parametrize('batch_size', [1, 7, 10, 33, 100, 1000])
def test_batch_invariance(batch_size: int):
    """ Any batch size gives the same rows, in the same order """
    rows = [{'id': id} for id in range(123)]
    iterator = CursorIterator(SequenceQuery(rows, order_by=['id DESC'], limit=10))

    batches = list(iterator.batch(batch_size))

    # Same rows
    assert [row for batch in batches for row in batch] == list(iterator.iterate())

    # Full batches, then the remainder
    assert all(len(batch) == batch_size for batch in batches[:-1])
    assert 1 <= len(batches[-1]) <= batch_size


def test_batch_default_size():
    """ By default, batches are as large as pages """
    rows = [{'id': id} for id in range(25)]
    query = RecordingQuery(rows, order_by=['id'], limit=10)

    batches = list(CursorIterator(query).batch())
    assert [len(batch) for batch in batches] == [10, 10, 5]


def test_batch_empty():
    """ No rows: no batches, not one empty batch """
    iterator = CursorIterator(SequenceQuery([], order_by=['id'], limit=10))
    assert list(iterator.batch()) == []
    assert list(iterator.batch(3)) == []
