""" Value extraction: read named fields from result rows

Works uniformly with:
* ORM instances and other objects: attribute access
* dicts, RowMapping, and other mappings: item access
* SqlAlchemy `Row`: item access through its `._mapping`

Dot-notation walks nested values: "author.id" reads `row.author.id` or `row['author']['id']`
"""

from collections import abc
from typing import Any

from .typing import Row


def get_value(row: Row, field: str) -> Any:
    """ Get the value of `field` from a row

    Raises:
        KeyError: the row has no such field
    """
    # Exact match first: mappings may have keys with dots in them
    try:
        return _get_one(row, field)
    except KeyError:
        if '.' not in field:
            raise

    # Walk the path
    value = row
    for name in field.split('.'):
        value = _get_one(value, name)
    return value


def _get_one(row: Row, name: str) -> Any:
    # SqlAlchemy Row: a named tuple with a mapping view
    mapping = getattr(row, '_mapping', None)
    if isinstance(mapping, abc.Mapping):
        row = mapping

    if isinstance(row, abc.Mapping):
        return row[name]

    try:
        return getattr(row, name)
    except AttributeError as e:
        raise KeyError(name) from e
