""" Ordering specification: the sort keys that keyset pagination walks along """

from __future__ import annotations

import logging
import dataclasses
from collections import abc
from typing import Any, Optional

from sacursor import exc
from sacursor.sainfo.order_by import OrderByField, unpack_order_by_clause
from sacursor.typing import OrderByClause


logger = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class OrderSpec:
    """ A single ordering rule: (field, direction) """
    # Field name, as found in result rows
    field: str

    # Sort direction: ASC?
    ascending: bool

    # The expression to compare against in the query: an SqlAlchemy column, or a qualified column name
    column: Any = dataclasses.field(default=None, compare=False)

    def __str__(self):
        return f'{self.field} {"ASC" if self.ascending else "DESC"}'


def extract_order_specs(clauses: abc.Iterable[OrderByClause], *, strict: bool = False,
                        resolve: Optional[abc.Callable[[OrderByField], OrderByField]] = None) -> tuple[OrderSpec, ...]:
    """ Get the list of OrderSpecs from ORDER BY clauses, in declaration order

    Args:
        clauses: ORDER BY clauses of the base query
        strict: fail on clauses that can't be used for pagination. Otherwise, skip them.
        resolve: the query's hook to match a clause against its result columns

    Raises:
        exc.ConfigurationError: 'missing ordering' when no usable clause is found
        exc.ConfigurationError: 'unsupported ordering' when `strict`, and some clause is not `<field> ASC|DESC`
        exc.ConfigurationError: 'ordering not selected' from `resolve`, when the sort key is not in the result
    """
    specs = []
    for clause in clauses:
        unpacked = unpack_order_by_clause(clause)

        if unpacked is None:
            if strict:
                raise exc.ConfigurationError('unsupported ordering', f'cannot paginate by {clause!s}')
            logger.warning('Skipping ORDER BY clause unsuitable for keyset pagination: %s', clause)
            continue

        if resolve is not None:
            unpacked = resolve(unpacked)

        specs.append(OrderSpec(field=unpacked.field, ascending=unpacked.ascending, column=unpacked.column))

    if not specs:
        raise exc.ConfigurationError('missing ordering', 'Please specify the ordering with order_by()')

    return tuple(specs)


def extract_page_limit(limit: Optional[int]) -> int:
    """ Validate the row limit of the base query

    Raises:
        exc.ConfigurationError: 'missing page size', 'invalid page size'
    """
    if limit is None:
        raise exc.ConfigurationError('missing page size', 'Please specify the page size with limit()')

    if isinstance(limit, bool) or not isinstance(limit, int) or limit <= 0:
        raise exc.ConfigurationError('invalid page size', f'limit must be a positive integer, got {limit!r}')

    return limit
