""" SequenceQuery: paginate an in-memory sequence of records

A tiny query engine over Python lists: records are dicts or objects.
Filters with predicates, sorts with ORDER BY strings, cuts with LIMIT.
"""

from __future__ import annotations

import copy
import operator
from collections import abc
from typing import Any, Optional

from sacursor.predicate import Expression, Comparison, ComparisonOperator, compile_expression
from sacursor.sainfo.order_by import OrderByField, parse_order_by_string
from sacursor.typing import Row, ValueGetter
from sacursor.values import get_value


class SequenceQuery:
    """ A query against a sequence of records

    Example:
        query = SequenceQuery(rows, order_by=['created_at DESC', 'id DESC'], limit=100)
    """
    # The records to query
    rows: abc.Sequence[Row]

    # ORDER BY: '<field> ASC|DESC' strings
    order_by_clauses: tuple[str, ...]

    # LIMIT
    limit: Optional[int]

    # Filter conditions, AND-ed
    predicates: tuple[Expression, ...]

    # Bound parameters: { name => value }
    parameters: dict[str, Any]

    # Reads fields from records
    value_getter: ValueGetter

    def __init__(self, rows: abc.Sequence[Row], order_by: abc.Iterable[str] = (), limit: Optional[int] = None, *,
                 value_getter: ValueGetter = get_value):
        self.rows = rows
        self.order_by_clauses = tuple(order_by)
        self.limit = limit
        self.value_getter = value_getter
        self.predicates = ()
        self.parameters = {}

    def where(self, predicate: Expression) -> SequenceQuery:
        query = copy.copy(self)
        query.predicates = self.predicates + (predicate,)
        return query

    def params(self, **values: Any) -> SequenceQuery:
        query = copy.copy(self)
        query.parameters = {**self.parameters, **values}
        return query

    def resolve_order_by(self, order_by: OrderByField) -> OrderByField:
        return order_by

    def execute(self, execution_options: abc.Mapping[str, Any]) -> list[Row]:
        # Filter
        conditions = [self._compile_condition(predicate) for predicate in self.predicates]
        rows = [
            row
            for row in self.rows
            if all(condition(row) for condition in conditions)
        ]

        # Sort: least significant field first; every next sort is stable
        for clause in reversed(self.order_by_clauses):
            order_by = parse_order_by_string(clause)
            if order_by is None:
                continue
            rows.sort(key=lambda row: self.value_getter(row, order_by.field), reverse=not order_by.ascending)  # type: ignore[union-attr]

        # Limit
        if self.limit is not None:
            rows = rows[:self.limit]

        return rows

    def _compile_condition(self, predicate: Expression) -> abc.Callable[[Row], bool]:
        """ Translate a predicate into a Python function: row => bool """
        def comparison(expr: Comparison) -> abc.Callable[[Row], bool]:
            op = OPERATORS[expr.op]
            value = self.parameters[expr.parameter]
            return lambda row: op(self.value_getter(row, expr.spec.field), value)

        return compile_expression(
            predicate,
            comparison=comparison,
            or_=lambda left, right: lambda row: left(row) or right(row),
            and_=lambda left, right: lambda row: left(row) and right(row),
        )


OPERATORS = {
    ComparisonOperator.GT: operator.gt,
    ComparisonOperator.LT: operator.lt,
    ComparisonOperator.EQ: operator.eq,
}
