""" SelectQuery: paginate SqlAlchemy `Select` statements, Core or ORM """

from __future__ import annotations

import operator
from collections import abc
from enum import Enum
from typing import Any, Optional, Union

import sqlalchemy as sa
import sqlalchemy.orm

from sacursor import exc
from sacursor.predicate import Expression, Comparison, ComparisonOperator, compile_expression
from sacursor.sainfo.limit import get_statement_limit
from sacursor.sainfo.order_by import OrderByField
from sacursor.sainfo.selected import resolve_selected_column
from sacursor.typing import OrderByClause, Row


# Anything that can execute a statement
Bind = Union[sa.engine.Connection, sa.engine.Engine, sa.orm.Session]


class Hydration(Enum):
    """ The shape of result rows """
    # ORM instances: `result.scalars()`
    OBJECT = 'object'

    # Dict-like rows: `result.mappings()`
    MAPPING = 'mapping'

    # Named tuples: `Row`
    ROW = 'row'


class SelectQuery:
    """ A `Select` statement bound to a Connection, an Engine, or a Session

    Example:
        stmt = sa.select(User).order_by(User.created_at.desc(), User.id.desc()).limit(100)
        query = SelectQuery(stmt, session)
    """
    # The statement to paginate
    stmt: sa.sql.Select

    # The Connection, Engine, or Session to execute it with
    bind: Bind

    # The shape of result rows
    hydration: Hydration

    def __init__(self, stmt: sa.sql.Select, bind: Bind, hydration: Optional[Hydration] = None):
        """
        Args:
            stmt: The statement. Must have ORDER BY and LIMIT
            bind: Connection, Engine, or Session
            hydration: The shape of result rows.
                Default: ORM instances when a Session selects a single entity; mappings otherwise.
        """
        self.stmt = stmt
        self.bind = bind
        self.hydration = hydration or default_hydration(stmt, bind)

    __slots__ = 'stmt', 'bind', 'hydration'

    @property
    def order_by_clauses(self) -> abc.Sequence[OrderByClause]:
        return self.stmt._order_by_clauses

    @property
    def limit(self) -> Optional[int]:
        return get_statement_limit(self.stmt)

    def where(self, predicate: Expression) -> SelectQuery:
        return self._replace(self.stmt.where(compile_predicate(predicate)))

    def params(self, **values: Any) -> SelectQuery:
        return self._replace(self.stmt.params(**values))

    def resolve_order_by(self, order_by: OrderByField) -> OrderByField:
        """ Sort keys are read from the result under their result key: "id_1" when two columns are named "id"

        Labels are compared by their expression, because WHERE can't refer to them.
        """
        resolved = resolve_selected_column(self.stmt, order_by)
        if resolved is None:
            raise exc.ConfigurationError('ordering not selected', f'sort key {order_by.field!r} must be one of the selected columns')

        key, column = resolved

        # ORM instances are read by attribute name
        field = order_by.field if self.hydration == Hydration.OBJECT else key
        return order_by._replace(column=column, field=field)

    def execute(self, execution_options: abc.Mapping[str, Any]) -> list[Row]:
        # Engine: borrow a connection for this one page
        if isinstance(self.bind, sa.engine.Engine):
            with self.bind.connect() as connection:
                return self._fetch_rows(connection, execution_options)
        else:
            return self._fetch_rows(self.bind, execution_options)

    def _fetch_rows(self, bind: Union[sa.engine.Connection, sa.orm.Session], execution_options: abc.Mapping[str, Any]) -> list[Row]:
        result = bind.execute(self.stmt, execution_options=dict(execution_options))

        if self.hydration == Hydration.OBJECT:
            # Joined eager loading repeats the entity once per related row
            return list(result.unique().scalars().all())
        elif self.hydration == Hydration.MAPPING:
            return list(result.mappings().all())
        else:
            return list(result.all())

    def _replace(self, stmt: sa.sql.Select) -> SelectQuery:
        return type(self)(stmt, self.bind, self.hydration)


def default_hydration(stmt: sa.sql.Select, bind: Bind) -> Hydration:
    """ ORM instances for Session queries that select one entity; mappings for everything else """
    if isinstance(bind, sa.orm.Session) and selects_single_entity(stmt):
        return Hydration.OBJECT
    else:
        return Hydration.MAPPING


def selects_single_entity(stmt: sa.sql.Select) -> bool:
    """ Check: is it `select(Model)`? """
    descriptions = stmt.column_descriptions
    return (
        len(descriptions) == 1 and
        descriptions[0].get('entity') is not None and
        descriptions[0]['expr'] is descriptions[0]['entity']
    )


def compile_predicate(predicate: Expression) -> sa.sql.ColumnElement:
    """ Translate a predicate into an SqlAlchemy expression

    Every field gets one bind parameter. It's used twice: with `>`/`<`, and with `=`.
    Its value is set later, with `Select.params()`
    """
    return compile_expression(
        predicate,
        comparison=compile_comparison,
        or_=sa.or_,
        and_=sa.and_,
    )


def compile_comparison(comparison: Comparison) -> sa.sql.ColumnElement:
    column = comparison.spec.column
    if column is None or isinstance(column, str):
        column = sa.literal_column(column or comparison.spec.field)

    parameter = sa.bindparam(comparison.parameter, type_=column.type)
    return OPERATORS[comparison.op](column, parameter)


OPERATORS = {
    ComparisonOperator.GT: operator.gt,
    ComparisonOperator.LT: operator.lt,
    ComparisonOperator.EQ: operator.eq,
}
