""" Read ORDER BY clauses: recognize `<field> ASC|DESC` shapes """

from __future__ import annotations

import re
from typing import NamedTuple, Optional, Union

import sqlalchemy as sa
from sqlalchemy.sql import operators
from sqlalchemy.sql.elements import (
    ColumnClause,
    Label,
    TextClause,
    UnaryExpression,
    _label_reference,
    _textual_label_reference,
)

from sacursor.typing import OrderByClause


class OrderByField(NamedTuple):
    """ An ORDER BY clause, unpacked """
    # The expression to compare against: a column, a labelled expression, or a qualified column name
    column: Union[sa.sql.ColumnElement, str]

    # Field name to read from result rows
    field: str

    # Sort direction
    ascending: bool


def unpack_order_by_clause(clause: OrderByClause) -> Optional[OrderByField]:
    """ Unpack an ORDER BY clause into (column, field, direction)

    Supports:
    * Columns, ORM attributes, literal columns: `User.id`, `table.c.id`, `literal_column('u.id')`
    * Labels: `func.lower(User.login).label('login')`
    * Directions: `.asc()`, `.desc()`; no direction means ASC
    * Text: `text('u.id DESC')`, 'id DESC'

    Returns:
        None if the clause has some other shape: functions, NULLS FIRST/LAST, arbitrary text
    """
    # order_by() wraps labels into a label reference
    if isinstance(clause, _label_reference):
        clause = clause.element

    # Text
    if isinstance(clause, str):
        return parse_order_by_string(clause)
    if isinstance(clause, TextClause):
        return parse_order_by_string(clause.text)
    if isinstance(clause, _textual_label_reference):
        return parse_order_by_string(clause.element)

    # Direction
    ascending = True
    if isinstance(clause, UnaryExpression):
        if clause.modifier is operators.desc_op:
            ascending = False
        elif clause.modifier is operators.asc_op:
            ascending = True
        else:
            return None  # nullsfirst(), nullslast(), and other modifiers
        clause = clause.element

    # `desc('name')` wraps the string into a label reference
    if isinstance(clause, _label_reference):
        clause = clause.element
    if isinstance(clause, _textual_label_reference):
        parsed = parse_order_by_string(clause.element)
        return parsed and parsed._replace(ascending=ascending)

    # Column
    if isinstance(clause, Label):
        return OrderByField(column=clause.element, field=clause.name, ascending=ascending)
    elif isinstance(clause, ColumnClause):
        return OrderByField(column=clause, field=column_field_name(clause), ascending=ascending)
    else:
        return None


def parse_order_by_string(s: str) -> Optional[OrderByField]:
    """ Parse '<field> ASC|DESC' or '<table>.<field> ASC|DESC' """
    m = ORDER_BY_REX.match(s.strip())
    if not m:
        return None

    table, field, direction = m.groups()
    return OrderByField(
        column=f'{table}.{field}' if table else field,
        field=field,
        ascending=(direction or 'asc').lower() == 'asc',
    )


def column_field_name(column: ColumnClause) -> str:
    """ Get the name under which the column's value appears in result rows

    For ORM columns, that's the attribute name; for others, the column key.
    """
    # ORM attributes annotate their columns with the attribute name
    proxy_key = column._annotations.get('proxy_key')
    if proxy_key:
        return proxy_key

    # literal_column('u.id') -> 'id'
    if column.is_literal:
        return column.key.rsplit('.', 1)[-1]

    return column.key


# <field> [ASC|DESC], or <table>.<field> [ASC|DESC]
ORDER_BY_REX = re.compile(r'^(?:([a-z0-9_]+)\.)?([a-z0-9_]+)(?:\s+(ASC|DESC))?$', re.IGNORECASE)
