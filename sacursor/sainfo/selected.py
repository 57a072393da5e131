""" Match ORDER BY clauses against the columns a statement returns """

from __future__ import annotations

from typing import Optional

import sqlalchemy as sa
from sqlalchemy.sql.elements import ColumnClause, Label

from .order_by import OrderByField


def resolve_selected_column(stmt: sa.sql.Select, order_by: OrderByField) -> Optional[tuple[str, sa.sql.ColumnElement]]:
    """ Find the result column that an ORDER BY clause sorts by

    Result keys are de-duplicated: `select(u.c.id, p.c.id)` gives rows with keys "id" and "id_1".
    Labels are selected by name, but compared by their expression: WHERE can't refer to a label.

    Returns:
        (result key, expression to compare against), or None when the sort key is not selected
    """
    selected = list(stmt.selected_columns.items())
    column = order_by.column

    # By name: strings, text, label references, literal columns
    if isinstance(column, str):
        return _find_by_name(selected, column)
    if isinstance(column, ColumnClause) and column.is_literal:
        return _find_by_name(selected, column.key)

    # Same expression
    for key, col in selected:
        expr = _unlabel(col)
        if expr is column or expr.compare(column):
            return key, expr

    # Same column, seen through annotations or labels
    for key, col in selected:
        if _unlabel(col).shares_lineage(column):
            return key, column

    return None


def _find_by_name(selected: list[tuple[str, sa.sql.ColumnElement]], name: str) -> Optional[tuple[str, sa.sql.ColumnElement]]:
    table_name, _, field = name.rpartition('.')

    # "<table>.<column>": match the table as well
    if table_name:
        for key, col in selected:
            table = getattr(col, 'table', None)
            if getattr(col, 'name', None) == field and getattr(table, 'name', None) == table_name:
                return key, col

    for key, col in selected:
        if key == field:
            return key, _unlabel(col)

    return None


def _unlabel(col: sa.sql.ColumnElement) -> sa.sql.ColumnElement:
    return col.element if isinstance(col, Label) else col
