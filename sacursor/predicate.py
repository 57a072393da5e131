""" Tie-break predicate: "strictly after the last row" under a multi-field ordering

The predicate is a tree of boolean expressions:
leaves are comparisons of a field with a bound parameter; branches are OR/AND of two subtrees.
Adapters translate the tree into their own query representation with `compile_expression()`.

For ordering (a ASC, b DESC, c ASC) and cursor (A, B, C), the predicate is:

    a > :A OR (a = :A AND (b < :B OR (b = :B AND c > :C)))

Note that the key tuple must be unique: otherwise, rows that share the key tuple with the last row
of a page are skipped.
"""

from __future__ import annotations

import dataclasses
import functools
from collections import abc
from enum import Enum
from typing import Any, Optional, TypeVar, Union

from .cursor_state import CursorState
from .orderspec import OrderSpec


class ComparisonOperator(Enum):
    GT = '>'
    LT = '<'
    EQ = '='


@dataclasses.dataclass(frozen=True)
class Comparison:
    """ Leaf: <field> <op> :<parameter> """
    spec: OrderSpec
    op: ComparisonOperator
    parameter: str

    def __str__(self):
        return f'{self.spec.field} {self.op.value} ?'


@dataclasses.dataclass(frozen=True)
class Or:
    """ Branch: <left> OR <right> """
    left: Expression
    right: Expression

    def __str__(self):
        return f'{_group(self.left)} OR {_group(self.right)}'


@dataclasses.dataclass(frozen=True)
class And:
    """ Branch: <left> AND <right> """
    left: Expression
    right: Expression

    def __str__(self):
        return f'{_group(self.left)} AND {_group(self.right)}'


Expression = Union[Comparison, Or, And]


def build_predicate(specs: abc.Sequence[OrderSpec], state: CursorState, get_parameter_name: abc.Callable[[OrderSpec], str]) -> Optional[Expression]:
    """ Build the tie-break predicate for the next page

    Folds the ordering right-to-left, so that the most significant field ends up on top.

    Returns:
        None for the first page: the cursor is empty, no condition is needed
    """
    if state.is_empty:
        return None

    def fold(nested: Optional[Expression], spec: OrderSpec) -> Expression:
        parameter = get_parameter_name(spec)
        comparison = Comparison(spec, ComparisonOperator.GT if spec.ascending else ComparisonOperator.LT, parameter)

        # The least significant field: a plain comparison
        if nested is None:
            return comparison

        # Either strictly after on this field, or equal on it and strictly after on the rest
        return Or(comparison, And(Comparison(spec, ComparisonOperator.EQ, parameter), nested))

    return functools.reduce(fold, reversed(specs), None)  # type: ignore[arg-type]


def predicate_parameters(specs: abc.Sequence[OrderSpec], state: CursorState, get_parameter_name: abc.Callable[[OrderSpec], str]) -> dict[str, Any]:
    """ Get values for the parameters of the tie-break predicate: one parameter per field """
    return {
        get_parameter_name(spec): state[spec.field]
        for spec in specs
    }


T = TypeVar('T')


def compile_expression(expr: Expression, *,
                       comparison: abc.Callable[[Comparison], T],
                       or_: abc.Callable[[T, T], T],
                       and_: abc.Callable[[T, T], T]) -> T:
    """ Translate an expression tree bottom-up

    Args:
        expr: The expression to translate
        comparison: Translate a leaf
        or_: Combine two translated subtrees with OR
        and_: Combine two translated subtrees with AND
    """
    if isinstance(expr, Comparison):
        return comparison(expr)

    left = compile_expression(expr.left, comparison=comparison, or_=or_, and_=and_)
    right = compile_expression(expr.right, comparison=comparison, or_=or_, and_=and_)

    if isinstance(expr, Or):
        return or_(left, right)
    elif isinstance(expr, And):
        return and_(left, right)
    else:
        raise NotImplementedError(expr)


def _group(expr: Expression) -> str:
    """ Render a subtree, parenthesized unless it's a leaf """
    return str(expr) if isinstance(expr, Comparison) else f'({expr})'
