import pytest

from sacursor import CursorSettings, CursorState, OrderSpec
from sacursor.predicate import (
    build_predicate, predicate_parameters, compile_expression,
    Comparison, ComparisonOperator, Or, And,
)


settings = CursorSettings()


def test_first_page_has_no_predicate():
    specs = [OrderSpec('id', True)]
    assert build_predicate(specs, CursorState(), settings.get_parameter_name) is None


@pytest.mark.parametrize(('specs', 'expected_predicate'), [
    # Single field: a plain comparison, no nesting
    ([OrderSpec('id', True)], 'id > ?'),
    ([OrderSpec('id', False)], 'id < ?'),
    # Two fields
    ([OrderSpec('createdAt', False), OrderSpec('id', False)],
     'createdAt < ? OR (createdAt = ? AND id < ?)'),
    ([OrderSpec('a', True), OrderSpec('id', False)],
     'a > ? OR (a = ? AND id < ?)'),
    # Three fields: most significant on top
    ([OrderSpec('a', True), OrderSpec('b', False), OrderSpec('c', True)],
     'a > ? OR (a = ? AND (b < ? OR (b = ? AND c > ?)))'),
])
def test_build_predicate(specs: list[OrderSpec], expected_predicate: str):
    state = CursorState({spec.field: 1 for spec in specs})
    predicate = build_predicate(specs, state, settings.get_parameter_name)
    assert str(predicate) == expected_predicate


def test_build_predicate_tree():
    specs = [OrderSpec('createdAt', False), OrderSpec('id', False)]
    state = CursorState({'createdAt': 20, 'id': 5})
    predicate = build_predicate(specs, state, settings.get_parameter_name)

    # The same parameter is used for both comparisons of a field
    assert predicate == Or(
        Comparison(specs[0], ComparisonOperator.LT, 'cursor_createdAt'),
        And(
            Comparison(specs[0], ComparisonOperator.EQ, 'cursor_createdAt'),
            Comparison(specs[1], ComparisonOperator.LT, 'cursor_id'),
        ),
    )

    # One value per field
    assert predicate_parameters(specs, state, settings.get_parameter_name) == {
        'cursor_createdAt': 20,
        'cursor_id': 5,
    }


def test_parameter_names():
    specs = [OrderSpec('author.id', True)]
    state = CursorState({'author.id': 7})
    name = CursorSettings(parameter_prefix='after_').get_parameter_name

    assert predicate_parameters(specs, state, name) == {'after_author_id': 7}


def test_compile_expression():
    """ Translate a predicate, e.g. into a Python function """
    specs = [OrderSpec('a', True), OrderSpec('b', False)]
    predicate = build_predicate(specs, CursorState({'a': 1, 'b': 10}), settings.get_parameter_name)

    # Render it with named parameters
    sql = compile_expression(
        predicate,
        comparison=lambda c: f'{c.spec.field} {c.op.value} :{c.parameter}',
        or_=lambda left, right: f'({left} OR {right})',
        and_=lambda left, right: f'({left} AND {right})',
    )
    assert sql == '(a > :cursor_a OR (a = :cursor_a AND b < :cursor_b))'
