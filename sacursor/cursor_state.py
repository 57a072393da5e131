""" Cursor state: the last seen value of every sort key """

from __future__ import annotations

import dataclasses
from collections import abc
from typing import Any, TYPE_CHECKING

from sacursor.typing import Row, ValueGetter


if TYPE_CHECKING:
    from .orderspec import OrderSpec


@dataclasses.dataclass(frozen=True)
class CursorState:
    """ Cursor state: { field name => last seen value }

    An immutable value: every step of the iteration produces a new state.
    Empty before the first page.
    """
    values: abc.Mapping[str, Any] = dataclasses.field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return not self.values

    @property
    def has_nulls(self) -> bool:
        return any(value is None for value in self.values.values())

    def __getitem__(self, field: str) -> Any:
        return self.values[field]

    def advance(self, row: Row, specs: abc.Sequence[OrderSpec], get_value: ValueGetter) -> CursorState:
        """ Make a new state that points at `row`: its key tuple becomes the last seen values """
        return CursorState(values={
            spec.field: get_value(row, spec.field)
            for spec in specs
        })
