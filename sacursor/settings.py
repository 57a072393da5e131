from __future__ import annotations

import dataclasses
from typing import Optional, Any, TYPE_CHECKING

from .values import get_value


if TYPE_CHECKING:
    from .orderspec import OrderSpec
    from .typing import Row, ValueGetter


@dataclasses.dataclass
class CursorSettings:
    """ Settings for CursorIterator

    This object defines how the iterator treats the base query and the rows it gets back:
    how strict it is about ordering clauses, how parameters are named, how values are read from rows.
    """
    # Fail on ORDER BY clauses that cannot be used for keyset pagination?
    # When `False`, such clauses are skipped with a warning
    strict_ordering: bool = False

    # Prefix for bound parameter names: "cursor_id", "cursor_created_at", ...
    parameter_prefix: str = 'cursor_'

    # Custom value extractor: (row, field name) -> value
    value_getter: Optional[ValueGetter] = None

    # ### Callbacks for CursorIterator
    # The iterator will use these methods to apply the settings

    def get_parameter_name(self, spec: OrderSpec) -> str:
        """ Callback: name of the bound parameter that carries the last seen value of `spec.field` """
        return self.parameter_prefix + spec.field.replace('.', '_')

    def get_value(self, row: Row, field: str) -> Any:
        """ Callback: read the value of `field` from a result row

        Default behavior: use `value_getter`, fall back to `sacursor.values.get_value()`
        You can override this method for custom behavior
        """
        if self.value_getter is not None:
            return self.value_getter(row, field)
        else:
            return get_value(row, field)
