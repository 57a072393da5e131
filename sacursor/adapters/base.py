from __future__ import annotations

from collections import abc
from typing import Any, Optional, Protocol, TYPE_CHECKING

from sacursor.sainfo.order_by import OrderByField
from sacursor.typing import OrderByClause, Row


if TYPE_CHECKING:
    from sacursor.predicate import Expression


class CursorQuery(Protocol):
    """ The query a CursorIterator paginates: a capability interface

    Implementations are generative: `where()` and `params()` return modified copies and never change the receiver.
    This way, the base query stays intact, and every page is fetched with a fresh copy.
    """

    @property
    def order_by_clauses(self) -> abc.Sequence[OrderByClause]:
        """ ORDER BY clauses, in declaration order """

    @property
    def limit(self) -> Optional[int]:
        """ The row limit: becomes the page size """

    def where(self, predicate: Expression) -> CursorQuery:
        """ Get a copy with an additional filter condition, AND-ed with the existing ones """

    def params(self, **values: Any) -> CursorQuery:
        """ Get a copy with named parameters bound to values """

    def resolve_order_by(self, order_by: OrderByField) -> OrderByField:
        """ Match an ORDER BY clause with the result: which field to read, which expression to compare

        Raises:
            exc.ConfigurationError: 'ordering not selected'
        """

    def execute(self, execution_options: abc.Mapping[str, Any]) -> list[Row]:
        """ Execute, get all rows, in result order """
