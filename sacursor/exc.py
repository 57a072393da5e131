from typing import Optional


class BaseSacursorException(Exception):
    pass


class ConfigurationError(BaseSacursorException, ValueError):
    """ The query cannot be paginated with a cursor

    Reported at construction time, before any row is fetched:
    the base query has no usable ordering, no limit, or an invalid limit.

    Attributes:
        reason: short machine-friendly reason: 'missing ordering', 'missing page size', ...
        hint: human-friendly explanation, if any
    """

    def __init__(self, reason: str, hint: Optional[str] = None):
        self.reason = reason
        self.hint = hint

        super().__init__(f'{reason}: {hint}' if hint else reason)
