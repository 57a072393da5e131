__version__ = __import__('importlib.metadata').metadata.version('sacursor')

from .iterator import CursorIterator
from .settings import CursorSettings
from .orderspec import OrderSpec
from .cursor_state import CursorState
from .adapters import CursorQuery, SelectQuery, SequenceQuery, Hydration

from . import exc
