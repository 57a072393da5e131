from .base import CursorQuery
from .select import SelectQuery, Hydration
from .sequence import SequenceQuery
