"""Host editor boundary: protocol, value types and an in-memory reference host."""

from .document import HostDocument
from .memory import HostTransaction, HostView, MemoryEditor
from .protocol import PASS, HostEditor, HostValidationError
from .state import HostRange, Position, SelectionState, map_offset
from .undo import UndoEntry, UndoTimeline
from .validation import clip_position

__all__ = [
    "PASS",
    "HostEditor",
    "HostValidationError",
    "HostDocument",
    "HostRange",
    "Position",
    "SelectionState",
    "map_offset",
    "MemoryEditor",
    "HostTransaction",
    "HostView",
    "UndoEntry",
    "UndoTimeline",
    "clip_position",
]
