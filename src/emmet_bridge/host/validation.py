"""Position clipping shared by host implementations."""

from __future__ import annotations

from .document import HostDocument
from .protocol import HostValidationError
from .state import Position


def clip_position(document: HostDocument, position: Position) -> Position:
    """Clamp ``position`` into the document the way editor widgets do."""

    line, column = position
    if not isinstance(line, int) or not isinstance(column, int):
        raise HostValidationError("Position must be integral", position=position)
    last = document.line_count - 1
    if line < 0:
        return Position(0, 0)
    if line > last:
        return Position(last, len(document.get_line(last)))
    return Position(line, max(0, min(column, len(document.get_line(line)))))
