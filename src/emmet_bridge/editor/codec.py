"""Conversion between host ``(line, column)`` positions and linear offsets."""

from __future__ import annotations

from bisect import bisect_right
from typing import List

from emmet_bridge.host.state import Position


class PositionCodec:
    """Offset/position mapping for one snapshot of document text.

    Build a fresh codec whenever the text may have changed; instances never
    observe later edits. Out-of-range input is clamped rather than rejected.
    """

    __slots__ = ("_text", "_line_starts")

    def __init__(self, text: str) -> None:
        self._text = text
        starts: List[int] = [0]
        index = text.find("\n")
        while index != -1:
            starts.append(index + 1)
            index = text.find("\n", index + 1)
        self._line_starts = starts

    @property
    def length(self) -> int:
        return len(self._text)

    @property
    def line_count(self) -> int:
        return len(self._line_starts)

    def line_length(self, line: int) -> int:
        line = max(0, min(line, self.line_count - 1))
        start = self._line_starts[line]
        if line + 1 < self.line_count:
            return self._line_starts[line + 1] - 1 - start
        return len(self._text) - start

    def to_offset(self, position: Position) -> int:
        line, column = position
        if line < 0:
            return 0
        if line >= self.line_count:
            return len(self._text)
        column = max(0, min(column, self.line_length(line)))
        return self._line_starts[line] + column

    def to_position(self, offset: int) -> Position:
        offset = max(0, min(offset, len(self._text)))
        line = bisect_right(self._line_starts, offset) - 1
        return Position(line, offset - self._line_starts[line])


def offset_from_position(text: str, position: Position) -> int:
    return PositionCodec(text).to_offset(position)


def position_from_offset(text: str, offset: int) -> Position:
    return PositionCodec(text).to_position(offset)


__all__ = ["PositionCodec", "offset_from_position", "position_from_offset"]
