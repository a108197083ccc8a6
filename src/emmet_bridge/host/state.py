"""Host-side cursor and selection value types."""

from __future__ import annotations

from dataclasses import dataclass
from typing import NamedTuple, Sequence, Tuple


class Position(NamedTuple):
    """Zero-based ``(line, column)`` coordinate as hosts report it."""

    line: int
    column: int


HostRange = Tuple[Position, Position]  # (anchor, head)


@dataclass(slots=True)
class SelectionState:
    """Ordered anchor/head pairs for every active cursor of a host."""

    ranges: Tuple[HostRange, ...] = ((Position(0, 0), Position(0, 0)),)

    def replace(self, ranges: Sequence[HostRange]) -> None:
        self.ranges = tuple(
            (Position(*anchor), Position(*head)) for anchor, head in ranges
        )

    @property
    def primary(self) -> HostRange:
        return self.ranges[0]

    def something_selected(self) -> bool:
        return any(anchor != head for anchor, head in self.ranges)


def map_offset(offset: int, start: int, end: int, inserted: str) -> int:
    """Where ``offset`` lands after ``[start, end)`` is replaced by ``inserted``.

    Offsets before the change stay put, offsets inside it (or at its start)
    move past the inserted text and later offsets shift by the length delta.
    """

    if offset < start:
        return offset
    if offset <= end:
        return start + len(inserted)
    return offset + len(inserted) - (end - start)


__all__ = ["Position", "HostRange", "SelectionState", "map_offset"]
