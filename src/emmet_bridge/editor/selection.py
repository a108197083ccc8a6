"""Offset-space view over a host's ordered selection list."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from emmet_bridge.host.protocol import HostEditor

from .codec import PositionCodec


@dataclass(frozen=True, slots=True)
class SelectionRange:
    """Order-independent ``[start, end)`` offset range."""

    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start > self.end:
            raise ValueError(f"start {self.start} is after end {self.end}")

    @classmethod
    def between(cls, a: int, b: int) -> "SelectionRange":
        return cls(min(a, b), max(a, b))

    @property
    def is_caret(self) -> bool:
        return self.start == self.end

    def __len__(self) -> int:
        return self.end - self.start


SelectionSet = Tuple[SelectionRange, ...]


class SelectionIndexError(IndexError):
    """The addressed selection index does not exist in the current set."""

    def __init__(self, index: int, count: int) -> None:
        super().__init__(f"Selection index {index} out of range for {count} selection(s)")
        self.index = index
        self.count = count


class SelectionModel:
    """Reads and rewrites host selections in offset space.

    Every call re-reads the host, so offsets stay correct after edits made
    by earlier iterations of a multi-selection run.
    """

    def __init__(self, host: HostEditor, *, selection_index: int = 0) -> None:
        self.host = host
        self.selection_index = selection_index

    def list(self) -> SelectionSet:
        codec = PositionCodec(self.host.get_value())
        return tuple(
            SelectionRange.between(codec.to_offset(anchor), codec.to_offset(head))
            for anchor, head in self.host.list_selections()
        )

    def current(self) -> SelectionRange:
        selections = self.list()
        index = self.selection_index
        if index < 0 or index >= len(selections):
            raise SelectionIndexError(index, len(selections))
        return selections[index]

    def set_current(self, start: int, end: Optional[int] = None) -> None:
        """Replace the entry at ``selection_index``; all other entries are kept."""

        if end is None:
            end = start
        codec = PositionCodec(self.host.get_value())
        ranges = list(self.host.list_selections())
        index = self.selection_index
        if index < 0 or index >= len(ranges):
            raise SelectionIndexError(index, len(ranges))
        target = SelectionRange.between(start, end)
        ranges[index] = (codec.to_position(target.start), codec.to_position(target.end))
        self.host.set_selections(ranges)

    def something_selected(self) -> bool:
        return any(not selection.is_caret for selection in self.list())


__all__ = ["SelectionRange", "SelectionSet", "SelectionIndexError", "SelectionModel"]
