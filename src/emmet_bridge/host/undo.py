"""Undo/redo history for the in-memory host."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

from .state import HostRange


@dataclass(frozen=True, slots=True)
class UndoEntry:
    """Text and selections on both sides of one outermost host batch."""

    label: str
    before_text: str
    after_text: str
    selections_before: Tuple[HostRange, ...]
    selections_after: Tuple[HostRange, ...]


class UndoTimeline:
    """Undo and redo stacks; recording a new entry empties the redo stack."""

    def __init__(self) -> None:
        self._done: List[UndoEntry] = []
        self._undone: List[UndoEntry] = []

    def push(self, entry: UndoEntry) -> None:
        self._done.append(entry)
        self._undone.clear()

    @property
    def depth(self) -> int:
        return len(self._done)

    def can_undo(self) -> bool:
        return bool(self._done)

    def can_redo(self) -> bool:
        return bool(self._undone)

    def undo(self) -> Optional[UndoEntry]:
        if not self._done:
            return None
        entry = self._done.pop()
        self._undone.append(entry)
        return entry

    def redo(self) -> Optional[UndoEntry]:
        if not self._undone:
            return None
        entry = self._undone.pop()
        self._done.append(entry)
        return entry


__all__ = ["UndoEntry", "UndoTimeline"]
