"""In-memory host editor with multiple selections and batched undo."""

from __future__ import annotations

from contextlib import AbstractContextManager
from dataclasses import dataclass
from typing import Callable, ContextManager, List, Optional, Sequence, Tuple

from emmet_bridge.runtime import telemetry

from .document import HostDocument
from .protocol import HostValidationError
from .state import HostRange, Position, SelectionState, map_offset
from .undo import UndoEntry, UndoTimeline
from .validation import clip_position


@dataclass(slots=True)
class HostView:
    version: int
    text: str
    selections: Tuple[HostRange, ...]
    label: str


ChangeListener = Callable[[HostView], None]


class MemoryEditor:
    """Reference host used by tests and headless tooling.

    Edits made outside ``batch()`` are each wrapped in their own implicit
    batch, so every public mutation lands in the undo history exactly once.
    """

    def __init__(
        self,
        text: str = "",
        *,
        name: str = "default",
        mode: Optional[str] = None,
        profile: Optional[str] = None,
        indent_with_tabs: bool = True,
        indent_unit: int = 2,
        file_path: Optional[str] = None,
        prompt_handler: Optional[Callable[[str], Optional[str]]] = None,
    ) -> None:
        self.name = name
        self.document = HostDocument.from_text(text)
        self.state = SelectionState()
        self.undo_history = UndoTimeline()
        self.mode = mode
        self.profile = profile
        self.indent_with_tabs = indent_with_tabs
        self.indent_unit = indent_unit
        self.file_path = file_path
        self._prompt_handler = prompt_handler
        self._listeners: List[ChangeListener] = []
        self._active: Optional[HostTransaction] = None

    @classmethod
    def from_text(cls, text: str, **options: object) -> "MemoryEditor":
        return cls(text, **options)  # type: ignore[arg-type]

    # -- reads -----------------------------------------------------------

    def get_value(self) -> str:
        return self.document.text

    def get_line(self, line: int) -> str:
        return self.document.get_line(line)

    def line_count(self) -> int:
        return self.document.line_count

    def list_selections(self) -> Tuple[HostRange, ...]:
        return self.state.ranges

    def something_selected(self) -> bool:
        return self.state.something_selected()

    def snapshot(self, label: str = "snapshot") -> HostView:
        return HostView(
            version=self.document.version,
            text=self.document.text,
            selections=self.state.ranges,
            label=label,
        )

    def prompt(self, title: str) -> Optional[str]:
        if self._prompt_handler is None:
            return None
        return self._prompt_handler(title)

    # -- writes ----------------------------------------------------------

    def batch(self, label: str = "batch") -> ContextManager["HostTransaction"]:
        return HostTransaction(self, label)

    def subscribe(self, listener: ChangeListener) -> None:
        self._listeners.append(listener)

    def set_selections(self, ranges: Sequence[HostRange]) -> None:
        if not ranges:
            raise HostValidationError("Host requires at least one selection")
        with self.batch("set_selections"):
            self.state.replace(
                [
                    (
                        clip_position(self.document, Position(*anchor)),
                        clip_position(self.document, Position(*head)),
                    )
                    for anchor, head in ranges
                ]
            )

    def set_cursor(self, position: Position) -> None:
        self.set_selections([(position, position)])

    def replace_range(
        self, text: str, start: Position, end: Optional[Position] = None
    ) -> None:
        """Replace ``[start, end)`` with ``text`` and map selections past the edit.

        Selection endpoints before the change stay put, endpoints inside it
        move to the end of the inserted text and endpoints after it shift by
        the length delta.
        """

        start = clip_position(self.document, Position(*start))
        end = start if end is None else clip_position(self.document, Position(*end))
        if _offset(self.document, end) < _offset(self.document, start):
            start, end = end, start
        with self.batch("replace_range"):
            before = self.document.text
            start_offset = _offset(self.document, start)
            end_offset = _offset(self.document, end)
            mapped = [
                (
                    map_offset(_offset(self.document, anchor), start_offset, end_offset, text),
                    map_offset(_offset(self.document, head), start_offset, end_offset, text),
                )
                for anchor, head in self.state.ranges
            ]
            self.document = self.document.with_text(
                before[:start_offset] + text + before[end_offset:]
            )
            self.state.replace(
                [
                    (_position(self.document, anchor), _position(self.document, head))
                    for anchor, head in mapped
                ]
            )

    def undo(self) -> bool:
        entry = self.undo_history.undo()
        if entry is None:
            return False
        self._restore(entry.before_text, entry.selections_before, "undo")
        return True

    def redo(self) -> bool:
        entry = self.undo_history.redo()
        if entry is None:
            return False
        self._restore(entry.after_text, entry.selections_after, "redo")
        return True

    def _restore(
        self, text: str, selections: Tuple[HostRange, ...], label: str
    ) -> None:
        self.document = self.document.with_text(text)
        self.state.replace(selections)
        self._notify(label)

    def _notify(self, label: str) -> None:
        view = self.snapshot(label)
        for listener in list(self._listeners):
            listener(view)


class HostTransaction(AbstractContextManager["HostTransaction"]):
    """Re-entrant batch: only the outermost level records undo and notifies."""

    def __init__(self, editor: MemoryEditor, label: str) -> None:
        self.editor = editor
        self.label = label
        self._outer = False
        self._span_cm: Optional[ContextManager[object]] = None
        self._before_text = ""
        self._before_selections: Tuple[HostRange, ...] = ()

    def __enter__(self) -> "HostTransaction":
        if self.editor._active is not None:
            return self.editor._active
        self._outer = True
        self.editor._active = self
        self._before_text = self.editor.document.text
        self._before_selections = self.editor.state.ranges
        self._span_cm = telemetry.span(
            f"host::{self.label}",
            component="host",
            metadata={"host": self.editor.name},
        )
        self._span_cm.__enter__()
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        if not self._outer:
            return False
        self.editor._active = None
        try:
            after_text = self.editor.document.text
            after_selections = self.editor.state.ranges
            if after_text != self._before_text:
                self.editor.undo_history.push(
                    UndoEntry(
                        label=self.label,
                        before_text=self._before_text,
                        after_text=after_text,
                        selections_before=self._before_selections,
                        selections_after=after_selections,
                    )
                )
            if (
                after_text != self._before_text
                or after_selections != self._before_selections
            ):
                self.editor._notify(self.label)
        finally:
            if self._span_cm is not None:
                self._span_cm.__exit__(exc_type, exc, tb)
        return False


def _offset(document: HostDocument, position: Position) -> int:
    lines = document.snapshot()
    return sum(len(lines[i]) + 1 for i in range(position.line)) + position.column


def _position(document: HostDocument, offset: int) -> Position:
    running = 0
    lines = document.snapshot()
    for row, line in enumerate(lines):
        if offset <= running + len(line):
            return Position(row, offset - running)
        running += len(line) + 1
    return Position(len(lines) - 1, len(lines[-1]))


__all__ = ["HostTransaction", "HostView", "MemoryEditor"]
