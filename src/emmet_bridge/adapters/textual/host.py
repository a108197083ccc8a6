"""Host adapter exposing a Textual ``TextArea`` to the bridge."""

from __future__ import annotations

from contextlib import AbstractContextManager, ExitStack
from typing import ContextManager, Optional, Sequence, Tuple

try:  # pragma: no cover - import guard only
    from textual.widgets import TextArea
    from textual.widgets.text_area import Selection
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use emmet_bridge.adapters.textual"
    ) from exc

from emmet_bridge.editor.codec import PositionCodec
from emmet_bridge.host.state import HostRange, Position, map_offset
from emmet_bridge.runtime import telemetry


class TextAreaHost:
    """Wraps a single-selection ``TextArea``.

    Inside ``batch()`` edits are applied to a staged copy of the text; when
    the outermost batch exits the net change is written back with one
    ``TextArea.replace`` call, which the widget records as one undo step.
    """

    def __init__(
        self,
        text_area: TextArea,
        *,
        profile: Optional[str] = None,
        file_path: Optional[str] = None,
    ) -> None:
        self.text_area = text_area
        self.profile = profile
        self.file_path = file_path
        self._depth = 0
        self._staged_text: Optional[str] = None
        self._staged_selection: Optional[HostRange] = None

    @property
    def indent_with_tabs(self) -> bool:
        return self.text_area.indent_type == "tabs"

    @property
    def indent_unit(self) -> int:
        return self.text_area.indent_width

    @property
    def mode(self) -> Optional[str]:
        return self.text_area.language

    def get_value(self) -> str:
        if self._staged_text is not None:
            return self._staged_text
        return self.text_area.text

    def get_line(self, line: int) -> str:
        return self.get_value().split("\n")[line]

    def line_count(self) -> int:
        return self.get_value().count("\n") + 1

    def list_selections(self) -> Tuple[HostRange, ...]:
        if self._staged_selection is not None:
            return (self._staged_selection,)
        selection = self.text_area.selection
        return ((Position(*selection.start), Position(*selection.end)),)

    def set_selections(self, ranges: Sequence[HostRange]) -> None:
        anchor, head = ranges[0]
        codec = PositionCodec(self.get_value())
        clipped = (
            codec.to_position(codec.to_offset(anchor)),
            codec.to_position(codec.to_offset(head)),
        )
        if self._depth:
            self._staged_selection = clipped
        else:
            self.text_area.selection = Selection(tuple(clipped[0]), tuple(clipped[1]))

    def replace_range(
        self, text: str, start: Position, end: Optional[Position] = None
    ) -> None:
        if not self._depth:
            with self.batch():
                self.replace_range(text, start, end)
            return

        before = self.get_value()
        codec = PositionCodec(before)
        start_offset = codec.to_offset(start)
        end_offset = start_offset if end is None else codec.to_offset(end)
        if end_offset < start_offset:
            start_offset, end_offset = end_offset, start_offset
        anchor, head = self.list_selections()[0]
        anchor_offset, head_offset = codec.to_offset(anchor), codec.to_offset(head)

        after = before[:start_offset] + text + before[end_offset:]
        after_codec = PositionCodec(after)
        self._staged_text = after
        self._staged_selection = (
            after_codec.to_position(map_offset(anchor_offset, start_offset, end_offset, text)),
            after_codec.to_position(map_offset(head_offset, start_offset, end_offset, text)),
        )

    def batch(self) -> ContextManager["TextAreaHost"]:
        return _TextAreaBatch(self)

    def _begin(self) -> None:
        if self._depth == 0:
            self._staged_text = self.text_area.text
            self._staged_selection = self.list_selections()[0]
        self._depth += 1

    def _commit(self) -> None:
        self._depth -= 1
        if self._depth:
            return
        staged_text, self._staged_text = self._staged_text, None
        staged_selection, self._staged_selection = self._staged_selection, None
        current = self.text_area.text
        with ExitStack() as stack:
            app = self.text_area.app if self.text_area.is_attached else None
            if app is not None:
                stack.enter_context(app.batch_update())
            if staged_text is not None and staged_text != current:
                self._write(current, staged_text)
            if staged_selection is not None:
                anchor, head = staged_selection
                self.text_area.selection = Selection(tuple(anchor), tuple(head))

    def _write(self, current: str, staged: str) -> None:
        prefix = 0
        limit = min(len(current), len(staged))
        while prefix < limit and current[prefix] == staged[prefix]:
            prefix += 1
        suffix = 0
        while (
            suffix < limit - prefix
            and current[len(current) - 1 - suffix] == staged[len(staged) - 1 - suffix]
        ):
            suffix += 1
        codec = PositionCodec(current)
        start = codec.to_position(prefix)
        end = codec.to_position(len(current) - suffix)
        with telemetry.span(
            "host::textarea_replace",
            component="host",
            metadata={"start": tuple(start), "end": tuple(end)},
        ):
            self.text_area.history.checkpoint()
            self.text_area.replace(
                staged[prefix : len(staged) - suffix], tuple(start), tuple(end)
            )
            self.text_area.history.checkpoint()


class _TextAreaBatch(AbstractContextManager["TextAreaHost"]):
    def __init__(self, host: TextAreaHost) -> None:
        self.host = host

    def __enter__(self) -> TextAreaHost:
        self.host._begin()
        return self.host

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.host._commit()
        return False


__all__ = ["TextAreaHost"]
