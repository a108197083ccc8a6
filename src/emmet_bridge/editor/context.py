"""Engine-facing view of the host editor for one dispatch invocation."""

from __future__ import annotations

from typing import Optional

from emmet_bridge.host.protocol import HostEditor
from emmet_bridge.runtime.config import BridgeSettings, load_settings

from .codec import PositionCodec
from .indentation import indent_unit_for, line_padding, reindent
from .selection import SelectionModel, SelectionRange
from .syntax import ProfileDetector, SyntaxDetector, detect_profile, detect_syntax, map_mode
from .tabstops import Escape, TabStopData, extract


class EditingContext:
    """Content, selection, syntax and the replace primitive, as the engine sees them.

    Nothing is cached: every getter reads the host again. The dispatcher
    re-points ``selection_index`` between iterations of a multi-selection run;
    the engine must treat it as read-only.
    """

    def __init__(
        self,
        host: HostEditor,
        *,
        settings: Optional[BridgeSettings] = None,
        syntax_detector: SyntaxDetector = detect_syntax,
        profile_detector: ProfileDetector = detect_profile,
        escape: Optional[Escape] = None,
    ) -> None:
        self.host = host
        self.settings = settings or load_settings()
        self.selection = SelectionModel(host)
        self._syntax_detector = syntax_detector
        self._profile_detector = profile_detector
        self._escape = escape

    @property
    def selection_index(self) -> int:
        return self.selection.selection_index

    @selection_index.setter
    def selection_index(self, value: int) -> None:
        self.selection.selection_index = value

    # -- content ---------------------------------------------------------

    def get_content(self) -> str:
        return self.host.get_value()

    def codec(self) -> PositionCodec:
        return PositionCodec(self.get_content())

    def get_indentation(self) -> str:
        return indent_unit_for(self.host.indent_with_tabs, self.host.indent_unit)

    # -- selection -------------------------------------------------------

    def get_selection_range(self) -> SelectionRange:
        return self.selection.current()

    def get_selection(self) -> str:
        current = self.selection.current()
        return self.get_content()[current.start : current.end]

    def get_caret_pos(self) -> int:
        return self.selection.current().start

    def set_caret_pos(self, offset: int) -> None:
        self.create_selection(offset)

    def create_selection(self, start: int, end: Optional[int] = None) -> None:
        self.selection.set_current(start, end)

    def get_current_line_range(self) -> SelectionRange:
        codec = self.codec()
        line = codec.to_position(self.get_caret_pos()).line
        start = codec.to_offset((line, 0))
        return SelectionRange(start, start + codec.line_length(line))

    def get_current_line(self) -> str:
        line_range = self.get_current_line_range()
        return self.get_content()[line_range.start : line_range.end]

    # -- syntax ----------------------------------------------------------

    def get_syntax(self) -> str:
        mode = self.host.mode
        return map_mode(mode) or self._syntax_detector(self, mode)

    def get_profile_name(self) -> str:
        if self.host.profile:
            return self.host.profile
        return self._profile_detector(self)

    def is_valid_syntax(self) -> bool:
        return self.settings.supports(self.get_syntax())

    # -- editing ---------------------------------------------------------

    def prepare_text(self, text: str, start: int, *, no_indent: bool = False) -> TabStopData:
        """Re-indent ``text`` for insertion at ``start`` and strip its tab stops."""

        if not no_indent:
            padding = line_padding(self.get_content(), start)
            text = reindent(text, self.get_indentation(), padding)
        return extract(text, escape=self._escape, variables=self.settings.variables)

    def replace_content(
        self,
        text: str,
        start: Optional[int] = None,
        end: Optional[int] = None,
        no_indent: bool = False,
    ) -> None:
        """Replace ``[start, end)`` with ``text`` and select its first tab stop.

        ``end`` defaults to ``start``; with neither given the whole document is
        replaced. Without tab stops the caret lands after the inserted text.
        The edit and the selection change form a single host batch.
        """

        content = self.get_content()
        if end is None:
            end = len(content) if start is None else start
        if start is None:
            start = 0
        if end < start:
            start, end = end, start

        data = self.prepare_text(text, start, no_indent=no_indent)
        caret_start, caret_end = data.caret_target(start)
        codec = PositionCodec(content)
        with self.host.batch():
            self.host.replace_range(
                data.text, codec.to_position(start), codec.to_position(end)
            )
            self.selection.set_current(caret_start, caret_end)

    # -- host extras -----------------------------------------------------

    def prompt(self, title: str) -> Optional[str]:
        ask = getattr(self.host, "prompt", None)
        if ask is None:
            return None
        return ask(title)

    def get_file_path(self) -> Optional[str]:
        return getattr(self.host, "file_path", None)


__all__ = ["EditingContext"]
