from __future__ import annotations

import asyncio
from typing import Awaitable, Callable

import pytest

pytest.importorskip("textual")

from textual.app import App, ComposeResult
from textual.widgets import TextArea

from emmet_bridge.actions import ActionDispatcher
from emmet_bridge.adapters.textual import TextAreaHost
from emmet_bridge.editor import EditingContext
from emmet_bridge.host import HostEditor, Position
from emmet_bridge.runtime.config import BridgeSettings


class EditorApp(App[None]):
    def __init__(self, text: str) -> None:
        super().__init__()
        self.initial_text = text

    def compose(self) -> ComposeResult:
        yield TextArea(self.initial_text, id="editor")


class InsertingEngine:
    class actions:
        @staticmethod
        def get_list() -> list:
            return []

    def run(self, action_name: str, context: EditingContext) -> object:
        context.replace_content("<p>$1</p>", context.get_caret_pos())
        return True


def run_with_area(text: str, scenario: Callable[[TextArea], Awaitable[None]]) -> None:
    async def main() -> None:
        app = EditorApp(text)
        async with app.run_test() as pilot:
            await scenario(app.query_one(TextArea))
            await pilot.pause()

    asyncio.run(main())


def test_host_reports_text_area_state() -> None:
    async def scenario(area: TextArea) -> None:
        area.indent_type = "spaces"
        area.indent_width = 4
        host = TextAreaHost(area, profile="html")

        assert isinstance(host, HostEditor)
        assert host.get_value() == "ab\ncd"
        assert host.line_count() == 2
        assert host.get_line(1) == "cd"
        assert host.indent_with_tabs is False
        assert host.indent_unit == 4

    run_with_area("ab\ncd", scenario)


def test_batch_stages_edits_until_exit() -> None:
    async def scenario(area: TextArea) -> None:
        host = TextAreaHost(area)
        host.set_selections([(Position(0, 0), Position(0, 0))])

        with host.batch():
            host.replace_range("X", Position(0, 0))
            host.replace_range("Y", Position(1, 0))
            assert area.text == "a\nb"
            assert host.get_value() == "Xa\nYb"

        assert area.text == "Xa\nYb"
        assert host.list_selections() == ((Position(0, 1), Position(0, 1)),)

    run_with_area("a\nb", scenario)


def test_dispatch_is_a_single_text_area_undo_step() -> None:
    async def scenario(area: TextArea) -> None:
        host = TextAreaHost(area)
        host.set_selections([(Position(0, 3), Position(0, 3))])
        dispatcher = ActionDispatcher(InsertingEngine(), settings=BridgeSettings())

        result = dispatcher.dispatch("expand_abbreviation", host)

        assert result.handled
        assert area.text == "div<p></p>"
        assert host.list_selections() == ((Position(0, 6), Position(0, 6)),)

        area.undo()
        assert area.text == "div"

    run_with_area("div", scenario)
