from emmet_bridge.editor import EditingContext, PositionCodec, SelectionRange
from emmet_bridge.host import MemoryEditor
from emmet_bridge.runtime.config import BridgeSettings


def make_context(editor: MemoryEditor, **settings: object) -> EditingContext:
    return EditingContext(editor, settings=BridgeSettings(**settings))  # type: ignore[arg-type]


def select(editor: MemoryEditor, start: int, end: int | None = None) -> None:
    codec = PositionCodec(editor.get_value())
    end = start if end is None else end
    editor.set_selections([(codec.to_position(start), codec.to_position(end))])


def test_replace_content_indents_and_lands_on_first_tabstop() -> None:
    editor = MemoryEditor("<body>\n\t\n</body>", indent_with_tabs=True)
    context = make_context(editor)

    context.replace_content("<ul>\n\t<li>$1</li>\n</ul>", 8)

    content = editor.get_value()
    assert content == "<body>\n\t<ul>\n\t\t<li></li>\n\t</ul>\n</body>"
    assert context.get_selection_range() == SelectionRange(19, 19)
    assert content[19:24] == "</li>"


def test_replace_content_uses_space_indentation_preference() -> None:
    editor = MemoryEditor("", indent_with_tabs=False, indent_unit=4)
    context = make_context(editor)

    context.replace_content("<ul>\n\t<li></li>\n</ul>")

    assert editor.get_value() == "<ul>\n    <li></li>\n</ul>"


def test_replace_content_without_tabstops_puts_caret_after_text() -> None:
    editor = MemoryEditor("abc")
    context = make_context(editor)

    context.replace_content("Z", 1)

    assert editor.get_value() == "aZbc"
    assert context.get_caret_pos() == 2


def test_replace_content_defaults_to_whole_document() -> None:
    editor = MemoryEditor("old\ncontent")
    context = make_context(editor)

    context.replace_content("new")

    assert editor.get_value() == "new"
    assert context.get_selection_range() == SelectionRange(3, 3)


def test_replace_content_selects_placeholder() -> None:
    editor = MemoryEditor("hello world")
    select(editor, 6, 11)
    context = make_context(editor)

    context.replace_content("${1:there}", 6, 11)

    assert editor.get_value() == "hello there"
    assert context.get_selection_range() == SelectionRange(6, 11)
    assert context.get_selection() == "there"


def test_replace_content_no_indent_keeps_text_verbatim() -> None:
    editor = MemoryEditor("\tx")
    context = make_context(editor)

    context.replace_content("a\n b", 2, 2, no_indent=True)

    assert editor.get_value() == "\txa\n b"


def test_replace_content_is_one_undo_step() -> None:
    editor = MemoryEditor("abc")
    context = make_context(editor)

    context.replace_content("<p>$1</p>", 3)

    assert editor.undo_history.depth == 1
    assert editor.undo()
    assert editor.get_value() == "abc"


def test_replace_content_expands_configured_variables() -> None:
    editor = MemoryEditor("")
    context = make_context(editor, variables={"charset": "UTF-8"})

    context.replace_content('<meta charset="${charset}">')

    assert editor.get_value() == '<meta charset="UTF-8">'


def test_current_line_helpers() -> None:
    editor = MemoryEditor("ab\ncde\nf")
    select(editor, 4)
    context = make_context(editor)

    assert context.get_current_line_range() == SelectionRange(3, 6)
    assert context.get_current_line() == "cde"


def test_caret_helpers_move_selection() -> None:
    editor = MemoryEditor("abcdef")
    context = make_context(editor)

    context.set_caret_pos(4)
    assert context.get_caret_pos() == 4

    context.create_selection(1, 3)
    assert context.get_selection() == "bc"


def test_syntax_from_mode_map_and_fallback() -> None:
    assert make_context(MemoryEditor(mode="text/css")).get_syntax() == "css"
    assert make_context(MemoryEditor(mode="text/x-less")).get_syntax() == "less"
    assert make_context(MemoryEditor(mode="scss")).get_syntax() == "scss"
    assert make_context(MemoryEditor(mode="python")).get_syntax() == "html"
    assert make_context(MemoryEditor()).get_syntax() == "html"


def test_custom_syntax_detector_is_consulted_for_unmapped_modes() -> None:
    seen = []

    def detector(context: EditingContext, hint: str | None) -> str:
        seen.append(hint)
        return "haml"

    context = EditingContext(
        MemoryEditor(mode="text/x-haml"),
        settings=BridgeSettings(),
        syntax_detector=detector,
    )

    assert context.get_syntax() == "haml"
    assert seen == ["text/x-haml"]


def test_profile_resolution() -> None:
    xhtml = '<!DOCTYPE html PUBLIC "-//W3C//DTD XHTML 1.0 Strict//EN">\n'

    assert make_context(MemoryEditor(profile="custom")).get_profile_name() == "custom"
    assert make_context(MemoryEditor(mode="application/xml")).get_profile_name() == "xml"
    assert make_context(MemoryEditor(mode="text/css")).get_profile_name() == "css"
    assert make_context(MemoryEditor(xhtml, mode="text/html")).get_profile_name() == "xhtml"
    assert make_context(MemoryEditor("<p>", mode="text/html")).get_profile_name() == "html"


def test_is_valid_syntax_follows_settings() -> None:
    assert make_context(MemoryEditor(mode="text/css")).is_valid_syntax()
    restricted = make_context(MemoryEditor(mode="text/html"), supported_syntaxes=("css",))
    assert restricted.is_valid_syntax() is False


def test_indentation_and_host_extras() -> None:
    editor = MemoryEditor(
        indent_with_tabs=False,
        indent_unit=3,
        file_path="/tmp/index.html",
        prompt_handler=lambda title: title.upper(),
    )
    context = make_context(editor)

    assert context.get_indentation() == "   "
    assert context.prompt("enter abbreviation") == "ENTER ABBREVIATION"
    assert context.get_file_path() == "/tmp/index.html"


def test_prompt_without_handler_returns_none() -> None:
    assert make_context(MemoryEditor()).prompt("title") is None


def test_single_line_replacement_keeps_its_whitespace() -> None:
    editor = MemoryEditor("x", indent_with_tabs=True)
    context = make_context(editor)

    context.replace_content("  /* a */", 0, 1)

    assert editor.get_value() == "  /* a */"
