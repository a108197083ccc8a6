import pytest

from emmet_bridge.editor import SelectionIndexError, SelectionModel, SelectionRange
from emmet_bridge.host import MemoryEditor, Position


def make_editor(text: str = "0123456789\nabc") -> MemoryEditor:
    return MemoryEditor(text)


def test_list_normalizes_drag_direction() -> None:
    forward = make_editor()
    forward.set_selections([(Position(0, 3), Position(0, 7))])
    backward = make_editor()
    backward.set_selections([(Position(0, 7), Position(0, 3))])

    assert SelectionModel(forward).list() == (SelectionRange(3, 7),)
    assert SelectionModel(backward).list() == (SelectionRange(3, 7),)


def test_set_current_only_touches_addressed_entry() -> None:
    editor = make_editor()
    original = (
        (Position(0, 0), Position(0, 1)),
        (Position(0, 4), Position(0, 2)),
        (Position(1, 0), Position(1, 2)),
    )
    editor.set_selections(original)
    model = SelectionModel(editor, selection_index=1)

    model.set_current(5, 6)

    after = editor.list_selections()
    assert after[0] == original[0]
    assert after[2] == original[2]
    assert after[1] == (Position(0, 5), Position(0, 6))


def test_set_current_defaults_to_caret() -> None:
    editor = make_editor()
    model = SelectionModel(editor)

    model.set_current(12)

    assert model.current() == SelectionRange(12, 12)
    assert editor.list_selections() == ((Position(1, 1), Position(1, 1)),)


def test_current_out_of_range_raises_index_error() -> None:
    model = SelectionModel(make_editor(), selection_index=3)

    with pytest.raises(SelectionIndexError) as info:
        model.current()

    assert isinstance(info.value, IndexError)
    assert info.value.count == 1


def test_current_rereads_host_after_edit() -> None:
    editor = make_editor()
    editor.set_selections([(Position(0, 4), Position(0, 4))])
    model = SelectionModel(editor)
    assert model.current() == SelectionRange(4, 4)

    editor.replace_range("XX", Position(0, 0))

    assert model.current() == SelectionRange(6, 6)


def test_something_selected() -> None:
    editor = make_editor()
    model = SelectionModel(editor)
    assert model.something_selected() is False

    editor.set_selections(
        [(Position(0, 0), Position(0, 0)), (Position(0, 2), Position(0, 5))]
    )

    assert model.something_selected() is True


def test_selection_range_rejects_inverted_bounds() -> None:
    with pytest.raises(ValueError):
        SelectionRange(5, 2)

    assert SelectionRange.between(5, 2) == SelectionRange(2, 5)
    assert SelectionRange(4, 4).is_caret
