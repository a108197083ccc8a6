from emmet_bridge.editor import CARET_GROUP, TabStop, extract


def test_single_marker_is_removed() -> None:
    data = extract("hello$1world")

    assert data.text == "helloworld"
    assert data.tabstops == (TabStop(5, 5, "1"),)


def test_text_without_markers_has_no_tabstops() -> None:
    data = extract("plain text")

    assert data.text == "plain text"
    assert data.tabstops == ()
    assert data.first is None
    assert data.caret_target(10) == (20, 20)


def test_placeholders_keep_their_text() -> None:
    data = extract('<a href="${1:url}">${2}</a>')

    assert data.text == '<a href="url"></a>'
    assert data.tabstops == (TabStop(9, 12, "1"), TabStop(14, 14, "2"))
    assert data.caret_target(100) == (109, 112)


def test_bare_stops_mirror_their_group_placeholder() -> None:
    data = extract("$1-${1:x}")

    assert data.text == "x-x"
    assert [(stop.start, stop.end) for stop in data.tabstops] == [(0, 1), (2, 3)]


def test_nested_placeholders_order_outer_first() -> None:
    data = extract("${1:a${2:b}c}")

    assert data.text == "abc"
    assert data.tabstops == (TabStop(0, 3, "1"), TabStop(1, 2, "2"))


def test_cursor_marker() -> None:
    data = extract("a${cursor}b")

    assert data.text == "ab"
    assert data.tabstops == (TabStop(1, 1, CARET_GROUP),)


def test_escaped_characters_go_through_escape_hook() -> None:
    assert extract(r"cost \$5 and \${1}").text == "cost $5 and ${1}"

    data = extract(r"\a$1", escape=str.upper)

    assert data.text == "A"
    assert data.tabstops == (TabStop(1, 1, "1"),)


def test_variables_resolve_or_stay_literal() -> None:
    assert extract("${indent}x", variables={"indent": "  "}).text == "  x"
    assert extract("<${child}>").text == "<${child}>"


def test_malformed_markers_stay_literal() -> None:
    assert extract("${1:abc").text == "${1:abc"
    assert extract("${1:abc").tabstops == ()
    assert extract("cost$").text == "cost$"
    assert extract("$x").text == "$x"


def test_last_placeholder_definition_wins_for_a_group() -> None:
    data = extract("${1:a} ${1:b} $1")

    assert data.text == "b b b"
    assert [(stop.start, stop.end) for stop in data.tabstops] == [(0, 1), (2, 3), (4, 5)]
