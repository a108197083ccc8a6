"""Static classification of engine actions."""

from __future__ import annotations

EXPAND_WITH_TAB = "expand_abbreviation_with_tab"
FORMATTED_LINE_BREAK = "insert_formatted_line_break_only"

# actions that run once against the primary selection
SINGLE_SELECTION_ACTIONS = frozenset(
    {
        "prev_edit_point",
        "next_edit_point",
        "merge_lines",
        "reflect_css_value",
        "select_next_item",
        "select_previous_item",
        "wrap_with_abbreviation",
        "update_tag",
        FORMATTED_LINE_BREAK,
    }
)

# actions whose key must fall back to the host when nothing was done
PASS_WHEN_UNHANDLED = frozenset({FORMATTED_LINE_BREAK})

# actions that defer to the host while text is selected or the syntax is unknown
SYNTAX_SENSITIVE_ACTIONS = frozenset({EXPAND_WITH_TAB})


def is_single_selection(action_name: str) -> bool:
    return action_name in SINGLE_SELECTION_ACTIONS


__all__ = [
    "EXPAND_WITH_TAB",
    "FORMATTED_LINE_BREAK",
    "SINGLE_SELECTION_ACTIONS",
    "PASS_WHEN_UNHANDLED",
    "SYNTAX_SENSITIVE_ACTIONS",
    "is_single_selection",
]
