"""Built-in key combinations for the engine's editing actions."""

from __future__ import annotations

from types import MappingProxyType
from typing import Iterable, Mapping, Sequence

from .models import KeyStroke

DEFAULT_KEYMAP: Mapping[str, str] = MappingProxyType(
    {
        "Cmd-E": "expand_abbreviation",
        "Tab": "expand_abbreviation_with_tab",
        "Cmd-D": "balance_outward",
        "Shift-Cmd-D": "balance_inward",
        "Cmd-M": "matching_pair",
        "Shift-Cmd-A": "wrap_with_abbreviation",
        "Ctrl-Alt-Right": "next_edit_point",
        "Ctrl-Alt-Left": "prev_edit_point",
        "Cmd-L": "select_line",
        "Cmd-Shift-M": "merge_lines",
        "Cmd-/": "toggle_comment",
        "Cmd-J": "split_join_tag",
        "Cmd-K": "remove_tag",
        "Shift-Cmd-Y": "evaluate_math_expression",
        "Ctrl-Up": "increment_number_by_1",
        "Ctrl-Down": "decrement_number_by_1",
        "Ctrl-Alt-Up": "increment_number_by_01",
        "Ctrl-Alt-Down": "decrement_number_by_01",
        "Shift-Ctrl-Up": "increment_number_by_10",
        "Shift-Ctrl-Down": "decrement_number_by_10",
        "Shift-Cmd-.": "select_next_item",
        "Shift-Cmd-,": "select_previous_item",
        "Cmd-B": "reflect_css_value",
        "Enter": "insert_formatted_line_break_only",
    }
)


def platform_keymap(
    keymap: Mapping[str, str], *, mac: bool
) -> tuple[tuple[KeyStroke, str], ...]:
    """Parse ``keymap`` and rewrite ``Cmd`` combinations for the platform."""

    return tuple(
        (KeyStroke.parse(key).for_platform(mac=mac), action)
        for key, action in keymap.items()
    )


def default_actions() -> tuple[str, ...]:
    return tuple(dict.fromkeys(DEFAULT_KEYMAP.values()))


def select_actions(
    actions: Iterable[str],
    *,
    include: Sequence[str] | None = None,
    exclude: Sequence[str] | None = None,
) -> tuple[str, ...]:
    """Keep ``actions`` named in ``include`` (all when empty) and not in ``exclude``."""

    allowed = frozenset(include) if include else None
    blocked = frozenset(exclude or ())
    return tuple(
        action
        for action in actions
        if (allowed is None or action in allowed) and action not in blocked
    )


__all__ = ["DEFAULT_KEYMAP", "default_actions", "platform_keymap", "select_actions"]
