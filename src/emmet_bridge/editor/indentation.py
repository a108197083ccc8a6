"""Re-indentation of generated text blocks for insertion into a host."""

from __future__ import annotations

import re
from functools import reduce
from math import gcd
from typing import List, Sequence

_LINE_SPLIT = re.compile(r"\r\n|\r|\n")
_LEADING_WS = re.compile(r"[ \t]*")


def split_lines(text: str) -> List[str]:
    return _LINE_SPLIT.split(text)


def indent_unit_for(indent_with_tabs: bool, indent_unit: int) -> str:
    """Host indentation preference as a literal string."""

    if indent_with_tabs:
        return "\t"
    return " " * max(1, int(indent_unit))


def detect_unit(lines: Sequence[str]) -> int:
    """Width in spaces of one indentation level among space-indented lines.

    Tabs always count as one level each, so only the spaces after the last
    leading tab are measured. Returns 0 when no line is space-indented.
    """

    widths = []
    for line in lines:
        if not line.strip():
            continue
        leading = _LEADING_WS.match(line).group(0)
        spaces = len(leading) - len(leading.rstrip(" "))
        if spaces:
            widths.append(spaces)
    if not widths:
        return 0
    return reduce(gcd, widths)


def normalize(text: str, unit: str) -> str:
    """Rewrite leading whitespace of each line as ``depth * unit``.

    Depth is counted in the block's own indentation levels, so a block using
    two-space levels and one using tabs normalize to the same result. Spaces
    that do not fill a whole level are kept as-is after the rewritten prefix.
    The first line is inserted mid-line, so it is never touched; text without
    a line break comes back unchanged.
    """

    lines = split_lines(text)
    if len(lines) == 1:
        return text
    source_unit = detect_unit(lines[1:])
    result = [lines[0]]
    for line in lines[1:]:
        leading = _LEADING_WS.match(line).group(0)
        if not leading:
            result.append(line)
            continue
        depth = 0
        spaces = 0
        for ch in leading:
            if ch == "\t":
                depth += 1 + (spaces // source_unit if source_unit else 0)
                spaces = 0
            else:
                spaces += 1
        if source_unit:
            depth += spaces // source_unit
            spaces %= source_unit
        result.append(unit * depth + " " * spaces + line[len(leading):])
    return "\n".join(result)


def pad(text: str, padding: str) -> str:
    """Prefix every line except the first with ``padding``."""

    lines = split_lines(text)
    if not padding:
        return "\n".join(lines)
    return "\n".join([lines[0], *(padding + line for line in lines[1:])])


def line_padding(content: str, offset: int) -> str:
    """Leading whitespace of the line of ``content`` containing ``offset``."""

    offset = max(0, min(offset, len(content)))
    line_start = content.rfind("\n", 0, offset) + 1
    return _LEADING_WS.match(content, line_start).group(0)


def reindent(text: str, unit: str, padding: str) -> str:
    return pad(normalize(text, unit), padding)


__all__ = [
    "detect_unit",
    "indent_unit_for",
    "line_padding",
    "normalize",
    "pad",
    "reindent",
    "split_lines",
]
