"""Extraction of engine tab-stop markers from generated text.

Recognized markers::

    $1            bare tab stop
    ${1}          braced tab stop
    ${1:text}     tab stop with placeholder text (may nest further markers)
    ${cursor}     caret marker
    ${name}       variable, resolved through ``variables`` or left as-is

A backslash escapes the following character. The backslash is dropped and the
character is handed to the ``escape`` callable, which decides its literal form.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, List, Mapping, Optional, Sequence, Tuple, Union

CARET_GROUP = "carets"

Escape = Callable[[str], str]


@dataclass(frozen=True, slots=True)
class TabStop:
    start: int
    end: int
    group: str

    def shifted(self, delta: int) -> "TabStop":
        return TabStop(self.start + delta, self.end + delta, self.group)


@dataclass(frozen=True, slots=True)
class TabStopData:
    text: str
    tabstops: Tuple[TabStop, ...] = ()

    @property
    def first(self) -> Optional[TabStop]:
        return self.tabstops[0] if self.tabstops else None

    def caret_target(self, base: int = 0) -> Tuple[int, int]:
        """First tab stop shifted by ``base``, or the end of the text."""

        stop = self.first
        if stop is None:
            end = base + len(self.text)
            return end, end
        return base + stop.start, base + stop.end


@dataclass(slots=True)
class _Stop:
    group: str
    children: Optional[List["_Node"]] = None


_Node = Union[str, _Stop]


@dataclass(slots=True)
class _Parser:
    source: str
    escape: Escape
    variables: Mapping[str, str]
    pos: int = 0
    placeholders: Dict[str, List[_Node]] = field(default_factory=dict)

    def parse(self, stop_at_brace: bool = False) -> List[_Node]:
        nodes: List[_Node] = []
        literal: List[str] = []
        text = self.source
        while self.pos < len(text):
            ch = text[self.pos]
            if ch == "\\" and self.pos + 1 < len(text):
                literal.append(self.escape(text[self.pos + 1]))
                self.pos += 2
                continue
            if stop_at_brace and ch == "}":
                break
            if ch == "$":
                node = self._marker()
                if node is not None:
                    if literal:
                        nodes.append("".join(literal))
                        literal = []
                    nodes.append(node)
                    continue
            literal.append(ch)
            self.pos += 1
        if literal:
            nodes.append("".join(literal))
        return nodes

    def _marker(self) -> Optional[_Node]:
        text = self.source
        start = self.pos
        cursor = start + 1
        if cursor < len(text) and text[cursor].isdigit():
            while cursor < len(text) and text[cursor].isdigit():
                cursor += 1
            self.pos = cursor
            return _Stop(group=str(int(text[start + 1 : cursor])))

        if cursor >= len(text) or text[cursor] != "{":
            return None

        cursor += 1
        name_end = cursor
        while name_end < len(text) and (text[name_end].isalnum() or text[name_end] == "_"):
            name_end += 1
        name = text[cursor:name_end]
        if not name or name_end >= len(text):
            return None

        if text[name_end] == "}":
            self.pos = name_end + 1
            if name.isdigit():
                return _Stop(group=str(int(name)))
            if name == "cursor":
                return _Stop(group=CARET_GROUP)
            if name in self.variables:
                return self.variables[name]
            return text[start : self.pos]

        if text[name_end] == ":" and name.isdigit():
            self.pos = name_end + 1
            children = self.parse(stop_at_brace=True)
            if self.pos >= len(text):
                # unterminated placeholder is kept as literal text
                self.pos = start + 1
                return "$"
            self.pos += 1
            group = str(int(name))
            self.placeholders[group] = children
            return _Stop(group=group, children=children)

        return None


@dataclass(slots=True)
class _Renderer:
    placeholders: Mapping[str, Sequence[_Node]]
    parts: List[str] = field(default_factory=list)
    length: int = 0
    stops: List[TabStop] = field(default_factory=list)
    _active: List[str] = field(default_factory=list)

    def render(self, nodes: Sequence[_Node]) -> None:
        for node in nodes:
            if isinstance(node, str):
                self.parts.append(node)
                self.length += len(node)
                continue
            start = self.length
            if node.group == CARET_GROUP:
                self.stops.append(TabStop(start, start, CARET_GROUP))
                continue
            body = self.placeholders.get(node.group, node.children)
            if body and node.group not in self._active:
                self._active.append(node.group)
                self.render(body)
                self._active.pop()
            self.stops.append(TabStop(start, self.length, node.group))


def _identity(ch: str) -> str:
    return ch


def extract(
    text: str,
    *,
    escape: Optional[Escape] = None,
    variables: Optional[Mapping[str, str]] = None,
) -> TabStopData:
    """Strip tab-stop markers from ``text`` and report where they landed.

    Tab stops are ordered by position in the literal text (outer placeholders
    before the ones nested inside them). Every occurrence of a group takes the
    last placeholder text defined for that group.
    """

    parser = _Parser(source=text, escape=escape or _identity, variables=variables or {})
    nodes = parser.parse()
    renderer = _Renderer(placeholders=parser.placeholders)
    renderer.render(nodes)
    ordered = sorted(renderer.stops, key=lambda stop: (stop.start, -stop.end))
    return TabStopData(text="".join(renderer.parts), tabstops=tuple(ordered))


__all__ = ["CARET_GROUP", "TabStop", "TabStopData", "extract"]
