"""Host mode to engine syntax mapping, plus fallback syntax/profile detection."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Mapping, Optional, Protocol

if TYPE_CHECKING:
    from .context import EditingContext

MODE_MAP: Mapping[str, str] = {
    "text/html": "html",
    "application/xml": "xml",
    "text/xsl": "xsl",
    "text/css": "css",
    "text/x-less": "less",
    "text/x-scss": "scss",
    "text/x-sass": "sass",
    "text/x-styl": "stylus",
    "application/xhtml+xml": "xhtml",
    "htmlmixed": "html",
}

STYLESHEET_SYNTAXES = frozenset({"css", "less", "scss", "sass", "stylus"})

_XHTML_DOCTYPE = re.compile(r"<!DOCTYPE[^>]+XHTML", re.IGNORECASE)


class SyntaxDetector(Protocol):
    def __call__(self, context: "EditingContext", hint: Optional[str]) -> str:
        ...


class ProfileDetector(Protocol):
    def __call__(self, context: "EditingContext") -> str:
        ...


def map_mode(mode: Optional[str]) -> Optional[str]:
    if not mode:
        return None
    return MODE_MAP.get(mode)


def detect_syntax(context: "EditingContext", hint: Optional[str]) -> str:
    """Accept a hint the engine understands, otherwise assume HTML."""

    if hint and context.settings.supports(hint):
        return hint.lower()
    return "html"


def detect_profile(context: "EditingContext") -> str:
    syntax = context.get_syntax()
    if syntax in {"xml", "xsl"}:
        return "xml"
    if syntax in STYLESHEET_SYNTAXES:
        return "css"
    if syntax == "xhtml":
        return "xhtml"
    if syntax == "html":
        return "xhtml" if _XHTML_DOCTYPE.search(context.get_content()) else "html"
    return context.settings.default_profile or "html"


__all__ = [
    "MODE_MAP",
    "STYLESHEET_SYNTAXES",
    "SyntaxDetector",
    "ProfileDetector",
    "map_mode",
    "detect_syntax",
    "detect_profile",
]
