"""Boundary types describing what the bridge needs from a host editor."""

from __future__ import annotations

from typing import ContextManager, Optional, Protocol, Sequence, runtime_checkable

from .state import HostRange, Position


class _PassSentinel:
    """Marker meaning "not handled here, run the host's default behaviour"."""

    _instance: Optional["_PassSentinel"] = None

    def __new__(cls) -> "_PassSentinel":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "PASS"


PASS = _PassSentinel()


@runtime_checkable
class HostEditor(Protocol):
    """Capability set consumed from an editing surface.

    Positions are ``(line, column)`` pairs; selections are ``(anchor, head)``
    pairs in the host's enumeration order. ``batch()`` must make everything
    executed inside it a single undo step and defer observer notifications
    until the outermost batch exits.
    """

    indent_with_tabs: bool
    indent_unit: int
    mode: Optional[str]
    profile: Optional[str]

    def get_value(self) -> str:
        ...

    def get_line(self, line: int) -> str:
        ...

    def line_count(self) -> int:
        ...

    def replace_range(
        self, text: str, start: Position, end: Optional[Position] = None
    ) -> None:
        ...

    def list_selections(self) -> Sequence[HostRange]:
        ...

    def set_selections(self, ranges: Sequence[HostRange]) -> None:
        ...

    def batch(self) -> ContextManager[object]:
        ...


class HostValidationError(RuntimeError):
    """Raised when a host receives malformed coordinates or selection lists."""

    def __init__(self, message: str, *, position: object | None = None) -> None:
        super().__init__(message)
        self.position = position


__all__ = ["PASS", "HostEditor", "HostValidationError"]
