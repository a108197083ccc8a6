"""Line-oriented text storage used by the in-memory host."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Sequence


@dataclass(slots=True)
class HostDocument:
    """Immutable-ish list-of-lines document.

    Lines never contain newline characters; the flattened text joins them
    with ``"\\n"``. Every edit returns a new document with a bumped version.
    """

    _lines: List[str] = field(default_factory=lambda: [""])
    version: int = 0

    @classmethod
    def from_text(cls, text: str, *, version: int = 0) -> "HostDocument":
        lines = text.replace("\r\n", "\n").replace("\r", "\n").split("\n")
        return cls(_lines=lines, version=version)

    def snapshot(self) -> Sequence[str]:
        return tuple(self._lines)

    @property
    def text(self) -> str:
        return "\n".join(self._lines)

    @property
    def line_count(self) -> int:
        return len(self._lines)

    def get_line(self, index: int) -> str:
        return self._lines[index]

    def with_text(self, text: str) -> "HostDocument":
        """Return a document holding ``text`` with the version bumped."""

        return HostDocument.from_text(text, version=self.version + 1)


__all__ = ["HostDocument"]
