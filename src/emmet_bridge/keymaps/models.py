"""Dataclasses describing key combinations, commands and bindings."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Iterable

# canonical modifier order, outermost first
MODIFIER_ORDER: tuple[str, ...] = ("Shift", "Cmd", "Ctrl", "Alt")

_MODIFIER_ALIASES = {
    "shift": "Shift",
    "cmd": "Cmd",
    "meta": "Cmd",
    "ctrl": "Ctrl",
    "control": "Ctrl",
    "alt": "Alt",
    "option": "Alt",
}

# split on dashes that are not the final character, so "Cmd--" keeps "-" as key
_KEY_PARTS = re.compile(r"-(?!$)")


def _normalize_modifiers(modifiers: Iterable[str]) -> tuple[str, ...]:
    resolved = set()
    for modifier in modifiers:
        cleaned = modifier.strip()
        if not cleaned:
            continue
        canonical = _MODIFIER_ALIASES.get(cleaned.lower())
        if canonical is None:
            raise ValueError(f"Unknown modifier '{modifier}'")
        resolved.add(canonical)
    return tuple(m for m in MODIFIER_ORDER if m in resolved)


@dataclass(frozen=True, slots=True)
class KeyStroke:
    """Single normalized key combination such as ``Shift-Ctrl-Up``."""

    key: str
    modifiers: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not self.key:
            raise ValueError("key cannot be empty")
        object.__setattr__(self, "modifiers", _normalize_modifiers(self.modifiers))

    @classmethod
    def parse(cls, name: str) -> "KeyStroke":
        parts = _KEY_PARTS.split(name.strip())
        *modifiers, key = parts
        return cls(key=key, modifiers=tuple(modifiers))

    @property
    def token(self) -> str:
        return "-".join((*self.modifiers, self.key))

    def for_platform(self, *, mac: bool) -> "KeyStroke":
        """Swap ``Cmd`` for ``Ctrl`` on non-Mac platforms."""

        if mac or "Cmd" not in self.modifiers:
            return self
        swapped = tuple("Ctrl" if m == "Cmd" else m for m in self.modifiers)
        return KeyStroke(key=self.key, modifiers=swapped)

    def __str__(self) -> str:
        return self.token


@dataclass(frozen=True, slots=True)
class Command:
    """Callable registered under ``id``; ``action`` names the engine action it runs."""

    id: str
    run: Callable[..., object]
    action: str | None = None
    source: str | None = None

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("command id cannot be empty")
        if not callable(self.run):
            raise TypeError(f"command '{self.id}' is not callable")

    def __call__(self, *args: object, **kwargs: object) -> object:
        return self.run(*args, **kwargs)


@dataclass(frozen=True, slots=True)
class Binding:
    """One key combination pointing at a command id. String keys are parsed."""

    key: KeyStroke
    command_id: str
    source: str | None = None

    def __post_init__(self) -> None:
        if not self.command_id:
            raise ValueError("binding needs a command id")
        if isinstance(self.key, str):
            object.__setattr__(self, "key", KeyStroke.parse(self.key))

    @property
    def id(self) -> str:
        return self.key.token


__all__ = ["MODIFIER_ORDER", "KeyStroke", "Command", "Binding"]
