"""Command table and key bindings a host consults when a key is pressed."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, ContextManager, Dict, Iterator, Optional

from emmet_bridge.runtime.telemetry import SpanHandle, span

from .models import Binding, Command, KeyStroke

KeyLike = str | KeyStroke


@dataclass(slots=True)
class RegistryStats:
    command_count: int
    binding_count: int
    sources: tuple[str, ...]


class KeymapConflictError(RuntimeError):
    """A key is already bound and replacement was not requested."""

    def __init__(self, binding: Binding, existing: Binding):
        super().__init__(
            f"Key '{binding.id}' is already bound to '{existing.command_id}'"
        )
        self.binding = binding
        self.existing = existing


def _token(key: KeyLike) -> str:
    stroke = key if isinstance(key, KeyStroke) else KeyStroke.parse(key)
    return stroke.token


class KeymapRegistry:
    """Commands by id plus at most one binding per key.

    Bindings are stored under their canonical key token, so ``Cmd-Shift-M``
    and ``Shift-Cmd-M`` address the same slot. ``revision()`` increases on
    every binding change.
    """

    def __init__(self, *, logger_name: str | None = None) -> None:
        self._commands: Dict[str, Command] = {}
        self._bindings: Dict[str, Binding] = {}
        self._logger_name = logger_name
        self._revision = 0

    def _span(self, operation: str, **metadata: Any) -> ContextManager[SpanHandle]:
        return span(
            f"keymaps::{operation}",
            logger_name=self._logger_name,
            component="keymaps",
            metadata=metadata,
        )

    def revision(self) -> int:
        return self._revision

    # -- commands --------------------------------------------------------

    def has_command(self, command_id: str) -> bool:
        return command_id in self._commands

    def get_command(self, command_id: str) -> Command:
        command = self._commands.get(command_id)
        if command is None:
            raise KeyError(f"Command '{command_id}' is not registered")
        return command

    def register_command(self, command: Command, *, replace: bool = False) -> Command:
        with self._span("register_command", command_id=command.id):
            if command.id in self._commands and not replace:
                raise ValueError(f"Command '{command.id}' already registered")
            self._commands[command.id] = command
        return command

    # -- bindings --------------------------------------------------------

    def lookup(self, key: KeyLike) -> Optional[Binding]:
        return self._bindings.get(_token(key))

    def register_binding(self, binding: Binding, *, replace: bool = False) -> Binding:
        with self._span(
            "register_binding", key=binding.id, command_id=binding.command_id
        ) as handle:
            if not self.has_command(binding.command_id):
                raise KeyError(
                    f"Binding '{binding.id}' references unknown command '{binding.command_id}'"
                )
            current = self._bindings.get(binding.id)
            if current is not None and not replace:
                handle.add_metadata("conflict", current.command_id)
                raise KeymapConflictError(binding, current)
            self._bindings[binding.id] = binding
            self._revision += 1
        return binding

    def unregister_binding(self, key: KeyLike) -> Optional[Binding]:
        token = _token(key)
        with self._span("unregister_binding", key=token):
            removed = self._bindings.pop(token, None)
            if removed is not None:
                self._revision += 1
        return removed

    def unregister_where(self, predicate: Callable[[Binding], bool]) -> tuple[Binding, ...]:
        """Remove every binding matching ``predicate`` and return them."""

        with self._span("unregister_where") as handle:
            removed = tuple(b for b in self._bindings.values() if predicate(b))
            for binding in removed:
                del self._bindings[binding.id]
            if removed:
                self._revision += 1
            handle.add_metadata("removed", len(removed))
        return removed

    def iter_bindings(self, source: Optional[str] = None) -> Iterator[Binding]:
        return (
            b for b in list(self._bindings.values()) if source is None or b.source == source
        )

    def stats(self) -> RegistryStats:
        return RegistryStats(
            command_count=len(self._commands),
            binding_count=len(self._bindings),
            sources=tuple(sorted({b.source for b in self._bindings.values() if b.source})),
        )


__all__ = [
    "KeymapRegistry",
    "KeymapConflictError",
    "RegistryStats",
]
