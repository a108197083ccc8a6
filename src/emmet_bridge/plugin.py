"""Command registration and keymap management for a host keymap registry."""

from __future__ import annotations

from functools import partial
from typing import Mapping, Optional, Sequence
from weakref import WeakKeyDictionary

from emmet_bridge.actions.dispatcher import ActionDispatcher, DispatchResult, DispatchStatus
from emmet_bridge.actions.engine import Engine, action_names
from emmet_bridge.host.protocol import PASS, HostEditor
from emmet_bridge.keymaps import (
    DEFAULT_KEYMAP,
    Binding,
    Command,
    KeymapRegistry,
    KeyStroke,
    default_actions,
    platform_keymap,
    select_actions,
)
from emmet_bridge.runtime import telemetry
from emmet_bridge.runtime.config import BridgeSettings, load_settings

SOURCE = "emmet"

_REGISTRATIONS: "WeakKeyDictionary[KeymapRegistry, RegistrationHandle]" = WeakKeyDictionary()


class RegistrationHandle:
    """Live registration of bridge commands in one keymap registry."""

    def __init__(
        self,
        registry: KeymapRegistry,
        dispatcher: ActionDispatcher,
        settings: BridgeSettings,
    ) -> None:
        self.registry = registry
        self.dispatcher = dispatcher
        self.settings = settings

    @property
    def engine(self) -> Engine:
        return self.dispatcher.engine

    def command_id(self, action: str) -> str:
        return f"{self.settings.command_prefix}{action}"

    def is_bridge_command(self, command_id: str) -> bool:
        return command_id.startswith(self.settings.command_prefix)

    def ensure_command(self, action: str) -> Command:
        command_id = self.command_id(action)
        if self.registry.has_command(command_id):
            return self.registry.get_command(command_id)
        return self.registry.register_command(
            Command(
                id=command_id,
                run=partial(self.run_command, action),
                action=action,
                source=SOURCE,
            )
        )

    def run_command(self, action: str, host: HostEditor) -> DispatchResult:
        return self.dispatcher.dispatch(action, host)

    # -- keymap ----------------------------------------------------------

    def system_key(self, key: str | KeyStroke) -> KeyStroke:
        stroke = key if isinstance(key, KeyStroke) else KeyStroke.parse(key)
        return stroke.for_platform(mac=self.settings.mac)

    def add_keybinding(self, key: str | KeyStroke, action: str) -> Binding:
        """Bind ``key`` (after platform rewrite) to ``action``, replacing any binding."""

        self.ensure_command(action)
        binding = Binding(
            key=self.system_key(key),
            command_id=self.command_id(action),
            source=SOURCE,
        )
        return self.registry.register_binding(binding, replace=True)

    def set_keymap(self, keymap: Mapping[str, str]) -> tuple[Binding, ...]:
        return tuple(self.add_keybinding(key, action) for key, action in keymap.items())

    def remove_keybinding(self, name: str) -> tuple[Binding, ...]:
        """Remove the binding for key ``name``, or every binding of action ``name``."""

        try:
            key = self.system_key(name)
        except ValueError:
            key = None
        if key is not None and self.registry.lookup(key) is not None:
            removed = self.registry.unregister_binding(key)
            return (removed,) if removed else ()
        command_id = self.command_id(name)
        return self.registry.unregister_where(lambda b: b.command_id == command_id)

    def clear_keymap(self) -> tuple[Binding, ...]:
        return self.registry.unregister_where(
            lambda b: self.is_bridge_command(b.command_id)
        )

    def handle_key(self, host: HostEditor, key: str | KeyStroke) -> DispatchResult:
        """Run whatever ``key`` is bound to; unbound keys are deferred to the host."""

        try:
            stroke = key if isinstance(key, KeyStroke) else KeyStroke.parse(key)
        except ValueError:
            return DispatchResult.defer(str(key))
        binding = self.registry.lookup(stroke)
        if binding is None:
            return DispatchResult.defer(stroke.token)
        command = self.registry.get_command(binding.command_id)
        outcome = command(host)
        if isinstance(outcome, DispatchResult):
            return outcome
        status = DispatchStatus.DEFERRED if outcome is PASS else DispatchStatus.HANDLED
        return DispatchResult(action=binding.command_id, status=status, value=bool(outcome))

    def teardown(self) -> None:
        self.clear_keymap()
        _REGISTRATIONS.pop(self.registry, None)


def setup(
    registry: KeymapRegistry,
    engine: Engine,
    *,
    settings: Optional[BridgeSettings] = None,
    keymap: Optional[Mapping[str, str]] = None,
    include_actions: Sequence[str] | None = None,
    exclude_actions: Sequence[str] | None = None,
) -> RegistrationHandle:
    """Register bridge commands and the keymap in ``registry`` once.

    Commands are created for every action of the keymap and every action the
    engine lists. Calling ``setup`` again for the same registry returns the
    existing handle untouched.
    """

    existing = _REGISTRATIONS.get(registry)
    if existing is not None:
        if existing.engine is not engine:
            telemetry.record_event(
                "plugin.setup_ignored",
                level="warning",
                data={"reason": "registry already bound to another engine"},
            )
        return existing

    settings = settings or load_settings()
    keymap = DEFAULT_KEYMAP if keymap is None else keymap
    handle = RegistrationHandle(
        registry, ActionDispatcher(engine, settings=settings), settings
    )

    with telemetry.span(
        "plugin::setup",
        logger_name=settings.logger_name,
        component="plugin",
        metadata={"mac": settings.mac},
    ) as span_handle:
        candidates = (*default_actions(), *action_names(engine), *keymap.values())
        actions = tuple(
            dict.fromkeys(
                select_actions(
                    candidates, include=include_actions, exclude=exclude_actions
                )
            )
        )
        for action in actions:
            handle.ensure_command(action)
        for stroke, action in platform_keymap(keymap, mac=settings.mac):
            if action in actions:
                handle.add_keybinding(stroke, action)
        span_handle.add_metadata("commands", len(actions))

    _REGISTRATIONS[registry] = handle
    telemetry.record_event(
        "plugin.setup",
        data={"commands": len(actions), "bindings": registry.stats().binding_count},
        logger_name=settings.logger_name,
    )
    return handle


__all__ = ["SOURCE", "RegistrationHandle", "setup"]
