"""Contract of the external abbreviation engine and its per-call outcomes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Mapping, Protocol, Sequence, Union, runtime_checkable

from emmet_bridge.host.protocol import PASS

if TYPE_CHECKING:
    from emmet_bridge.editor.context import EditingContext


class ActionCatalog(Protocol):
    def get_list(self) -> Sequence[Mapping[str, Any]]:
        ...


@runtime_checkable
class Engine(Protocol):
    """External transformation service invoked once per action iteration.

    ``run`` returns a truthy value when it handled the action, a falsy value
    when it did nothing, or ``PASS`` to hand the key back to the host. It may
    raise; callers contain the fault.
    """

    actions: ActionCatalog

    def run(self, action_name: str, context: "EditingContext") -> object:
        ...


@runtime_checkable
class SupportsVariables(Protocol):
    """Engines that accept resource variables such as ``indentation``."""

    def set_variable(self, name: str, value: str) -> None:
        ...


@dataclass(frozen=True, slots=True)
class EngineOk:
    value: object

    @property
    def passed(self) -> bool:
        return self.value is PASS

    def __bool__(self) -> bool:
        return not self.passed and bool(self.value)


@dataclass(frozen=True, slots=True)
class EngineFault:
    cause: BaseException

    def __bool__(self) -> bool:
        return False


EngineOutcome = Union[EngineOk, EngineFault]


def invoke(engine: Engine, action_name: str, context: "EditingContext") -> EngineOutcome:
    """Run ``action_name`` and capture any exception as an ``EngineFault``."""

    try:
        return EngineOk(engine.run(action_name, context))
    except Exception as exc:
        return EngineFault(exc)


def action_names(engine: Engine) -> tuple[str, ...]:
    catalog = getattr(engine, "actions", None)
    if catalog is None:
        return ()
    names = []
    for entry in catalog.get_list():
        name = entry.get("name") if isinstance(entry, Mapping) else getattr(entry, "name", None)
        if name:
            names.append(str(name))
    return tuple(dict.fromkeys(names))


__all__ = [
    "ActionCatalog",
    "Engine",
    "SupportsVariables",
    "EngineOk",
    "EngineFault",
    "EngineOutcome",
    "invoke",
    "action_names",
]
