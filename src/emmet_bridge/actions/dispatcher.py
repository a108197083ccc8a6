"""Replays engine actions across host selections inside one atomic batch."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, Sequence

from emmet_bridge.editor.context import EditingContext
from emmet_bridge.editor.selection import SelectionIndexError
from emmet_bridge.host.protocol import HostEditor
from emmet_bridge.runtime import telemetry
from emmet_bridge.runtime.config import BridgeSettings, load_settings

from .catalog import PASS_WHEN_UNHANDLED, SYNTAX_SENSITIVE_ACTIONS, is_single_selection
from .engine import Engine, EngineFault, SupportsVariables, invoke

ContextFactory = Callable[[HostEditor], EditingContext]


class DispatchStatus(str, Enum):
    HANDLED = "handled"
    DEFERRED = "deferred"


@dataclass(frozen=True, slots=True)
class DispatchResult:
    """Outcome of one dispatch.

    ``value`` is the truthiness of the last completed iteration. Faults and
    skipped indices are reported but never turn a run into a failure.
    """

    action: str
    status: DispatchStatus
    value: bool = False
    iterations: int = 0
    faults: tuple[EngineFault, ...] = ()
    skipped: tuple[int, ...] = ()

    @property
    def handled(self) -> bool:
        return self.status is DispatchStatus.HANDLED

    @property
    def deferred(self) -> bool:
        return self.status is DispatchStatus.DEFERRED

    @classmethod
    def defer(cls, action: str, **fields: object) -> "DispatchResult":
        return cls(action=action, status=DispatchStatus.DEFERRED, **fields)  # type: ignore[arg-type]


class ActionDispatcher:
    """Runs an engine action once, or once per selection, as a single batch."""

    def __init__(
        self,
        engine: Engine,
        *,
        settings: Optional[BridgeSettings] = None,
        context_factory: Optional[ContextFactory] = None,
        logger_name: Optional[str] = None,
    ) -> None:
        self.engine = engine
        self.settings = settings or load_settings()
        self._context_factory = context_factory or self._default_context
        self._logger_name = logger_name or f"{self.settings.logger_name}.dispatch"

    def dispatch(self, action_name: str, host: HostEditor) -> DispatchResult:
        context = self._context_factory(host)
        context.selection_index = 0
        if isinstance(self.engine, SupportsVariables):
            self.engine.set_variable("indentation", context.get_indentation())

        with telemetry.span(
            f"dispatch::{action_name}",
            logger_name=self._logger_name,
            component="dispatcher",
            metadata={"action": action_name},
        ) as handle:
            with host.batch():
                result = self._replay(action_name, context)
            handle.add_metadata("status", result.status.value)
            handle.add_metadata("iterations", result.iterations)

        if result.deferred:
            telemetry.record_event(
                "dispatch.deferred",
                level="debug",
                data={"action": action_name, "iterations": result.iterations},
                logger_name=self._logger_name,
            )
        return result

    def _replay(self, action_name: str, context: EditingContext) -> DispatchResult:
        if is_single_selection(action_name):
            indices: Sequence[int] = (0,)
        else:
            indices = range(len(context.selection.list()))

        value = False
        iterations = 0
        faults: List[EngineFault] = []
        skipped: List[int] = []

        for index in indices:
            context.selection_index = index
            try:
                context.selection.current()
            except SelectionIndexError as exc:
                if self.settings.strict_selection:
                    raise
                telemetry.record_event(
                    "dispatch.selection_skipped",
                    level="warning",
                    data={"action": action_name, "index": index, "count": exc.count},
                    logger_name=self._logger_name,
                )
                skipped.append(index)
                value = False
                continue

            if self._defers_before_run(action_name, context):
                return DispatchResult.defer(
                    action_name, iterations=iterations, skipped=tuple(skipped)
                )

            outcome = invoke(self.engine, action_name, context)
            iterations += 1
            if isinstance(outcome, EngineFault):
                telemetry.record_fault(
                    "dispatch.engine_fault",
                    outcome.cause,
                    data={"action": action_name, "index": index},
                    logger_name=self._logger_name,
                )
                faults.append(outcome)
                value = False
                continue

            if outcome.passed or (not outcome and action_name in PASS_WHEN_UNHANDLED):
                return DispatchResult.defer(
                    action_name,
                    iterations=iterations,
                    faults=tuple(faults),
                    skipped=tuple(skipped),
                )
            value = bool(outcome)

        return DispatchResult(
            action=action_name,
            status=DispatchStatus.HANDLED,
            value=value,
            iterations=iterations,
            faults=tuple(faults),
            skipped=tuple(skipped),
        )

    def _defers_before_run(self, action_name: str, context: EditingContext) -> bool:
        if action_name not in SYNTAX_SENSITIVE_ACTIONS:
            return False
        return context.selection.something_selected() or not context.is_valid_syntax()

    def _default_context(self, host: HostEditor) -> EditingContext:
        return EditingContext(host, settings=self.settings)


__all__ = ["ActionDispatcher", "DispatchResult", "DispatchStatus"]
