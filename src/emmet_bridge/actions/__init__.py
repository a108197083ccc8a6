"""Action dispatch: engine contract, classification table and the replay loop."""

from .catalog import (
    EXPAND_WITH_TAB,
    FORMATTED_LINE_BREAK,
    SINGLE_SELECTION_ACTIONS,
    is_single_selection,
)
from .dispatcher import ActionDispatcher, DispatchResult, DispatchStatus
from .engine import Engine, EngineFault, EngineOk, SupportsVariables, action_names, invoke

__all__ = [
    "EXPAND_WITH_TAB",
    "FORMATTED_LINE_BREAK",
    "SINGLE_SELECTION_ACTIONS",
    "is_single_selection",
    "ActionDispatcher",
    "DispatchResult",
    "DispatchStatus",
    "Engine",
    "EngineOk",
    "EngineFault",
    "SupportsVariables",
    "action_names",
    "invoke",
]
