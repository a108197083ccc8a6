"""Key combinations, command registry and the default keymap."""

from .models import Binding, Command, KeyStroke
from .registry import KeymapConflictError, KeymapRegistry, RegistryStats
from .defaults import DEFAULT_KEYMAP, default_actions, platform_keymap, select_actions

__all__ = [
    "Binding",
    "Command",
    "KeyStroke",
    "KeymapRegistry",
    "KeymapConflictError",
    "RegistryStats",
    "DEFAULT_KEYMAP",
    "default_actions",
    "platform_keymap",
    "select_actions",
]
