"""Editor adapter and multi-selection action dispatcher for abbreviation engines."""

__all__ = [
    "actions",
    "adapters",
    "editor",
    "host",
    "keymaps",
    "plugin",
    "runtime",
]

__version__ = "0.1.0"
