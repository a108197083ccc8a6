"""Environment-driven settings shared by the dispatcher, context and plugin."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field
from typing import Mapping, Optional

ENV_PREFIX = "EMMET_BRIDGE_"

DEFAULT_SUPPORTED_SYNTAXES: tuple[str, ...] = (
    "html",
    "xhtml",
    "xml",
    "xsl",
    "css",
    "less",
    "scss",
    "sass",
    "stylus",
    "haml",
    "jade",
    "slim",
)


@dataclass(frozen=True, slots=True)
class BridgeSettings:
    """Static knobs read once and passed explicitly to bridge components."""

    mac: bool = False
    default_profile: str = "html"
    strict_selection: bool = False
    supported_syntaxes: tuple[str, ...] = DEFAULT_SUPPORTED_SYNTAXES
    command_prefix: str = "emmet."
    logger_name: str = "emmet_bridge"
    variables: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.command_prefix:
            raise ValueError("command_prefix cannot be empty")
        normalized = tuple(
            dict.fromkeys(s.strip().lower() for s in self.supported_syntaxes if s.strip())
        )
        object.__setattr__(self, "supported_syntaxes", normalized)

    def supports(self, syntax: Optional[str]) -> bool:
        return bool(syntax) and str(syntax).lower() in self.supported_syntaxes


def _lookup(env: Mapping[str, str], name: str) -> Optional[str]:
    return env.get(f"{ENV_PREFIX}{name}")


def _flag(env: Mapping[str, str], name: str, default: bool) -> bool:
    raw = _lookup(env, name)
    if raw is None:
        return default
    return raw.lower() in {"1", "true", "yes", "on"}


def _is_mac(env: Mapping[str, str]) -> bool:
    raw = _lookup(env, "PLATFORM")
    if raw:
        return raw.strip().lower() in {"mac", "macos", "darwin", "osx"}
    return sys.platform == "darwin"


def load_settings(env: Optional[Mapping[str, str]] = None) -> BridgeSettings:
    """Build settings from ``EMMET_BRIDGE_*`` variables (``os.environ`` by default)."""

    source = os.environ if env is None else env
    syntaxes_raw = _lookup(source, "SUPPORTED_SYNTAXES")
    syntaxes = (
        tuple(part for part in syntaxes_raw.split(",") if part.strip())
        if syntaxes_raw
        else DEFAULT_SUPPORTED_SYNTAXES
    )
    variables = {
        key[len(ENV_PREFIX) + 4 :].lower(): value
        for key, value in source.items()
        if key.startswith(f"{ENV_PREFIX}VAR_")
    }
    return BridgeSettings(
        mac=_is_mac(source),
        default_profile=(_lookup(source, "DEFAULT_PROFILE") or "html").strip(),
        strict_selection=_flag(source, "STRICT_SELECTION", False),
        supported_syntaxes=syntaxes,
        command_prefix=_lookup(source, "COMMAND_PREFIX") or "emmet.",
        logger_name=_lookup(source, "LOGGER") or "emmet_bridge",
        variables=variables,
    )


__all__ = ["BridgeSettings", "DEFAULT_SUPPORTED_SYNTAXES", "load_settings"]
