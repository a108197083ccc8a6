"""Structured logging and profiling for the bridge, backed by telelog.

Surface used by the rest of the package:

``configure(...)`` -- adopt an explicit telelog config or a named preset
``get_logger(name)`` -- fetch (and cache) a configured logger
``record_event(name, ...)`` -- emit a structured event at a chosen level
``record_fault(name, exc, ...)`` -- log a contained exception as an error event
``span(name, ...)`` -- profile a block and optionally track it as a component

Output is driven by ``EMMET_BRIDGE_*`` variables: ``LOG_LEVEL``, ``LOG_FILE``,
``LOG_JSON``, ``DISABLE_CONSOLE``, ``NO_COLOR``, ``LOG_BUFFERED`` and
``LOG_BUFFER_SIZE``.
"""

from __future__ import annotations

import os
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterator, Mapping, MutableMapping, Optional, Tuple, cast

import telelog  # type: ignore[import]

tl = cast(Any, telelog)

ENV_PREFIX = "EMMET_BRIDGE_"
DEFAULT_LOGGER_NAME = os.getenv(f"{ENV_PREFIX}LOGGER", "emmet_bridge")

_TRUTHY = frozenset({"1", "true", "yes", "on"})

_LOGGER_CACHE: MutableMapping[str, Any] = {}
_ACTIVE_CONFIG: Optional[Any] = None


@dataclass(frozen=True, slots=True)
class LogOptions:
    """Output switches resolved from the environment or a preset."""

    level: str = "INFO"
    console: bool = True
    colored: bool = True
    json: bool = False
    file: str = ""
    buffered: bool = False
    buffer_size: int = 2048

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "LogOptions":
        source = os.environ if env is None else env

        def raw(name: str) -> Optional[str]:
            return source.get(f"{ENV_PREFIX}{name}")

        def flag(name: str) -> bool:
            value = raw(name)
            return value is not None and value.lower() in _TRUTHY

        return cls(
            level=(raw("LOG_LEVEL") or "INFO").upper(),
            console=not flag("DISABLE_CONSOLE"),
            colored=not flag("NO_COLOR"),
            json=flag("LOG_JSON"),
            file=raw("LOG_FILE") or "",
            buffered=flag("LOG_BUFFERED"),
            buffer_size=int(raw("LOG_BUFFER_SIZE") or "2048"),
        )


PRESETS: Dict[str, LogOptions] = {
    "development": LogOptions(level="DEBUG"),
    "production": LogOptions(
        level="WARNING", console=False, file="emmet_bridge.log", buffered=True
    ),
    "quiet": LogOptions(level="ERROR", console=False, colored=False),
}


def build_config(options: LogOptions) -> Any:
    """Translate ``options`` into a ``telelog.Config`` with profiling on."""

    config = tl.Config()
    config.with_min_level(options.level)
    config.with_console_output(options.console)
    if options.console:
        config.with_colored_output(options.colored)
    config.with_json_format(options.json)
    if options.file:
        config.with_file_output(options.file)
    if options.buffered:
        config.with_buffering(True)
        config.with_buffer_size(options.buffer_size)
    config.with_profiling(True)
    return config


def configure(*, config: Optional[Any] = None, preset: Optional[str] = None) -> None:
    """Replace the active telelog configuration.

    ``config`` is an explicit ``telelog.Config``; ``preset`` names one of
    ``PRESETS``. Passing both is an error. Cached loggers are dropped so the
    next ``get_logger`` call picks up the new configuration.
    """

    global _ACTIVE_CONFIG
    if config and preset:
        raise ValueError("Provide either `config` or `preset`, not both.")

    if preset:
        try:
            options = PRESETS[preset.lower()]
        except KeyError:
            raise ValueError(f"Unknown preset '{preset}'.") from None
        log_file = os.getenv(f"{ENV_PREFIX}LOG_FILE")
        if log_file and options.file:
            options = replace(options, file=log_file)
        config = build_config(options)
    elif config is None:
        config = build_config(LogOptions.from_env())

    _ACTIVE_CONFIG = config
    _LOGGER_CACHE.clear()


def get_logger(name: Optional[str] = None) -> Any:
    """Return a cached ``telelog.Logger`` for ``name``."""

    global _ACTIVE_CONFIG
    if _ACTIVE_CONFIG is None:
        _ACTIVE_CONFIG = build_config(LogOptions.from_env())
    logger_name = name or DEFAULT_LOGGER_NAME
    log = _LOGGER_CACHE.get(logger_name)
    if log is None:
        log = _LOGGER_CACHE[logger_name] = tl.Logger.with_config(
            logger_name, _ACTIVE_CONFIG
        )
    return log


def _text(value: Any) -> str:
    if isinstance(value, (dict, list, tuple, set)):
        return repr(value)
    return value if isinstance(value, str) else str(value)


def _level_method(log: Any, level: str) -> Tuple[Any, bool]:
    name = level.lower()
    structured = getattr(log, f"{name}_with", None)
    if structured is not None:
        return structured, True
    plain = getattr(log, name, None)
    if plain is None:
        raise ValueError(f"Unsupported log level '{level}'.")
    return plain, False


def _emit(log: Any, level: str, message: str, payload: Dict[str, Any]) -> None:
    method, structured = _level_method(log, level)
    if structured:
        method(message, [(str(key), _text(value)) for key, value in payload.items()])
    else:
        method(f"{message} {payload}")


def record_event(
    name: str,
    *,
    level: str = "info",
    data: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    """Emit ``event::<name>`` with ``data`` attached as key/value pairs."""

    _emit(get_logger(logger_name), level, f"event::{name}", {"event": name, **(data or {})})


def record_fault(
    name: str,
    exc: BaseException,
    *,
    data: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    """Log an exception that was contained instead of propagated."""

    payload = {
        "event": name,
        "error_type": type(exc).__name__,
        "error": str(exc),
        **(data or {}),
    }
    _emit(get_logger(logger_name), "error", f"event::{name}", payload)


@dataclass
class SpanHandle:
    """Yielded by ``span``; collects metadata reported when the block fails."""

    logger: Any
    span_name: str
    component_name: Optional[str] = None
    metadata: Dict[str, str] = field(default_factory=dict)

    def add_metadata(self, key: str, value: Any) -> None:
        self.metadata[key] = _text(value)

    def fail(self, reason: str) -> None:
        self._report("error", "span::fail", reason)

    def _report(self, level: str, message: str, reason: Optional[str]) -> None:
        payload: Dict[str, Any] = {"span": self.span_name, **self.metadata}
        if self.component_name:
            payload["component"] = self.component_name
        if reason:
            payload["reason"] = reason
        _emit(self.logger, level, message, payload)


@contextmanager
def span(
    name: str,
    *,
    logger_name: Optional[str] = None,
    component: Optional[str | bool] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> Iterator[SpanHandle]:
    """Profile a block and, when ``component`` is given, track it as a component.

    ``component=True`` reuses ``name`` as the component id. ``metadata`` is
    attached as logger context while the block runs.
    """

    log = get_logger(logger_name)
    component_name = name if component is True else (component or None)
    handle = SpanHandle(
        logger=log,
        span_name=name,
        component_name=component_name,
        metadata={key: _text(value) for key, value in (metadata or {}).items()},
    )
    pushed = list(handle.metadata)

    with ExitStack() as stack:
        for key in pushed:
            log.add_context(key, handle.metadata[key])
            stack.callback(log.remove_context, key)
        if component_name:
            stack.enter_context(log.track_component(component_name))
        stack.enter_context(log.profile(name))
        try:
            yield handle
        except Exception as exc:
            handle.fail(str(exc))
            raise


configure()

__all__ = [
    "LogOptions",
    "PRESETS",
    "SpanHandle",
    "build_config",
    "configure",
    "get_logger",
    "record_event",
    "record_fault",
    "span",
]
