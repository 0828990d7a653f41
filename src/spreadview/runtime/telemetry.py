"""Structured logging for the viewer, built on telelog.

Three calls cover every use in the package: ``get_logger`` for a cached
logger, ``record_event`` for one ``event::<name>`` line with key/value data,
and ``span`` to profile a block and tag its lines with metadata.

The Textual UI owns the terminal, so console output stays off unless
``SPREADVIEW_LOG_CONSOLE`` asks for it; ``SPREADVIEW_LOG_FILE`` sends lines
to a file instead.
"""

from __future__ import annotations

import os
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, Mapping, MutableMapping, Optional, cast

import telelog  # type: ignore[import]

tl = cast(Any, telelog)

ENV_PREFIX = "SPREADVIEW_"
DEFAULT_LOGGER_NAME = "spreadview"

_LOGGER_CACHE: MutableMapping[str, Any] = {}
_ACTIVE_CONFIG: Optional[Any] = None


def _flag(raw: Optional[str]) -> bool:
    return raw is not None and raw.lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class LogOptions:
    """Logging switches read from ``SPREADVIEW_LOG_*`` variables."""

    level: str = "INFO"
    console: bool = False
    color: bool = True
    log_file: str = ""

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "LogOptions":
        env = os.environ if environ is None else environ
        return cls(
            level=(env.get(f"{ENV_PREFIX}LOG_LEVEL") or "INFO").upper(),
            console=_flag(env.get(f"{ENV_PREFIX}LOG_CONSOLE")),
            color=not _flag(env.get(f"{ENV_PREFIX}NO_COLOR")),
            log_file=env.get(f"{ENV_PREFIX}LOG_FILE", ""),
        )

    def build(self) -> Any:
        config = tl.Config()
        config.with_min_level(self.level)
        config.with_console_output(self.console)
        if self.console:
            config.with_colored_output(self.color)
        if self.log_file:
            config.with_file_output(self.log_file)
        return config


def configure(options: Optional[LogOptions] = None) -> None:
    """Adopt ``options`` (or the environment) and drop cached loggers."""

    global _ACTIVE_CONFIG
    _ACTIVE_CONFIG = (options or LogOptions.from_env()).build()
    _LOGGER_CACHE.clear()


def get_logger(name: Optional[str] = None) -> Any:
    """Return a cached ``telelog.Logger`` for ``name``."""

    if _ACTIVE_CONFIG is None:
        configure()
    logger_name = name or DEFAULT_LOGGER_NAME
    if logger_name not in _LOGGER_CACHE:
        _LOGGER_CACHE[logger_name] = tl.Logger.with_config(logger_name, _ACTIVE_CONFIG)
    return _LOGGER_CACHE[logger_name]


def _stringify(value: Any) -> str:
    if isinstance(value, str):
        return value
    return repr(value) if isinstance(value, (dict, list, tuple, set)) else str(value)


def _emit(logger: Any, level: str, message: str, payload: Dict[str, Any]) -> None:
    name = str(level).lower()
    with_data = getattr(logger, f"{name}_with", None)
    if with_data is not None:
        with_data(message, [(str(k), _stringify(v)) for k, v in payload.items()])
        return
    plain = getattr(logger, name, None)
    if plain is None:
        raise ValueError(f"Unsupported log level '{level}'.")
    plain(f"{message} {payload}")


def record_event(
    name: str,
    *,
    level: str = "info",
    data: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    _emit(get_logger(logger_name), level, f"event::{name}", {"event": name, **(data or {})})


@dataclass
class SpanHandle:
    """Yielded by ``span``; extra metadata lands on the failure line."""

    logger: Any
    span_name: str
    component_name: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    def add_metadata(self, key: str, value: Any) -> None:
        self.metadata[key] = _stringify(value)

    def fail(self, reason: str) -> None:
        payload = {"span": self.span_name, **self.metadata, "reason": reason}
        if self.component_name:
            payload["component"] = self.component_name
        _emit(self.logger, "error", "span::fail", payload)


@contextmanager
def span(
    name: str,
    *,
    logger_name: Optional[str] = None,
    component: Optional[str] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> Iterator[SpanHandle]:
    """Profile a block, optionally tracked as ``component``.

    ``metadata`` is attached as logger context for the duration of the block.
    An exception escaping the block is logged as ``span::fail`` and re-raised.
    """

    log = get_logger(logger_name)
    context = {key: _stringify(value) for key, value in (metadata or {}).items()}
    for key, value in context.items():
        log.add_context(key, value)

    with ExitStack() as stack:
        if component:
            stack.enter_context(log.track_component(component))
        stack.enter_context(log.profile(name))
        handle = SpanHandle(
            logger=log, span_name=name, component_name=component, metadata=dict(context)
        )
        try:
            yield handle
        except Exception as exc:
            handle.fail(str(exc))
            raise
        finally:
            for key in context:
                log.remove_context(key)


__all__ = [
    "LogOptions",
    "SpanHandle",
    "configure",
    "get_logger",
    "record_event",
    "span",
]
