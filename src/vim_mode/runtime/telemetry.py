"""Structured logging for the mode controller, built on ``logging``.

The rest of the package only touches four helpers:

``configure(...)`` -- attach handlers for a level or a named preset
``get_logger(name)`` -- fetch a logger under the ``vim_mode`` hierarchy
``record_event(name, ...)`` -- emit a structured event such as ``mode.switch``
``span(name, ...)`` -- time a block and tag its log lines with metadata
"""

from __future__ import annotations

import logging
import os
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, Optional

ENV_PREFIX = "VIM_MODE_"
ROOT_LOGGER_NAME = "vim_mode"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

_HANDLER_MARK = "_vim_mode_handler"


def _env(name: str, default: Optional[str] = None) -> Optional[str]:
    return os.getenv(f"{ENV_PREFIX}{name}", default)


def _env_flag(name: str, default: bool) -> bool:
    raw = _env(name)
    if raw is None:
        return default
    return raw.lower() in {"1", "true", "yes", "on"}


def _stringify(value: Any) -> str:
    if isinstance(value, str):
        return value
    if hasattr(value, "value") and isinstance(getattr(value, "value"), str):
        return value.value
    return repr(value) if isinstance(value, (dict, list, tuple, set)) else str(value)


def _format_pairs(data: Dict[str, Any]) -> str:
    return " ".join(f"{key}={_stringify(value)}" for key, value in data.items())


def _resolve_level(level: str | int) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unsupported log level '{level}'.")
    return resolved


def _console_handler() -> logging.Handler:
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%H:%M:%S"))
    return handler


def _file_handler(path: str) -> logging.Handler:
    handler = logging.FileHandler(path)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    return handler


def _preset_handlers(preset: str) -> tuple[int, list[logging.Handler]]:
    key = preset.lower()
    if key == "development":
        return logging.DEBUG, [_console_handler()]
    if key == "production":
        return logging.INFO, [_file_handler(_env("LOG_FILE") or "vim_mode.log")]
    if key == "quiet":
        return logging.ERROR, [logging.NullHandler()]
    raise ValueError(f"Unknown preset '{preset}'.")


def _default_handlers() -> tuple[int, list[logging.Handler]]:
    level = _env("LOG_LEVEL")
    handlers: list[logging.Handler] = []
    if level and not _env_flag("DISABLE_CONSOLE", False):
        handlers.append(_console_handler())
    log_file = _env("LOG_FILE")
    if log_file:
        handlers.append(_file_handler(log_file))
    if not handlers:
        handlers.append(logging.NullHandler())
    return _resolve_level(level or "INFO"), handlers


def configure(
    *, level: Optional[str | int] = None, preset: Optional[str] = None
) -> None:
    """Replace the handlers on the ``vim_mode`` logger.

    Parameters
    ----------
    level:
        Explicit level; console output at that level.
    preset:
        ``"development"``, ``"production"`` or ``"quiet"``. ``level`` and
        ``preset`` are mutually exclusive.

    Without arguments the ``VIM_MODE_LOG_LEVEL`` / ``VIM_MODE_LOG_FILE``
    variables decide; with neither set the package stays silent.
    """

    if level is not None and preset:
        raise ValueError("Provide either `level` or `preset`, not both.")

    if preset:
        resolved, handlers = _preset_handlers(preset)
    elif level is not None:
        resolved, handlers = _resolve_level(level), [_console_handler()]
    else:
        resolved, handlers = _default_handlers()

    root = logging.getLogger(ROOT_LOGGER_NAME)
    for existing in list(root.handlers):
        if getattr(existing, _HANDLER_MARK, False):
            root.removeHandler(existing)
            existing.close()
    for handler in handlers:
        setattr(handler, _HANDLER_MARK, True)
        root.addHandler(handler)
    root.setLevel(resolved)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return ``name`` (or the package root logger) from ``logging``."""

    return logging.getLogger(name or ROOT_LOGGER_NAME)


def record_event(
    name: str,
    *,
    level: str | int = "info",
    data: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    """Emit ``event::<name>`` with ``data`` rendered as key=value pairs."""

    log = get_logger(logger_name)
    numeric = _resolve_level(level)
    if not log.isEnabledFor(numeric):
        return
    payload = {"event": name, **(data or {})}
    log.log(numeric, "event::%s %s", name, _format_pairs(payload), extra={"event": payload})


@dataclass
class SpanHandle:
    """Yielded by ``span``; carries the context its log lines are tagged with."""

    logger: logging.Logger
    span_name: str
    component_name: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    def _payload(self, **extra: Any) -> Dict[str, Any]:
        payload = {"span": self.span_name, **self.metadata}
        if self.component_name:
            payload["component"] = self.component_name
        payload.update({key: _stringify(val) for key, val in extra.items()})
        return payload

    def fail(self, reason: str) -> None:
        self.logger.error("span::fail %s", _format_pairs(self._payload(reason=reason)))


@contextmanager
def span(
    name: str,
    *,
    logger_name: Optional[str] = None,
    component: Optional[str | bool] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> Iterator[SpanHandle]:
    """Time a block and log its metadata at debug level when it ends.

    ``component=True`` tags the block with a component named after the span,
    a string names the component explicitly.
    """

    component_name = None
    if component is True:
        component_name = name
    elif isinstance(component, str):
        component_name = component

    handle = SpanHandle(
        logger=get_logger(logger_name),
        span_name=name,
        component_name=component_name,
        metadata={key: _stringify(value) for key, value in (metadata or {}).items()},
    )
    started = time.perf_counter()
    try:
        yield handle
    except Exception as exc:
        handle.fail(str(exc))
        raise
    if handle.logger.isEnabledFor(logging.DEBUG):
        elapsed_ms = (time.perf_counter() - started) * 1000.0
        handle.logger.debug(
            "span::end %s",
            _format_pairs(handle._payload(elapsed_ms=f"{elapsed_ms:.3f}")),
        )


configure()

__all__ = [
    "SpanHandle",
    "configure",
    "get_logger",
    "record_event",
    "span",
]
