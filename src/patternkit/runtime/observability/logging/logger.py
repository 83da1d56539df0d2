"""Structured logging for history and retry events.

Key/value logging with bound context: human-readable console output for
development, JSON lines (orjson) for log aggregation.

Quick Start:
    >>> from patternkit.runtime.observability import get_logger, configure_logging
    >>> configure_logging(format="console", level="DEBUG")
    >>> log = get_logger("patternkit.retry", operation="fetch")
    >>> log.info("retrying", attempt=1, delay=0.3)
"""

from __future__ import annotations

import logging
import sys
import time
from contextvars import ContextVar
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any, Protocol, TextIO, runtime_checkable

import orjson

if TYPE_CHECKING:
    from patternkit.foundation.config import LoggingSettings

LogContext = dict[str, Any]


@dataclass(slots=True)
class LogEntry:
    """A single rendered log record."""

    timestamp: float
    level: str
    event: str
    context: LogContext

    @property
    def ts_iso(self) -> str:
        return datetime.fromtimestamp(self.timestamp, tz=UTC).isoformat()

    @property
    def ts_human(self) -> str:
        """HH:MM:SS.mmm"""
        return datetime.fromtimestamp(self.timestamp, tz=UTC).strftime("%H:%M:%S.%f")[:-3]


@runtime_checkable
class LogRenderer(Protocol):
    """Protocol for log output renderers."""

    def render(self, entry: LogEntry) -> None: ...


@dataclass(slots=True)
class ConsoleRenderer:
    """Human-readable console output. Format: timestamp [level] event key=value ..."""

    output: TextIO = field(default_factory=lambda: sys.stderr)
    show_timestamp: bool = True

    def render(self, entry: LogEntry) -> None:
        parts = [entry.ts_human] if self.show_timestamp else []
        parts += [f"[{entry.level}]", entry.event]
        parts += [f"{k}={_format_value(v)}" for k, v in sorted(entry.context.items())]
        print(" ".join(parts), file=self.output)


@dataclass(slots=True)
class JsonRenderer:
    """JSON Lines output for log aggregation."""

    output: TextIO = field(default_factory=lambda: sys.stdout)

    def render(self, entry: LogEntry) -> None:
        payload = {"timestamp": entry.ts_iso, "level": entry.level, "event": entry.event, **entry.context}
        print(orjson.dumps(payload, default=repr, option=orjson.OPT_NON_STR_KEYS).decode(), file=self.output)


@dataclass(slots=True)
class NoOpRenderer:
    """Silent renderer for testing."""

    def render(self, entry: LogEntry) -> None:
        pass


@dataclass(slots=True)
class BoundLogger:
    """Structured logger with bound context. bind() returns a new logger with merged context.

    The level threshold and renderer are looked up at emit time, so loggers
    created at import time follow a later configure_logging() call.

    Example:
        >>> log = BoundLogger(context={"component": "history"})
        >>> log.debug("state saved", undo_depth=3)
    """

    context: LogContext = field(default_factory=dict)
    _renderer: LogRenderer | None = None

    def bind(self, **kw: Any) -> BoundLogger:
        return BoundLogger(context={**self.context, **kw}, _renderer=self._renderer)

    def _log(self, level: int, event: str, **kw: Any) -> None:
        if level < _level.get():
            return
        (self._renderer or _get_renderer()).render(
            LogEntry(time.time(), logging.getLevelName(level).lower(), event, {**self.context, **kw})
        )

    def debug(self, event: str, **kw: Any) -> None: self._log(logging.DEBUG, event, **kw)
    def info(self, event: str, **kw: Any) -> None: self._log(logging.INFO, event, **kw)
    def warning(self, event: str, **kw: Any) -> None: self._log(logging.WARNING, event, **kw)
    def error(self, event: str, **kw: Any) -> None: self._log(logging.ERROR, event, **kw)


_renderer: ContextVar[LogRenderer | None] = ContextVar("patternkit_log_renderer", default=None)
_level: ContextVar[int] = ContextVar("patternkit_log_level", default=logging.INFO)


def configure_logging(
    format: str = "console",  # noqa: A002
    level: str = "INFO",
    *,
    output: TextIO | None = None,
) -> LogRenderer:
    """Configure structured logging. Format: "console" (human), "json" (machine), "none"."""
    _level.set(getattr(logging, level.upper(), logging.INFO))
    match format:
        case "console": renderer: LogRenderer = ConsoleRenderer(output=output or sys.stderr)
        case "json": renderer = JsonRenderer(output=output or sys.stdout)
        case "none": renderer = NoOpRenderer()
        case _: raise ValueError(f"Unknown format: {format}. Use 'console', 'json', or 'none'")
    _renderer.set(renderer)
    return renderer


def configure_from_settings(settings: LoggingSettings | None = None) -> LogRenderer:
    """Configure logging from ``PATTERNKIT_LOG_*`` settings."""
    if settings is None:
        from patternkit.foundation.config import get_settings
        settings = get_settings().logging
    return configure_logging(settings.format, settings.level)


def get_logger(name: str | None = None, **initial_context: Any) -> BoundLogger:
    """Get a structured logger. Name is added to context as 'logger'."""
    return BoundLogger(context={**initial_context, **({"logger": name} if name else {})})


def _get_renderer() -> LogRenderer:
    if (renderer := _renderer.get()) is None:
        _renderer.set(renderer := ConsoleRenderer())
    return renderer


def _format_value(v: object) -> str:
    match v:
        case str(): return f'"{v}"'
        case bool(): return str(v).lower()
        case int() | float(): return str(v)
        case list() | tuple(): return f"[{len(v)} items]"
        case _: return repr(v)
