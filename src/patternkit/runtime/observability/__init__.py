"""Observability - structured logging for history and retry events."""

from .logging import (
    BoundLogger,
    ConsoleRenderer,
    JsonRenderer,
    LogEntry,
    LogRenderer,
    NoOpRenderer,
    configure_from_settings,
    configure_logging,
    get_logger,
)

__all__ = [
    "BoundLogger", "ConsoleRenderer", "JsonRenderer", "LogEntry", "LogRenderer", "NoOpRenderer",
    "configure_from_settings", "configure_logging", "get_logger",
]
