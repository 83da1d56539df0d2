"""Configuration management using pydantic-settings."""

from .settings import (
    HistorySettings,
    LoggingSettings,
    PatternkitSettings,
    RetrySettings,
    clear_settings_cache,
    get_settings,
)

__all__ = [
    "HistorySettings",
    "LoggingSettings",
    "PatternkitSettings",
    "RetrySettings",
    "clear_settings_cache",
    "get_settings",
]
