"""Environment-based configuration using pydantic-settings.

Example:
    >>> from patternkit.foundation.config import get_settings
    >>> settings = get_settings()
    >>> settings.retry.strategy
    'exponential'

    # Or with environment variables:
    # PATTERNKIT_RETRY_STRATEGY=fixed
    # PATTERNKIT_RETRY_MAX_ATTEMPTS=5
    # PATTERNKIT_HISTORY_MAX_DEPTH=100
    # PATTERNKIT_LOG_LEVEL=DEBUG
"""

from __future__ import annotations

from functools import lru_cache
from typing import Annotated, Literal

from pydantic import Field, NonNegativeFloat, PositiveFloat, PositiveInt, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class HistorySettings(BaseSettings):
    """Undo/redo history configuration."""

    model_config = SettingsConfigDict(
        env_prefix="PATTERNKIT_HISTORY_",
        extra="ignore",
    )

    max_depth: PositiveInt | None = Field(default=None, description="Undo entries kept; None keeps all")


class RetrySettings(BaseSettings):
    """Default retry policy configuration."""

    model_config = SettingsConfigDict(
        env_prefix="PATTERNKIT_RETRY_",
        extra="ignore",
    )

    strategy: Literal["never", "fixed", "exponential"] = "exponential"
    max_attempts: Annotated[int, Field(ge=1, le=20)] = 3
    delay: NonNegativeFloat = Field(default=0.5, description="Fixed strategy delay in seconds")
    base_delay: PositiveFloat = Field(default=0.3, description="Exponential strategy base delay in seconds")
    max_delay: PositiveFloat | None = Field(default=None, description="Cap on exponential delay")

    @field_validator("strategy", mode="before")
    @classmethod
    def _normalize_strategy(cls, v: str) -> str:
        return v.lower() if isinstance(v, str) else v


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(
        env_prefix="PATTERNKIT_LOG_",
        extra="ignore",
    )

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    format: Literal["console", "json", "none"] = "console"

    @field_validator("level", mode="before")
    @classmethod
    def _normalize_level(cls, v: str) -> str:
        return v.upper() if isinstance(v, str) else v


class PatternkitSettings(BaseSettings):
    """Root settings for patternkit.

    Loads configuration from environment variables with the PATTERNKIT_
    prefix and from a local .env file.

    Example environment variables:
        PATTERNKIT_DEBUG=true
        PATTERNKIT_HISTORY_MAX_DEPTH=50
        PATTERNKIT_RETRY_STRATEGY=fixed
        PATTERNKIT_LOG_FORMAT=json
    """

    model_config = SettingsConfigDict(
        env_prefix="PATTERNKIT_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
        validate_default=True,
    )

    debug: bool = Field(default=False, description="Enable debug mode")

    history: HistorySettings = Field(default_factory=HistorySettings)
    retry: RetrySettings = Field(default_factory=RetrySettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


@lru_cache(maxsize=1)
def get_settings() -> PatternkitSettings:
    """Get the process settings instance (cached)."""
    return PatternkitSettings()


def clear_settings_cache() -> None:
    """Clear the settings cache so the next get_settings() re-reads the environment."""
    get_settings.cache_clear()
