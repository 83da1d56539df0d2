"""Tests for environment-based configuration."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from patternkit.foundation.config import PatternkitSettings, RetrySettings, get_settings
from patternkit.history import HistoryManager
from patternkit.runtime.retry import NO_RETRY, ExponentialRetry, FixedRetry, policy_from_settings


def test_defaults() -> None:
    settings = PatternkitSettings()
    assert settings.history.max_depth is None
    assert settings.retry.strategy == "exponential"
    assert settings.retry.max_attempts == 3
    assert settings.logging.format == "console"


def test_env_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PATTERNKIT_RETRY_STRATEGY", "FIXED")
    monkeypatch.setenv("PATTERNKIT_RETRY_MAX_ATTEMPTS", "4")
    monkeypatch.setenv("PATTERNKIT_RETRY_DELAY", "0.1")
    monkeypatch.setenv("PATTERNKIT_LOG_LEVEL", "debug")

    settings = get_settings()
    assert settings.retry.strategy == "fixed"
    assert settings.logging.level == "DEBUG"

    policy = policy_from_settings()
    assert isinstance(policy, FixedRetry)
    assert (policy.max_attempts, policy.delay) == (4, 0.1)


def test_get_settings_is_cached() -> None:
    assert get_settings() is get_settings()


@pytest.mark.parametrize(
    ("strategy", "expected"),
    [("never", None), ("fixed", FixedRetry), ("exponential", ExponentialRetry)],
)
def test_policy_from_settings_strategies(strategy: str, expected: type | None) -> None:
    policy = policy_from_settings(RetrySettings(strategy=strategy, max_attempts=2, base_delay=0.5, max_delay=2.0))
    if expected is None:
        assert policy is NO_RETRY
    else:
        assert isinstance(policy, expected)
        assert policy.max_attempts == 2


def test_exponential_settings_carry_cap() -> None:
    policy = policy_from_settings(RetrySettings(strategy="exponential", base_delay=1.0, max_delay=2.0))
    assert policy.get_delay(5) == 2.0


def test_invalid_settings() -> None:
    with pytest.raises(ValidationError):
        RetrySettings(strategy="sometimes")
    with pytest.raises(ValidationError):
        RetrySettings(max_attempts=0)


def test_history_manager_from_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PATTERNKIT_HISTORY_MAX_DEPTH", "2")
    assert HistoryManager.from_settings().max_depth == 2
    assert HistoryManager().max_depth == 2
    assert HistoryManager(max_depth=None).max_depth is None
    assert HistoryManager(max_depth=5).max_depth == 5
