"""Shared fixtures for patternkit tests."""

import pytest

from patternkit.foundation.config import clear_settings_cache
from patternkit.runtime.observability import configure_logging


@pytest.fixture(autouse=True)
def quiet_logging() -> object:
    """Silence structured logging unless a test configures its own renderer."""
    configure_logging(format="none")
    yield


@pytest.fixture(autouse=True)
def clean_settings() -> object:
    """Reset cached settings before and after each test."""
    clear_settings_cache()
    yield
    clear_settings_cache()
