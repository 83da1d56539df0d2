"""Foundation - configuration and error handling shared by every package."""

from .config import PatternkitSettings, clear_settings_cache, get_settings
from .errors import Err, ErrorCode, Ok, PatternkitError, Result, RetryCancelledError

__all__ = [
    "PatternkitSettings", "get_settings", "clear_settings_cache",
    "ErrorCode", "PatternkitError", "RetryCancelledError", "Result", "Ok", "Err",
]
