"""Unified error handling for patternkit.

- ErrorCode: Classification of library errors
- PatternkitError/RetryCancelledError: Exception hierarchy
- Result/Ok/Err: Value-based error handling
"""

from .errors import ErrorCode, PatternkitError, RetryCancelledError
from .result import Err, Ok, Result, sequence

__all__ = [
    "ErrorCode", "PatternkitError", "RetryCancelledError",
    "Result", "Ok", "Err", "sequence",
]
