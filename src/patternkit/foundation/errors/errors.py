"""Error codes and exceptions shared by the history and retry packages.

History operations report failure through their boolean return value and
never raise. The retry executors let the wrapped operation's own exception
propagate untouched and raise ``RetryCancelledError`` only when the caller
cancels, so the two outcomes are distinguishable with a plain ``except``.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Self


class ErrorCode(StrEnum):
    """Machine-readable classification for patternkit errors."""
    CANCELLED = "CANCELLED"
    INVALID_POLICY = "INVALID_POLICY"
    UNKNOWN = "UNKNOWN"


class PatternkitError(Exception):
    """Base exception carrying an ErrorCode."""

    code: ErrorCode = ErrorCode.UNKNOWN

    def __init__(self, message: str, *, code: ErrorCode | None = None) -> None:
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r}, code={self.code.value})"


class RetryCancelledError(PatternkitError):
    """Raised when a retrying execution is cancelled by its caller.

    Attributes:
        attempts: Number of times the operation was started before cancellation
        reason: Optional reason passed to ``CancelToken.cancel``
    """

    code = ErrorCode.CANCELLED

    def __init__(self, message: str = "Retry cancelled", *, attempts: int = 0, reason: str | None = None) -> None:
        super().__init__(f"{message}: {reason}" if reason else message)
        self.attempts = attempts
        self.reason = reason

    @classmethod
    def create(cls, name: str, attempts: int, reason: str | None = None) -> Self:
        """Factory used by the executors."""
        return cls(f"[{name}] cancelled after {attempts} attempt(s)", attempts=attempts, reason=reason)
