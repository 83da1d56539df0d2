"""Retry policies: decide whether to retry a failed attempt and how long to wait.

A policy is anything satisfying the RetryPolicy protocol. Three variants ship:

- FailFast: never retries
- FixedRetry: up to max_attempts calls, constant delay
- ExponentialRetry: up to max_attempts calls, delay base_delay * 2^attempt

Attempt numbers are 0-indexed and count failed calls, so ``max_attempts=3``
asks the policy after attempts 0, 1 and 2 and declines on the last one.

Example:
    >>> payments = ExponentialRetry(max_attempts=5, base_delay=0.3)
    >>> analytics = FixedRetry(max_attempts=2, delay=0.2)
    >>> auth = NO_RETRY
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Annotated, Callable, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field, NonNegativeFloat, PositiveFloat

from patternkit.foundation.errors import ErrorCode, PatternkitError

from .backoff import Backoff, ConstantBackoff, ExponentialBackoff

if TYPE_CHECKING:
    from patternkit.foundation.config import RetrySettings

RetryHook = Callable[[int, BaseException, float], None]


@runtime_checkable
class RetryPolicy(Protocol):
    """Decision function for re-attempting a failed operation."""

    def should_retry(self, error: BaseException, attempt: int) -> bool:
        """Whether to retry after ``attempt`` (0-indexed) failed with ``error``."""
        ...

    def get_delay(self, attempt: int) -> float:
        """Seconds to wait before the retry following ``attempt``."""
        ...


class FailFast(BaseModel):
    """Policy that never retries."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    def should_retry(self, error: BaseException, attempt: int) -> bool:
        return False

    def get_delay(self, attempt: int) -> float:
        return 0.0


class _BoundedRetry(BaseModel):
    """Shared attempt budget and error filter for retrying policies.

    Attributes:
        max_attempts: Total calls of the operation, including the first
        retry_on: Exception types worth retrying; anything else fails fast
        on_retry: Optional hook called as (attempt, error, delay) before each wait
    """

    model_config = ConfigDict(frozen=True, extra="forbid", arbitrary_types_allowed=True)

    max_attempts: Annotated[int, Field(ge=1, le=20)] = 3
    retry_on: tuple[type[BaseException], ...] = (Exception,)
    on_retry: RetryHook | None = Field(default=None, exclude=True, repr=False)

    @property
    @abstractmethod
    def backoff(self) -> Backoff: ...

    def should_retry(self, error: BaseException, attempt: int) -> bool:
        if attempt + 1 >= self.max_attempts:
            return False
        return isinstance(error, self.retry_on)

    def get_delay(self, attempt: int) -> float:
        return self.backoff.delay(attempt)


class FixedRetry(_BoundedRetry):
    """Retry with a constant delay between attempts."""

    delay: NonNegativeFloat = 0.5

    @property
    def backoff(self) -> Backoff:
        return ConstantBackoff(self.delay)


class ExponentialRetry(_BoundedRetry):
    """Retry with delay base_delay * 2^attempt, optionally capped at max_delay."""

    max_attempts: Annotated[int, Field(ge=1, le=20)] = 5
    base_delay: PositiveFloat = 0.3
    max_delay: PositiveFloat | None = None

    @property
    def backoff(self) -> Backoff:
        return ExponentialBackoff(base=self.base_delay, max_delay=self.max_delay)


NO_RETRY = FailFast()


def policy_from_settings(settings: RetrySettings | None = None) -> RetryPolicy:
    """Build the configured default policy from ``PATTERNKIT_RETRY_*`` settings."""
    if settings is None:
        from patternkit.foundation.config import get_settings
        settings = get_settings().retry
    match settings.strategy:
        case "never":
            return NO_RETRY
        case "fixed":
            return FixedRetry(max_attempts=settings.max_attempts, delay=settings.delay)
        case "exponential":
            return ExponentialRetry(
                max_attempts=settings.max_attempts, base_delay=settings.base_delay, max_delay=settings.max_delay,
            )
        case other:
            raise PatternkitError(f"Unknown retry strategy: {other}", code=ErrorCode.INVALID_POLICY)
