"""Backoff strategies for retry policies.

Provides pluggable delay calculation for retry attempts:
- ConstantBackoff: Fixed delay
- ExponentialBackoff: base * multiplier^attempt with optional cap and jitter
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Protocol, runtime_checkable


@runtime_checkable
class Backoff(Protocol):
    """Protocol for backoff delay calculation.

    Attempt numbers are 0-indexed (the delay after the first failure uses
    attempt 0).
    """

    def delay(self, attempt: int) -> float:
        """Delay in seconds before the next attempt."""
        ...


@dataclass(frozen=True, slots=True)
class ConstantBackoff:
    """Same delay for every attempt.

    Attributes:
        delay_seconds: Fixed delay in seconds (default: 0.5)
    """

    delay_seconds: float = 0.5

    def delay(self, attempt: int) -> float:
        return self.delay_seconds


@dataclass(frozen=True, slots=True)
class ExponentialBackoff:
    """Exponential backoff.

    Delay = min(base * (multiplier ^ attempt), max_delay), then scaled by a
    random 0.5-1.5x factor when jitter is on. With the defaults the delay is
    exactly base * 2^attempt.

    Attributes:
        base: Delay for attempt 0 in seconds (default: 0.3)
        multiplier: Growth factor (default: 2.0)
        max_delay: Optional cap in seconds (default: uncapped)
        jitter: Randomize delays to spread out concurrent retriers (default: False)
    """

    base: float = 0.3
    multiplier: float = 2.0
    max_delay: float | None = None
    jitter: bool = False

    def delay(self, attempt: int) -> float:
        d = self.base * (self.multiplier ** attempt)
        if self.max_delay is not None:
            d = min(d, self.max_delay)
        return d * (0.5 + random.random()) if self.jitter else d
