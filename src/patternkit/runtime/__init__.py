"""Runtime - retry execution, cancellation and observability."""

from __future__ import annotations

from .concurrency import CancelToken, checkpoint
from .observability import configure_logging, get_logger
from .retry import (
    NO_RETRY,
    Backoff,
    ConstantBackoff,
    ExclusiveRunner,
    ExponentialBackoff,
    ExponentialRetry,
    FailFast,
    FixedRetry,
    RetryingClient,
    RetryPolicy,
    execute_with_retry,
    execute_with_retry_sync,
    policy_from_settings,
    retrying,
)

__all__ = [
    # Concurrency
    "CancelToken", "checkpoint",
    # Observability
    "configure_logging", "get_logger",
    # Retry
    "Backoff", "ConstantBackoff", "ExponentialBackoff",
    "RetryPolicy", "FailFast", "FixedRetry", "ExponentialRetry", "NO_RETRY", "policy_from_settings",
    "execute_with_retry", "execute_with_retry_sync", "RetryingClient", "ExclusiveRunner", "retrying",
]
