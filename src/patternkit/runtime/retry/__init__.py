"""Retry policies for failing operations.

Provides the policy variants (fail fast, fixed delay, exponential backoff),
the executors that apply them, and call-site helpers with cooperative
cancellation.

Example:
    >>> from patternkit.runtime.retry import ExponentialRetry, execute_with_retry
    >>> from patternkit.runtime.concurrency import CancelToken
    >>>
    >>> token = CancelToken()
    >>> data = await execute_with_retry(
    ...     fetch_payments, ExponentialRetry(max_attempts=4, base_delay=0.5), cancel=token,
    ... )
"""

from .backoff import Backoff, ConstantBackoff, ExponentialBackoff
from .client import ExclusiveRunner, RetryingClient, retrying
from .executor import execute_with_retry, execute_with_retry_sync
from .policy import NO_RETRY, ExponentialRetry, FailFast, FixedRetry, RetryPolicy, policy_from_settings

__all__ = [
    # Backoff strategies
    "Backoff",
    "ConstantBackoff",
    "ExponentialBackoff",
    # Policies
    "RetryPolicy",
    "FailFast",
    "FixedRetry",
    "ExponentialRetry",
    "NO_RETRY",
    "policy_from_settings",
    # Execution
    "execute_with_retry",
    "execute_with_retry_sync",
    "RetryingClient",
    "ExclusiveRunner",
    "retrying",
]
