"""Run an operation under a retry policy, with optional cooperative cancellation.

Loop semantics (identical for the async and sync executors):

1. Stop with RetryCancelledError if the token is already cancelled.
2. Call the operation. Success returns its value.
3. On failure (other than a nested RetryCancelledError, which always
   propagates): if the token fired meanwhile, raise RetryCancelledError chained
   from the failure. Otherwise ask the policy; if it declines, re-raise the
   original exception unchanged.
4. Wait get_delay(attempt) on the token (a cancel aborts the wait and raises
   RetryCancelledError), increment the attempt counter, go to 1.

Each call owns its attempt counter, so concurrent executions never share state.
"""

from __future__ import annotations

import asyncio
import time
from typing import TYPE_CHECKING, Callable, TypeVar

from patternkit.foundation.errors import RetryCancelledError
from patternkit.runtime.concurrency import CancelToken, checkpoint
from patternkit.runtime.observability import get_logger

if TYPE_CHECKING:
    from collections.abc import Awaitable

    from .policy import RetryPolicy

T = TypeVar("T")

log = get_logger("patternkit.retry")


def _announce_retry(policy: RetryPolicy, name: str, attempt: int, error: BaseException, delay: float) -> None:
    budget = {"max_attempts": m} if (m := getattr(policy, "max_attempts", None)) is not None else {}
    log.info(
        "retrying", operation=name, attempt=attempt + 1, delay=round(delay, 3), error=type(error).__name__, **budget,
    )
    if (hook := getattr(policy, "on_retry", None)) is not None:
        hook(attempt, error, delay)


def _cancelled(name: str, attempts: int, token: CancelToken) -> RetryCancelledError:
    log.warning("retry cancelled", operation=name, attempts=attempts, reason=token.reason)
    return RetryCancelledError.create(name, attempts, token.reason)


async def _attempt(
    operation: Callable[[], Awaitable[T]], token: CancelToken | None, name: str, attempt: int,
) -> T:
    """Await one attempt, abandoning it if the token fires first."""
    if token is None:
        return await operation()
    task = asyncio.ensure_future(operation())
    watcher = asyncio.ensure_future(token.wait_cancelled())
    try:
        await asyncio.wait((task, watcher), return_when=asyncio.FIRST_COMPLETED)
    except asyncio.CancelledError:
        task.cancel()
        watcher.cancel()
        raise
    watcher.cancel()
    await asyncio.gather(watcher, return_exceptions=True)
    if not task.done():
        task.cancel()
        await asyncio.gather(task, return_exceptions=True)
        raise _cancelled(name, attempt + 1, token)
    return task.result()


async def execute_with_retry(
    operation: Callable[[], Awaitable[T]],
    policy: RetryPolicy,
    *,
    cancel: CancelToken | None = None,
    name: str = "operation",
) -> T:
    """Execute an async operation under a retry policy.

    Args:
        operation: Zero-argument coroutine function to run
        policy: Retry policy consulted after each failure
        cancel: Optional token; once cancelled no further attempts start
        name: Operation name for logging and error messages

    Returns:
        The operation's result from the first successful attempt

    Raises:
        RetryCancelledError: If the token fires before success
        Exception: The operation's own exception once the policy declines
    """
    attempt = 0
    while True:
        if cancel is not None and cancel.cancelled:
            raise _cancelled(name, attempt, cancel)
        try:
            return await _attempt(operation, cancel, name, attempt)
        except RetryCancelledError:
            raise
        except Exception as e:
            if cancel is not None and cancel.cancelled:
                raise _cancelled(name, attempt + 1, cancel) from e
            if not policy.should_retry(e, attempt):
                raise
            delay = policy.get_delay(attempt)
            _announce_retry(policy, name, attempt, e, delay)
            if cancel is None:
                await asyncio.sleep(delay)
            elif not await cancel.wait(delay):
                raise _cancelled(name, attempt + 1, cancel) from e
            await checkpoint()
            attempt += 1


def execute_with_retry_sync(
    operation: Callable[[], T],
    policy: RetryPolicy,
    *,
    cancel: CancelToken | None = None,
    name: str = "operation",
) -> T:
    """Execute a blocking operation under a retry policy.

    Synchronous version for plain callables. The wait between attempts blocks
    the calling thread but ends as soon as the token is cancelled.
    """
    attempt = 0
    while True:
        if cancel is not None and cancel.cancelled:
            raise _cancelled(name, attempt, cancel)
        try:
            return operation()
        except RetryCancelledError:
            raise
        except Exception as e:
            if cancel is not None and cancel.cancelled:
                raise _cancelled(name, attempt + 1, cancel) from e
            if not policy.should_retry(e, attempt):
                raise
            delay = policy.get_delay(attempt)
            _announce_retry(policy, name, attempt, e, delay)
            if cancel is None:
                time.sleep(delay)
            elif not cancel.wait_sync(delay):
                raise _cancelled(name, attempt + 1, cancel) from e
            attempt += 1
