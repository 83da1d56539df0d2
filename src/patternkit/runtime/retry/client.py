"""Call-site helpers built on the retry executors.

- RetryingClient: binds one policy to a client so each call site picks its
  retry behaviour by construction, not by branching on the caller
- retrying(): turns an operation into a zero-argument retrying coroutine function
- ExclusiveRunner: at most one live execution per runner; starting a new one
  cancels the previous, close() cancels whatever is in flight

Example:
    >>> payments = RetryingClient(ExponentialRetry(), name="payments")
    >>> analytics = RetryingClient(FixedRetry(max_attempts=2, delay=0.2), name="analytics")
    >>> auth = RetryingClient(NO_RETRY, name="auth")
    >>> receipt = await payments.request(lambda: charge(order))
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, TypeVar

from patternkit.foundation.errors import Err, Ok, Result
from patternkit.runtime.concurrency import CancelToken

from .executor import execute_with_retry, execute_with_retry_sync

if TYPE_CHECKING:
    from collections.abc import Awaitable

    from .policy import RetryPolicy

T = TypeVar("T")


class RetryingClient:
    """Executes operations under a fixed retry policy."""

    __slots__ = ("_policy", "_name")

    def __init__(self, policy: RetryPolicy, *, name: str = "client") -> None:
        self._policy, self._name = policy, name

    @property
    def policy(self) -> RetryPolicy:
        return self._policy

    @property
    def name(self) -> str:
        return self._name

    async def request(self, operation: Callable[[], Awaitable[T]], *, cancel: CancelToken | None = None) -> T:
        """Run operation, raising its final exception or RetryCancelledError."""
        return await execute_with_retry(operation, self._policy, cancel=cancel, name=self._name)

    def request_sync(self, operation: Callable[[], T], *, cancel: CancelToken | None = None) -> T:
        return execute_with_retry_sync(operation, self._policy, cancel=cancel, name=self._name)

    async def request_result(
        self, operation: Callable[[], Awaitable[T]], *, cancel: CancelToken | None = None,
    ) -> Result[T, Exception]:
        """Like request(), but failures come back as Err instead of being raised."""
        try:
            return Ok(await self.request(operation, cancel=cancel))
        except Exception as e:
            return Err(e)

    def __repr__(self) -> str:
        return f"RetryingClient({self._name!r}, {self._policy!r})"


def retrying(
    operation: Callable[[], Awaitable[T]],
    policy: RetryPolicy,
    cancel: CancelToken | None = None,
    *,
    name: str = "operation",
) -> Callable[[], Awaitable[T]]:
    """Wrap operation so every call runs it under policy with a fresh attempt counter."""
    async def execute() -> T:
        return await execute_with_retry(operation, policy, cancel=cancel, name=name)
    return execute


class ExclusiveRunner:
    """Runs one retrying execution at a time for a single call site.

    Each execute() cancels the token of the previous execution before starting
    its own, so a superseded request stops retrying and fails with
    RetryCancelledError. close() cancels the current execution, e.g. when the
    owning component is torn down.
    """

    __slots__ = ("_policy", "_name", "_token")

    def __init__(self, policy: RetryPolicy, *, name: str = "runner") -> None:
        self._policy, self._name = policy, name
        self._token: CancelToken | None = None

    @property
    def active_token(self) -> CancelToken | None:
        return self._token

    async def execute(self, operation: Callable[[], Awaitable[T]]) -> T:
        if self._token is not None:
            self._token.cancel("superseded")
        self._token = token = CancelToken()
        return await execute_with_retry(operation, self._policy, cancel=token, name=self._name)

    def close(self, reason: str = "closed") -> None:
        if self._token is not None:
            self._token.cancel(reason)
