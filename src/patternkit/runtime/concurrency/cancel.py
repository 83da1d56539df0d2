"""Cooperative cancellation for retrying executions.

A CancelToken is a one-shot signal owned by the caller and passed explicitly
to whatever should observe it. Once cancelled it stays cancelled. Waits on
the token end early when it fires, so a retry delay never outlives a cancel.

Example:
    >>> token = CancelToken()
    >>> task = asyncio.create_task(execute_with_retry(fetch, policy, cancel=token))
    >>> token.cancel("user navigated away")
    >>> await task  # raises RetryCancelledError
"""

from __future__ import annotations

import asyncio
import threading
from dataclasses import dataclass, field

from patternkit.foundation.errors import RetryCancelledError


@dataclass(slots=True, eq=False)
class CancelToken:
    """Permanent cancellation flag with async and blocking waits.

    cancel() is expected to be called from the thread running the event loop
    that is waiting on the token, or from any thread for wait_sync().
    """

    _cancelled: bool = field(default=False, repr=False)
    _reason: str | None = field(default=None, repr=False)
    _event: threading.Event = field(default_factory=threading.Event, repr=False)
    _waiters: set[asyncio.Future[None]] = field(default_factory=set, repr=False)

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def reason(self) -> str | None:
        return self._reason

    def cancel(self, reason: str | None = None) -> bool:
        """Signal cancellation. Returns False if the token was already cancelled."""
        if self._cancelled:
            return False
        self._cancelled, self._reason = True, reason
        self._event.set()
        for waiter in tuple(self._waiters):
            if not waiter.done():
                waiter.set_result(None)
        return True

    def raise_if_cancelled(self, name: str = "operation", attempts: int = 0) -> None:
        """Raise RetryCancelledError if the token has been cancelled."""
        if self._cancelled:
            raise RetryCancelledError.create(name, attempts, self._reason)

    async def wait_cancelled(self) -> None:
        """Suspend until the token is cancelled."""
        if self._cancelled:
            return
        waiter = asyncio.get_running_loop().create_future()
        self._waiters.add(waiter)
        try:
            await waiter
        finally:
            self._waiters.discard(waiter)

    async def wait(self, delay: float) -> bool:
        """Sleep for delay seconds unless cancelled first.

        Returns:
            True if the full delay elapsed, False if the token fired
        """
        if self._cancelled:
            return False
        try:
            await asyncio.wait_for(self.wait_cancelled(), timeout=delay)
        except TimeoutError:
            return True
        return False

    def wait_sync(self, delay: float) -> bool:
        """Blocking counterpart of wait() for synchronous executors."""
        return not self._event.wait(delay)


async def checkpoint() -> None:
    """Cooperative cancellation checkpoint: yield control to the event loop."""
    await asyncio.sleep(0)
