"""Concurrency primitives for cooperative cancellation.

Example:
    >>> from patternkit.runtime.concurrency import CancelToken
    >>> token = CancelToken()
    >>> token.cancel("shutdown")
    True
    >>> token.cancelled
    True
"""

from __future__ import annotations

from .cancel import CancelToken, checkpoint

__all__ = ["CancelToken", "checkpoint"]
