"""patternkit - undo/redo history and retry policies.

Two independent utilities:

History (Memento):
    >>> from patternkit import Document, HistoryManager
    >>> doc, history = Document(), HistoryManager()
    >>> doc.set_text("Hello")
    >>> history.save_state(doc)
    >>> doc.set_text("Hello World")
    >>> history.undo(doc)
    True
    >>> doc.content
    'Hello'

Retry (Strategy):
    >>> from patternkit import CancelToken, ExponentialRetry, RetryingClient
    >>> client = RetryingClient(ExponentialRetry(max_attempts=4), name="payments")
    >>> token = CancelToken()
    >>> result = await client.request(charge, cancel=token)
"""

from patternkit.foundation import (
    Err,
    ErrorCode,
    Ok,
    PatternkitError,
    PatternkitSettings,
    Result,
    RetryCancelledError,
    clear_settings_cache,
    get_settings,
)
from patternkit.history import Document, DocumentState, HistoryManager, HistoryStats, Originator, Snapshot
from patternkit.runtime import (
    NO_RETRY,
    Backoff,
    CancelToken,
    ConstantBackoff,
    ExclusiveRunner,
    ExponentialBackoff,
    ExponentialRetry,
    FailFast,
    FixedRetry,
    RetryingClient,
    RetryPolicy,
    configure_logging,
    execute_with_retry,
    execute_with_retry_sync,
    get_logger,
    policy_from_settings,
    retrying,
)

__version__ = "0.1.0"

__all__ = [
    # History
    "Document", "DocumentState", "Snapshot", "Originator", "HistoryManager", "HistoryStats",
    # Retry
    "RetryPolicy", "FailFast", "FixedRetry", "ExponentialRetry", "NO_RETRY", "policy_from_settings",
    "Backoff", "ConstantBackoff", "ExponentialBackoff",
    "execute_with_retry", "execute_with_retry_sync", "RetryingClient", "ExclusiveRunner", "retrying",
    "CancelToken",
    # Errors
    "ErrorCode", "PatternkitError", "RetryCancelledError", "Result", "Ok", "Err",
    # Config & logging
    "PatternkitSettings", "get_settings", "clear_settings_cache", "configure_logging", "get_logger",
]
