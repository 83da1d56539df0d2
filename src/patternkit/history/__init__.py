"""Undo/redo history over immutable document snapshots.

Example:
    >>> from patternkit.history import Document, HistoryManager
    >>> doc, history = Document(), HistoryManager()
    >>> doc.set_text("Version 1")
    >>> history.create_checkpoint("v1", doc)
    >>> doc.set_text("Version 2")
    >>> history.restore_checkpoint("v1", doc)
    True
"""

from .document import Document, Originator
from .manager import HistoryManager, HistoryStats
from .snapshot import DocumentState, Snapshot

__all__ = [
    "Document",
    "DocumentState",
    "HistoryManager",
    "HistoryStats",
    "Originator",
    "Snapshot",
]
