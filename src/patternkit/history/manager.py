"""Undo/redo history with named checkpoints.

The manager owns every Snapshot it stores; documents never keep references
to them. Failures (nothing to undo, unknown checkpoint) are reported through
the boolean return value and leave all state unchanged.

Invariants:
    - save_state() and restore_checkpoint() clear the redo stack
    - undo() and redo() are inverses: each pushes the current state onto the
      opposite stack before restoring the popped entry

Example:
    >>> doc, history = Document(), HistoryManager()
    >>> for text in ("A", "B", "C"):
    ...     doc.set_text(text)
    ...     history.save_state(doc)
    >>> history.undo(doc), doc.content
    (True, 'B')
"""

from __future__ import annotations

from collections import deque
from collections.abc import MutableSequence
from types import EllipsisType
from typing import TYPE_CHECKING, Annotated, Self

from pydantic import BaseModel, ConfigDict, Field

from patternkit.runtime.observability import get_logger

if TYPE_CHECKING:
    from patternkit.foundation.config import HistorySettings

    from .document import Originator
    from .snapshot import Snapshot

log = get_logger("patternkit.history")


def _configured_max_depth() -> int | None:
    from patternkit.foundation.config import get_settings
    return get_settings().history.max_depth


class HistoryStats(BaseModel):
    """Sizes of the history stacks, for memory monitoring."""

    model_config = ConfigDict(frozen=True)

    undo_depth: Annotated[int, Field(ge=0)]
    redo_depth: Annotated[int, Field(ge=0)]
    checkpoint_count: Annotated[int, Field(ge=0)]


class HistoryManager:
    """Caretaker for document snapshots.

    The top of the undo stack mirrors the document right after save_state(),
    so undo() steps past it to the previously saved state.

    Args:
        max_depth: Maximum undo entries kept; the oldest is dropped first.
            None keeps everything. Defaults to PATTERNKIT_HISTORY_MAX_DEPTH.
    """

    __slots__ = ("_undo", "_redo", "_checkpoints", "_max_depth")

    def __init__(self, max_depth: int | None | EllipsisType = ...) -> None:
        if max_depth is ...:
            max_depth = _configured_max_depth()
        if max_depth is not None and max_depth < 1:
            raise ValueError(f"max_depth must be positive, got {max_depth}")
        self._max_depth = max_depth
        self._undo: deque[Snapshot] = deque(maxlen=max_depth)
        self._redo: list[Snapshot] = []
        self._checkpoints: dict[str, Snapshot] = {}

    @classmethod
    def from_settings(cls, settings: HistorySettings | None = None) -> Self:
        """Create a manager bounded by ``PATTERNKIT_HISTORY_MAX_DEPTH``."""
        if settings is None:
            from patternkit.foundation.config import get_settings
            settings = get_settings().history
        return cls(max_depth=settings.max_depth)

    @property
    def max_depth(self) -> int | None:
        return self._max_depth

    @property
    def can_undo(self) -> bool:
        return bool(self._undo)

    @property
    def can_redo(self) -> bool:
        return bool(self._redo)

    def save_state(self, document: Originator) -> None:
        """Record the document's current state as a new undo step."""
        self._redo.clear()
        self._undo.append(document.create_snapshot())
        log.debug("state saved", undo_depth=len(self._undo))

    def undo(self, document: Originator) -> bool:
        if not self._step(self._undo, self._redo, document):
            return False
        log.debug("undo", undo_depth=len(self._undo), redo_depth=len(self._redo))
        return True

    def redo(self, document: Originator) -> bool:
        if not self._step(self._redo, self._undo, document):
            return False
        log.debug("redo", undo_depth=len(self._undo), redo_depth=len(self._redo))
        return True

    @staticmethod
    def _step(source: MutableSequence[Snapshot], target: MutableSequence[Snapshot], document: Originator) -> bool:
        """Move the document one entry back along source, recording where it came from on target.

        An entry on top of source that matches the document is the current
        state, not a step: it is dropped and the entry below it restored.
        """
        current = document.create_snapshot()
        skip = 1 if source and source[-1].state == current.state else 0
        if len(source) <= skip:
            return False
        if skip:
            source.pop()
        target.append(current)
        document.restore_snapshot(source.pop())
        return True

    def create_checkpoint(self, name: str, document: Originator) -> None:
        """Store the current state under name, replacing any earlier checkpoint of that name."""
        self._checkpoints[name] = document.create_snapshot()
        log.debug("checkpoint created", checkpoint=name)

    def restore_checkpoint(self, name: str, document: Originator) -> bool:
        """Jump to a checkpoint. The jump itself is undoable."""
        if (snapshot := self._checkpoints.get(name)) is None:
            return False
        self._undo.append(document.create_snapshot())
        self._redo.clear()
        document.restore_snapshot(snapshot)
        log.debug("checkpoint restored", checkpoint=name, undo_depth=len(self._undo))
        return True

    def get_checkpoint(self, name: str) -> Snapshot | None:
        return self._checkpoints.get(name)

    def delete_checkpoint(self, name: str) -> bool:
        return self._checkpoints.pop(name, None) is not None

    def list_checkpoints(self) -> list[str]:
        """Checkpoint names in creation order."""
        return list(self._checkpoints)

    def clear_history(self) -> None:
        """Drop undo, redo and checkpoints."""
        self._undo.clear()
        self._redo.clear()
        self._checkpoints.clear()

    def stats(self) -> HistoryStats:
        return HistoryStats(
            undo_depth=len(self._undo), redo_depth=len(self._redo), checkpoint_count=len(self._checkpoints),
        )

    def __repr__(self) -> str:
        s = self.stats()
        return f"HistoryManager(undo={s.undo_depth}, redo={s.redo_depth}, checkpoints={s.checkpoint_count})"
