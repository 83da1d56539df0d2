"""Tests for the undo/redo history manager.

Validates:
- Undo/redo inverse behaviour
- Redo invalidation on new saves and checkpoint restores
- Checkpoint create/restore/delete/list
- Depth bound and stats
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from patternkit.history import Document, DocumentState, HistoryManager, Originator, Snapshot


def _save_texts(doc: Document, history: HistoryManager, texts: list[str]) -> None:
    for text in texts:
        doc.set_text(text)
        history.save_state(doc)


# ═════════════════════════════════════════════════════════════════════════════
# Undo / Redo
# ═════════════════════════════════════════════════════════════════════════════


@pytest.mark.parametrize("undos", [1, 2, 3, 4])
def test_undo_walks_back_through_saves(undos: int) -> None:
    """After N saves and k < N undos the document holds the content of save N-k."""
    texts = ["s1", "s2", "s3", "s4", "s5"]
    doc, history = Document(), HistoryManager()
    _save_texts(doc, history, texts)

    for _ in range(undos):
        assert history.undo(doc)

    assert doc.content == texts[len(texts) - undos - 1]


def test_undo_past_first_save_fails() -> None:
    texts = ["s1", "s2", "s3"]
    doc, history = Document(), HistoryManager()
    _save_texts(doc, history, texts)

    assert history.undo(doc)
    assert history.undo(doc)
    assert not history.undo(doc)
    assert doc.content == "s1"
    assert history.stats().redo_depth == 2


def test_undo_restores_unsaved_edit_on_redo() -> None:
    doc, history = Document(), HistoryManager()
    _save_texts(doc, history, ["A", "B"])
    doc.set_text("unsaved")

    assert history.undo(doc)
    assert doc.content == "B"
    assert history.undo(doc)
    assert doc.content == "A"
    assert history.redo(doc)
    assert history.redo(doc)
    assert doc.content == "unsaved"


def test_undo_redo_example() -> None:
    doc, history = Document(), HistoryManager()
    _save_texts(doc, history, ["A", "B", "C"])

    assert history.undo(doc)
    assert doc.content == "B"
    assert history.undo(doc)
    assert doc.content == "A"
    assert history.redo(doc)
    assert doc.content == "B"


def test_undo_on_empty_history_fails() -> None:
    doc, history = Document(content="draft"), HistoryManager()

    assert not history.undo(doc)
    assert doc.content == "draft"
    assert history.stats().redo_depth == 0


def test_redo_on_empty_history_fails() -> None:
    doc, history = Document(content="draft"), HistoryManager()
    history.save_state(doc)

    assert not history.redo(doc)
    assert doc.content == "draft"
    assert history.stats().undo_depth == 1


def test_undo_then_redo_restores_exact_state() -> None:
    doc, history = Document(), HistoryManager()
    doc.set_text("Hello")
    history.save_state(doc)
    doc.set_text("Hello World")
    doc.set_font_size(18)
    before = doc.state

    assert history.undo(doc)
    assert doc.content == "Hello"
    assert doc.font_size == 12
    assert history.redo(doc)
    assert doc.state == before


def test_formatting_is_restored_on_undo() -> None:
    doc, history = Document(), HistoryManager()
    doc.set_text("The Quick Brown Fox")
    history.save_state(doc)

    doc.set_font_size(18)
    doc.set_font_family("Georgia")
    doc.set_line_spacing(2.0)
    history.save_state(doc)

    assert history.undo(doc)
    assert doc.state == DocumentState(content="The Quick Brown Fox")


def test_save_after_undo_clears_redo() -> None:
    doc, history = Document(), HistoryManager()
    _save_texts(doc, history, ["State A", "State B", "State C"])

    assert history.undo(doc)
    doc.set_text("State B (Modified)")
    history.save_state(doc)

    assert history.stats().redo_depth == 0
    assert not history.can_redo
    assert not history.redo(doc)
    assert doc.content == "State B (Modified)"


# ═════════════════════════════════════════════════════════════════════════════
# Checkpoints
# ═════════════════════════════════════════════════════════════════════════════


def test_restore_checkpoint() -> None:
    doc, history = Document(), HistoryManager()
    doc.set_text("Version 1")
    history.create_checkpoint("v1", doc)

    doc.set_text("Version 2 - Major Changes")
    doc.set_font_size(14)
    doc.set_line_spacing(2.0)
    history.save_state(doc)
    doc.set_text("Version 3 - More Changes")
    doc.set_font_size(16)

    assert history.restore_checkpoint("v1", doc)
    assert doc.content == "Version 1"
    assert doc.font_size == 12
    assert doc.line_spacing == 1.5


def test_restore_checkpoint_is_undoable() -> None:
    doc, history = Document(), HistoryManager()
    doc.set_text("checkpointed")
    history.create_checkpoint("cp", doc)
    doc.set_text("current")

    assert history.restore_checkpoint("cp", doc)
    assert history.undo(doc)
    assert doc.content == "current"


def test_restore_checkpoint_clears_redo() -> None:
    doc, history = Document(), HistoryManager()
    _save_texts(doc, history, ["A", "B"])
    history.create_checkpoint("b", doc)
    assert history.undo(doc)
    assert history.can_redo

    assert history.restore_checkpoint("b", doc)

    assert not history.can_redo
    assert not history.redo(doc)


def test_restore_unknown_checkpoint_changes_nothing() -> None:
    doc, history = Document(), HistoryManager()
    _save_texts(doc, history, ["A", "B"])
    history.create_checkpoint("a", doc)
    assert history.undo(doc)
    before_stats, before_state = history.stats(), doc.state

    assert not history.restore_checkpoint("missing", doc)

    assert history.stats() == before_stats
    assert doc.state == before_state
    assert history.redo(doc)


def test_create_checkpoint_overwrites() -> None:
    doc, history = Document(), HistoryManager()
    doc.set_text("first")
    history.create_checkpoint("cp", doc)
    doc.set_text("second")
    history.create_checkpoint("cp", doc)
    doc.set_text("third")

    assert history.list_checkpoints() == ["cp"]
    assert history.restore_checkpoint("cp", doc)
    assert doc.content == "second"


def test_checkpoint_survives_restore() -> None:
    doc, history = Document(), HistoryManager()
    doc.set_text("base")
    history.create_checkpoint("base", doc)

    for edit in ("x", "y"):
        doc.set_text(edit)
        assert history.restore_checkpoint("base", doc)
        assert doc.content == "base"


def test_list_and_delete_checkpoints() -> None:
    doc, history = Document(), HistoryManager()
    for name in ("draft", "review", "final"):
        history.create_checkpoint(name, doc)

    assert history.list_checkpoints() == ["draft", "review", "final"]
    assert history.delete_checkpoint("review")
    assert not history.delete_checkpoint("review")
    assert history.list_checkpoints() == ["draft", "final"]
    assert history.get_checkpoint("review") is None
    assert not history.restore_checkpoint("review", doc)


def test_checkpoint_is_isolated_from_later_edits() -> None:
    doc, history = Document(), HistoryManager()
    doc.set_text("original")
    history.create_checkpoint("cp", doc)
    doc.set_text("edited")

    snapshot = history.get_checkpoint("cp")
    assert snapshot is not None
    assert snapshot.content == "original"


# ═════════════════════════════════════════════════════════════════════════════
# Stats, clearing and depth bound
# ═════════════════════════════════════════════════════════════════════════════


def test_stats_and_clear_history() -> None:
    doc, history = Document(), HistoryManager()
    _save_texts(doc, history, ["A", "B", "C"])
    history.undo(doc)
    history.create_checkpoint("cp", doc)

    stats = history.stats()
    assert (stats.undo_depth, stats.redo_depth, stats.checkpoint_count) == (1, 1, 1)

    history.clear_history()
    assert history.stats().model_dump() == {"undo_depth": 0, "redo_depth": 0, "checkpoint_count": 0}
    assert not history.can_undo


def test_max_depth_drops_oldest() -> None:
    doc, history = Document(), HistoryManager(max_depth=2)
    _save_texts(doc, history, ["A", "B", "C"])
    doc.set_text("D")

    assert history.stats().undo_depth == 2
    assert history.undo(doc)
    assert doc.content == "C"
    assert history.undo(doc)
    assert doc.content == "B"
    assert not history.undo(doc)


def test_invalid_max_depth() -> None:
    with pytest.raises(ValueError, match="max_depth"):
        HistoryManager(max_depth=0)


# ═════════════════════════════════════════════════════════════════════════════
# Snapshot & Document
# ═════════════════════════════════════════════════════════════════════════════


def test_snapshot_is_immutable() -> None:
    snapshot = Document(content="frozen").create_snapshot()

    with pytest.raises(ValidationError):
        snapshot.state = DocumentState()  # type: ignore[misc]
    with pytest.raises(ValidationError):
        snapshot.state.content = "changed"  # type: ignore[misc]


def test_snapshot_has_creation_time() -> None:
    first = Snapshot.capture(DocumentState())
    second = Snapshot.capture(DocumentState())

    assert first.created_at.tzinfo is not None
    assert second.created_at >= first.created_at


def test_document_is_originator() -> None:
    assert isinstance(Document(), Originator)


def test_document_rejects_invalid_values() -> None:
    with pytest.raises(ValidationError):
        Document(font_size=0)

    doc, history = Document(content="kept"), HistoryManager()
    history.save_state(doc)
    with pytest.raises(ValidationError):
        doc.set_font_family("")
    with pytest.raises(ValidationError):
        doc.set_line_spacing(-1.0)

    assert doc.font_family == "Arial"
    assert history.stats().undo_depth == 1


def test_fractional_font_size_round_trips_through_history() -> None:
    doc, history = Document(), HistoryManager()
    doc.set_font_size(13.5)
    history.save_state(doc)
    doc.set_font_size(20)
    history.save_state(doc)

    assert history.undo(doc)
    assert doc.font_size == 13.5
    assert history.redo(doc)
    assert doc.font_size == 20
