"""Mutable document that can save itself to, and restore itself from, a Snapshot."""

from __future__ import annotations

from typing import Annotated, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field, PositiveFloat

from .snapshot import DocumentState, Snapshot


@runtime_checkable
class Originator(Protocol):
    """Anything whose state a HistoryManager can capture and restore."""

    def create_snapshot(self) -> Snapshot: ...
    def restore_snapshot(self, snapshot: Snapshot) -> None: ...


class Document(BaseModel):
    """Editable document.

    Every assignment is validated, so a document always holds a state that
    can be captured. Bad values raise ValidationError at the setter and never
    reach the history.

    Example:
        >>> doc = Document()
        >>> doc.set_text("Hello")
        >>> doc.set_font_family("Georgia")
        >>> doc.state.font_family
        'Georgia'
    """

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    content: str = ""
    font_size: PositiveFloat = 12
    line_spacing: PositiveFloat = 1.5
    font_family: Annotated[str, Field(min_length=1)] = "Arial"

    def set_text(self, content: str) -> None:
        self.content = content

    def set_font_size(self, size: float) -> None:
        self.font_size = size

    def set_line_spacing(self, spacing: float) -> None:
        self.line_spacing = spacing

    def set_font_family(self, family: str) -> None:
        self.font_family = family

    @property
    def state(self) -> DocumentState:
        """Current state as an immutable value."""
        # fields were validated on assignment
        return DocumentState.model_construct(**self.model_dump())

    def create_snapshot(self) -> Snapshot:
        return Snapshot.capture(self.state)

    def restore_snapshot(self, snapshot: Snapshot) -> None:
        s = snapshot.state
        self.content, self.font_size, self.line_spacing, self.font_family = (
            s.content, s.font_size, s.line_spacing, s.font_family,
        )
