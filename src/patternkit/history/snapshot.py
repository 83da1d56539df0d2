"""Immutable document state and the snapshots that carry it."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Annotated, Self

from pydantic import BaseModel, ConfigDict, Field, PositiveFloat


class DocumentState(BaseModel):
    """Observable state of a document: text plus formatting."""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        json_schema_extra={
            "title": "Document State",
            "examples": [{"content": "Hello", "font_size": 12, "line_spacing": 1.5, "font_family": "Arial"}],
        },
    )

    content: str = ""
    font_size: PositiveFloat = 12
    line_spacing: PositiveFloat = 1.5
    font_family: Annotated[str, Field(min_length=1)] = "Arial"


class Snapshot(BaseModel):
    """Immutable copy of a document's state tagged with its creation time.

    Frozen, and holding a frozen DocumentState, so the history manager can
    hand the same snapshot out repeatedly without copying.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", revalidate_instances="never")

    state: DocumentState
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @classmethod
    def capture(cls, state: DocumentState) -> Self:
        return cls(state=state)

    @property
    def content(self) -> str:
        return self.state.content
