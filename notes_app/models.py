"""Pydantic models for notes and their stored representation."""

from __future__ import annotations

import time
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, RootModel


def new_note_id() -> str:
    return str(uuid4())


def now_ms() -> int:
    """Current time as epoch milliseconds."""
    return int(time.time() * 1000)


class Note(BaseModel):
    """A single note.

    Title and length rules are enforced by the form, not here, so records
    written by older versions still load. Unknown keys are carried through.
    """

    model_config = ConfigDict(frozen=True, extra="allow", populate_by_name=True)

    id: str = Field(default_factory=new_note_id)
    title: str = Field(..., description="Note title")
    details: str = Field(default="", description="Free text body")
    created_at: int = Field(
        default_factory=now_ms,
        alias="createdAt",
        description="Epoch milliseconds at creation",
    )


class NoteList(RootModel[list[Note]]):
    """The JSON array stored under the notes key."""

    root: list[Note] = Field(default_factory=list)
