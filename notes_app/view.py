"""Read-only card projection of the collection for display."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime
from typing import Sequence

from notes_app.models import Note
from notes_app.search import filter_notes

EMPTY_MESSAGE = "No notes yet — add one!"
EXCERPT_CHARS = 160
_MARKDOWN_SPECIAL = re.compile(r"([\\`*_{}\[\]()#+\-.!|<>~$])")


def clamp(text: str, limit: int = EXCERPT_CHARS) -> str:
    """Shorten ``text`` to ``limit`` characters, ending in an ellipsis."""
    if len(text) <= limit:
        return text
    return text[: limit - 1].rstrip() + "…"


def format_created(created_at: int) -> str:
    """Local date-time label for an epoch-millisecond timestamp.

    Returns "" for timestamps the platform can't represent.
    """
    try:
        return datetime.fromtimestamp(created_at / 1000).strftime("%Y-%m-%d %H:%M")
    except (ValueError, OverflowError, OSError):
        return ""


def escape_markdown(text: str) -> str:
    """Backslash-escape Markdown control characters in user text."""
    return _MARKDOWN_SPECIAL.sub(r"\\\1", text)


@dataclass(frozen=True)
class NoteCard:
    id: str
    title: str
    excerpt: str
    created: str

    @classmethod
    def from_note(cls, note: Note) -> NoteCard:
        return cls(
            id=note.id,
            title=note.title,
            excerpt=clamp(note.details),
            created=format_created(note.created_at),
        )


def build_cards(notes: Sequence[Note], query: str = "") -> list[NoteCard]:
    """Cards for the notes matching ``query``, in collection order."""
    return [NoteCard.from_note(n) for n in filter_notes(notes, query)]
