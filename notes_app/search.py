"""Live text filter over the note collection."""

from __future__ import annotations

from typing import Sequence

from notes_app.models import Note


def normalize_query(query: str) -> str:
    return query.strip().lower()


def matches(note: Note, query: str) -> bool:
    """Case-insensitive substring match on title or details.

    ``query`` must already be normalized.
    """
    return query in note.title.lower() or query in note.details.lower()


def filter_notes(notes: Sequence[Note], query: str) -> tuple[Note, ...]:
    """Return the notes matching ``query``, in their original order.

    A blank query returns every note.
    """
    q = normalize_query(query)
    if not q:
        return tuple(notes)
    return tuple(n for n in notes if matches(n, q))
