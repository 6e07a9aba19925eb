"""Shared fixtures for the notes tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from notes_app.app import NotesApp
from notes_app.models import Note
from notes_app.storage import FileKeyValueStore, MemoryKeyValueStore, NotePersistence


def _make_note(title: str, details: str = "", note_id: str | None = None) -> Note:
    kwargs = {"title": title, "details": details, "created_at": 1_700_000_000_000}
    if note_id is not None:
        kwargs["id"] = note_id
    return Note(**kwargs)


@pytest.fixture()
def make_note():
    """Factory for notes with a fixed creation time."""
    return _make_note


@pytest.fixture()
def memory_backend() -> MemoryKeyValueStore:
    return MemoryKeyValueStore()


@pytest.fixture()
def file_backend(tmp_path: Path) -> FileKeyValueStore:
    """Return a FileKeyValueStore backed by a temp JSON file."""
    return FileKeyValueStore(tmp_path / "test_notes.json")


@pytest.fixture()
def persistence(memory_backend: MemoryKeyValueStore) -> NotePersistence:
    return NotePersistence(memory_backend)


@pytest.fixture()
def notes_app(persistence: NotePersistence) -> NotesApp:
    """A started NotesApp over empty in-memory storage."""
    app = NotesApp(persistence)
    app.start()
    return app
