"""Controller tying the store, persistence, form and search query together."""

from __future__ import annotations

import logging
from typing import Optional

from notes_app.config import Settings
from notes_app.form import DEFAULT_MAX_DETAILS, NoteForm
from notes_app.models import Note
from notes_app.search import filter_notes
from notes_app.state import NotesState, NoteStore
from notes_app.storage import LoadResult, NotePersistence, backend_from_settings
from notes_app.view import NoteCard, build_cards

logger = logging.getLogger(__name__)


class NotesApp:
    """One user session: the collection, its storage, the form and the query.

    Every change to the collection is written back through ``persistence``.
    Storage failures are logged and otherwise ignored, the in-memory
    collection stays authoritative.
    """

    def __init__(
        self,
        persistence: NotePersistence,
        max_details: int = DEFAULT_MAX_DETAILS,
        store: Optional[NoteStore] = None,
    ) -> None:
        self.persistence = persistence
        self.store = store or NoteStore()
        self.form = NoteForm(
            on_add=self.store.add,
            on_update=self.store.update,
            max_details=max_details,
        )
        self.query = ""
        self._started = False
        self.store.subscribe(self._persist)

    @classmethod
    def from_settings(cls, settings: Settings) -> NotesApp:
        persistence = NotePersistence(
            backend_from_settings(settings),
            key=settings.storage_key,
            validate_on_load=settings.validate_on_load,
            max_details=settings.details_max_chars,
        )
        return cls(persistence, max_details=settings.details_max_chars)

    @property
    def started(self) -> bool:
        return self._started

    def start(self) -> LoadResult:
        """Hydrate the store from storage. Only the first call does anything."""
        if self._started:
            return LoadResult(notes=self.store.notes)
        self._started = True

        result = self.persistence.load()
        if result.error is not None:
            logger.warning("Failed to load notes: %s — starting empty", result.error)
        self.store.hydrate(result.notes)
        return result

    def _persist(self, state: NotesState) -> None:
        error = self.persistence.save(state.notes)
        if error is not None:
            logger.warning("Failed to persist notes: %s", error)

    # ------------------------------------------------------------------
    # Interactions
    # ------------------------------------------------------------------

    def request_edit(self, note_id: str) -> Optional[Note]:
        """Load the note into the form for editing."""
        note = self.store.get(note_id)
        if note is None:
            logger.warning("Edit requested for unknown note %s", note_id)
            return None
        self.form.begin_edit(note)
        return note

    def delete(self, note_id: str) -> None:
        if self.form.editing is not None and self.form.editing.id == note_id:
            self.form.cancel()
        self.store.delete(note_id)

    @property
    def visible_notes(self) -> tuple[Note, ...]:
        """Notes matching the current query."""
        return filter_notes(self.store.notes, self.query)

    @property
    def cards(self) -> list[NoteCard]:
        return build_cards(self.store.notes, self.query)
