"""In-memory note collection and the reducer that updates it.

Every mutation goes through :func:`reduce`, which returns a new
:class:`NotesState` (or the same one when nothing changed). :class:`NoteStore`
holds the current snapshot and tells subscribers when it changes.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Iterable, Optional, Union

from notes_app.models import Note

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NotesState:
    """Immutable snapshot of the collection, most recent first."""

    notes: tuple[Note, ...] = ()


# ---------------------------------------------------------------------------
# Actions
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Hydrate:
    notes: tuple[Note, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class Add:
    note: Note


@dataclass(frozen=True)
class Update:
    note: Note


@dataclass(frozen=True)
class Delete:
    note_id: str


Action = Union[Hydrate, Add, Update, Delete]
Listener = Callable[[NotesState], None]


def reduce(state: NotesState, action: Action) -> NotesState:
    """Apply one action. Returns ``state`` itself for a no-op."""
    if isinstance(action, Hydrate):
        return NotesState(notes=tuple(action.notes))

    if isinstance(action, Add):
        return NotesState(notes=(action.note, *state.notes))

    if isinstance(action, Update):
        for index, note in enumerate(state.notes):
            if note.id == action.note.id:
                notes = list(state.notes)
                notes[index] = action.note
                return NotesState(notes=tuple(notes))
        return state

    if isinstance(action, Delete):
        notes = tuple(n for n in state.notes if n.id != action.note_id)
        if len(notes) == len(state.notes):
            return state
        return NotesState(notes=notes)

    raise TypeError(f"Unknown action: {action!r}")


class NoteStore:
    """Owns the canonical collection."""

    def __init__(self, state: Optional[NotesState] = None) -> None:
        self._state = state or NotesState()
        self._listeners: list[Listener] = []

    @property
    def state(self) -> NotesState:
        return self._state

    @property
    def notes(self) -> tuple[Note, ...]:
        return self._state.notes

    @property
    def count(self) -> int:
        """Number of notes in the collection."""
        return len(self._state.notes)

    def get(self, note_id: str) -> Optional[Note]:
        """Return the note with ``note_id``, or None."""
        for note in self._state.notes:
            if note.id == note_id:
                return note
        return None

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call ``listener`` with the new state after every change.

        Returns a function that removes the listener again.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def dispatch(self, action: Action) -> NotesState:
        new_state = reduce(self._state, action)
        if new_state is self._state:
            logger.debug("No-op %s", type(action).__name__)
            return new_state

        self._state = new_state
        for listener in list(self._listeners):
            listener(new_state)
        return new_state

    # ------------------------------------------------------------------
    # Convenience wrappers
    # ------------------------------------------------------------------

    def hydrate(self, notes: Iterable[Note]) -> NotesState:
        """Replace the whole collection verbatim."""
        state = self.dispatch(Hydrate(notes=tuple(notes)))
        logger.info("Hydrated %d notes", len(state.notes))
        return state

    def add(self, note: Note) -> NotesState:
        """Prepend ``note``. Caller has already validated it."""
        logger.info("Added note %s — '%s'", note.id, note.title)
        return self.dispatch(Add(note=note))

    def update(self, note: Note) -> NotesState:
        """Replace the note with the same id in place."""
        before = self._state
        state = self.dispatch(Update(note=note))
        if state is not before:
            logger.info("Updated note %s", note.id)
        return state

    def delete(self, note_id: str) -> NotesState:
        """Remove the note with ``note_id`` if present."""
        before = self._state
        state = self.dispatch(Delete(note_id=note_id))
        if state is not before:
            logger.info("Deleted note %s", note_id)
        return state
