"""Create/edit form for notes.

The form has two modes. In ``CREATING`` a submit adds a new note. After
:meth:`NoteForm.begin_edit` it is in ``EDITING`` and a submit updates the
selected note. Submitting or cancelling an edit returns it to ``CREATING``.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Callable, Optional

from notes_app.errors import ValidationError
from notes_app.models import Note, new_note_id, now_ms

logger = logging.getLogger(__name__)

DEFAULT_MAX_DETAILS = 500


class FormMode(str, Enum):
    CREATING = "creating"
    EDITING = "editing"


class NoteForm:
    """Working fields plus the create/edit state machine."""

    def __init__(
        self,
        on_add: Callable[[Note], object],
        on_update: Callable[[Note], object],
        max_details: int = DEFAULT_MAX_DETAILS,
        id_factory: Callable[[], str] = new_note_id,
        clock: Callable[[], int] = now_ms,
    ) -> None:
        self._on_add = on_add
        self._on_update = on_update
        self._id_factory = id_factory
        self._clock = clock
        self.max_details = max_details

        self.title = ""
        self.details = ""
        self.error = ""
        self.editing: Optional[Note] = None

    @property
    def mode(self) -> FormMode:
        return FormMode.EDITING if self.editing is not None else FormMode.CREATING

    @property
    def counter(self) -> str:
        """Character counter shown under the details field."""
        return f"{len(self.details)}/{self.max_details}"

    @property
    def over_limit(self) -> bool:
        return len(self.details) > self.max_details

    @property
    def submit_label(self) -> str:
        return "Update Note" if self.editing is not None else "Add Note"

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def begin_edit(self, note: Note) -> None:
        """Select ``note`` and copy its fields into the form."""
        self.editing = note
        self.title = note.title
        self.details = note.details
        self.error = ""

    def cancel(self) -> None:
        """Drop the selection and clear the fields. Nothing is saved."""
        self.editing = None
        self._clear()

    def _clear(self) -> None:
        self.title = ""
        self.details = ""
        self.error = ""

    def validate(self) -> None:
        """Raise ValidationError if the working fields can't be committed."""
        if not self.title.strip():
            raise ValidationError("Title required")
        if len(self.details) > self.max_details:
            raise ValidationError(f"Details max {self.max_details} chars")

    def submit(self) -> Note:
        """Commit the working fields and return the committed note.

        On a validation failure ``error`` holds the message, the fields are
        left alone, and the ValidationError propagates.
        """
        self.error = ""
        try:
            self.validate()
        except ValidationError as exc:
            self.error = str(exc)
            raise

        title = self.title.strip()
        details = self.details.strip()

        if self.editing is not None:
            note = self.editing.model_copy(update={"title": title, "details": details})
            self._on_update(note)
            self.editing = None
        else:
            note = Note(
                id=self._id_factory(),
                title=title,
                details=details,
                created_at=self._clock(),
            )
            self._on_add(note)

        self._clear()
        return note
