"""Exception hierarchy for the notes app."""


class NotesError(Exception):
    """Base class for every error raised by notes_app."""


class ValidationError(NotesError):
    """A form submission broke the title/details rules.

    The message is shown verbatim next to the form.
    """


class StorageError(NotesError):
    """The key-value backend could not be read or written."""
