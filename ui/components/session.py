"""Per-browser-session NotesApp and the widget keys bound to it."""

from __future__ import annotations

import streamlit as st

from notes_app.app import NotesApp
from notes_app.config import settings

TITLE_KEY = "note_title"
DETAILS_KEY = "note_details"
QUERY_KEY = "note_query"


def get_app() -> NotesApp:
    """Return this session's NotesApp, creating and hydrating it on first use."""
    if "notes_app" not in st.session_state:
        app = NotesApp.from_settings(settings)
        app.start()
        st.session_state.notes_app = app
    return st.session_state.notes_app


def push_form_fields(app: NotesApp) -> None:
    """Copy the form's working fields into the input widgets.

    Only valid inside a widget callback, before the widgets are drawn.
    """
    st.session_state[TITLE_KEY] = app.form.title
    st.session_state[DETAILS_KEY] = app.form.details


def pull_form_fields(app: NotesApp) -> None:
    """Copy the input widgets' values into the form."""
    app.form.title = st.session_state.get(TITLE_KEY, "")
    app.form.details = st.session_state.get(DETAILS_KEY, "")
