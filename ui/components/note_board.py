"""Right column: search box and the grid of note cards."""

from __future__ import annotations

import streamlit as st

from notes_app.app import NotesApp
from notes_app.view import EMPTY_MESSAGE, NoteCard, escape_markdown
from ui.components.session import QUERY_KEY, push_form_fields

_GRID_COLUMNS = 3


def _on_edit(app: NotesApp, note_id: str) -> None:
    if app.request_edit(note_id) is not None:
        push_form_fields(app)


def _on_delete(app: NotesApp, note_id: str) -> None:
    was_editing = app.form.editing is not None
    app.delete(note_id)
    if was_editing and app.form.editing is None:
        push_form_fields(app)


def _render_card(app: NotesApp, card: NoteCard) -> None:
    with st.container(border=True):
        st.markdown(f"**{escape_markdown(card.title)}**")
        if card.excerpt:
            st.markdown(escape_markdown(card.excerpt))
        st.caption(card.created)
        col_edit, col_delete = st.columns(2)
        with col_edit:
            st.button(
                "✏️ Edit",
                key=f"edit_{card.id}",
                on_click=_on_edit,
                args=(app, card.id),
                use_container_width=True,
            )
        with col_delete:
            st.button(
                "🗑️",
                key=f"delete_{card.id}",
                on_click=_on_delete,
                args=(app, card.id),
                use_container_width=True,
            )


def render(app: NotesApp) -> None:
    """Render the search box and note cards."""
    col_title, col_search = st.columns([2, 1])
    with col_title:
        st.header("Recent Notes")
    with col_search:
        app.query = st.text_input(
            "Search notes",
            key=QUERY_KEY,
            placeholder="Search...",
        )

    cards = app.cards
    if not cards:
        st.info(EMPTY_MESSAGE)
        return

    cols = st.columns(_GRID_COLUMNS)
    for i, card in enumerate(cards):
        with cols[i % _GRID_COLUMNS]:
            _render_card(app, card)
