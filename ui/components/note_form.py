"""Left column: create/edit form with live character counter."""

from __future__ import annotations

import streamlit as st

from notes_app.app import NotesApp
from notes_app.errors import ValidationError
from ui.components.session import (
    DETAILS_KEY,
    TITLE_KEY,
    pull_form_fields,
    push_form_fields,
)


def _on_submit(app: NotesApp) -> None:
    pull_form_fields(app)
    try:
        app.form.submit()
    except ValidationError:
        # form.error is rendered inline on this rerun
        return
    push_form_fields(app)


def _on_cancel(app: NotesApp) -> None:
    app.form.cancel()
    push_form_fields(app)


def render(app: NotesApp) -> None:
    """Render the note form."""
    form = app.form
    st.header("Edit Note" if form.editing is not None else "Add Notes")

    form.title = st.text_input(
        "Note title",
        key=TITLE_KEY,
        placeholder="Enter Notes Heading",
    )
    form.details = st.text_area(
        "Note details",
        key=DETAILS_KEY,
        placeholder="Write Details.",
        height=160,
    )

    col_submit, col_cancel = st.columns([3, 1])
    with col_submit:
        st.button(
            f"➕ {form.submit_label}",
            on_click=_on_submit,
            args=(app,),
            type="primary",
            use_container_width=True,
        )
    with col_cancel:
        if form.editing is not None:
            st.button(
                "Cancel",
                on_click=_on_cancel,
                args=(app,),
                use_container_width=True,
            )

    col_error, col_counter = st.columns([3, 1])
    with col_error:
        if form.error:
            st.error(form.error)
    with col_counter:
        counter = form.counter
        st.caption(f":red[{counter}]" if form.over_limit else counter)
