"""Notes — Streamlit single-page interface.

Run with:
    streamlit run ui/app.py
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

# Ensure the project root is on sys.path so `ui.*` and `notes_app.*` imports
# resolve regardless of the working directory Streamlit uses.
_project_root = str(Path(__file__).resolve().parent.parent)
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)

import streamlit as st  # noqa: E402

st.set_page_config(
    page_title="Notes",
    page_icon="📝",
    layout="wide",
)

from notes_app.config import settings  # noqa: E402
from ui.components import note_board, note_form  # noqa: E402
from ui.components.session import get_app  # noqa: E402

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s | %(name)s | %(levelname)s | %(message)s",
)

app = get_app()

col_form, col_board = st.columns(2, gap="large")
with col_form:
    note_form.render(app)
with col_board:
    note_board.render(app)

st.divider()
st.caption(f"{app.store.count} notes · stored in {settings.storage_backend} backend")
