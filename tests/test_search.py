"""Tests for notes_app.search."""

from __future__ import annotations

import pytest

from notes_app.models import Note
from notes_app.search import filter_notes


@pytest.fixture()
def notes(make_note) -> tuple[Note, ...]:
    return (
        make_note("Groceries", "milk, eggs", note_id="g"),
        make_note("Workout", "legs day, then groceries run", note_id="w"),
        make_note("Reading", "Dune", note_id="r"),
    )


class TestFilterNotes:
    def test_title_match(self, notes: tuple[Note, ...]) -> None:
        assert [n.title for n in filter_notes(notes[:2], "gro")] == [
            "Groceries",
            "Workout",
        ]
        assert [n.title for n in filter_notes((notes[0], notes[2]), "gro")] == [
            "Groceries"
        ]

    def test_only_matching_title(self, make_note) -> None:
        notes = (make_note("Groceries"), make_note("Workout"))
        assert [n.title for n in filter_notes(notes, "gro")] == ["Groceries"]

    def test_details_match(self, notes: tuple[Note, ...]) -> None:
        assert [n.id for n in filter_notes(notes, "dune")] == ["r"]

    def test_case_insensitive_and_trimmed(self, notes: tuple[Note, ...]) -> None:
        assert [n.id for n in filter_notes(notes, "  MILK ")] == ["g"]

    @pytest.mark.parametrize("query", ["", "   ", "\t\n"])
    def test_blank_query_returns_everything(
        self, notes: tuple[Note, ...], query: str
    ) -> None:
        assert filter_notes(notes, query) == notes

    def test_no_match(self, notes: tuple[Note, ...]) -> None:
        assert filter_notes(notes, "xyz") == ()

    def test_idempotent(self, notes: tuple[Note, ...]) -> None:
        once = filter_notes(notes, "e")
        assert filter_notes(once, "e") == once

    def test_preserves_order(self, notes: tuple[Note, ...]) -> None:
        assert [n.id for n in filter_notes(notes, "r")] == ["g", "w", "r"]

    def test_does_not_mutate_source(self, notes: tuple[Note, ...]) -> None:
        source = list(notes)
        filter_notes(source, "gro")
        assert source == list(notes)
