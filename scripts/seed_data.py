"""Seed the notes storage with sample notes for screenshots.

Notes go through the same form path as the UI, so they are validated and
persisted exactly like hand-written ones.

Usage:
    python scripts/seed_data.py [--reset] [--backend file|redis|memory]
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

_project_root = str(Path(__file__).resolve().parent.parent)
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)

from notes_app.app import NotesApp  # noqa: E402
from notes_app.config import Settings  # noqa: E402
from notes_app.errors import ValidationError  # noqa: E402

logger = logging.getLogger("seed_data")

# Each entry: (title, details). Added oldest first, so the first one ends up last.
NOTES: list[tuple[str, str]] = [
    ("Groceries", "milk, eggs, bread, coffee beans"),
    ("Workout", "5k run on Monday, legs on Wednesday, swim Friday"),
    (
        "Reading List",
        "Designing Data-Intensive Applications; The Pragmatic Programmer; "
        "Structure and Interpretation of Computer Programs",
    ),
    ("Project Ideas", "Weekend CLI that turns meeting notes into task lists"),
    ("Meeting Notes", "Q3 planning: freeze scope by Friday, demo on the 28th"),
    ("Gift ideas", ""),
]


def seed(app: NotesApp, notes: list[tuple[str, str]]) -> int:
    """Submit each note through the form. Returns how many were added."""
    added = 0
    for title, details in notes:
        app.form.title = title
        app.form.details = details
        try:
            note = app.form.submit()
        except ValidationError as exc:
            logger.warning("Skipped '%s': %s", title, exc)
            app.form.cancel()
            continue
        logger.info("Seeded %s — '%s'", note.id, note.title)
        added += 1
    return added


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed sample notes")
    parser.add_argument(
        "--reset",
        action="store_true",
        help="Remove stored notes before seeding",
    )
    parser.add_argument(
        "--backend",
        choices=["file", "redis", "memory"],
        default=None,
        help="Override NOTES_STORAGE_BACKEND",
    )
    args = parser.parse_args()

    overrides = {"storage_backend": args.backend} if args.backend else {}
    settings = Settings(**overrides)

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s | %(name)s | %(levelname)s | %(message)s",
    )

    app = NotesApp.from_settings(settings)
    if args.reset:
        error = app.persistence.clear()
        if error is not None:
            print(f"  Reset failed: {error}")
            sys.exit(1)

    result = app.start()
    if not result.ok:
        print(f"  Warning: existing notes could not be loaded ({result.error})")

    added = seed(app, NOTES)
    print("=" * 60)
    print(f"  Seeded {added}/{len(NOTES)} notes — {app.store.count} total")
    print("=" * 60)


if __name__ == "__main__":
    main()
