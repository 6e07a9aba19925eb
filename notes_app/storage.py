"""Key-value storage backends and the note persistence adapter.

Backends mimic the browser ``localStorage`` API (``get_item`` / ``set_item`` /
``remove_item``) over a JSON file, Redis, or a plain dict. All of them raise
:class:`StorageError` on failure. :class:`NotePersistence` turns those
failures into return values so the caller can log and carry on.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Iterable, Optional, Protocol

import redis
from pydantic import ValidationError as PydanticValidationError

from notes_app.errors import StorageError
from notes_app.models import Note, NoteList

if TYPE_CHECKING:
    from notes_app.config import Settings

logger = logging.getLogger(__name__)

DEFAULT_KEY = "notes_app_v1"
DEFAULT_QUOTA_BYTES = 5 * 1024 * 1024
REDIS_PREFIX = "notes_app:"


class KeyValueStore(Protocol):
    """Minimal text key-value interface."""

    def get_item(self, key: str) -> Optional[str]: ...

    def set_item(self, key: str, value: str) -> None: ...

    def remove_item(self, key: str) -> None: ...


def _check_quota(items: dict[str, str], quota: Optional[int]) -> None:
    if quota is None:
        return
    used = sum(len(k.encode("utf-8")) + len(v.encode("utf-8")) for k, v in items.items())
    if used > quota:
        raise StorageError(f"quota exceeded ({used} > {quota} bytes)")


# ---------------------------------------------------------------------------
# Backends
# ---------------------------------------------------------------------------


class MemoryKeyValueStore:
    """Dict-backed store. Nothing survives the process."""

    def __init__(self, quota_bytes: Optional[int] = None) -> None:
        self._items: dict[str, str] = {}
        self._quota = quota_bytes

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        _check_quota({**self._items, key: value}, self._quota)
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)


class FileKeyValueStore:
    """All keys in one JSON object file, rewritten atomically on each change."""

    def __init__(
        self, path: Path, quota_bytes: Optional[int] = DEFAULT_QUOTA_BYTES
    ) -> None:
        self._path = Path(path)
        self._quota = quota_bytes

    @property
    def path(self) -> Path:
        return self._path

    def _read_all(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
        except OSError as exc:
            raise StorageError(f"cannot read {self._path}: {exc}") from exc
        except ValueError as exc:
            # JSONDecodeError or UnicodeDecodeError
            raise StorageError(f"corrupt storage file {self._path}: {exc}") from exc
        if not isinstance(raw, dict) or not all(
            isinstance(v, str) for v in raw.values()
        ):
            raise StorageError(f"unexpected content in {self._path}")
        return raw

    def _write_all(self, items: dict[str, str]) -> None:
        _check_quota(items, self._quota)
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp = tempfile.mkstemp(
                dir=self._path.parent, prefix=f".{self._path.name}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    json.dump(items, fh, indent=2)
                os.replace(tmp, self._path)
            except BaseException:
                Path(tmp).unlink(missing_ok=True)
                raise
        except OSError as exc:
            raise StorageError(f"cannot write {self._path}: {exc}") from exc

    def get_item(self, key: str) -> Optional[str]:
        return self._read_all().get(key)

    def _read_for_write(self) -> dict[str, str]:
        """Current items, or an empty dict if the file can't be read.

        A damaged file is replaced on the next write rather than blocking
        every save after it.
        """
        try:
            return self._read_all()
        except StorageError as exc:
            logger.warning("Discarding unreadable storage file: %s", exc)
            return {}

    def set_item(self, key: str, value: str) -> None:
        items = self._read_for_write()
        items[key] = value
        self._write_all(items)

    def remove_item(self, key: str) -> None:
        if not self._path.exists():
            return
        items = self._read_for_write()
        items.pop(key, None)
        self._write_all(items)


class RedisKeyValueStore:
    """Redis-backed store. Keys are namespaced with ``notes_app:``."""

    def __init__(
        self, redis_url: str, client: Optional[redis.Redis] = None
    ) -> None:
        self._redis_url = redis_url
        self._client = client or redis.Redis.from_url(
            redis_url, decode_responses=True
        )

    @staticmethod
    def _make_key(key: str) -> str:
        return f"{REDIS_PREFIX}{key}"

    def get_item(self, key: str) -> Optional[str]:
        try:
            return self._client.get(self._make_key(key))
        except redis.RedisError as exc:
            raise StorageError(f"Redis get failed: {exc}") from exc
        except UnicodeDecodeError as exc:
            raise StorageError(f"Redis value is not valid UTF-8: {exc}") from exc

    def set_item(self, key: str, value: str) -> None:
        try:
            self._client.set(self._make_key(key), value)
        except redis.RedisError as exc:
            raise StorageError(f"Redis set failed: {exc}") from exc

    def remove_item(self, key: str) -> None:
        try:
            self._client.delete(self._make_key(key))
        except redis.RedisError as exc:
            raise StorageError(f"Redis delete failed: {exc}") from exc


def backend_from_settings(settings: Settings) -> KeyValueStore:
    """Build the backend named by ``settings.storage_backend``."""
    if settings.storage_backend == "redis":
        return RedisKeyValueStore(settings.redis_url)
    if settings.storage_backend == "memory":
        return MemoryKeyValueStore(quota_bytes=settings.storage_quota_bytes)
    return FileKeyValueStore(
        settings.storage_path, quota_bytes=settings.storage_quota_bytes
    )


# ---------------------------------------------------------------------------
# Persistence adapter
# ---------------------------------------------------------------------------


def is_valid_note(note: Note, max_details: int) -> bool:
    """Whether ``note`` satisfies the rules the form enforces."""
    return bool(note.title.strip()) and len(note.details) <= max_details


@dataclass(frozen=True)
class LoadResult:
    """Outcome of :meth:`NotePersistence.load`.

    ``notes`` is always usable. ``error`` is set when the stored blob could
    not be read, in which case ``notes`` is empty. ``dropped`` counts stored
    records that were skipped.
    """

    notes: tuple[Note, ...] = ()
    error: Optional[StorageError] = None
    dropped: int = 0

    @property
    def ok(self) -> bool:
        return self.error is None


class NotePersistence:
    """Reads and writes the full note collection under a single key."""

    def __init__(
        self,
        backend: KeyValueStore,
        key: str = DEFAULT_KEY,
        validate_on_load: bool = False,
        max_details: int = 500,
    ) -> None:
        self._backend = backend
        self._key = key
        self._validate_on_load = validate_on_load
        self._max_details = max_details

    @property
    def key(self) -> str:
        return self._key

    @property
    def backend(self) -> KeyValueStore:
        return self._backend

    @staticmethod
    def serialize(notes: Iterable[Note]) -> str:
        """Notes as the JSON array text kept in storage."""
        return NoteList(list(notes)).model_dump_json(by_alias=True)

    @staticmethod
    def parse(raw: str) -> tuple[list[Note], int]:
        """Parse stored text into notes plus the count of unreadable records.

        Raises StorageError only when the text is not a JSON array. Single
        records that don't fit the Note shape are skipped.
        """
        try:
            records = json.loads(raw)
        except ValueError as exc:
            raise StorageError(f"stored notes are not valid JSON: {exc}") from exc
        if not isinstance(records, list):
            raise StorageError(
                f"stored notes are a {type(records).__name__}, expected a list"
            )

        notes: list[Note] = []
        skipped = 0
        for index, record in enumerate(records):
            try:
                notes.append(Note.model_validate(record))
            except PydanticValidationError as exc:
                logger.warning(
                    "Skipping stored record %d: %d validation errors",
                    index,
                    exc.error_count(),
                )
                skipped += 1
        return notes, skipped

    def load(self) -> LoadResult:
        """Load the stored collection. Never raises."""
        try:
            raw = self._backend.get_item(self._key)
            if raw is None:
                logger.info("No stored notes under '%s' — starting fresh", self._key)
                return LoadResult()
            notes, dropped = self.parse(raw)
        except StorageError as exc:
            return LoadResult(error=exc)

        if self._validate_on_load:
            kept = [n for n in notes if is_valid_note(n, self._max_details)]
            if len(kept) < len(notes):
                logger.warning(
                    "Dropped %d stored notes that break title/details rules",
                    len(notes) - len(kept),
                )
            dropped += len(notes) - len(kept)
            notes = kept

        logger.info("Loaded %d notes from '%s'", len(notes), self._key)
        return LoadResult(notes=tuple(notes), dropped=dropped)

    def save(self, notes: Iterable[Note]) -> Optional[StorageError]:
        """Overwrite the stored collection. Returns the error instead of raising."""
        notes = list(notes)
        try:
            self._backend.set_item(self._key, self.serialize(notes))
        except StorageError as exc:
            return exc
        logger.info("Saved %d notes to '%s'", len(notes), self._key)
        return None

    def clear(self) -> Optional[StorageError]:
        """Remove the stored collection."""
        try:
            self._backend.remove_item(self._key)
        except StorageError as exc:
            return exc
        return None
