"""Date-keyed note persistence.

Notes live in a key-value namespace that may hold unrelated data. Each note
is stored under ``prefix + date key`` with the raw body as its value.

Writes report failure with PersistenceError so the user learns a save did
not happen. Reads never raise: an unreadable store looks empty, so a
calendar can always be rendered.
"""

import logging
import sqlite3
from collections.abc import Iterable
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from threading import Lock
from typing import Generator, Protocol, runtime_checkable

from daynotes.core.config import DATABASE_PATH, NOTE_KEY_PREFIX
from daynotes.core.datekey import InvalidKeyError, from_key
from daynotes.storage.db import connect, init_db

logger = logging.getLogger(__name__)

UPSERT_SQL = """
INSERT INTO kv_store (key, value, updated_at)
VALUES (?, ?, ?)
ON CONFLICT(key) DO UPDATE SET
    value = excluded.value,
    updated_at = excluded.updated_at
"""


class PersistenceError(RuntimeError):
    """Raised when a note could not be written to storage."""


@runtime_checkable
class NoteStore(Protocol):
    """Interface for reading and writing notes by date key."""

    def get(self, key: str) -> str | None:
        """Return the body stored for key, or None if absent."""
        ...

    def set(self, key: str, body: str) -> None:
        """Insert or overwrite the body for key."""
        ...

    def delete(self, key: str) -> None:
        """Remove the entry for key; absent keys are a no-op."""
        ...

    def enumerate(self) -> list[tuple[str, str]]:
        """Return every (date key, body) pair held in the store."""
        ...


def validate_key(key: str) -> str:
    """Return key unchanged, raising InvalidKeyError if it is malformed."""
    from_key(key)
    return key


def filter_note_items(
    items: Iterable[tuple[str, str]], prefix: str
) -> list[tuple[str, str]]:
    """
    Reduce raw storage items to note entries.

    Keys outside the prefix belong to someone else and are ignored.
    Prefixed keys whose remainder is not a date key are skipped with a
    warning instead of failing the whole enumeration.

    Args:
        items: (storage key, value) pairs from the backend
        prefix: Namespace prefix for note keys

    Returns:
        (date key, body) pairs
    """
    entries: list[tuple[str, str]] = []
    for storage_key, value in items:
        if not storage_key.startswith(prefix):
            continue
        key = storage_key[len(prefix) :]
        try:
            from_key(key)
        except InvalidKeyError as e:
            logger.warning("Skipping note with malformed key %r: %s", storage_key, e)
            continue
        if not isinstance(value, str):
            logger.warning("Skipping note %s with non-text value", key)
            continue
        entries.append((key, value))
    return entries


class SqliteNoteStore:
    """NoteStore backed by a SQLite key-value table."""

    def __init__(
        self,
        db_path: Path | str | None = None,
        prefix: str | None = None,
    ):
        """
        Initialize note store.

        Args:
            db_path: Path to SQLite database (defaults to ~/.daynotes/daynotes.db)
            prefix: Namespace prefix for note keys (defaults to NOTE_KEY_PREFIX)
        """
        self.db_path = Path(db_path) if db_path else DATABASE_PATH
        self.prefix = NOTE_KEY_PREFIX if prefix is None else prefix
        self._connection: sqlite3.Connection | None = None
        self._connection_lock = Lock()
        self._ensure_schema()

    def _ensure_schema(self) -> None:
        """Create database schema if not exists."""
        try:
            init_db(self.db_path)
        except (sqlite3.Error, OSError) as e:
            raise PersistenceError(
                f"Cannot initialize note storage at {self.db_path}: {e}"
            ) from e

    @contextmanager
    def _get_connection(self) -> Generator[sqlite3.Connection, None, None]:
        """Get the shared connection; each block is one transaction."""
        with self._connection_lock:
            if self._connection is None:
                self._connection = connect(self.db_path)
            try:
                yield self._connection
                self._connection.commit()
            except Exception:
                self._connection.rollback()
                raise

    def close(self) -> None:
        """Close the shared database connection."""
        with self._connection_lock:
            if self._connection is not None:
                self._connection.close()
                self._connection = None

    def _storage_key(self, key: str) -> str:
        return f"{self.prefix}{key}"

    def get(self, key: str) -> str | None:
        """Get the body for a date key, or None if absent or unreadable."""
        try:
            validate_key(key)
        except InvalidKeyError as e:
            logger.warning("Lookup with malformed key: %s", e)
            return None

        try:
            with self._get_connection() as conn:
                row = conn.execute(
                    "SELECT value FROM kv_store WHERE key = ?",
                    (self._storage_key(key),),
                ).fetchone()
        except (sqlite3.Error, OSError):
            logger.error("Failed to read note %s", key, exc_info=True)
            return None

        if row is None:
            return None
        return row["value"]

    def set(self, key: str, body: str) -> None:
        """
        Insert or overwrite the body for a date key.

        Raises:
            InvalidKeyError: If key is not a date key
            PersistenceError: If the write failed
        """
        validate_key(key)
        if not isinstance(body, str):
            raise TypeError(f"Note body must be str, got {type(body).__name__}")

        try:
            with self._get_connection() as conn:
                conn.execute(
                    UPSERT_SQL,
                    (self._storage_key(key), body, datetime.now().isoformat()),
                )
        except (sqlite3.Error, OSError) as e:
            logger.error("Failed to save note %s", key, exc_info=True)
            raise PersistenceError(f"Failed to save note for {key}: {e}") from e

    def delete(self, key: str) -> None:
        """
        Delete the entry for a date key if present.

        Raises:
            InvalidKeyError: If key is not a date key
            PersistenceError: If the delete failed
        """
        validate_key(key)
        try:
            with self._get_connection() as conn:
                conn.execute(
                    "DELETE FROM kv_store WHERE key = ?", (self._storage_key(key),)
                )
        except (sqlite3.Error, OSError) as e:
            logger.error("Failed to delete note %s", key, exc_info=True)
            raise PersistenceError(f"Failed to delete note for {key}: {e}") from e

    def enumerate(self) -> list[tuple[str, str]]:
        """Get all notes as (date key, body) pairs; empty if unreadable."""
        try:
            with self._get_connection() as conn:
                rows = conn.execute(
                    "SELECT key, value FROM kv_store WHERE substr(key, 1, ?) = ?",
                    (len(self.prefix), self.prefix),
                ).fetchall()
        except (sqlite3.Error, OSError):
            logger.error("Failed to enumerate notes", exc_info=True)
            return []

        return filter_note_items(
            ((row["key"], row["value"]) for row in rows), self.prefix
        )

    def put_raw(self, storage_key: str, value: str) -> None:
        """Write an entry into the shared namespace without any key checks."""
        try:
            with self._get_connection() as conn:
                conn.execute(
                    UPSERT_SQL,
                    (storage_key, value, datetime.now().isoformat()),
                )
        except (sqlite3.Error, OSError) as e:
            raise PersistenceError(f"Failed to write {storage_key!r}: {e}") from e

    def __repr__(self) -> str:
        return f"SqliteNoteStore({self.db_path})"
