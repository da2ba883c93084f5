"""In-memory NoteStore for tests and ephemeral sessions."""

from threading import Lock

from daynotes.core.config import NOTE_KEY_PREFIX
from daynotes.core.datekey import is_valid_key
from daynotes.storage.note_store import (
    PersistenceError,
    filter_note_items,
    validate_key,
)


class InMemoryNoteStore:
    """Dict-backed NoteStore sharing a namespace like the SQLite store."""

    def __init__(
        self,
        prefix: str | None = None,
        initial: dict[str, str] | None = None,
    ):
        """
        Initialize in-memory store.

        Args:
            prefix: Namespace prefix for note keys (defaults to NOTE_KEY_PREFIX)
            initial: Raw storage items to preload, keyed by full storage key
        """
        self.prefix = NOTE_KEY_PREFIX if prefix is None else prefix
        self.items: dict[str, str] = dict(initial or {})
        self.writes = 0
        self.fail_writes = False
        self._lock = Lock()

    def _storage_key(self, key: str) -> str:
        return f"{self.prefix}{key}"

    def get(self, key: str) -> str | None:
        if not is_valid_key(key):
            return None
        with self._lock:
            return self.items.get(self._storage_key(key))

    def set(self, key: str, body: str) -> None:
        validate_key(key)
        if not isinstance(body, str):
            raise TypeError(f"Note body must be str, got {type(body).__name__}")
        with self._lock:
            if self.fail_writes:
                raise PersistenceError(f"Storage unavailable, cannot save {key}")
            self.items[self._storage_key(key)] = body
            self.writes += 1

    def delete(self, key: str) -> None:
        validate_key(key)
        with self._lock:
            if self.fail_writes:
                raise PersistenceError(f"Storage unavailable, cannot delete {key}")
            self.items.pop(self._storage_key(key), None)

    def enumerate(self) -> list[tuple[str, str]]:
        with self._lock:
            items = list(self.items.items())
        return filter_note_items(items, self.prefix)

    def put_raw(self, storage_key: str, value: str) -> None:
        """Write an entry into the shared namespace without any key checks."""
        with self._lock:
            self.items[storage_key] = value

    def __repr__(self) -> str:
        return f"InMemoryNoteStore({len(self.items)} items)"
