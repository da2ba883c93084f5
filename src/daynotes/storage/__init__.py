"""Storage layer for daynotes - note stores and SQLite helpers."""

from daynotes.storage.db import get_connection, init_db
from daynotes.storage.memory import InMemoryNoteStore
from daynotes.storage.note_store import NoteStore, PersistenceError, SqliteNoteStore

__all__ = [
    "get_connection",
    "init_db",
    "InMemoryNoteStore",
    "NoteStore",
    "PersistenceError",
    "SqliteNoteStore",
]
