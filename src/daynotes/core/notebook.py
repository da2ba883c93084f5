"""Note operations for the calendar and editor views.

NoteBook wires the store, the auto-save controller, search and analytics
together behind date-based calls, so the presentation layer never handles
storage keys.
"""

import logging
from datetime import date, datetime
from pathlib import Path

from daynotes.core import analytics
from daynotes.core import search as search_engine
from daynotes.core.autosave import AutoSaveController
from daynotes.core.config import (
    DATABASE_PATH,
    EXCERPT_WINDOW,
    NOTE_KEY_PREFIX,
    validate_core_environment,
)
from daynotes.core.datekey import to_key
from daynotes.core.scheduling import Scheduler
from daynotes.core.types import (
    AnalyticsSummary,
    NoteEntry,
    NotePreview,
    SearchResult,
)
from daynotes.storage.note_store import NoteStore, SqliteNoteStore

logger = logging.getLogger(__name__)


class NoteBook:
    """Date-keyed notes with auto-save, search and analytics."""

    def __init__(
        self,
        store: NoteStore,
        autosave: AutoSaveController | None = None,
        excerpt_window: int = EXCERPT_WINDOW,
    ):
        """
        Initialize notebook.

        Args:
            store: Note storage backend
            autosave: Auto-save controller (defaults to one writing to store)
            excerpt_window: Search excerpt characters around the first match
        """
        if excerpt_window < 0:
            raise ValueError(f"excerpt_window cannot be negative, got {excerpt_window}")
        self.store = store
        self.autosave = autosave if autosave is not None else AutoSaveController(store)
        self.excerpt_window = excerpt_window

    def load(self, day: date | datetime) -> str:
        """Text to show in the editor; unsaved edits take precedence."""
        key = to_key(day)
        pending = self.autosave.pending_body(key)
        if pending is not None:
            return pending
        return self.store.get(key) or ""

    def has_note(self, day: date | datetime) -> bool:
        """Whether the calendar should mark this day."""
        return bool(self.store.get(to_key(day)))

    def edit(self, day: date | datetime, body: str) -> None:
        """Record editor text; it is written after the debounce delay."""
        self.autosave.on_edit(to_key(day), body)

    def save(self, day: date | datetime, body: str | None = None) -> bool:
        """
        Save now, superseding any pending auto-save.

        Args:
            day: Day being edited
            body: Current editor text (defaults to the last recorded edit)

        Returns:
            True if a write happened

        Raises:
            PersistenceError: If the note could not be saved
        """
        return self.autosave.flush(to_key(day), body)

    def delete(self, day: date | datetime) -> None:
        """Remove the note for a day, dropping any unsaved edits."""
        key = to_key(day)
        self.autosave.discard(key)
        self.store.delete(key)
        logger.info("Deleted note %s", key)

    def close_day(self, day: date | datetime) -> bool:
        """Leave the editor for a day, saving pending edits."""
        return self.autosave.close(to_key(day))

    def entries(self) -> list[NoteEntry]:
        """All non-empty notes, newest first."""
        entries = [
            NoteEntry(key=key, body=body)
            for key, body in self.store.enumerate()
            if body
        ]
        entries.sort(key=lambda entry: entry.key, reverse=True)
        return entries

    def search(self, query: str, limit: int | None = None) -> list[SearchResult]:
        return search_engine.search(
            query, self.store.enumerate(), window=self.excerpt_window, limit=limit
        )

    def summary(self) -> AnalyticsSummary:
        return analytics.summarize(self.store.enumerate())

    def recent(self, today: date | datetime | None = None) -> list[NotePreview]:
        return analytics.recent_notes(self.store.enumerate(), today or date.today())

    def month(self, year: int, month: int) -> list[int]:
        """Days in a month that have a note, for the calendar grid."""
        return analytics.month_overview(self.store.enumerate(), year, month)

    def close(self) -> None:
        """Flush all pending edits and release the store."""
        try:
            self.autosave.close_all()
        finally:
            close_store = getattr(self.store, "close", None)
            if close_store is not None:
                close_store()


def build_notebook(
    db_path: Path | str | None = None,
    scheduler: Scheduler | None = None,
    delay: float | None = None,
    prefix: str | None = None,
) -> NoteBook:
    """
    Build a NoteBook backed by SQLite.

    Args:
        db_path: Path to SQLite database (defaults to config)
        scheduler: Timer source for auto-save (defaults to threads)
        delay: Auto-save debounce in seconds (defaults to config)
        prefix: Storage key prefix (defaults to config)

    Returns:
        Configured NoteBook

    Raises:
        ValueError: If the environment configuration is invalid
    """
    is_valid, message = validate_core_environment()
    if not is_valid:
        raise ValueError(message)

    actual_db_path = Path(db_path) if db_path else DATABASE_PATH
    store = SqliteNoteStore(
        db_path=actual_db_path,
        prefix=prefix if prefix is not None else NOTE_KEY_PREFIX,
    )
    autosave = AutoSaveController(store, scheduler=scheduler, delay=delay)
    logger.info("Notebook opened at %s", actual_db_path)
    return NoteBook(store=store, autosave=autosave)
