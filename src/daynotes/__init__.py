"""daynotes - calendar notes with auto-save and full-text search."""

from daynotes.core.analytics import month_overview, note_stats, recent_notes, summarize
from daynotes.core.autosave import AutoSaveController
from daynotes.core.datekey import (
    DateKeyError,
    InvalidDateError,
    InvalidKeyError,
    from_key,
    to_key,
)
from daynotes.core.notebook import NoteBook, build_notebook
from daynotes.core.search import search
from daynotes.core.types import (
    AnalyticsSummary,
    NoteEntry,
    NotePreview,
    NoteStats,
    SearchResult,
)
from daynotes.storage import (
    InMemoryNoteStore,
    NoteStore,
    PersistenceError,
    SqliteNoteStore,
)

__version__ = "0.1.0"

__all__ = [
    "AnalyticsSummary",
    "AutoSaveController",
    "DateKeyError",
    "InMemoryNoteStore",
    "InvalidDateError",
    "InvalidKeyError",
    "NoteBook",
    "NoteEntry",
    "NotePreview",
    "NoteStats",
    "NoteStore",
    "PersistenceError",
    "SearchResult",
    "SqliteNoteStore",
    "build_notebook",
    "from_key",
    "month_overview",
    "note_stats",
    "recent_notes",
    "search",
    "summarize",
    "to_key",
]
