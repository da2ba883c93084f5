"""daynotes core library - date keys, auto-save, search and analytics."""

from daynotes.core.datekey import (
    DateKeyError,
    InvalidDateError,
    InvalidKeyError,
    from_key,
    to_key,
)
from daynotes.core.types import (
    AnalyticsSummary,
    NoteEntry,
    NotePreview,
    NoteStats,
    SearchResult,
)

__all__ = [
    # Auto-save
    "AutoSaveController",
    # Date keys
    "DateKeyError",
    "InvalidDateError",
    "InvalidKeyError",
    "from_key",
    "to_key",
    # Types
    "AnalyticsSummary",
    "NoteEntry",
    "NotePreview",
    "NoteStats",
    "SearchResult",
    # Notebook
    "NoteBook",
    "build_notebook",
]


def __getattr__(name: str):
    if name == "AutoSaveController":
        from daynotes.core.autosave import AutoSaveController

        return AutoSaveController
    if name == "NoteBook":
        from daynotes.core.notebook import NoteBook

        return NoteBook
    if name == "build_notebook":
        from daynotes.core.notebook import build_notebook

        return build_notebook
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
