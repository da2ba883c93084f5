"""Shared types and data structures for daynotes."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from pydantic import BaseModel, Field

from daynotes.core.datekey import from_key

__all__ = [
    "AnalyticsSummary",
    "NoteEntry",
    "NotePreview",
    "NoteStats",
    "SearchResult",
    "Snapshot",
]

# Entries as produced by NoteStore.enumerate(): (date key, body) pairs
Snapshot = list[tuple[str, str]]


def count_words(body: str) -> int:
    """Count whitespace-separated tokens, ignoring empty ones."""
    return len(body.split())


def count_lines(body: str) -> int:
    """Count lines; an empty body has none."""
    return len(body.splitlines())


class NoteStats(BaseModel, frozen=True):
    """Size figures derived from a note body."""

    char_count: int = 0
    word_count: int = 0
    line_count: int = 0

    @classmethod
    def of(cls, body: str) -> NoteStats:
        return cls(
            char_count=len(body),
            word_count=count_words(body),
            line_count=count_lines(body),
        )


@dataclass(frozen=True)
class NoteEntry:
    """A stored note for one calendar day."""

    key: str
    body: str

    @property
    def date(self) -> date:
        return from_key(self.key)

    @property
    def char_count(self) -> int:
        return len(self.body)

    @property
    def word_count(self) -> int:
        return count_words(self.body)

    @property
    def line_count(self) -> int:
        return count_lines(self.body)

    @property
    def is_empty(self) -> bool:
        """Empty bodies count as "no note" everywhere outside the store."""
        return self.body == ""

    def to_dict(self) -> dict[str, str | int]:
        """Convert to dictionary for serialization."""
        return {
            "key": self.key,
            "body": self.body,
            "char_count": self.char_count,
            "word_count": self.word_count,
            "line_count": self.line_count,
        }


class SearchResult(BaseModel, frozen=True):
    """One matching note, with a preview excerpt and highlight ranges."""

    key: str
    excerpt: str
    # Half-open [start, end) ranges relative to excerpt
    highlight_spans: list[tuple[int, int]] = Field(default_factory=list)
    source_char_count: int = 0

    @property
    def date(self) -> date:
        return from_key(self.key)


class AnalyticsSummary(BaseModel, frozen=True):
    """Aggregate figures over all non-empty notes."""

    total_entries: int = 0
    total_chars: int = 0
    avg_chars_per_entry: int = 0


class NotePreview(BaseModel, frozen=True):
    """Shortened note for the recent activity list."""

    key: str
    preview: str
    char_count: int
    word_count: int

    @property
    def date(self) -> date:
        return from_key(self.key)
