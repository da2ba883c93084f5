"""Summary figures over stored notes for dashboard widgets."""

import logging
from collections.abc import Iterable
from datetime import date, datetime, timedelta

from daynotes.core.config import PREVIEW_CHARS, RECENT_NOTES_DAYS
from daynotes.core.datekey import InvalidKeyError, from_key
from daynotes.core.types import AnalyticsSummary, NotePreview, NoteStats, count_words

logger = logging.getLogger(__name__)


def _visible_entries(
    snapshot: Iterable[tuple[str, str]],
) -> list[tuple[date, str, str]]:
    """Non-empty entries with a parseable key, as (date, key, body)."""
    entries = []
    for key, body in snapshot:
        if not body:
            continue
        try:
            day = from_key(key)
        except InvalidKeyError as e:
            logger.warning("Skipping analytics entry: %s", e)
            continue
        entries.append((day, key, body))
    return entries


def _round_half_up(numerator: int, denominator: int) -> int:
    return (2 * numerator + denominator) // (2 * denominator)


def summarize(snapshot: Iterable[tuple[str, str]]) -> AnalyticsSummary:
    """
    Count notes and characters across a snapshot.

    Empty bodies are not notes. The average is rounded half up and is 0
    when there are no notes.
    """
    entries = _visible_entries(snapshot)
    total_entries = len(entries)
    total_chars = sum(len(body) for _, _, body in entries)
    avg = _round_half_up(total_chars, total_entries) if total_entries else 0
    return AnalyticsSummary(
        total_entries=total_entries,
        total_chars=total_chars,
        avg_chars_per_entry=avg,
    )


def note_stats(body: str) -> NoteStats:
    """Character, word and line counts for a single note body."""
    return NoteStats.of(body)


def recent_notes(
    snapshot: Iterable[tuple[str, str]],
    today: date,
    days: int = RECENT_NOTES_DAYS,
    preview_chars: int = PREVIEW_CHARS,
) -> list[NotePreview]:
    """
    Notes from the last `days` calendar days up to and including today.

    Args:
        snapshot: (date key, body) pairs
        today: Last day of the range; a datetime counts as its date
        days: Number of days covered
        preview_chars: Preview length before truncation

    Returns:
        Previews ordered newest first
    """
    if days <= 0:
        return []
    if isinstance(today, datetime):
        today = today.date()
    # Ranges reaching before year 1 start at date.min
    span = min(days - 1, (today - date.min).days)
    earliest = today - timedelta(days=span)

    previews = []
    for day, key, body in _visible_entries(snapshot):
        if not earliest <= day <= today:
            continue
        preview = body[:preview_chars]
        if len(body) > preview_chars:
            preview += "..."
        previews.append(
            NotePreview(
                key=key,
                preview=preview,
                char_count=len(body),
                word_count=count_words(body),
            )
        )

    previews.sort(key=lambda p: p.key, reverse=True)
    return previews


def month_overview(
    snapshot: Iterable[tuple[str, str]], year: int, month: int
) -> list[int]:
    """Days of the given month that have a note, in ascending order."""
    if not 1 <= month <= 12:
        raise ValueError(f"Month must be in 1..12, got {month}")
    return sorted(
        day.day
        for day, _, _ in _visible_entries(snapshot)
        if day.year == year and day.month == month
    )
