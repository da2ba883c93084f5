"""Full-text search over stored notes.

A linear scan with case-insensitive substring matching. Each result carries
an excerpt around the first match and the position of every match inside
that excerpt, so a renderer can mark them all.
"""

import logging
import re
from collections.abc import Iterable

from daynotes.core.config import ELLIPSIS, EXCERPT_WINDOW
from daynotes.core.datekey import InvalidKeyError, from_key
from daynotes.core.types import SearchResult

logger = logging.getLogger(__name__)


def compile_query(query: str) -> re.Pattern[str] | None:
    """
    Build the matcher for a query.

    Returns None for an empty or whitespace-only query, which callers treat
    as "search closed" rather than "no matches".
    """
    if not query or not query.strip():
        return None
    # IGNORECASE folds per character, so match offsets index the original body
    return re.compile(re.escape(query), re.IGNORECASE)


def build_excerpt(
    body: str,
    pattern: re.Pattern[str],
    window: int = EXCERPT_WINDOW,
) -> tuple[str, list[tuple[int, int]]] | None:
    """
    Cut an excerpt around the first match and locate all matches in it.

    Args:
        body: Note text
        pattern: Compiled query from compile_query()
        window: Characters kept on each side of the first match

    Returns:
        (excerpt, highlight spans) or None if body has no match
    """
    first = pattern.search(body)
    if first is None:
        return None

    start = max(0, first.start() - window)
    end = min(len(body), first.end() + window)
    prefix = ELLIPSIS if start > 0 else ""
    suffix = ELLIPSIS if end < len(body) else ""

    offset = len(prefix) - start
    spans = [
        (match.start() + offset, match.end() + offset)
        for match in pattern.finditer(body, start, end)
    ]
    return f"{prefix}{body[start:end]}{suffix}", spans


def search(
    query: str,
    snapshot: Iterable[tuple[str, str]],
    window: int = EXCERPT_WINDOW,
    limit: int | None = None,
) -> list[SearchResult]:
    """
    Find notes containing query, newest date first.

    Args:
        query: Text to look for, matched case-insensitively
        snapshot: (date key, body) pairs, e.g. NoteStore.enumerate()
        window: Excerpt characters on each side of the first match
        limit: Maximum number of results

    Returns:
        Matching notes ordered by date key descending
    """
    pattern = compile_query(query)
    if pattern is None:
        return []

    results: list[SearchResult] = []
    for key, body in snapshot:
        if not body:
            continue
        try:
            from_key(key)
        except InvalidKeyError as e:
            logger.warning("Skipping search entry: %s", e)
            continue

        found = build_excerpt(body, pattern, window)
        if found is None:
            continue
        excerpt, spans = found
        results.append(
            SearchResult(
                key=key,
                excerpt=excerpt,
                highlight_spans=spans,
                source_char_count=len(body),
            )
        )

    results.sort(key=lambda result: result.key, reverse=True)
    if limit is not None:
        results = results[: max(limit, 0)]
    logger.debug("Search %r matched %d notes", query, len(results))
    return results


def highlight(
    excerpt: str,
    spans: Iterable[tuple[int, int]],
    start_marker: str = "[",
    end_marker: str = "]",
) -> str:
    """Wrap each span of excerpt in markers, for plain-text rendering."""
    parts: list[str] = []
    cursor = 0
    for span_start, span_end in sorted(spans):
        parts.append(excerpt[cursor:span_start])
        parts.append(f"{start_marker}{excerpt[span_start:span_end]}{end_marker}")
        cursor = span_end
    parts.append(excerpt[cursor:])
    return "".join(parts)
