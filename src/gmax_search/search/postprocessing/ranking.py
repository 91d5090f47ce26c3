"""Result ordering and pagination.

All sorts are stable: results with equal keys keep their index order.
"""

import logging
import unicodedata
from datetime import date, datetime, time, timezone
from typing import Any, List, Optional

from gmax_search.search.models import SearchResult, SortMode

logger = logging.getLogger("gmax-search.ranking")

DEFAULT_LIMIT = 50


def to_timestamp(value: Any) -> Optional[float]:
    """Convert a date-like value to epoch seconds.

    Accepts datetime, date, ISO-8601 strings and numbers. Naive datetimes are
    treated as UTC so mixed inputs compare consistently.

    Returns:
        Epoch seconds, or None if the value cannot be interpreted
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            value = datetime.fromisoformat(text.replace("Z", "+00:00"))
        except ValueError:
            logger.debug("Ignoring unparseable date: %r", value)
            return None
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.timestamp()
    if isinstance(value, date):
        return datetime.combine(value, time.min, tzinfo=timezone.utc).timestamp()
    return None


def _title_key(title: str) -> tuple:
    """Accent- and case-insensitive title key, original title as tie-breaker."""
    decomposed = unicodedata.normalize("NFKD", title)
    folded = "".join(c for c in decomposed if not unicodedata.combining(c)).casefold()
    return (folded, title)


class ResultRanker:
    """Sorts and paginates scored results.

    Usage:
        >>> ranker = ResultRanker()
        >>> page = ranker.paginate(ranker.sort(results, SortMode.DATE), offset=0, limit=10)
    """

    def __init__(self, default_limit: int = DEFAULT_LIMIT):
        self.default_limit = default_limit

    def sort(self, results: List[SearchResult], mode: SortMode = SortMode.RELEVANCE) -> List[SearchResult]:
        """Return a new list ordered by the given mode."""
        mode = SortMode.parse(mode)

        if mode is SortMode.RELEVANCE:
            return sorted(results, key=lambda r: r.score, reverse=True)
        if mode is SortMode.DATE:
            return sorted(
                results,
                key=lambda r: to_timestamp(r.item.metadata.get("date")) or 0.0,
                reverse=True,
            )
        if mode is SortMode.POPULARITY:
            return sorted(results, key=lambda r: r.item.search_weight or 0, reverse=True)
        return sorted(results, key=lambda r: _title_key(r.item.title))

    def paginate(self, results: List[SearchResult], offset: int = 0, limit: Optional[int] = None) -> List[SearchResult]:
        """Slice a page; negative values clamp to 0, offsets past the end give []."""
        start = max(0, offset or 0)
        size = self.default_limit if limit is None else max(0, limit)
        return results[start:start + size]
