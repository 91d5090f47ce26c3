"""Data models for the G-Maxing search engine.

This module defines the indexed unit (SearchableItem), the per-call query
(SearchQuery) and everything a search call hands back: scored results with
match details, suggestions, and response/analytics statistics.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Union

from gmax_search.search.highlighting import render_highlights

# (start, end) character offsets, end exclusive
Span = Tuple[int, int]

DateLike = Union[datetime, date, str, int, float]


class SortMode(Enum):
    """Result ordering modes.

    - RELEVANCE: descending score (default)
    - DATE: newest ``metadata["date"]`` first, undated items last
    - POPULARITY: descending ``search_weight``
    - ALPHABETICAL: ascending title
    """
    RELEVANCE = "relevance"
    DATE = "date"
    POPULARITY = "popularity"
    ALPHABETICAL = "alphabetical"

    @classmethod
    def parse(cls, value: Union["SortMode", str, None]) -> "SortMode":
        """Coerce a string (or None) into a SortMode.

        Raises:
            ValueError: If the string names no known mode
        """
        if value is None:
            return cls.RELEVANCE
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            choices = ", ".join(m.value for m in cls)
            raise ValueError(f"Unknown sort mode {value!r} (expected one of: {choices})") from None


class SuggestionType(Enum):
    CORRECTION = "correction"
    COMPLETION = "completion"
    SIMILAR = "similar"


@dataclass
class SearchableItem:
    """A document in the search index.

    Attributes:
        id: Unique, stable identifier
        title: Display title (heaviest scoring weight)
        description: Short summary
        content: Body text
        category: Single classification tag, used for exact-match filtering
        tags: Free-text labels, display order preserved
        url: Destination reference, never searched
        metadata: Open key/value bag carried through to results
            Common fields:
            - featured (bool)
            - priority (str)
            - difficulty (str)
            - date (datetime | ISO string): used by date sort and date filters
        search_weight: Optional positive multiplier on the aggregate score.
            None means "unset": scoring treats it as 1, popularity sort as 0.

    Usage:
        >>> item = SearchableItem(
        ...     id="personal-coaching",
        ...     title="Coaching Personnel G-Maxing",
        ...     description="Coaching 1-on-1",
        ...     content="...",
        ...     category="services",
        ...     tags=["coaching", "personnel"],
        ...     url="/coaching-g-maxing",
        ...     search_weight=9,
        ... )
    """

    id: str
    title: str
    description: str = ""
    content: str = ""
    category: str = ""
    tags: List[str] = field(default_factory=list)
    url: str = ""
    metadata: Dict[str, Any] = field(default_factory=dict)
    search_weight: Optional[float] = None

    def __post_init__(self):
        if self.metadata is None:
            self.metadata = {}
        if self.tags is None:
            self.tags = []
        else:
            self.tags = list(self.tags)

    @classmethod
    def field_names(cls) -> List[str]:
        return list(cls.__dataclass_fields__)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SearchableItem":
        """Build an item from a plain dict (JSON seed files, tool payloads).

        Accepts ``searchWeight`` as an alias of ``search_weight``.

        Raises:
            ValueError: If ``id`` or ``title`` is missing, or unknown keys are present
        """
        payload = dict(data)
        if "searchWeight" in payload:
            payload["search_weight"] = payload.pop("searchWeight")

        unknown = set(payload) - set(cls.field_names())
        if unknown:
            raise ValueError(f"Unknown item fields: {', '.join(sorted(unknown))}")
        if not payload.get("id") or not payload.get("title"):
            raise ValueError("Searchable items require 'id' and 'title'")
        return cls(**payload)

    @property
    def effective_weight(self) -> float:
        """Score multiplier; unset or zero weights count as 1."""
        return self.search_weight or 1

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "content": self.content,
            "category": self.category,
            "tags": list(self.tags),
            "url": self.url,
            "metadata": dict(self.metadata),
            "search_weight": self.search_weight,
        }


@dataclass
class SearchQuery:
    """Caller input for a single search call.

    Attributes:
        text: Free query text
        category: Exact category filter
        tags: Tag filter, OR semantics (an item qualifies when any of its tags
            contains any filter tag, case-insensitively)
        sort_by: Ordering mode (SortMode or its string value)
        limit: Page size; None uses the configured default (50)
        offset: Page start; negative values are clamped to 0
        date_from: Inclusive lower bound on ``metadata["date"]``
        date_to: Inclusive upper bound on ``metadata["date"]``
    """

    text: str
    category: Optional[str] = None
    tags: Optional[List[str]] = None
    sort_by: Union[SortMode, str] = SortMode.RELEVANCE
    limit: Optional[int] = None
    offset: int = 0
    date_from: Optional[DateLike] = None
    date_to: Optional[DateLike] = None

    def __post_init__(self):
        self.sort_by = SortMode.parse(self.sort_by)


@dataclass
class SearchMatch:
    """Per-field match descriptor.

    ``indices`` lists the substring hits (exact phrase, exact word, partial)
    in the lowercased field text. Fuzzy hits have no offsets.
    """

    field: str
    text: str
    indices: List[Span]
    score: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "field": self.field,
            "text": self.text,
            "indices": [list(span) for span in self.indices],
            "score": self.score,
        }


@dataclass
class SearchResult:
    """Scored search result.

    The score is unbounded and relevance-only. Highlighting is emitted as
    structured ranges; ``highlighted_title`` / ``highlighted_description``
    render them with ``<mark>`` tags for consumers that want markup.

    Attributes:
        item: The matched SearchableItem
        score: Relevance score (higher = more relevant)
        matches: Per-field match descriptors for fields that scored
        title_highlights: Query-term ranges in ``item.title``
        description_highlights: Query-term ranges in ``item.description``
        explanation: Human-readable summary, e.g. "Matched in title and tags"
    """

    item: SearchableItem
    score: float
    matches: List[SearchMatch] = field(default_factory=list)
    title_highlights: List[Span] = field(default_factory=list)
    description_highlights: List[Span] = field(default_factory=list)
    explanation: str = ""

    @property
    def highlighted_title(self) -> str:
        return self.highlight_title()

    @property
    def highlighted_description(self) -> str:
        return self.highlight_description()

    def highlight_title(self, open_tag: str = "<mark>", close_tag: str = "</mark>") -> str:
        """Render the title with query terms wrapped in the given tags.

        Example:
            >>> result.highlight_title("**", "**")
            '**Engel** **Garcia** **Gomez** - Expert G-Maxing'
        """
        return render_highlights(self.item.title, self.title_highlights, open_tag, close_tag)

    def highlight_description(self, open_tag: str = "<mark>", close_tag: str = "</mark>") -> str:
        return render_highlights(self.item.description, self.description_highlights, open_tag, close_tag)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "item": self.item.to_dict(),
            "score": self.score,
            "matches": [m.to_dict() for m in self.matches],
            "title_highlights": [list(span) for span in self.title_highlights],
            "description_highlights": [list(span) for span in self.description_highlights],
            "highlighted_title": self.highlighted_title,
            "highlighted_description": self.highlighted_description,
            "explanation": self.explanation,
        }


@dataclass
class SearchSuggestion:
    """Query suggestion.

    ``score`` only ranks suggestions against each other; it is not
    comparable with document scores.
    """

    text: str
    score: float
    type: SuggestionType
    original_query: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "text": self.text,
            "score": self.score,
            "type": self.type.value,
            "original_query": self.original_query,
        }


@dataclass
class ResponseStats:
    total: int
    total_matches: int
    time_ms: int

    def to_dict(self) -> Dict[str, Any]:
        return {"total": self.total, "total_matches": self.total_matches, "time_ms": self.time_ms}


@dataclass
class SearchResponse:
    results: List[SearchResult]
    suggestions: List[SearchSuggestion]
    stats: ResponseStats

    def to_dict(self) -> Dict[str, Any]:
        return {
            "results": [r.to_dict() for r in self.results],
            "suggestions": [s.to_dict() for s in self.suggestions],
            "stats": self.stats.to_dict(),
        }


@dataclass
class QueryCount:
    query: str
    count: int

    def to_dict(self) -> Dict[str, Any]:
        return {"query": self.query, "count": self.count}


@dataclass
class SearchStats:
    """Aggregated query analytics."""

    total_queries: int = 0
    avg_response_time: float = 0.0
    popular_queries: List[QueryCount] = field(default_factory=list)
    no_results_queries: List[QueryCount] = field(default_factory=list)
    category_distribution: Dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total_queries": self.total_queries,
            "avg_response_time": self.avg_response_time,
            "popular_queries": [q.to_dict() for q in self.popular_queries],
            "no_results_queries": [q.to_dict() for q in self.no_results_queries],
            "category_distribution": dict(self.category_distribution),
        }
