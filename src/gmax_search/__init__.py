"""G-Maxing fuzzy search engine."""

from gmax_search.search import (
    FuzzySearchEngine,
    SearchableItem,
    SearchQuery,
    SearchResponse,
    SearchResult,
    SearchSuggestion,
    SortMode,
)

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "FuzzySearchEngine",
    "SearchableItem",
    "SearchQuery",
    "SearchResponse",
    "SearchResult",
    "SearchSuggestion",
    "SortMode",
]
