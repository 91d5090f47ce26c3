"""Search infrastructure for the G-Maxing catalogue.

Components:
- SearchIndex: in-memory item store
- normalize_query: query normalization
- ScoringEngine: weighted multi-field fuzzy scoring
- ResultRanker: ordering and pagination
- SuggestionGenerator: corrections, completions, similar queries
- QueryTelemetry: query analytics
- AutocompleteProvider: live-typing suggestions
- FuzzySearchEngine: facade wiring all of the above
"""

from gmax_search.search.models import (
    QueryCount,
    ResponseStats,
    SearchableItem,
    SearchMatch,
    SearchQuery,
    SearchResponse,
    SearchResult,
    SearchStats,
    SearchSuggestion,
    SortMode,
    SuggestionType,
)
from gmax_search.search.index import SearchIndex
from gmax_search.search.preprocessing import normalize_query, split_terms
from gmax_search.search.scoring import ScoringEngine, levenshtein_distance, similarity
from gmax_search.search.postprocessing import ResultRanker
from gmax_search.search.telemetry import QueryTelemetry
from gmax_search.search.suggestions import SuggestionGenerator
from gmax_search.search.autocomplete import AutocompleteProvider
from gmax_search.search.engines import BaseSearchEngine, FuzzySearchEngine

__all__ = [
    "AutocompleteProvider",
    "BaseSearchEngine",
    "FuzzySearchEngine",
    "QueryCount",
    "QueryTelemetry",
    "ResponseStats",
    "ResultRanker",
    "ScoringEngine",
    "SearchIndex",
    "SearchMatch",
    "SearchQuery",
    "SearchResponse",
    "SearchResult",
    "SearchStats",
    "SearchSuggestion",
    "SearchableItem",
    "SortMode",
    "SuggestionGenerator",
    "SuggestionType",
    "levenshtein_distance",
    "normalize_query",
    "similarity",
    "split_terms",
]
