"""Fuzzy search engine facade.

Wires the components together:

    search(query)
      -> normalize query text
      -> score every indexed item that passes the filters
      -> drop zero scores, sort, paginate
      -> generate suggestions (popular fallback when nothing matched)
      -> record telemetry (query, timing, zero-result queries)

One engine instance is meant to be created by the application's composition
root and shared. All public methods hold the engine lock, so the instance can
be used from worker threads.
"""

import copy
import logging
import threading
import time
from collections.abc import Callable, Iterable
from datetime import date, datetime
from typing import Any, Dict, List, Optional, Tuple, Union

from gmax_search.config import SearchConfig, get_search_config
from gmax_search.search.autocomplete import AutocompleteProvider
from gmax_search.search.engines.base_engine import BaseSearchEngine
from gmax_search.search.models import (
    DateLike,
    ResponseStats,
    SearchableItem,
    SearchQuery,
    SearchResponse,
    SearchResult,
    SearchStats,
)
from gmax_search.search.postprocessing.ranking import ResultRanker, to_timestamp
from gmax_search.search.preprocessing.normalizer import normalize_query, split_terms
from gmax_search.search.scoring.field_scorer import ScoringEngine
from gmax_search.search.seed import load_seed_items
from gmax_search.search.suggestions import SuggestionGenerator
from gmax_search.search.telemetry import QueryTelemetry

logger = logging.getLogger("gmax-search.engine")

_SECONDS_PER_DAY = 86400


def _is_bare_date(value: DateLike) -> bool:
    if isinstance(value, str):
        try:
            date.fromisoformat(value.strip())
        except ValueError:
            return False
        return True
    return isinstance(value, date) and not isinstance(value, datetime)


def _bound(value: Optional[DateLike], upper: bool) -> Optional[float]:
    if value is None:
        return None
    timestamp = to_timestamp(value)
    if timestamp is None:
        raise ValueError(f"Invalid date bound: {value!r}")
    # A bare date ("2024-03-01" or a date object) as upper bound covers the whole day
    if upper and _is_bare_date(value):
        timestamp += _SECONDS_PER_DAY - 1e-6
    return timestamp


class FuzzySearchEngine(BaseSearchEngine):
    """Weighted multi-field fuzzy search over an in-memory catalogue.

    Features:
    - Exact phrase, exact word, partial substring and Levenshtein matching
    - Field weights (title 3, description 2, content 1, tags 2.5, category 1.5)
    - Category, tag and date-range filters
    - Relevance / date / popularity / alphabetical ordering with pagination
    - Typo corrections, completions and similar-query suggestions
    - Autocomplete and query analytics

    Usage:
        >>> engine = FuzzySearchEngine()  # bundled seed catalogue
        >>> response = engine.search(SearchQuery(text="coaching", sort_by="popularity", limit=3))
        >>> response.stats.total
        3
        >>> engine.get_autocomplete_suggestions("g-max")
        ['Engel Garcia Gomez - Expert G-Maxing & Transformation Physique', ...]
    """

    def __init__(
        self,
        items: Optional[Iterable[SearchableItem]] = None,
        config: Optional[SearchConfig] = None,
        item_loader: Optional[Callable[[], list[SearchableItem]]] = None,
    ):
        """Create and build the engine.

        Args:
            items: Fixed initial items, deep-copied on every build so
                rebuild() restores them (takes precedence over item_loader)
            config: Settings; defaults to ``get_search_config()``
            item_loader: Callable returning the initial items; defaults to the
                seed catalogue (``config.seed_path`` or the bundled file)
        """
        self.config = config or get_search_config()

        if items is not None:
            fixed = list(items)
            loader: Callable[[], list[SearchableItem]] = lambda: copy.deepcopy(fixed)
        elif item_loader is not None:
            loader = item_loader
        else:
            loader = lambda: load_seed_items(self.config.seed_path)

        super().__init__(loader)
        self._lock = threading.RLock()

        self.telemetry = QueryTelemetry(
            max_history=self.config.max_history,
            max_samples=self.config.max_response_samples,
        )
        self.scorer = ScoringEngine(
            weights=self.config.field_weights,
            fuzzy_threshold=self.config.fuzzy_threshold,
        )
        self.ranker = ResultRanker(default_limit=self.config.default_limit)
        self.suggester = SuggestionGenerator(
            self.telemetry,
            max_suggestions=self.config.max_suggestions,
            correction_min=self.config.correction_min_similarity,
            correction_max=self.config.correction_max_similarity,
            similar_window=self.config.similar_history_window,
            similar_min=self.config.similar_min_similarity,
        )
        self.autocomplete = AutocompleteProvider(self.index, self.telemetry)

        self.build()

    def build(self) -> None:
        with self._lock:
            super().build()
        logger.info("Search index built with %d items", len(self.index))

    def rebuild(self) -> None:
        with self._lock:
            super().rebuild()

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------

    def search(self, query: Union[SearchQuery, str]) -> SearchResponse:
        """Run a search.

        Empty or punctuation-only text returns an empty response without
        touching telemetry.

        Raises:
            ValueError: If a date bound cannot be interpreted
        """
        if isinstance(query, str):
            query = SearchQuery(text=query)

        started = time.perf_counter()
        normalized = normalize_query(query.text)
        if not normalized:
            return SearchResponse(results=[], suggestions=[], stats=ResponseStats(0, 0, 0))

        date_bounds = (_bound(query.date_from, upper=False), _bound(query.date_to, upper=True))

        with self._lock:
            self.telemetry.track(normalized)

            matches = self._score_items(query, normalized, date_bounds)
            ranked = self.ranker.sort(matches, query.sort_by)
            page = self.ranker.paginate(ranked, query.offset, query.limit)

            no_results = not matches
            suggestions = self.suggester.suggest(normalized, no_results)

            elapsed_ms = (time.perf_counter() - started) * 1000
            self.telemetry.record_response_time(elapsed_ms)
            if no_results:
                self.telemetry.track_no_results(normalized)

        logger.debug("Search completed: %r -> %d results in %.1fms", query.text, len(page), elapsed_ms)

        return SearchResponse(
            results=page,
            suggestions=suggestions,
            stats=ResponseStats(total=len(page), total_matches=len(matches), time_ms=int(round(elapsed_ms))),
        )

    def _score_items(
        self,
        query: SearchQuery,
        normalized: str,
        date_bounds: Tuple[Optional[float], Optional[float]],
    ) -> List[SearchResult]:
        terms = split_terms(normalized)
        results = []
        for item in self.index:
            if not self._passes_filters(item, query, date_bounds):
                continue
            result = self.scorer.score(item, terms, normalized)
            if result.score > 0:
                results.append(result)
        return results

    @staticmethod
    def _passes_filters(
        item: SearchableItem,
        query: SearchQuery,
        date_bounds: Tuple[Optional[float], Optional[float]],
    ) -> bool:
        if query.category and item.category != query.category:
            return False

        if query.tags:
            wanted = [tag.lower() for tag in query.tags if tag]
            if wanted and not any(w in tag.lower() for tag in item.tags for w in wanted):
                return False

        lower, upper = date_bounds
        if lower is not None or upper is not None:
            timestamp = to_timestamp(item.metadata.get("date"))
            if timestamp is None:
                return False
            if lower is not None and timestamp < lower:
                return False
            if upper is not None and timestamp > upper:
                return False

        return True

    # ------------------------------------------------------------------
    # Index management
    # ------------------------------------------------------------------

    def add_item(self, item: Union[SearchableItem, Dict[str, Any]]) -> bool:
        """Append an item; duplicate ids are kept (append-only).

        Returns:
            True if the id was already present
        """
        if isinstance(item, dict):
            item = SearchableItem.from_dict(item)
        with self._lock:
            return self.index.add(item)

    def remove_item(self, item_id: str) -> bool:
        """Remove the first item with this id; unknown ids are a no-op."""
        with self._lock:
            return self.index.remove(item_id)

    def update_item(self, item_id: str, changes: Optional[Dict[str, Any]] = None, **fields: Any) -> bool:
        """Merge partial fields into an item; unknown ids are a no-op.

        Example:
            >>> engine.update_item("personal-coaching", search_weight=10)
            True

        Raises:
            ValueError: If a field name is not a SearchableItem field
        """
        merged = dict(changes or {})
        merged.update(fields)
        if "searchWeight" in merged:
            merged["search_weight"] = merged.pop("searchWeight")
        with self._lock:
            return self.index.update(item_id, merged)

    def get_item(self, item_id: str) -> Optional[SearchableItem]:
        with self._lock:
            return self.index.get(item_id)

    # ------------------------------------------------------------------
    # Autocomplete and analytics
    # ------------------------------------------------------------------

    def get_autocomplete_suggestions(self, query: str, limit: Optional[int] = None) -> List[str]:
        with self._lock:
            return self.autocomplete.suggest(query, self.config.autocomplete_limit if limit is None else limit)

    def get_search_stats(self) -> SearchStats:
        with self._lock:
            return self.telemetry.get_stats(self.index)

    def clear_history(self) -> None:
        with self._lock:
            self.telemetry.clear()
        logger.info("Search history cleared")
