"""Query analytics kept in memory for the lifetime of the process.

Four stores:
- query history: ordered log of normalized queries, oldest evicted first
- query frequencies: normalized query -> count
- zero-result frequencies: normalized query -> count
- response times: rolling window of samples (milliseconds)

Nothing here is persisted. ``clear()`` resets every store.
"""

from collections import Counter, deque
from typing import Deque, List, Optional, Tuple

from gmax_search.config import MAX_QUERY_HISTORY, MAX_RESPONSE_SAMPLES
from gmax_search.search.index import SearchIndex
from gmax_search.search.models import QueryCount, SearchStats

TOP_QUERIES = 10


class QueryTelemetry:
    def __init__(self, max_history: int = MAX_QUERY_HISTORY, max_samples: int = MAX_RESPONSE_SAMPLES):
        self._history: Deque[str] = deque(maxlen=max_history)
        self._frequencies: Counter = Counter()
        self._no_results: Counter = Counter()
        self._response_times: Deque[float] = deque(maxlen=max_samples)

    def track(self, query: str) -> None:
        self._history.append(query)
        self._frequencies[query] += 1

    def track_no_results(self, query: str) -> None:
        self._no_results[query] += 1

    def record_response_time(self, elapsed_ms: float) -> None:
        self._response_times.append(elapsed_ms)

    @property
    def history(self) -> List[str]:
        return list(self._history)

    @property
    def total_queries(self) -> int:
        return len(self._history)

    @property
    def average_response_time(self) -> float:
        if not self._response_times:
            return 0.0
        return sum(self._response_times) / len(self._response_times)

    def frequency(self, query: str) -> int:
        return self._frequencies[query]

    def no_results_count(self, query: str) -> int:
        return self._no_results[query]

    def top_queries(self, limit: Optional[int] = TOP_QUERIES) -> List[Tuple[str, int]]:
        """Most frequent queries; ties keep first-seen order."""
        return self._frequencies.most_common(limit)

    def top_no_results_queries(self, limit: Optional[int] = TOP_QUERIES) -> List[Tuple[str, int]]:
        return self._no_results.most_common(limit)

    def get_stats(self, index: SearchIndex) -> SearchStats:
        """Snapshot of analytics plus the index's category distribution."""
        return SearchStats(
            total_queries=self.total_queries,
            avg_response_time=self.average_response_time,
            popular_queries=[QueryCount(q, c) for q, c in self.top_queries()],
            no_results_queries=[QueryCount(q, c) for q, c in self.top_no_results_queries()],
            category_distribution=index.category_distribution(),
        )

    def clear(self) -> None:
        self._history.clear()
        self._frequencies.clear()
        self._no_results.clear()
        self._response_times.clear()
