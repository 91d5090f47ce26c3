"""Live-typing autocomplete over titles, tags and query history."""

from typing import List

from gmax_search.config import DEFAULT_AUTOCOMPLETE_LIMIT
from gmax_search.search.index import SearchIndex
from gmax_search.search.preprocessing.normalizer import normalize_query
from gmax_search.search.telemetry import QueryTelemetry

MIN_AUTOCOMPLETE_LENGTH = 2


class AutocompleteProvider:
    def __init__(self, index: SearchIndex, telemetry: QueryTelemetry):
        self.index = index
        self.telemetry = telemetry

    def suggest(self, query: str, limit: int = DEFAULT_AUTOCOMPLETE_LIMIT) -> List[str]:
        """Substring lookup, deduplicated, in discovery order.

        Titles are checked first, then tags, then past queries. Queries
        shorter than two characters return nothing.

        Example:
            >>> provider.suggest("coach", 3)
            ['Coaching Personnel G-Maxing', 'Coaching Groupe G-Maxing', 'coach']
        """
        if not query or len(query.strip()) < MIN_AUTOCOMPLETE_LENGTH or limit <= 0:
            return []

        needle = normalize_query(query)
        if not needle:
            return []

        found: dict[str, None] = {}
        for item in self.index:
            if needle in item.title.lower():
                found.setdefault(item.title, None)
        for item in self.index:
            for tag in item.tags:
                if needle in tag.lower():
                    found.setdefault(tag, None)

        for past_query in self.telemetry.history:
            if needle in past_query:
                found.setdefault(past_query, None)

        return list(found)[:limit]
