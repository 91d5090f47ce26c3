"""Query suggestions: typo corrections, completions and similar past queries.

Suggestion scores only rank suggestions against each other:

- correction: similarity x 5, for near misses (0.6 < similarity < 0.95)
  against the common-terms dictionary
- completion: flat 3, for known phrases starting with the query
- similar: overlap x ln(frequency + 1), for frequent past queries sharing words
- popular: flat 2 (typed "similar"), only when the search found nothing
"""

import math
from typing import Iterable, List, Sequence

from gmax_search.config import (
    CORRECTION_MAX_SIMILARITY,
    CORRECTION_MIN_SIMILARITY,
    MAX_SUGGESTIONS,
    SIMILAR_HISTORY_WINDOW,
    SIMILAR_QUERY_MIN_SIMILARITY,
)
from gmax_search.search.models import SearchSuggestion, SuggestionType
from gmax_search.search.scoring.similarity import similarity
from gmax_search.search.telemetry import QueryTelemetry
from gmax_search.search.vocabulary import COMMON_TERMS, COMPLETION_PHRASES, POPULAR_QUERIES

CORRECTION_SCORE_FACTOR = 5.0
COMPLETION_SCORE = 3.0
POPULAR_SCORE = 2.0
MIN_CORRECTION_TOKEN_LENGTH = 3
MIN_COMPLETION_QUERY_LENGTH = 2


class SuggestionGenerator:
    """Builds ranked suggestions for a normalized query.

    Usage:
        >>> generator = SuggestionGenerator(telemetry)
        >>> [s.text for s in generator.suggest("engle garcia", no_results=False)]
        ['engel garcia gomez']
    """

    def __init__(
        self,
        telemetry: QueryTelemetry,
        common_terms: Iterable[str] = COMMON_TERMS,
        completion_phrases: Iterable[str] = COMPLETION_PHRASES,
        popular_queries: Iterable[str] = POPULAR_QUERIES,
        max_suggestions: int = MAX_SUGGESTIONS,
        correction_min: float = CORRECTION_MIN_SIMILARITY,
        correction_max: float = CORRECTION_MAX_SIMILARITY,
        similar_window: int = SIMILAR_HISTORY_WINDOW,
        similar_min: float = SIMILAR_QUERY_MIN_SIMILARITY,
    ):
        self.telemetry = telemetry
        self.common_terms = tuple(common_terms)
        self.completion_phrases = tuple(completion_phrases)
        self.popular_queries = tuple(popular_queries)
        self.max_suggestions = max_suggestions
        self.correction_min = correction_min
        self.correction_max = correction_max
        self.similar_window = similar_window
        self.similar_min = similar_min

    def suggest(self, query: str, no_results: bool) -> List[SearchSuggestion]:
        """Collect, rank and cap suggestions.

        Args:
            query: Normalized query text
            no_results: Whether the search matched nothing (adds popular queries)

        Returns:
            At most ``max_suggestions`` suggestions, highest score first.
            Duplicate texts keep only their best-scoring entry.
        """
        if not query:
            return []

        suggestions: List[SearchSuggestion] = []
        suggestions.extend(self.corrections(query))
        if len(query) >= MIN_COMPLETION_QUERY_LENGTH:
            suggestions.extend(self.completions(query))
        suggestions.extend(self.similar_queries(query))
        if no_results:
            suggestions.extend(self.popular(query))

        suggestions.sort(key=lambda s: s.score, reverse=True)

        unique: List[SearchSuggestion] = []
        seen = set()
        for suggestion in suggestions:
            if suggestion.text in seen:
                continue
            seen.add(suggestion.text)
            unique.append(suggestion)

        return unique[:self.max_suggestions]

    def _is_near_miss(self, value: float) -> bool:
        return self.correction_min < value < self.correction_max

    def corrections(self, query: str) -> List[SearchSuggestion]:
        """Typo corrections against the common-terms dictionary.

        Each token of three or more characters is compared with every term;
        a near miss replaces that token. Multi-word queries are also compared
        with the leading words of multi-word terms, and a near miss proposes
        the whole term ("engle garcia" -> "engel garcia gomez").
        """
        tokens = query.split()
        corrections: List[SearchSuggestion] = []

        for position, token in enumerate(tokens):
            if len(token) < MIN_CORRECTION_TOKEN_LENGTH:
                continue
            for term in self.common_terms:
                value = similarity(token, term)
                if self._is_near_miss(value):
                    corrected = list(tokens)
                    corrected[position] = term
                    corrections.append(self._suggestion(" ".join(corrected), value * CORRECTION_SCORE_FACTOR,
                                                        SuggestionType.CORRECTION, query))

        if len(tokens) > 1:
            for term in self.common_terms:
                term_words = term.split()
                if len(term_words) < len(tokens):
                    continue
                leading = " ".join(term_words[:len(tokens)])
                value = similarity(" ".join(tokens), leading)
                if self._is_near_miss(value):
                    corrections.append(self._suggestion(term, value * CORRECTION_SCORE_FACTOR,
                                                        SuggestionType.CORRECTION, query))

        return corrections

    def completions(self, query: str) -> List[SearchSuggestion]:
        prefix = query.lower()
        return [
            self._suggestion(phrase, COMPLETION_SCORE, SuggestionType.COMPLETION, query)
            for phrase in self.completion_phrases
            if phrase.startswith(prefix) and phrase != prefix
        ]

    def similar_queries(self, query: str) -> List[SearchSuggestion]:
        """Frequent past queries that share words with this one."""
        query_words = query.lower().split()
        if not query_words or self.similar_window <= 0:
            return []

        similar: List[SearchSuggestion] = []
        for past_query, count in self.telemetry.top_queries(self.similar_window):
            if past_query == query:
                continue
            past_words = past_query.split()
            overlap = word_overlap(query_words, past_words)
            if overlap > self.similar_min:
                similar.append(self._suggestion(past_query, overlap * math.log(count + 1),
                                                SuggestionType.SIMILAR, query))
        return similar

    def popular(self, query: str) -> List[SearchSuggestion]:
        return [
            self._suggestion(text, POPULAR_SCORE, SuggestionType.SIMILAR, query)
            for text in self.popular_queries
        ]

    @staticmethod
    def _suggestion(text: str, score: float, kind: SuggestionType, query: str) -> SearchSuggestion:
        return SearchSuggestion(text=text, score=score, type=kind, original_query=query)


def word_overlap(words_a: Sequence[str], words_b: Sequence[str]) -> float:
    """Dice-style overlap ``2 * |common| / (|a| + |b|)``.

    A word of ``a`` is common when it contains, or is contained in, any word
    of ``b``.

    Example:
        >>> word_overlap(["coaching"], ["coaching", "personnel"])
        0.6666666666666666
    """
    if not words_a or not words_b:
        return 0.0
    common = [word for word in words_a if any(other in word or word in other for other in words_b)]
    return (2 * len(common)) / (len(words_a) + len(words_b))
