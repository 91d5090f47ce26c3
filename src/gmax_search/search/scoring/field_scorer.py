"""Multi-field relevance scoring with typo tolerance.

Each of the five searchable fields is scored independently, then combined
with the configured field weights:

    field score = exact phrase (+10)
                + exact word   (+5 per whole-word hit of each term)
                + fuzzy        (+3 x best similarity per term, if > threshold)
                + partial      (+3 per term found as a raw substring)
                x 1.3 when the field starts with the first query term

    document score = sum(field score x field weight) x item weight
                     x 1.5 if the title contains the full query (len > 3)
                     x 1.2 if the content contains the full query (len > 3)
"""

import re
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from gmax_search.config import FUZZY_MATCH_THRESHOLD, FieldWeights
from gmax_search.search.highlighting import find_highlight_ranges
from gmax_search.search.models import SearchableItem, SearchMatch, SearchResult
from gmax_search.search.scoring.similarity import similarity

EXACT_PHRASE_BONUS = 10.0
EXACT_WORD_BONUS = 5.0
FUZZY_BONUS = 3.0
PARTIAL_BONUS = 3.0
PREFIX_MULTIPLIER = 1.3
TITLE_PHRASE_MULTIPLIER = 1.5
CONTENT_PHRASE_MULTIPLIER = 1.2

MIN_TERM_LENGTH = 2
MIN_FUZZY_WORD_LENGTH = 3
MIN_PHRASE_LENGTH = 2  # phrase bonus needs len > 2
MIN_DOCUMENT_PHRASE_LENGTH = 3  # document multipliers need len > 3


@dataclass
class FieldScore:
    score: float = 0.0
    indices: List[Tuple[int, int]] = field(default_factory=list)


class ScoringEngine:
    """Scores one item against a normalized query.

    Usage:
        >>> scorer = ScoringEngine()
        >>> result = scorer.score(item, ["engel", "garcia"], "engel garcia")
        >>> result.explanation
        'Matched in title, description, content and tags'
    """

    def __init__(self, weights: Optional[FieldWeights] = None, fuzzy_threshold: float = FUZZY_MATCH_THRESHOLD):
        self.weights = weights or FieldWeights()
        self.fuzzy_threshold = fuzzy_threshold

    def score(self, item: SearchableItem, terms: Sequence[str], full_query: str) -> SearchResult:
        """Score an item.

        Args:
            item: Item to score
            terms: Normalized query terms
            full_query: The full normalized query

        Returns:
            SearchResult (score 0.0 when nothing matched)
        """
        fields = {
            "title": item.title,
            "description": item.description,
            "content": item.content,
            "tags": " ".join(item.tags),
            "category": item.category,
        }

        total = 0.0
        matches: List[SearchMatch] = []
        for field_name, weight in self.weights.as_pairs():
            text = fields[field_name] or ""
            field_score = self.score_field(text, terms, full_query)
            if field_score.score > 0:
                total += field_score.score * weight
                matches.append(
                    SearchMatch(
                        field=field_name,
                        text=text,
                        indices=field_score.indices,
                        score=field_score.score,
                    )
                )

        total *= item.effective_weight

        if len(full_query) > MIN_DOCUMENT_PHRASE_LENGTH:
            if full_query in item.title.lower():
                total *= TITLE_PHRASE_MULTIPLIER
            if full_query in (item.content or "").lower():
                total *= CONTENT_PHRASE_MULTIPLIER

        return SearchResult(
            item=item,
            score=total,
            matches=matches,
            title_highlights=find_highlight_ranges(item.title, terms),
            description_highlights=find_highlight_ranges(item.description, terms),
            explanation=explain_matches(matches),
        )

    def score_field(self, text: str, terms: Sequence[str], full_query: str) -> FieldScore:
        """Score a single field's text against the query."""
        result = FieldScore()
        normalized = text.lower()
        if not normalized or not terms:
            return result

        # Exact phrase
        if len(full_query) > MIN_PHRASE_LENGTH:
            index = normalized.find(full_query)
            if index != -1:
                result.score += EXACT_PHRASE_BONUS
                result.indices.append((index, index + len(full_query)))

        words = normalized.split()
        for term in terms:
            if len(term) < MIN_TERM_LENGTH:
                continue

            # Exact word
            word_pattern = re.compile(rf"\b{re.escape(term)}\b")
            for match in word_pattern.finditer(normalized):
                result.score += EXACT_WORD_BONUS
                result.indices.append(match.span())

            # Fuzzy
            result.score += self.fuzzy_score(words, term)

            # Partial substring
            index = normalized.find(term)
            if index != -1:
                result.score += PARTIAL_BONUS
                while index != -1:
                    result.indices.append((index, index + len(term)))
                    index = normalized.find(term, index + 1)

        if normalized.startswith(terms[0]):
            result.score *= PREFIX_MULTIPLIER

        return result

    def fuzzy_score(self, words: Sequence[str], term: str) -> float:
        """Best single fuzzy hit of term against the field words.

        Only pairs where both sides have at least three characters count, and
        only similarities above the fuzzy threshold score.
        """
        if len(term) < MIN_FUZZY_WORD_LENGTH:
            return 0.0

        best = 0.0
        for word in words:
            if len(word) < MIN_FUZZY_WORD_LENGTH:
                continue
            value = similarity(word, term)
            if value > self.fuzzy_threshold and value > best:
                best = value

        return best * FUZZY_BONUS


def explain_matches(matches: Sequence[SearchMatch]) -> str:
    """Human-readable list of matched fields.

    Examples:
        >>> explain_matches([])
        'No matches found'
        >>> explain_matches([title_match, tags_match])
        'Matched in title and tags'
    """
    fields: List[str] = []
    for match in matches:
        if match.field not in fields:
            fields.append(match.field)

    if not fields:
        return "No matches found"
    if len(fields) == 1:
        return f"Matched in {fields[0]}"
    return f"Matched in {', '.join(fields[:-1])} and {fields[-1]}"
