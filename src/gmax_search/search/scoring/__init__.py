"""Scoring algorithms for the search engine."""

from gmax_search.search.scoring.field_scorer import ScoringEngine, explain_matches
from gmax_search.search.scoring.similarity import levenshtein_distance, similarity

__all__ = ["ScoringEngine", "explain_matches", "levenshtein_distance", "similarity"]
