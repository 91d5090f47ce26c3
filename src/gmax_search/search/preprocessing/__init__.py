"""Query preprocessing for the search engine."""

from gmax_search.search.preprocessing.normalizer import normalize_query, split_terms

__all__ = ["normalize_query", "split_terms"]
