"""Search engine implementations."""

from gmax_search.search.engines.base_engine import BaseSearchEngine
from gmax_search.search.engines.fuzzy_engine import FuzzySearchEngine

__all__ = [
    "BaseSearchEngine",
    "FuzzySearchEngine",
]
