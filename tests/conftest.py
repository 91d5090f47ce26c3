"""Shared fixtures for search engine tests."""

import pytest

from gmax_search.config import SearchConfig
from gmax_search.search import FuzzySearchEngine, SearchableItem


@pytest.fixture
def config():
    return SearchConfig()


@pytest.fixture
def seed_engine(config):
    """Engine over the bundled G-Maxing catalogue."""
    return FuzzySearchEngine(config=config)


@pytest.fixture
def sortable_items():
    """Three items that all match the query "gm" through their tags."""
    return [
        SearchableItem(id="a", title="Beta", tags=["gm"], search_weight=2, metadata={"date": "2024-01-01"}),
        SearchableItem(id="b", title="alpha", tags=["gm"], search_weight=5),
        SearchableItem(id="c", title="Gamma", tags=["gm"], metadata={"date": "2025-06-01T10:00:00Z"}),
    ]


@pytest.fixture
def sortable_engine(sortable_items, config):
    return FuzzySearchEngine(items=sortable_items, config=config)
