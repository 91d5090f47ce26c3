"""Base search engine interface.

Engines own an index built from an item loader and answer SearchQuery
objects with SearchResponse objects.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Union

from gmax_search.search.index import SearchIndex
from gmax_search.search.models import SearchableItem, SearchQuery, SearchResponse


class BaseSearchEngine(ABC):
    """Abstract base class for search engines.

    The engine is responsible for:
    - Building the index from its item loader
    - Executing queries with filtering and ranking
    - Returning standardized SearchResponse objects

    The loader is injected so the composition root decides where items come
    from (bundled seed file, alternate JSON, a fixed list in tests).

    Usage:
        >>> engine = FuzzySearchEngine(item_loader=load_seed_items)
        >>> response = engine.search("g-maxing nutrition")
        >>> for result in response.results:
        ...     print(f"{result.item.title}: {result.score:.1f}")
    """

    def __init__(self, item_loader: Callable[[], list[SearchableItem]]):
        """Initialize search engine with an item loader.

        Args:
            item_loader: Callable returning the initial list of items
        """
        self.item_loader = item_loader
        self.index = SearchIndex()
        self._is_built = False

    def build(self) -> None:
        """Load items and (re)populate the index."""
        self.index.replace_all(self.item_loader())
        self._is_built = True

    @abstractmethod
    def search(self, query: Union[SearchQuery, str]) -> SearchResponse:
        """Execute a search.

        Args:
            query: SearchQuery, or plain text for a default query

        Returns:
            SearchResponse with the result page, suggestions and timing stats
        """
        pass

    def rebuild(self) -> None:
        """Discard index changes and reload items from the loader."""
        self._is_built = False
        self.build()

    def is_built(self) -> bool:
        return self._is_built

    def get_document_count(self) -> int:
        return len(self.index)
