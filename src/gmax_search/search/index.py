"""In-memory search index.

A plain list of SearchableItem objects. Lookups by id are linear, which is
fine for catalogues of tens to hundreds of items. Duplicate ids are not
rejected: ``add`` appends, and ``update``/``remove`` act on the first item
with a matching id.
"""

import logging
from collections import Counter
from typing import Any, Dict, Iterable, Iterator, List, Optional

from gmax_search.search.models import SearchableItem

logger = logging.getLogger("gmax-search.index")


class SearchIndex:
    """Ordered collection of searchable items."""

    def __init__(self, items: Optional[Iterable[SearchableItem]] = None):
        self._items: List[SearchableItem] = list(items or [])

    def __iter__(self) -> Iterator[SearchableItem]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, item_id: object) -> bool:
        return self._find(item_id) != -1

    def _find(self, item_id: object) -> int:
        for position, item in enumerate(self._items):
            if item.id == item_id:
                return position
        return -1

    def get(self, item_id: str) -> Optional[SearchableItem]:
        position = self._find(item_id)
        return self._items[position] if position != -1 else None

    def add(self, item: SearchableItem) -> bool:
        """Append an item.

        Returns:
            True if another item already used this id (the item is still added)
        """
        duplicate = item.id in self
        if duplicate:
            logger.warning("Adding item with duplicate id: %s", item.id)
        self._items.append(item)
        logger.info("Added search item: %s", item.title)
        return duplicate

    def update(self, item_id: str, changes: Dict[str, Any]) -> bool:
        """Merge changes into the item with this id, in place.

        Unknown ids are a no-op.

        Returns:
            True if an item was updated

        Raises:
            ValueError: If changes name fields SearchableItem does not have,
                or would blank out the id or title
        """
        unknown = set(changes) - set(SearchableItem.field_names())
        if unknown:
            raise ValueError(f"Unknown item fields: {', '.join(sorted(unknown))}")
        required = [name for name in ("id", "title") if name in changes and not changes[name]]
        if required:
            raise ValueError(f"Item fields cannot be empty: {', '.join(required)}")

        item = self.get(item_id)
        if item is None:
            return False

        for name, value in changes.items():
            if name == "tags":
                value = list(value or [])
            elif name == "metadata":
                value = dict(value or {})
            setattr(item, name, value)
        logger.info("Updated search item: %s", item_id)
        return True

    def remove(self, item_id: str) -> bool:
        """Remove the first item with this id. Unknown ids are a no-op.

        Returns:
            True if an item was removed
        """
        position = self._find(item_id)
        if position == -1:
            return False
        del self._items[position]
        logger.info("Removed search item: %s", item_id)
        return True

    def replace_all(self, items: Iterable[SearchableItem]) -> None:
        self._items = list(items)

    def category_distribution(self) -> Dict[str, int]:
        """Number of indexed items per category."""
        return dict(Counter(item.category for item in self._items))
