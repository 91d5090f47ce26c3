"""Seed catalogue loading.

The bundled catalogue lives in ``gmax_search/resources/seed_items.json``.
An alternate JSON file (same shape: a list of item objects) can be supplied
through ``GMAX_SEARCH_SEED_PATH`` or the server's ``--seed`` option.
"""

import copy
import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import Any, List, Optional, Tuple, cast

from gmax_search.search.models import SearchableItem

logger = logging.getLogger("gmax-search.seed")

_RESOURCES_DIR = Path(__file__).resolve().parent.parent / "resources"
SEED_ITEMS_PATH = _RESOURCES_DIR / "seed_items.json"


@lru_cache(maxsize=4)
def _load_raw(path: str) -> Tuple[dict[str, Any], ...]:
    seed_path = Path(path)
    if not seed_path.exists():
        raise FileNotFoundError(f"Seed file not found: {seed_path}")

    with open(seed_path, encoding="utf-8") as f:
        data = json.load(f)

    if not isinstance(data, list) or not all(isinstance(entry, dict) for entry in data):
        raise ValueError(f"Seed file must contain a list of objects: {seed_path}")
    return tuple(cast(list[dict[str, Any]], data))


def load_seed_items(path: Optional[str] = None) -> List[SearchableItem]:
    """Load the seed catalogue as fresh SearchableItem objects.

    The parsed JSON is cached; items are rebuilt on every call so callers may
    mutate them freely.

    Args:
        path: Optional JSON file; defaults to the bundled catalogue

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file is not a list of valid item objects
    """
    seed_path = str(path or SEED_ITEMS_PATH)
    items = [SearchableItem.from_dict(copy.deepcopy(entry)) for entry in _load_raw(seed_path)]
    logger.debug("Loaded %d seed items from %s", len(items), seed_path)
    return items
