"""Search tool implementations."""

from . import (
    autocomplete,
    manage_index,
    search_catalogue,
    search_stats,
)

__all__ = [
    "autocomplete",
    "manage_index",
    "search_catalogue",
    "search_stats",
]
