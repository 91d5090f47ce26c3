"""Search result post-processing: ordering and pagination."""

from gmax_search.search.postprocessing.ranking import ResultRanker, to_timestamp

__all__ = ["ResultRanker", "to_timestamp"]
