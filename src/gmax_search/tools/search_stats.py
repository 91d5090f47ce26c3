"""Search Analytics Tools - query statistics and history reset."""

from typing import Any

from fastmcp import FastMCP

from gmax_search.contracts import build_ok, build_tool_data
from gmax_search.search import FuzzySearchEngine


def register(mcp: FastMCP, engine: FuzzySearchEngine) -> None:
    """Register analytics tools with the MCP server."""

    @mcp.tool()
    def gmax_search_stats() -> dict[str, Any]:
        """Query analytics: volume, mean latency, popular and zero-result queries,
        and indexed items per category."""
        stats = engine.get_search_stats().to_dict()
        return build_ok(
            build_tool_data(
                action="stats",
                entries=stats["popular_queries"],
                summary={
                    "total_queries": stats["total_queries"],
                    "avg_response_time_ms": round(stats["avg_response_time"], 3),
                    "no_results_queries": stats["no_results_queries"],
                    "category_distribution": stats["category_distribution"],
                },
            )
        )

    @mcp.tool()
    def gmax_clear_history() -> dict[str, Any]:
        """Reset query history, frequencies, zero-result counts and timings."""
        engine.clear_history()
        return build_ok(build_tool_data(action="clear", entries=[], summary={"cleared": True}))
