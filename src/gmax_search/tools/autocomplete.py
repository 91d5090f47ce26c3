"""Autocomplete Tool - live-typing suggestions from titles, tags and history."""

from typing import Any

from fastmcp import FastMCP

from gmax_search.contracts import build_ok, build_tool_data
from gmax_search.search import FuzzySearchEngine
from gmax_search.utils import AutocompleteLimit, AutocompleteText


def register(mcp: FastMCP, engine: FuzzySearchEngine) -> None:
    """Register gmax_autocomplete tool with the MCP server."""

    @mcp.tool()
    def gmax_autocomplete(
        query: AutocompleteText,
        limit: AutocompleteLimit = 5,
    ) -> dict[str, Any]:
        """Suggest completions for partially typed text.

        Returns titles, tags and past queries containing the text. Inputs
        shorter than two characters return no suggestions.
        """
        suggestions = engine.get_autocomplete_suggestions(query, limit)
        entries = [{"text": text} for text in suggestions]
        return build_ok(
            build_tool_data(action="autocomplete", entries=entries, summary={"count": len(entries)})
        )
