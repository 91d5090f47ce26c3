"""Catalogue Search Tool - fuzzy, typo-tolerant search over the catalogue."""

from typing import Any

from fastmcp import FastMCP

from gmax_search.contracts import SearchSummary, SuggestionEntry, build_error, build_ok, build_tool_data
from gmax_search.search import FuzzySearchEngine, SearchQuery, SearchResult
from gmax_search.utils import (
    CategoryFilter,
    DateBound,
    SearchLimit,
    SearchOffset,
    SearchText,
    SortBy,
    TagsFilter,
)


def format_result(result: SearchResult) -> dict[str, Any]:
    item = result.item
    return {
        "id": item.id,
        "title": item.title,
        "url": item.url,
        "category": item.category,
        "score": round(result.score, 3),
        "explanation": result.explanation,
        "matched_fields": [match.field for match in result.matches],
        "highlighted_title": result.highlighted_title,
        "highlighted_description": result.highlighted_description,
        "title_highlights": [list(span) for span in result.title_highlights],
        "metadata": dict(item.metadata),
    }


def register(mcp: FastMCP, engine: FuzzySearchEngine) -> None:
    """Register gmax_search tool with the MCP server."""

    @mcp.tool()
    def gmax_search(
        query: SearchText,
        category: CategoryFilter = None,
        tags: TagsFilter = None,
        sort_by: SortBy = "relevance",
        limit: SearchLimit = 10,
        offset: SearchOffset = 0,
        date_from: DateBound = None,
        date_to: DateBound = None,
    ) -> dict[str, Any]:
        """Search the G-Maxing catalogue (protocols, coaching, nutrition, blog).

        Matching is weighted across title, description, content, tags and
        category, and tolerates typos. Suggestions (corrections, completions,
        similar past queries) are returned in the summary.

        Related tools:
        - gmax_autocomplete: suggestions while typing
        - gmax_search_stats: query analytics
        """
        try:
            response = engine.search(
                SearchQuery(
                    text=query,
                    category=category,
                    tags=tags,
                    sort_by=sort_by,
                    limit=limit,
                    offset=offset,
                    date_from=date_from,
                    date_to=date_to,
                )
            )
        except ValueError as exc:
            return build_error("invalid_query", "Search query is invalid", {"reason": str(exc)})

        entries = [format_result(result) for result in response.results]
        summary = SearchSummary(
            count=response.stats.total,
            total_matches=response.stats.total_matches,
            time_ms=response.stats.time_ms,
            suggestions=[SuggestionEntry(**suggestion.to_dict()) for suggestion in response.suggestions],
        )
        if not entries:
            summary.available_categories = sorted(engine.get_search_stats().category_distribution)

        return build_ok(build_tool_data(action="search", entries=entries, summary=summary))
