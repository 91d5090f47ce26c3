"""Index Management Tools - add, update and remove catalogue items."""

from typing import Any

from fastmcp import FastMCP

from gmax_search.contracts import build_error, build_ok, build_tool_data
from gmax_search.search import FuzzySearchEngine, SearchableItem
from gmax_search.utils import (
    ItemId,
    ItemMetadata,
    ItemTags,
    ItemTitle,
    OptionalText,
    SearchWeight,
)


def register(mcp: FastMCP, engine: FuzzySearchEngine) -> None:
    """Register index management tools with the MCP server."""

    @mcp.tool()
    def gmax_add_item(
        id: ItemId,
        title: ItemTitle,
        description: OptionalText = None,
        content: OptionalText = None,
        category: OptionalText = None,
        tags: ItemTags = None,
        url: OptionalText = None,
        metadata: ItemMetadata = None,
        search_weight: SearchWeight = None,
    ) -> dict[str, Any]:
        """Add an item to the search index.

        Ids are not deduplicated: adding an existing id appends a second item
        and reports `duplicate_id: true`.
        """
        item = SearchableItem(
            id=id,
            title=title,
            description=description or "",
            content=content or "",
            category=category or "",
            tags=tags or [],
            url=url or "",
            metadata=metadata or {},
            search_weight=search_weight,
        )
        duplicate = engine.add_item(item)
        return build_ok(
            build_tool_data(
                action="add",
                entries=[item.to_dict()],
                summary={"duplicate_id": duplicate, "item_count": engine.get_document_count()},
            )
        )

    @mcp.tool()
    def gmax_update_item(
        id: ItemId,
        title: OptionalText = None,
        description: OptionalText = None,
        content: OptionalText = None,
        category: OptionalText = None,
        tags: ItemTags = None,
        url: OptionalText = None,
        metadata: ItemMetadata = None,
        search_weight: SearchWeight = None,
    ) -> dict[str, Any]:
        """Merge the given fields into an existing item. Omitted fields are kept.

        Unknown ids are a no-op reported as `updated: false`.
        """
        changes = {
            name: value
            for name, value in {
                "title": title,
                "description": description,
                "content": content,
                "category": category,
                "tags": tags,
                "url": url,
                "metadata": metadata,
                "search_weight": search_weight,
            }.items()
            if value is not None
        }
        if not changes:
            return build_error("invalid_update", "No fields to update", {"id": id})

        try:
            updated = engine.update_item(id, changes)
        except ValueError as exc:
            return build_error("invalid_update", "Update rejected", {"id": id, "reason": str(exc)})

        item = engine.get_item(id) if updated else None
        entries = [item.to_dict()] if item is not None else []
        summary = {"updated": updated, "updated_fields": sorted(changes) if updated else []}
        return build_ok(build_tool_data(action="update", entries=entries, summary=summary))

    @mcp.tool()
    def gmax_remove_item(id: ItemId) -> dict[str, Any]:
        """Remove an item from the search index by id.

        Unknown ids are a no-op reported as `removed: false`, so retrying a
        removal is harmless.
        """
        removed = engine.remove_item(id)
        return build_ok(
            build_tool_data(
                action="remove",
                entries=[{"id": id}] if removed else [],
                summary={"removed": removed, "item_count": engine.get_document_count()},
            )
        )
