"""Response envelope shared by every gmax-search tool.

A tool answers with ``{"ok": true, "data": {...}}`` or
``{"ok": false, "error": {"code", "message", "details"}}``. The inner
``data`` always carries an ``action``, a list of ``entries`` and a
free-form ``summary``; search responses use the typed ``SearchSummary``.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field, model_validator

ToolAction = Literal["search", "autocomplete", "stats", "add", "update", "remove", "clear"]

ErrorCode = Literal["invalid_query", "invalid_update"]


class ToolError(BaseModel):
    code: ErrorCode = Field(description="Machine-readable error code")
    message: str = Field(description="Short human-readable reason")
    details: dict[str, Any] | None = Field(default=None, description="Offending values and hints")


class ToolEnvelope(BaseModel):
    """Outer response shape; ``error`` is present exactly when ``ok`` is false."""

    ok: bool
    data: Any | None = None
    error: ToolError | None = None

    @model_validator(mode="after")
    def _error_matches_ok(self) -> "ToolEnvelope":
        if self.ok == (self.error is not None):
            state = "must not" if self.ok else "must"
            raise ValueError(f"ok={str(self.ok).lower()} responses {state} include error")
        return self


class SuggestionEntry(BaseModel):
    text: str
    score: float
    type: Literal["correction", "completion", "similar"]
    original_query: str


class SearchSummary(BaseModel):
    """Page statistics and suggestions for one search call."""

    count: int = Field(ge=0, description="Results on this page")
    total_matches: int = Field(ge=0, description="Matching items before pagination")
    time_ms: int = Field(ge=0)
    suggestions: list[SuggestionEntry] = Field(default_factory=list)
    available_categories: list[str] | None = Field(
        default=None, description="Only set when the page is empty"
    )


class ToolData(BaseModel):
    action: ToolAction
    entries: list[dict[str, Any]]
    summary: SearchSummary | dict[str, Any] = Field(default_factory=dict)


def build_ok(data: Any) -> dict[str, Any]:
    return ToolEnvelope(ok=True, data=data).model_dump(exclude_none=True)


def build_error(code: ErrorCode, message: str, details: dict[str, Any] | None = None) -> dict[str, Any]:
    """Error envelope; error responses carry no ``data``."""
    error = ToolError(code=code, message=message, details=details)
    return ToolEnvelope(ok=False, error=error).model_dump(exclude_none=True)


def build_tool_data(
    *,
    action: ToolAction,
    entries: list[dict[str, Any]],
    summary: SearchSummary | dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Validate and dump the inner ``data`` payload."""
    return ToolData(action=action, entries=entries, summary=summary or {}).model_dump(exclude_none=True)
