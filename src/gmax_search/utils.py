"""Validation models and utilities for search tools."""

from typing import Annotated, Any, Literal, Optional

from pydantic import Field
from pydantic.functional_validators import AfterValidator


# Search limits
DEFAULT_SEARCH_LIMIT = 10
MAX_SEARCH_LIMIT = 50
DEFAULT_AUTOCOMPLETE_LIMIT = 5
MAX_AUTOCOMPLETE_LIMIT = 20

# Item constraints
ID_MAX_LENGTH = 200
TITLE_MAX_LENGTH = 300


def validate_non_empty_string(value: str) -> str:
    """Validate that a string is not empty after stripping whitespace."""
    stripped = value.strip()
    if not stripped:
        raise ValueError("Value cannot be empty or whitespace only")
    return stripped


def validate_positive_weight(value: Optional[float]) -> Optional[float]:
    if value is not None and value <= 0:
        raise ValueError("search_weight must be positive")
    return value


def validate_tags(value: Optional[list[str]]) -> Optional[list[str]]:
    """Drop blank tags, keep order."""
    if value is None:
        return None
    return [tag.strip() for tag in value if tag and tag.strip()]


SearchText = Annotated[
    str,
    Field(
        ...,
        description=(
            "Search text. Examples: 'engel garcia gomez', 'g-maxing nutrition', "
            "'perte de gras'. Case-insensitive, typo-tolerant."
        ),
    ),
]

CategoryFilter = Annotated[
    Optional[str],
    Field(default=None, description="Only return items in this category (exact match)"),
]

TagsFilter = Annotated[
    Optional[list[str]],
    AfterValidator(validate_tags),
    Field(default=None, description="Only return items having any of these tags (substring, case-insensitive)"),
]

SortBy = Annotated[
    Literal["relevance", "date", "popularity", "alphabetical"],
    Field(default="relevance", description="Result ordering"),
]

SearchLimit = Annotated[
    int,
    Field(
        default=DEFAULT_SEARCH_LIMIT,
        ge=1,
        le=MAX_SEARCH_LIMIT,
        description=f"Maximum number of results (1-{MAX_SEARCH_LIMIT}).",
    ),
]

SearchOffset = Annotated[
    int,
    Field(default=0, ge=0, description="Skip this many results (pagination)"),
]

DateBound = Annotated[
    Optional[str],
    Field(default=None, description="ISO-8601 date bound on item metadata 'date' (inclusive)"),
]

AutocompleteText = Annotated[
    str,
    Field(..., description="Partial text typed so far (at least 2 characters to get suggestions)"),
]

AutocompleteLimit = Annotated[
    int,
    Field(
        default=DEFAULT_AUTOCOMPLETE_LIMIT,
        ge=1,
        le=MAX_AUTOCOMPLETE_LIMIT,
        description=f"Maximum number of suggestions (1-{MAX_AUTOCOMPLETE_LIMIT}).",
    ),
]

ItemId = Annotated[
    str,
    AfterValidator(validate_non_empty_string),
    Field(..., min_length=1, max_length=ID_MAX_LENGTH, description="Unique item identifier"),
]

ItemTitle = Annotated[
    str,
    AfterValidator(validate_non_empty_string),
    Field(..., min_length=1, max_length=TITLE_MAX_LENGTH, description="Item title"),
]

OptionalText = Annotated[Optional[str], Field(default=None)]

ItemTags = Annotated[
    Optional[list[str]],
    AfterValidator(validate_tags),
    Field(default=None, description="Free-text labels"),
]

ItemMetadata = Annotated[
    Optional[dict[str, Any]],
    Field(default=None, description="Open key/value bag (e.g. featured, priority, date)"),
]

SearchWeight = Annotated[
    Optional[float],
    AfterValidator(validate_positive_weight),
    Field(default=None, description="Positive score multiplier (importance)"),
]
