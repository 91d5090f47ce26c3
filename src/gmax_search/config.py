"""Runtime configuration for the G-Maxing search engine.

The numeric thresholds below are hand-tuned. They are exposed as named,
environment-overridable settings so they can be adjusted without touching the
scoring code; none of them is assumed to be optimal.
"""

from dataclasses import dataclass, field
import os
from typing import Callable, TypeVar

N = TypeVar("N", int, float)


def _env_number(name: str, default: N, cast: Callable[[str], N]) -> N:
    """Read a numeric env var; unset, empty or unparseable values give the default."""
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return cast(raw)
    except ValueError:
        return default


def _env_int(name: str, default: int) -> int:
    return _env_number(name, default, int)


def _env_float(name: str, default: float) -> float:
    return _env_number(name, default, float)


# Scoring thresholds
FUZZY_MATCH_THRESHOLD = 0.7
CORRECTION_MIN_SIMILARITY = 0.6
CORRECTION_MAX_SIMILARITY = 0.95
SIMILAR_QUERY_MIN_SIMILARITY = 0.3

# Result / suggestion limits
DEFAULT_RESULT_LIMIT = 50
MAX_SUGGESTIONS = 8
DEFAULT_AUTOCOMPLETE_LIMIT = 5
SIMILAR_HISTORY_WINDOW = 100

# Telemetry caps
MAX_QUERY_HISTORY = 10_000
MAX_RESPONSE_SAMPLES = 1_000


@dataclass(frozen=True)
class FieldWeights:
    """Per-field multipliers applied to field scores."""

    title: float = 3.0
    description: float = 2.0
    content: float = 1.0
    tags: float = 2.5
    category: float = 1.5

    def as_pairs(self) -> list[tuple[str, float]]:
        """Field name / weight pairs in scoring order."""
        return [
            ("title", self.title),
            ("description", self.description),
            ("content", self.content),
            ("tags", self.tags),
            ("category", self.category),
        ]


@dataclass(frozen=True)
class SearchConfig:
    default_limit: int = DEFAULT_RESULT_LIMIT
    max_history: int = MAX_QUERY_HISTORY
    max_response_samples: int = MAX_RESPONSE_SAMPLES
    max_suggestions: int = MAX_SUGGESTIONS
    autocomplete_limit: int = DEFAULT_AUTOCOMPLETE_LIMIT
    fuzzy_threshold: float = FUZZY_MATCH_THRESHOLD
    correction_min_similarity: float = CORRECTION_MIN_SIMILARITY
    correction_max_similarity: float = CORRECTION_MAX_SIMILARITY
    similar_history_window: int = SIMILAR_HISTORY_WINDOW
    similar_min_similarity: float = SIMILAR_QUERY_MIN_SIMILARITY
    seed_path: str | None = None
    field_weights: FieldWeights = field(default_factory=FieldWeights)


def get_search_config() -> SearchConfig:
    """Load search config from environment variables."""
    seed_path = os.getenv("GMAX_SEARCH_SEED_PATH")
    return SearchConfig(
        default_limit=max(0, _env_int("GMAX_SEARCH_DEFAULT_LIMIT", DEFAULT_RESULT_LIMIT)),
        max_history=max(1, _env_int("GMAX_SEARCH_MAX_HISTORY", MAX_QUERY_HISTORY)),
        max_response_samples=max(1, _env_int("GMAX_SEARCH_MAX_RESPONSE_SAMPLES", MAX_RESPONSE_SAMPLES)),
        max_suggestions=max(0, _env_int("GMAX_SEARCH_MAX_SUGGESTIONS", MAX_SUGGESTIONS)),
        autocomplete_limit=max(0, _env_int("GMAX_SEARCH_AUTOCOMPLETE_LIMIT", DEFAULT_AUTOCOMPLETE_LIMIT)),
        fuzzy_threshold=_env_float("GMAX_SEARCH_FUZZY_THRESHOLD", FUZZY_MATCH_THRESHOLD),
        correction_min_similarity=_env_float("GMAX_SEARCH_CORRECTION_MIN", CORRECTION_MIN_SIMILARITY),
        correction_max_similarity=_env_float("GMAX_SEARCH_CORRECTION_MAX", CORRECTION_MAX_SIMILARITY),
        similar_history_window=max(0, _env_int("GMAX_SEARCH_SIMILAR_WINDOW", SIMILAR_HISTORY_WINDOW)),
        similar_min_similarity=_env_float("GMAX_SEARCH_SIMILAR_MIN", SIMILAR_QUERY_MIN_SIMILARITY),
        seed_path=seed_path if seed_path else None,
    )
