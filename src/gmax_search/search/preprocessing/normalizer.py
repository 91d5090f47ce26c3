"""Query normalization.

Normalization is a pure, idempotent function:
``normalize_query(normalize_query(s)) == normalize_query(s)``.
"""

import re
from typing import List

# Anything that is not a word character, whitespace or a hyphen
_STRIP_PATTERN = re.compile(r"[^\w\s-]")
_WHITESPACE_PATTERN = re.compile(r"\s+")


def normalize_query(raw: str) -> str:
    """Lowercase, replace punctuation with spaces and collapse whitespace.

    Hyphens survive so compound terms like "g-maxing" stay intact.

    Example:
        >>> normalize_query("  Engel, Garcia!!  G-Maxing? ")
        'engel garcia g-maxing'
    """
    if not raw:
        return ""
    text = _STRIP_PATTERN.sub(" ", raw.lower())
    return _WHITESPACE_PATTERN.sub(" ", text).strip()


def split_terms(normalized_query: str) -> List[str]:
    """Split a normalized query into its non-empty terms."""
    return [term for term in normalized_query.split() if term]
