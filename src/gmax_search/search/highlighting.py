"""Query-term highlighting.

Highlights are computed as (start, end) ranges over the original text so the
presentation layer decides how emphasis is rendered. ``render_highlights``
is provided for consumers that just want tagged markup.
"""

import re
from typing import Iterable, List, Tuple

MIN_HIGHLIGHT_TERM_LENGTH = 2


def find_highlight_ranges(text: str, terms: Iterable[str]) -> List[Tuple[int, int]]:
    """Locate every case-insensitive occurrence of every term in text.

    Terms shorter than two characters are ignored. Overlapping or touching
    ranges from different terms are merged into one.

    Example:
        >>> find_highlight_ranges("Engel Garcia Gomez", ["garcia", "gomez"])
        [(6, 12), (13, 18)]
    """
    if not text:
        return []

    spans = []
    for term in terms:
        if len(term) < MIN_HIGHLIGHT_TERM_LENGTH:
            continue
        pattern = re.compile(re.escape(term), re.IGNORECASE)
        spans.extend(match.span() for match in pattern.finditer(text))

    return merge_ranges(spans)


def merge_ranges(spans: Iterable[Tuple[int, int]]) -> List[Tuple[int, int]]:
    merged: List[Tuple[int, int]] = []
    for start, end in sorted(spans):
        if merged and start <= merged[-1][1]:
            last_start, last_end = merged[-1]
            merged[-1] = (last_start, max(last_end, end))
        else:
            merged.append((start, end))
    return merged


def render_highlights(
    text: str,
    ranges: Iterable[Tuple[int, int]],
    open_tag: str = "<mark>",
    close_tag: str = "</mark>",
) -> str:
    """Wrap each range of text in open/close tags.

    Example:
        >>> render_highlights("ball create", [(5, 11)], "**", "**")
        'ball **create**'
    """
    parts = []
    cursor = 0
    for start, end in merge_ranges(ranges):
        start = max(start, cursor)
        if start >= end:
            continue
        parts.append(text[cursor:start])
        parts.append(f"{open_tag}{text[start:end]}{close_tag}")
        cursor = end
    parts.append(text[cursor:])
    return "".join(parts)
