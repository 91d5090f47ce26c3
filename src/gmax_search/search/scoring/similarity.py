"""Edit-distance helpers shared by scoring and suggestion generation."""


def levenshtein_distance(a: str, b: str) -> int:
    """Classic Levenshtein distance (insert/delete/substitute all cost 1).

    Dynamic-programming table kept one row at a time.

    Examples:
        >>> levenshtein_distance("kitten", "sitting")
        3
        >>> levenshtein_distance("engle", "engel")
        2
    """
    if a == b:
        return 0
    if not a:
        return len(b)
    if not b:
        return len(a)

    previous = list(range(len(a) + 1))
    for j, char_b in enumerate(b, start=1):
        current = [j] + [0] * len(a)
        for i, char_a in enumerate(a, start=1):
            substitution = 0 if char_a == char_b else 1
            current[i] = min(
                current[i - 1] + 1,  # deletion
                previous[i] + 1,  # insertion
                previous[i - 1] + substitution,
            )
        previous = current

    return previous[len(a)]


def similarity(a: str, b: str) -> float:
    """Normalized similarity ``(max_len - distance) / max_len`` in [0, 1].

    Two empty strings have similarity 0.0, not a division by zero.

    Example:
        >>> similarity("transformation", "transformaton")
        0.9285714285714286
    """
    max_length = max(len(a), len(b))
    if max_length == 0:
        return 0.0
    return (max_length - levenshtein_distance(a, b)) / max_length
