"""Normalized string similarity used to score provider matches.

Similarity is ``1 - levenshtein(a, b) / max(len(a), len(b))`` over the
lowercased, trimmed inputs.  The edit distance is the classic unit-cost
Levenshtein distance (insertion, deletion, substitution), computed by
rapidfuzz rather than a hand-written DP table.
"""

from rapidfuzz.distance import Levenshtein


def normalize_for_match(value: str) -> str:
    """Lowercase and strip *value* for comparison."""
    return value.strip().lower()


def edit_distance(a: str, b: str) -> int:
    """Return the unit-cost Levenshtein distance between *a* and *b*."""
    return Levenshtein.distance(a, b)


def similarity(a: str, b: str) -> float:
    """Return the similarity of *a* and *b* in ``[0.0, 1.0]``.

    Case-insensitive and insensitive to leading/trailing whitespace.  Equal
    normalized strings (including two empty strings) score exactly 1.0.

    Args:
        a: First string.
        b: Second string.

    Returns:
        1.0 for identical normalized strings, 0.0 for completely different
        strings of equal length.
    """
    s1 = normalize_for_match(a)
    s2 = normalize_for_match(b)

    if s1 == s2:
        return 1.0

    longest = max(len(s1), len(s2))
    return (longest - edit_distance(s1, s2)) / longest
