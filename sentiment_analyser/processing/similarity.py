"""
String proximity measures used by the phrase matcher.

levenshtein_distance: rapidfuzz edit distance (insert/delete/substitute)
similar_text / similarity_percent: symmetric character overlap, computed
    as the longest common run plus, recursively, the overlap of the
    pieces left and right of it on both sides.
"""

from difflib import SequenceMatcher
from typing import Optional

from rapidfuzz.distance import Levenshtein


def levenshtein_distance(a: str, b: str, max_distance: Optional[int] = None) -> int:
    """
    Edit distance between two strings.

    With max_distance set, any distance above it is reported as
    max_distance + 1, which lets rapidfuzz stop early.
    """
    if max_distance is None:
        return Levenshtein.distance(a, b)
    return Levenshtein.distance(a, b, score_cutoff=max_distance)


def similar_text(a: str, b: str) -> int:
    """Number of characters the two strings have in common."""
    if not a or not b:
        return 0

    # Ties resolve to the earliest run in a, then the earliest in b
    match = SequenceMatcher(None, a, b, autojunk=False).find_longest_match(0, len(a), 0, len(b))
    if match.size == 0:
        return 0

    left = similar_text(a[:match.a], b[:match.b])
    right = similar_text(a[match.a + match.size:], b[match.b + match.size:])
    return match.size + left + right


def similarity_percent(a: str, b: str) -> float:
    """similar_text as a percentage of the combined length."""
    total = len(a) + len(b)
    if total == 0:
        return 0.0
    return similar_text(a, b) * 2 * 100.0 / total
