"""
Levenshtein edit distance and normalized string similarity
"""
from __future__ import annotations


def _normalize(value: str) -> str:
    return (value or "").strip().lower()


def levenshtein_distance(a: str, b: str) -> int:
    """Minimum number of single-character inserts, deletes or substitutions turning a into b."""
    if a == b:
        return 0
    if not a:
        return len(b)
    if not b:
        return len(a)
    # Keep the shorter string on the inner loop so the rows stay small
    if len(a) < len(b):
        a, b = b, a

    previous = list(range(len(b) + 1))
    for i, ca in enumerate(a, start=1):
        current = [i]
        for j, cb in enumerate(b, start=1):
            if ca == cb:
                current.append(previous[j - 1])
            else:
                current.append(min(previous[j - 1], previous[j], current[j - 1]) + 1)
        previous = current
    return previous[-1]


def similarity(a: str, b: str) -> float:
    """
    Case-insensitive similarity in [0, 1] derived from edit distance.

    Both strings are trimmed and lower-cased first. An empty string on either
    side scores 0.0, including empty against empty.
    """
    s1 = _normalize(a)
    s2 = _normalize(b)

    if not s1 or not s2:
        return 0.0
    if s1 == s2:
        return 1.0

    distance = levenshtein_distance(s1, s2)
    max_length = max(len(s1), len(s2))
    return max(0.0, 1.0 - distance / max_length)
