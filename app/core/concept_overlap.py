"""
Bag-of-words concept overlap between a candidate answer and a reference answer
"""
from __future__ import annotations

from typing import List

# Tokens this short or shorter are treated as stop words
MIN_SIGNIFICANT_LENGTH = 3


def significant_tokens(text: str) -> List[str]:
    """Whitespace tokens, lower-cased, longer than MIN_SIGNIFICANT_LENGTH characters."""
    if not text:
        return []
    return [tok for tok in text.lower().split() if len(tok) > MIN_SIGNIFICANT_LENGTH]


def overlap(candidate: str, reference: str) -> float:
    """
    Fraction of significant reference tokens found in the candidate.

    A reference token counts as found when some significant candidate token
    contains it or is contained in it, so "cell" and "cells" match. Repeated
    reference tokens count once per occurrence.
    """
    reference_tokens = significant_tokens(reference)
    if not reference_tokens:
        return 0.0

    candidate_tokens = significant_tokens(candidate)
    matched = 0
    for ref in reference_tokens:
        if any(ref in tok or tok in ref for tok in candidate_tokens):
            matched += 1
    return matched / len(reference_tokens)
