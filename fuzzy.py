"""Typo-tolerant keyword containment used when vector scoring finds nothing."""

from __future__ import annotations

from typing import Iterable

from rapidfuzz.distance import Levenshtein

SHORT_KEYWORD_LENGTH = 4
SHORT_KEYWORD_MAX_EDITS = 1
LONG_KEYWORD_MAX_EDITS = 2


def edit_distance(a: str, b: str) -> int:
    """Case-insensitive Levenshtein distance with unit costs."""
    return Levenshtein.distance(a.lower(), b.lower())


def max_edits(keyword: str) -> int:
    if len(keyword) <= SHORT_KEYWORD_LENGTH:
        return SHORT_KEYWORD_MAX_EDITS
    return LONG_KEYWORD_MAX_EDITS


def fuzzy_includes(hay_tokens: Iterable[str], keyword: str) -> bool:
    """True if any token contains (or is contained in) ``keyword`` or is within the edit budget."""
    hay_tokens = [token.lower() for token in hay_tokens]
    needle = keyword.lower()
    if any(needle in token or token in needle for token in hay_tokens):
        return True

    threshold = max_edits(needle)
    return any(edit_distance(token, needle) <= threshold for token in hay_tokens)
