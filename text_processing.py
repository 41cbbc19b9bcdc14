"""Tokenization and naive suffix stemming for catalog and query text."""

from __future__ import annotations

import re
from typing import Iterable

SPLIT_PATTERN = re.compile(r"[^a-z0-9\-]+")
STEM_PATTERN = re.compile(r"(ing|ers|er|s)$", re.IGNORECASE)

DEFAULT_STOP_WORDS: frozenset[str] = frozenset(
    {
        "the", "a", "an", "for", "with", "and", "or", "to", "of", "in", "on",
        "at", "me", "show", "find", "under", "below", "over", "above", "less",
        "than", "more", "good", "reviews", "best", "top", "high", "low",
    }
)


def stem(token: str) -> str:
    """Strip one trailing ``ing``/``ers``/``er``/``s`` suffix."""
    return STEM_PATTERN.sub("", token, count=1)


class Tokenizer:
    """Lowercases, splits, drops stop-words and stems text.

    The stop-word set is fixed at construction, so two tokenizers with the
    same set always produce the same tokens for the same text.
    """

    def __init__(self, stop_words: Iterable[str] = DEFAULT_STOP_WORDS) -> None:
        self._stop_words = frozenset(word.lower() for word in stop_words)

    @property
    def stop_words(self) -> frozenset[str]:
        return self._stop_words

    def split(self, text: str) -> list[str]:
        """Lowercase raw pieces of ``[a-z0-9-]``, without filtering or stemming."""
        return [piece for piece in SPLIT_PATTERN.split((text or "").lower()) if piece]

    def tokenize(self, text: str) -> list[str]:
        """Full-vocabulary variant used for indexing and query vectors."""
        tokens: list[str] = []
        for piece in self.split(text):
            if piece in self._stop_words:
                continue
            token = stem(piece)
            if token:
                tokens.append(token)
        return tokens

    def keywords(self, text: str) -> list[str]:
        """Keyword variant: drops stems of a single character."""
        return [token for token in self.tokenize(text) if len(token) > 1]


DEFAULT_TOKENIZER = Tokenizer()
