"""Rule-based extraction of price, rating and category constraints from queries."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, Mapping

from text_processing import DEFAULT_TOKENIZER, Tokenizer

_NUMBER = r"(\d+(?:\.\d+)?)"

PRICE_MAX_PATTERN = re.compile(r"(?:under|below|less than)\s*\$?" + _NUMBER)
PRICE_MIN_PATTERN = re.compile(r"(?:over|above|more than)\s*\$?" + _NUMBER)
PRICE_RANGE_PATTERN = re.compile(
    r"(?:between|from)\s*\$?" + _NUMBER + r"\s*(?:and|to)\s*\$?" + _NUMBER
)
GOOD_REVIEWS_PATTERN = re.compile(r"(good reviews|4\+|4\s*stars|rating\s*>=?\s*4)")
RATING_MIN_PATTERN = re.compile(r"(?:rating|stars)\s*>=?\s*(\d(?:\.\d)?)")

GOOD_REVIEWS_RATING = 4.0

# Order matters: the first synonym contained in the query wins.
DEFAULT_CATEGORY_SYNONYMS: tuple[tuple[str, str], ...] = (
    ("shoe", "Shoes"),
    ("sneaker", "Shoes"),
    ("runner", "Shoes"),
    ("running", "Shoes"),
    ("boots", "Shoes"),
    ("boot", "Shoes"),
    ("shirt", "Apparel"),
    ("tshirt", "Apparel"),
    ("t-shirt", "Apparel"),
    ("apparel", "Apparel"),
    ("socks", "Apparel"),
    ("sock", "Apparel"),
    ("bottle", "Accessories"),
    ("mat", "Accessories"),
    ("yoga", "Accessories"),
    ("accessory", "Accessories"),
    ("earbuds", "Electronics"),
    ("earbud", "Electronics"),
    ("headphones", "Electronics"),
    ("tracker", "Electronics"),
    ("watch", "Electronics"),
    ("electronics", "Electronics"),
    ("dumbbell", "Equipment"),
    ("dumbbells", "Equipment"),
    ("weights", "Equipment"),
    ("equipment", "Equipment"),
)


@dataclass(frozen=True)
class ParsedQuery:
    """Structured constraints and keywords extracted from one raw query."""

    keywords: tuple[str, ...] = ()
    category: str | None = None
    price_min: float | None = None
    price_max: float | None = None
    rating_min: float | None = None


class QueryParser:
    """Extracts a :class:`ParsedQuery` from free text.

    Every rule runs against the same lowercased string; a later rule
    overwrites a field set by an earlier one (range over single price
    bounds, explicit rating over "good reviews").
    """

    def __init__(
        self,
        tokenizer: Tokenizer | None = None,
        category_synonyms: Mapping[str, str] | Iterable[tuple[str, str]] | None = None,
    ) -> None:
        self._tokenizer = tokenizer or DEFAULT_TOKENIZER
        if category_synonyms is None:
            category_synonyms = DEFAULT_CATEGORY_SYNONYMS
        if isinstance(category_synonyms, Mapping):
            category_synonyms = category_synonyms.items()
        self._synonyms = tuple((surface.lower(), canonical) for surface, canonical in category_synonyms)

    @property
    def tokenizer(self) -> Tokenizer:
        return self._tokenizer

    @property
    def category_synonyms(self) -> tuple[tuple[str, str], ...]:
        return self._synonyms

    def parse(self, raw: str) -> ParsedQuery:
        lower = (raw or "").lower()
        price_min: float | None = None
        price_max: float | None = None
        rating_min: float | None = None

        match = PRICE_MAX_PATTERN.search(lower)
        if match:
            price_max = float(match.group(1))

        match = PRICE_MIN_PATTERN.search(lower)
        if match:
            price_min = float(match.group(1))

        match = PRICE_RANGE_PATTERN.search(lower)
        if match:
            price_min = float(match.group(1))
            price_max = float(match.group(2))

        if GOOD_REVIEWS_PATTERN.search(lower):
            rating_min = GOOD_REVIEWS_RATING

        match = RATING_MIN_PATTERN.search(lower)
        if match:
            rating_min = float(match.group(1))

        return ParsedQuery(
            keywords=tuple(dict.fromkeys(self._tokenizer.keywords(lower))),
            category=self.detect_category(lower),
            price_min=price_min,
            price_max=price_max,
            rating_min=rating_min,
        )

    def detect_category(self, text: str) -> str | None:
        lower = (text or "").lower()
        for surface, canonical in self._synonyms:
            if surface in lower:
                return canonical
        return None


_DEFAULT_PARSER = QueryParser()


def parse_query(raw: str) -> ParsedQuery:
    """Parse ``raw`` with the default stop-words and synonym table."""
    return _DEFAULT_PARSER.parse(raw)
