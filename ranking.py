"""Ranking pipeline: extraction, filtering, scoring, fuzzy fallback and sort."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Sequence

from catalog_loader import Product
from filters import FilterState
from fuzzy import fuzzy_includes
from indexer import TfIdfModel
from query_parser import ParsedQuery, QueryParser
from similarity import cosine, vectorize

LOGGER = logging.getLogger(__name__)

CATEGORY_BOOST = 0.25
NEAR_ZERO_SCORE = 0.001
FALLBACK_BOOST = 0.25
FALLBACK_CATEGORY_BOOST = 0.4
FALLBACK_MAX_KEYWORDS = 5
NOMINAL_SCORE = 0.12


class SortOrder(str, Enum):
    RELEVANCE = "relevance"
    PRICE_ASC = "price-asc"
    PRICE_DESC = "price-desc"
    RATING_DESC = "rating-desc"


@dataclass(frozen=True)
class ScoredItem:
    item: Product
    score: float


@dataclass(frozen=True)
class RankingResult:
    """Ordered results plus the parsed query they were ranked against."""

    items: list[ScoredItem]
    parsed: ParsedQuery


def rank(
    raw_query: str,
    filters: FilterState | None,
    model: TfIdfModel,
    catalog: Sequence[Product],
    sort: SortOrder | str = SortOrder.RELEVANCE,
    parser: QueryParser | None = None,
) -> RankingResult:
    """Rank ``catalog`` for ``raw_query`` under manual and parsed constraints."""
    sort_order = SortOrder(sort)
    parser = parser or QueryParser()
    filters = filters or FilterState()

    parsed = parser.parse(raw_query)
    query_vector = vectorize(raw_query, model, parser.tokenizer)
    LOGGER.debug("Parsed query %r: %s", raw_query, parsed)

    base = [
        product
        for product in catalog
        if _passes(product, filters.category_constraint, filters.price_min, filters.price_max, filters.rating_min)
    ]
    candidates = [
        product
        for product in base
        if _passes(product, parsed.category, parsed.price_min, parsed.price_max, parsed.rating_min)
    ]

    scored: list[ScoredItem] = []
    for product in candidates:
        score = cosine(query_vector, model.doc_vectors.get(product.id, {}))
        if parsed.category and product.category == parsed.category:
            score += CATEGORY_BOOST
        scored.append(ScoredItem(item=product, score=score))

    if scored and all(entry.score < NEAR_ZERO_SCORE for entry in scored):
        scored = _fuzzy_fallback(scored, parsed, parser)

    return RankingResult(items=_sort(scored, sort_order), parsed=parsed)


def _passes(
    product: Product,
    category: str | None,
    price_min: float | None,
    price_max: float | None,
    rating_min: float | None,
) -> bool:
    if category and product.category != category:
        return False
    if price_min is not None and product.price < price_min:
        return False
    if price_max is not None and product.price > price_max:
        return False
    if rating_min is not None and product.rating < rating_min:
        return False
    return True


def _fuzzy_fallback(scored: list[ScoredItem], parsed: ParsedQuery, parser: QueryParser) -> list[ScoredItem]:
    keywords = parsed.keywords[:FALLBACK_MAX_KEYWORDS]
    LOGGER.debug("No vector signal for %d candidates, fuzzy matching %s", len(scored), keywords)

    matched: list[ScoredItem] = []
    if keywords:
        for entry in scored:
            hay_tokens = parser.tokenizer.split(entry.item.searchable_text)
            if not all(fuzzy_includes(hay_tokens, keyword) for keyword in keywords):
                continue
            boost = FALLBACK_BOOST
            if parsed.category and entry.item.category == parsed.category:
                boost += FALLBACK_CATEGORY_BOOST
            matched.append(ScoredItem(item=entry.item, score=entry.score + boost))

    if matched:
        return matched
    return [ScoredItem(item=entry.item, score=NOMINAL_SCORE) for entry in scored]


def _sort(scored: list[ScoredItem], sort_order: SortOrder) -> list[ScoredItem]:
    if sort_order is SortOrder.PRICE_ASC:
        return sorted(scored, key=lambda entry: entry.item.price)
    if sort_order is SortOrder.PRICE_DESC:
        return sorted(scored, key=lambda entry: entry.item.price, reverse=True)
    if sort_order is SortOrder.RATING_DESC:
        return sorted(scored, key=lambda entry: entry.item.rating, reverse=True)
    return sorted(scored, key=lambda entry: entry.score, reverse=True)
