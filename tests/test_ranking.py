import pytest

from catalog_loader import Product
from filters import FilterState
from indexer import build_index
from ranking import CATEGORY_BOOST, FALLBACK_BOOST, NOMINAL_SCORE, SortOrder, rank


def _catalog() -> list[Product]:
    return [
        Product("s1", "Trail Sneakers", 80.0, "Shoes", 4.5, "Lightweight running sneakers"),
        Product("s2", "Leather Boots", 150.0, "Shoes", 4.0, "Waterproof hiking boots"),
        Product("a1", "Wool Socks", 25.0, "Apparel", 4.6, "Merino socks for runs"),
        Product("a2", "Cotton T-Shirt", 30.0, "Apparel", 3.5, "Soft cotton tee"),
        Product("e1", "Sport Watch", 200.0, "Electronics", 4.7, "GPS watch with heart monitor"),
        Product("q1", "Yoga Mat", 40.0, "Accessories", 4.2, "Thick non-slip mat"),
    ]


def _rank(query: str, filters: FilterState | None = None, sort: SortOrder | str = SortOrder.RELEVANCE):
    catalog = _catalog()
    model = build_index(product.to_document() for product in catalog)
    return rank(query, filters, model, catalog, sort=sort)


def test_rank_orders_by_text_similarity() -> None:
    result = _rank("hiking")

    assert len(result.items) == 6
    assert result.items[0].item.id == "s2"
    assert result.items[0].score > 0
    assert result.parsed.category is None


def test_rank_applies_category_boost_and_filter() -> None:
    result = _rank("running sneakers")

    assert result.parsed.category == "Shoes"
    assert [entry.item.id for entry in result.items] == ["s1", "s2"]
    assert result.items[0].score > CATEGORY_BOOST
    assert result.items[1].score == pytest.approx(CATEGORY_BOOST)


def test_rank_applies_parsed_price_bound() -> None:
    result = _rank("socks under $28")

    assert [entry.item.id for entry in result.items] == ["a1"]
    assert result.parsed.price_max == 28.0


def test_rank_applies_explicit_rating() -> None:
    result = _rank("rating >= 4.5 watch")

    assert [entry.item.id for entry in result.items] == ["e1"]


def test_rank_applies_manual_filters() -> None:
    result = _rank("", FilterState(category="Apparel", price_max=26.0))

    assert [entry.item.id for entry in result.items] == ["a1"]


def test_rank_all_category_sentinel_keeps_everything() -> None:
    result = _rank("", FilterState(category="All"))

    assert len(result.items) == 6


def test_rank_fuzzy_fallback_recovers_typo() -> None:
    result = _rank("sneakr")

    assert [entry.item.id for entry in result.items] == ["s1"]
    assert result.items[0].score == pytest.approx(FALLBACK_BOOST)


def test_rank_degrades_to_nominal_score_without_fuzzy_match() -> None:
    result = _rank("zzzzqq")

    assert len(result.items) == 6
    assert all(entry.score == NOMINAL_SCORE for entry in result.items)


def test_rank_empty_query_returns_filtered_set_with_nominal_score() -> None:
    result = _rank("")

    assert len(result.items) == 6
    assert all(entry.score == NOMINAL_SCORE for entry in result.items)


def test_rank_min_above_max_returns_nothing() -> None:
    assert _rank("over 100 under 50").items == []


def test_rank_empty_catalog() -> None:
    model = build_index([])

    result = rank("running shoes", None, model, [])

    assert model.vocabulary == ()
    assert model.idf == {}
    assert result.items == []
    assert result.parsed.category == "Shoes"


def test_rank_sort_price_ascending() -> None:
    prices = [entry.item.price for entry in _rank("", sort="price-asc").items]

    assert prices == sorted(prices)


def test_rank_sort_price_descending() -> None:
    prices = [entry.item.price for entry in _rank("", sort=SortOrder.PRICE_DESC).items]

    assert prices == sorted(prices, reverse=True)


def test_rank_sort_rating_descending() -> None:
    ratings = [entry.item.rating for entry in _rank("", sort="rating-desc").items]

    assert ratings == sorted(ratings, reverse=True)


def test_rank_rejects_unknown_sort_order() -> None:
    with pytest.raises(ValueError):
        _rank("", sort="newest")


def test_rank_fallback_considers_only_first_five_keywords() -> None:
    result = _rank("sneakr trial lightweigt trai sneakrz qqqqqqq")

    assert len(result.parsed.keywords) == 6
    assert [entry.item.id for entry in result.items] == ["s1"]
    assert result.items[0].score == pytest.approx(FALLBACK_BOOST)


def test_rank_fallback_requires_every_keyword_to_match() -> None:
    result = _rank("sneakr qqqqqqq")

    assert len(result.items) == 6
    assert all(entry.score == NOMINAL_SCORE for entry in result.items)


def test_rank_manual_bounds_are_inclusive() -> None:
    by_price = _rank("", FilterState(price_min=80.0, price_max=80.0))
    by_rating = _rank("", FilterState(rating_min=4.6))

    assert [entry.item.id for entry in by_price.items] == ["s1"]
    assert [entry.item.id for entry in by_rating.items] == ["a1", "e1"]


def test_rank_parsed_bounds_are_inclusive() -> None:
    assert [entry.item.id for entry in _rank("socks under $25").items] == ["a1"]
    assert [entry.item.id for entry in _rank("rating >= 4.7 watch").items] == ["e1"]
    assert [entry.item.id for entry in _rank("boots over $150").items] == ["s2"]
