from catalog_loader import Product
from filters import FilterState
from query_parser import QueryParser
from search_engine import SearchEngine
from text_processing import Tokenizer


class DummyLogger:
    def __init__(self) -> None:
        self.records: list[tuple[str, str]] = []

    def info(self, msg: str, *args: object) -> None:
        self.records.append(("info", msg % args if args else msg))

    def warning(self, msg: str, *args: object) -> None:
        self.records.append(("warning", msg % args if args else msg))

    def debug(self, msg: str, *args: object) -> None:
        self.records.append(("debug", msg % args if args else msg))


def _catalog() -> list[Product]:
    return [
        Product("s1", "Trail Sneakers", 80.0, "Shoes", 4.5, "Lightweight running sneakers"),
        Product("s2", "Leather Boots", 150.0, "Shoes", 4.0, "Waterproof hiking boots"),
        Product("a1", "Wool Socks", 25.0, "Apparel", 4.6, "Merino socks for runs"),
        Product("e1", "Sport Watch", 200.0, "Electronics", 4.7, "GPS watch with heart monitor"),
    ]


def test_search_returns_ranked_results() -> None:
    engine = SearchEngine(_catalog(), logger=DummyLogger())

    result = engine.search("waterproof hiking")

    assert result.items[0].item.id == "s2"
    assert result.items[0].score >= result.items[1].score


def test_search_applies_filters_and_sort() -> None:
    engine = SearchEngine(_catalog(), logger=DummyLogger())

    result = engine.search("", FilterState(price_max=100.0), sort="price-desc")

    assert [entry.item.id for entry in result.items] == ["s1", "a1"]


def test_categories_in_first_seen_order() -> None:
    engine = SearchEngine(_catalog(), logger=DummyLogger())

    assert engine.categories == ["Shoes", "Apparel", "Electronics"]


def test_reload_swaps_model_and_keeps_old_one_intact() -> None:
    logger = DummyLogger()
    engine = SearchEngine(_catalog(), logger=logger)
    old_model = engine.model

    engine.reload([Product("n1", "Yoga Mat", 40.0, "Accessories", 4.2, "Thick non-slip mat")])

    assert engine.model is not old_model
    assert set(old_model.doc_vectors) == {"s1", "s2", "a1", "e1"}
    assert [entry.item.id for entry in engine.search("mat").items] == ["n1"]
    assert any(level == "info" and "swapped" in msg for level, msg in logger.records)


def test_engine_uses_injected_parser() -> None:
    parser = QueryParser(tokenizer=Tokenizer(["boots"]), category_synonyms={"hiking": "Shoes"})
    engine = SearchEngine(_catalog(), parser=parser, logger=DummyLogger())

    result = engine.search("hiking")

    assert result.parsed.category == "Shoes"
    assert [entry.item.id for entry in result.items] == ["s2", "s1"]
    assert "boot" not in engine.model.vocabulary


def test_search_on_empty_catalog() -> None:
    engine = SearchEngine([], logger=DummyLogger())

    result = engine.search("running shoes under $100")

    assert result.items == []
    assert engine.model.idf == {}
