"""Demonstration of the catalog search pipeline on the bundled demo catalog."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict
from pathlib import Path

from catalog_loader import load_catalog
from config_loader import load_config
from search_engine import SearchEngine

LOGGER = logging.getLogger("catalog_search.demo")

DEMO_QUERIES = [
    "running shoes under $100 with good reviews",
    "between $20 and $50 socks",
    "rating >= 4.5 watch",
    "sneakr",
    "",
]


def run_demo() -> None:
    """Load the catalog and print ranked results for each demo query."""
    base_dir = Path(__file__).resolve().parent
    config = load_config(base_dir / "config.yml")

    catalog = load_catalog(config.catalog_file, LOGGER)
    engine = SearchEngine(catalog, parser=config.build_parser(), logger=LOGGER)

    for query in DEMO_QUERIES:
        result = engine.search(query, sort=config.default_sort)
        payload = {
            "query": query,
            "parsed": asdict(result.parsed),
            "results": [
                {
                    "id": entry.item.id,
                    "name": entry.item.name,
                    "price": entry.item.price,
                    "rating": entry.item.rating,
                    "score": round(entry.score, 6),
                }
                for entry in result.items
            ],
        }
        print(json.dumps(payload, ensure_ascii=False, indent=2))


def main() -> None:
    """Entry point of the demo."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    run_demo()


if __name__ == "__main__":
    main()
