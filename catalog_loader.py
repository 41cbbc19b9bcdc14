"""Catalog loading from JSON or YAML product lists."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from indexer import Document

REQUIRED_FIELDS = ("id", "name", "price", "category", "rating", "description")


@dataclass(frozen=True)
class Product:
    """A catalog item as supplied by the catalog provider."""

    id: str
    name: str
    price: float
    category: str
    rating: float
    description: str

    @property
    def searchable_text(self) -> str:
        return f"{self.name} {self.description} {self.category}"

    def to_document(self) -> Document:
        return Document(id=self.id, text=self.searchable_text)


def load_catalog(catalog_path: Path, logger: logging.Logger) -> list[Product]:
    """Load products from ``catalog_path``. Malformed records are skipped."""
    if not catalog_path.exists():
        raise FileNotFoundError(f"Catalog file not found: {catalog_path}")

    suffix = catalog_path.suffix.lower()
    with catalog_path.open("r", encoding="utf-8") as file:
        if suffix == ".json":
            raw: Any = json.load(file)
        elif suffix in (".yml", ".yaml"):
            raw = yaml.safe_load(file)
        else:
            raise ValueError(f"Unsupported catalog format: {catalog_path.suffix or '<none>'}")

    if raw is None:
        raw = []
    if not isinstance(raw, list):
        raise ValueError("Catalog must be a list of product records")

    products: list[Product] = []
    for position, record in enumerate(raw):
        product = _parse_product(record, position, logger)
        if product is not None:
            products.append(product)

    logger.info("Loaded %d products from %s", len(products), catalog_path)
    return products


def _parse_product(record: Any, position: int, logger: logging.Logger) -> Product | None:
    if not isinstance(record, dict):
        logger.warning("Skipping catalog record #%d: not a mapping", position)
        return None

    missing = [name for name in REQUIRED_FIELDS if record.get(name) is None]
    if missing:
        logger.warning("Skipping catalog record #%d: missing %s", position, ", ".join(missing))
        return None

    try:
        price = float(record["price"])
        rating = float(record["rating"])
    except (TypeError, ValueError) as exc:
        logger.warning("Skipping catalog record #%d: %s", position, exc)
        return None

    return Product(
        id=str(record["id"]),
        name=str(record["name"]),
        price=price,
        category=str(record["category"]),
        rating=rating,
        description=str(record["description"]),
    )
