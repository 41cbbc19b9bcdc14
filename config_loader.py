"""Configuration loading utilities for the catalog search demo."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from query_parser import QueryParser
from ranking import SortOrder
from text_processing import DEFAULT_STOP_WORDS, Tokenizer


@dataclass(frozen=True)
class AppConfig:
    """Application configuration loaded from YAML."""

    catalog_file: Path
    default_sort: SortOrder = SortOrder.RELEVANCE
    stop_words: tuple[str, ...] | None = None
    category_synonyms: tuple[tuple[str, str], ...] | None = None

    def build_parser(self) -> QueryParser:
        """Query parser wired with the configured stop-words and synonyms."""
        tokenizer = Tokenizer(self.stop_words if self.stop_words is not None else DEFAULT_STOP_WORDS)
        return QueryParser(tokenizer=tokenizer, category_synonyms=self.category_synonyms)


def load_config(config_path: Path) -> AppConfig:
    """Load and validate configuration from a YAML file."""
    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with config_path.open("r", encoding="utf-8") as file:
        raw: dict[str, Any] = yaml.safe_load(file) or {}

    catalog_raw = raw.get("catalog_file")
    if not isinstance(catalog_raw, str) or not catalog_raw.strip():
        raise ValueError("'catalog_file' must be a non-empty string")

    catalog_file = Path(catalog_raw)
    if not catalog_file.is_absolute():
        catalog_file = (config_path.parent / catalog_file).resolve()

    sort_raw = raw.get("default_sort", SortOrder.RELEVANCE.value)
    allowed_sorts = [order.value for order in SortOrder]
    if sort_raw not in allowed_sorts:
        raise ValueError(f"'default_sort' must be one of: {', '.join(allowed_sorts)}")

    stop_words: tuple[str, ...] | None = None
    stop_words_raw = raw.get("stop_words")
    if stop_words_raw is not None:
        if not isinstance(stop_words_raw, list) or not stop_words_raw:
            raise ValueError("'stop_words' must be a non-empty list")
        for value in stop_words_raw:
            if not isinstance(value, str) or not value.strip():
                raise ValueError("Each entry in 'stop_words' must be a non-empty string")
        stop_words = tuple(value.strip().lower() for value in stop_words_raw)

    category_synonyms: tuple[tuple[str, str], ...] | None = None
    synonyms_raw = raw.get("category_synonyms")
    if synonyms_raw is not None:
        if not isinstance(synonyms_raw, dict) or not synonyms_raw:
            raise ValueError("'category_synonyms' must be a non-empty mapping")
        for surface, canonical in synonyms_raw.items():
            if not isinstance(surface, str) or not surface.strip():
                raise ValueError("Each key in 'category_synonyms' must be a non-empty string")
            if not isinstance(canonical, str) or not canonical.strip():
                raise ValueError(f"Category for synonym '{surface}' must be a non-empty string")
        category_synonyms = tuple(
            (surface.strip().lower(), canonical.strip()) for surface, canonical in synonyms_raw.items()
        )

    return AppConfig(
        catalog_file=catalog_file,
        default_sort=SortOrder(sort_raw),
        stop_words=stop_words,
        category_synonyms=category_synonyms,
    )
