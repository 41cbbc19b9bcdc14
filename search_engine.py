"""Thread-safe search facade over a catalog snapshot and its TF-IDF model."""

from __future__ import annotations

import logging
import threading
from typing import Iterable

from catalog_loader import Product
from filters import FilterState
from indexer import Indexer, TfIdfModel
from query_parser import QueryParser
from ranking import RankingResult, SortOrder, rank


class SearchEngine:
    """Ranks queries against an immutable model that can be swapped on reload."""

    def __init__(
        self,
        catalog: Iterable[Product],
        parser: QueryParser | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self._parser = parser or QueryParser()
        self._logger = logger or logging.getLogger(__name__)
        self._lock = threading.RLock()
        self._catalog, self._model = self._build(catalog)

    @property
    def model(self) -> TfIdfModel:
        with self._lock:
            return self._model

    @property
    def catalog(self) -> tuple[Product, ...]:
        with self._lock:
            return self._catalog

    @property
    def categories(self) -> list[str]:
        """Distinct catalog categories in first-seen order."""
        return list(dict.fromkeys(product.category for product in self.catalog))

    def reload(self, catalog: Iterable[Product]) -> None:
        """Rebuild the model for a new catalog and swap it in."""
        snapshot = self._build(catalog)
        with self._lock:
            self._catalog, self._model = snapshot
        self._logger.info("Search model swapped, %d products", len(snapshot[0]))

    def search(
        self,
        query: str,
        filters: FilterState | None = None,
        sort: SortOrder | str = SortOrder.RELEVANCE,
    ) -> RankingResult:
        """Rank the current catalog snapshot for ``query``."""
        with self._lock:
            catalog, model = self._catalog, self._model

        result = rank(query, filters, model, catalog, sort=sort, parser=self._parser)
        self._logger.debug("Query %r returned %d items", query, len(result.items))
        return result

    def _build(self, catalog: Iterable[Product]) -> tuple[tuple[Product, ...], TfIdfModel]:
        products = tuple(catalog)
        indexer = Indexer(tokenizer=self._parser.tokenizer, logger=self._logger)
        model = indexer.build(product.to_document() for product in products)
        return products, model
