"""TF-IDF model construction over a catalog snapshot."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, Mapping

from text_processing import DEFAULT_TOKENIZER, Tokenizer


@dataclass(frozen=True)
class Document:
    """Indexable text of a single catalog item."""

    id: str
    text: str


@dataclass(frozen=True)
class TfIdfModel:
    """Read-only TF-IDF index. A changed catalog needs a new model."""

    vocabulary: tuple[str, ...]
    idf: Mapping[str, float]
    doc_vectors: Mapping[str, Mapping[str, float]]


class Indexer:
    """Builds a :class:`TfIdfModel` from documents in one pass."""

    def __init__(self, tokenizer: Tokenizer | None = None, logger: logging.Logger | None = None) -> None:
        self._tokenizer = tokenizer or DEFAULT_TOKENIZER
        self._logger = logger or logging.getLogger(__name__)

    def build(self, documents: Iterable[Document]) -> TfIdfModel:
        """Tokenize every document, compute idf and the per-document weights."""
        doc_tokens: dict[str, list[str]] = {}
        for document in documents:
            if document.id in doc_tokens:
                self._logger.warning("Duplicate document id %s, keeping the last one", document.id)
            doc_tokens[document.id] = self._tokenizer.tokenize(document.text)

        vocabulary = tuple(dict.fromkeys(token for tokens in doc_tokens.values() for token in tokens))
        idf = _compute_idf(doc_tokens.values())

        doc_vectors: dict[str, Mapping[str, float]] = {}
        for doc_id, tokens in doc_tokens.items():
            doc_vectors[doc_id] = MappingProxyType(weigh_terms(tokens, idf))
            self._logger.debug("Indexed document %s (%d terms)", doc_id, len(tokens))

        self._logger.info(
            "Prepared TF-IDF model for %d documents, %d terms",
            len(doc_vectors),
            len(vocabulary),
        )
        return TfIdfModel(
            vocabulary=vocabulary,
            idf=MappingProxyType(idf),
            doc_vectors=MappingProxyType(doc_vectors),
        )


def build_index(documents: Iterable[Document], tokenizer: Tokenizer | None = None) -> TfIdfModel:
    """Build a model with the given (or default) tokenizer."""
    return Indexer(tokenizer).build(documents)


def weigh_terms(tokens: list[str], idf: Mapping[str, float]) -> dict[str, float]:
    """Length-normalized term frequency times idf; unknown terms weigh 0."""
    counts = _count_terms(tokens)
    length = len(tokens) or 1
    return {token: (count / length) * idf.get(token, 0.0) for token, count in counts.items()}


def _count_terms(tokens: Iterable[str]) -> dict[str, int]:
    counts: dict[str, int] = {}
    for token in tokens:
        counts[token] = counts.get(token, 0) + 1
    return counts


def _compute_idf(token_lists: Iterable[list[str]]) -> dict[str, float]:
    token_lists = list(token_lists)
    total_docs = len(token_lists)
    if total_docs == 0:
        return {}

    doc_frequency: dict[str, int] = {}
    for tokens in token_lists:
        for token in dict.fromkeys(tokens):
            doc_frequency[token] = doc_frequency.get(token, 0) + 1

    idf: dict[str, float] = {}
    for token, df in doc_frequency.items():
        idf[token] = math.log((1 + total_docs) / (1 + df)) + 1.0
    return idf
