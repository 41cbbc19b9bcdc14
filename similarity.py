"""Query vectorization and cosine similarity over sparse term vectors."""

from __future__ import annotations

import math
from typing import Mapping

from indexer import TfIdfModel, weigh_terms
from text_processing import DEFAULT_TOKENIZER, Tokenizer


def vectorize(query: str, model: TfIdfModel, tokenizer: Tokenizer | None = None) -> dict[str, float]:
    """Weigh query terms against the model's idf; unseen terms get weight 0."""
    tokens = (tokenizer or DEFAULT_TOKENIZER).tokenize(query)
    return weigh_terms(tokens, model.idf)


def cosine(vec_a: Mapping[str, float], vec_b: Mapping[str, float]) -> float:
    """Cosine of two sparse vectors, 0.0 when either has zero norm."""
    dot = 0.0
    norm_a = 0.0
    for token, weight in vec_a.items():
        dot += weight * vec_b.get(token, 0.0)
        norm_a += weight * weight

    norm_b = sum(weight * weight for weight in vec_b.values())
    if norm_a == 0 or norm_b == 0:
        return 0.0
    return dot / (math.sqrt(norm_a) * math.sqrt(norm_b))
