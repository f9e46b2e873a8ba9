"""Cosine similarity between a query vector and indexed document vectors."""
from __future__ import annotations
import math
from typing import Dict, Iterable, Mapping

from .index import DocumentRecord, QueryRecord


def unit_vector(weights: Mapping[str, float], norm: float) -> Dict[str, float]:
    if norm == 0:
        return {}
    return {term: w / norm for term, w in weights.items()}


def cosine(unit_query: Mapping[str, float], doc: DocumentRecord) -> float:
    """Dot product of the unit query with ``doc`` divided by the document norm.

    Only document terms are visited; terms missing from the query add zero.
    """
    if doc.norm == 0 or not unit_query:
        return 0.0
    # order-independent sum: equal term bags must give bit-equal scores
    total = math.fsum((w / doc.norm) * unit_query.get(term, 0.0) for term, w in doc.weights.items())
    # rounding can push an exact match a hair past 1.0
    return min(total, 1.0)


def score_all(query: QueryRecord, documents: Iterable[DocumentRecord]) -> Dict[int, float]:
    """Score every document against ``query``.

    A zero-norm query (stopwords or punctuation only) scores 0.0 everywhere.
    """
    unit_query = unit_vector(query.weights, query.norm)
    return {doc.doc_id: cosine(unit_query, doc) for doc in documents}
