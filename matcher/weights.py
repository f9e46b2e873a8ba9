"""IDF and TF-IDF weighting."""
from __future__ import annotations
import math
from typing import Dict, Mapping, Tuple

from .errors import InternalConsistencyError


def compute_idf(df: Mapping[str, int], total_documents: int) -> Dict[str, float]:
    """Return ``log10(total_documents / df)`` for every term in ``df``.

    A term present in every document gets 0.0; it is kept, not dropped.
    """
    if total_documents <= 0:
        raise InternalConsistencyError(f"IDF needs a positive document count, got {total_documents}")
    idf: Dict[str, float] = {}
    for term, count in df.items():
        if count < 1 or count > total_documents:
            raise InternalConsistencyError(
                f"document frequency {count} for {term!r} outside [1, {total_documents}]"
            )
        idf[term] = math.log10(total_documents / count)
    return idf


def compute_weights(tf: Mapping[str, int], idf: Mapping[str, float]) -> Tuple[Dict[str, float], float]:
    """Weight each term by ``idf * tf`` and return ``(weights, euclidean_norm)``."""
    weights: Dict[str, float] = {}
    for term, count in tf.items():
        try:
            weights[term] = idf[term] * count
        except KeyError:
            raise InternalConsistencyError(f"term {term!r} has no IDF entry") from None
    # fsum is exact, so the norm does not depend on term order
    return weights, math.sqrt(math.fsum(w * w for w in weights.values()))
