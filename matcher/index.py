# matcher/index.py
"""Frequency index over a line corpus.

The index is built in two phases. ``add_document``/``index_document`` record
term counts and document frequencies; ``finalize`` computes IDF and the
TF-IDF vector of every document. After ``finalize`` the index is read-only,
and queries are scored through transient ``QueryRecord`` objects that never
enter the document collection.
"""

from __future__ import annotations
import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import AbstractSet, Dict, List, Optional

from .errors import IndexStateError
from .normalize import EMPTY_STOPWORDS, normalize, stopword_set
from .weights import compute_idf, compute_weights

logger = logging.getLogger(__name__)


@dataclass
class DocumentRecord:
    doc_id: int
    text: str
    terms: List[str]
    tf: Dict[str, int]
    weights: Dict[str, float] = field(default_factory=dict)
    norm: float = 0.0


@dataclass
class QueryRecord:
    text: str
    terms: List[str]
    tf: Dict[str, int]
    idf: Dict[str, float] = field(default_factory=dict)
    weights: Dict[str, float] = field(default_factory=dict)
    norm: float = 0.0


def count_terms(terms: List[str]) -> Dict[str, int]:
    # dict() keeps first-seen order, which keeps rebuilds identical
    return dict(Counter(terms))


class CorpusIndex:
    """Documents, document frequencies and, once finalized, IDF and weights."""

    def __init__(self, stopwords: AbstractSet[str] = EMPTY_STOPWORDS):
        self.stopwords = stopword_set(stopwords)
        self.documents: List[DocumentRecord] = []
        self.df: Dict[str, int] = {}
        self.idf: Dict[str, float] = {}
        self.idf_document_count = 0
        self._ids: Dict[int, int] = {}
        self._finalized = False

    # ------------------------------ building --------------------------------
    def add_document(self, text: str) -> Optional[int]:
        """Index ``text`` under the next free identifier.

        Blank lines are skipped and get no identifier (returns ``None``).
        """
        if not text or not text.strip():
            return None
        doc_id = self.documents[-1].doc_id + 1 if self.documents else 0
        self.index_document(doc_id, text)
        return doc_id

    def index_document(self, doc_id: int, text: str) -> DocumentRecord:
        if self._finalized:
            raise IndexStateError("index is finalized; documents can no longer be added")
        if doc_id < 0:
            raise IndexStateError(f"document ids are non-negative, got {doc_id}")
        if doc_id in self._ids:
            raise IndexStateError(f"document {doc_id} is already indexed")
        if self.documents and doc_id <= self.documents[-1].doc_id:
            raise IndexStateError(f"document {doc_id} is out of load order")

        terms = normalize(text, self.stopwords)
        tf = count_terms(terms)
        for term in tf:
            self.df[term] = self.df.get(term, 0) + 1

        record = DocumentRecord(doc_id=doc_id, text=text, terms=terms, tf=tf)
        self._ids[doc_id] = len(self.documents)
        self.documents.append(record)
        return record

    def finalize(self) -> "CorpusIndex":
        """Compute IDF and every document vector; the index becomes read-only.

        IDF is taken over corpus size + 1, the extra slot being the query,
        which is how every query sees the corpus terms.
        """
        if self._finalized:
            return self
        self.idf = compute_idf(self.df, len(self.documents) + 1)
        self.idf_document_count = len(self.documents) + 1
        for doc in self.documents:
            doc.weights, doc.norm = compute_weights(doc.tf, self.idf)
        self._finalized = True
        logger.info("Indexed %d documents, %d distinct terms", len(self.documents), len(self.df))
        return self

    # ------------------------------ queries ---------------------------------
    def build_query(self, text: str) -> QueryRecord:
        """Normalise, weight and return a query without touching the index.

        The query counts as one more document. Terms the corpus never saw get
        a document frequency of one; corpus terms keep their corpus DF.
        """
        self.require_finalized()
        terms = normalize(text, self.stopwords)
        tf = count_terms(terms)
        query_df = {term: self.df.get(term, 1) for term in tf}
        idf = compute_idf(query_df, len(self.documents) + 1)
        weights, norm = compute_weights(tf, idf)
        return QueryRecord(text=text, terms=terms, tf=tf, idf=idf, weights=weights, norm=norm)

    # ------------------------------ access ----------------------------------
    @property
    def finalized(self) -> bool:
        return self._finalized

    def require_finalized(self) -> None:
        if not self._finalized:
            raise IndexStateError("index is not finalized; call finalize() first")

    def get(self, doc_id: int) -> Optional[DocumentRecord]:
        pos = self._ids.get(doc_id)
        return None if pos is None else self.documents[pos]

    def successor(self, doc_id: int) -> Optional[DocumentRecord]:
        """Return the document loaded right after ``doc_id``, if any."""
        pos = self._ids.get(doc_id)
        if pos is None or pos + 1 >= len(self.documents):
            return None
        return self.documents[pos + 1]

    def __len__(self) -> int:
        return len(self.documents)

    def stats(self) -> Dict[str, int]:
        return {
            "documents": len(self.documents),
            "vocabulary": len(self.df),
            "empty_documents": sum(1 for d in self.documents if not d.tf),
        }
