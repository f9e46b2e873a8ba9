# matcher/selector.py
"""Pick the best-matching line for a query.

``Matcher`` wraps a finalized ``CorpusIndex``. Each call builds a transient
query, scores the whole corpus, and picks among the documents sharing the top
score uniformly at random. In alternating mode the answer is the line that
follows the match, which turns a dialog transcript into a responder.
"""

from __future__ import annotations
import logging
import threading
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from sklearn.utils import check_random_state

from .errors import NoMatchError, NoSuccessorError, UsageError
from .index import CorpusIndex
from .similarity import score_all

logger = logging.getLogger(__name__)


@dataclass
class MatchResult:
    query: str
    document_id: int          # the matched line
    answer_id: int            # the returned line (== document_id unless alternating)
    text: str
    score: float
    ties: List[int]
    alternating: bool
    scores: Dict[int, float] = field(default_factory=dict, repr=False)

    def top(self, k: int) -> List[tuple]:
        """Return up to ``k`` ``(doc_id, score)`` pairs, best first, ties in load order."""
        ranked = sorted(self.scores.items(), key=lambda x: (-x[1], x[0]))
        return ranked[: max(0, k)]


def group_by_score(scores: Dict[int, float]) -> Dict[float, List[int]]:
    groups: Dict[float, List[int]] = {}
    for doc_id, s in scores.items():
        groups.setdefault(s, []).append(doc_id)
    return groups


class Matcher:
    """Thread-safe query front end over one finalized index.

    Args:
        index: A ``CorpusIndex``; it is finalized here if it is not already.
        alternating: Default for ``match``/``rank`` calls that do not say.
        random_state: ``None``, an int seed, or a ``numpy.random.RandomState``
            used to break ties.
    """

    def __init__(self, index: CorpusIndex, alternating: bool = False, random_state=None):
        self.index = index.finalize()
        self.alternating = alternating
        self.random_state = check_random_state(random_state)
        self._lock = threading.Lock()

    def match(self, query: str, alternating: Optional[bool] = None) -> str:
        return self.rank(query, alternating=alternating).text

    def rank(self, query: str, alternating: Optional[bool] = None) -> MatchResult:
        if query is None or not query.strip():
            raise UsageError("query is empty")
        if alternating is None:
            alternating = self.alternating
        if not len(self.index):
            raise NoMatchError("the corpus has no documents")

        with self._lock:
            q = self.index.build_query(query)
            scores = score_all(q, self.index.documents)
            groups = group_by_score(scores)
            best = max(groups)
            ties = groups[best]
            if len(ties) > 1:
                chosen = ties[self.random_state.randint(len(ties))]
                logger.debug("%d documents tie at %.4f for %r; picked %d", len(ties), best, query, chosen)
            else:
                chosen = ties[0]

        answer = self.index.get(chosen)
        if alternating:
            answer = self.index.successor(chosen)
            if answer is None:
                raise NoSuccessorError(chosen)
        return MatchResult(
            query=query,
            document_id=chosen,
            answer_id=answer.doc_id,
            text=answer.text,
            score=best,
            ties=list(ties),
            alternating=alternating,
            scores=scores,
        )
