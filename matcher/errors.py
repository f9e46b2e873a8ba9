"""Exception hierarchy for the line matcher."""
from __future__ import annotations


class MatcherError(Exception):
    """Base class for every error raised by the matcher."""


class ConfigurationError(MatcherError):
    """A stopword, corpus, snapshot or batch source could not be read."""


class UsageError(MatcherError, ValueError):
    """The caller passed an empty or blank query."""


class NoSuccessorError(MatcherError, LookupError):
    """Alternating mode matched the last line, which has no following line."""

    def __init__(self, doc_id: int):
        super().__init__(f"document {doc_id} is the last line of the corpus; no successor")
        self.doc_id = doc_id


class NoMatchError(MatcherError, LookupError):
    """There is nothing to select from (empty corpus)."""


class InternalConsistencyError(MatcherError, RuntimeError):
    """Index statistics disagree with each other (e.g. a term without IDF)."""


class IndexStateError(MatcherError, RuntimeError):
    """The index was used out of order: duplicate id, late add, early scoring."""
