"""Text normalisation: contraction stripping, punctuation removal, stopwords.

Terms keep their case. Stopword membership is the only case-insensitive check,
so "Cat" and "cat" index as different terms while "The" and "the" are both
dropped when "the" is a stopword.
"""

from __future__ import annotations
import re
from typing import AbstractSet, Iterable, List, Optional

# Ordered: each rule runs once, in this order, over the whole text.
# "word+suffix" keeps only the word ("they're" -> "they", "don't" -> "do").
CONTRACTION_RULES = [
    re.compile(r"(\w)'re"),
    re.compile(r"(\w)'m"),
    re.compile(r"(\w)n't"),
    re.compile(r"(\w)'ll"),
    re.compile(r"(\w)'s"),
    re.compile(r"(\w)'d"),
    re.compile(r"(\w)'ve"),
]

_DROP_CHARS = re.compile(r"['\".;:?!]")
# "red, green" -> "red green"; "red,green" -> "red, green" (comma kept on "red,")
_COMMA_SPACE = re.compile(r",\s+")
_COMMA_TIGHT = re.compile(r",(?=\S)")
_SPACES = re.compile(r" {2,}")

EMPTY_STOPWORDS: frozenset = frozenset()


def stopword_set(words: Iterable[str]) -> frozenset:
    """Lowercase and strip ``words`` for case-insensitive membership checks."""
    return frozenset(w.strip().lower() for w in words if w and w.strip())


def strip_contractions(text: str) -> str:
    for rule in CONTRACTION_RULES:
        text = rule.sub(r"\1", text)
    return text


def strip_punctuation(text: str) -> str:
    """Remove quotes and sentence punctuation, tidy commas and spaces."""
    text = _DROP_CHARS.sub("", text)
    text = _COMMA_SPACE.sub(" ", text)
    text = _COMMA_TIGHT.sub(", ", text)
    return _SPACES.sub(" ", text)


def is_stopword(word: str, stopwords: AbstractSet[str]) -> bool:
    if not word:
        return False
    return word.strip().lower() in stopwords


def normalize(text: Optional[str], stopwords: AbstractSet[str] = EMPTY_STOPWORDS) -> List[str]:
    """Turn raw text into the ordered list of indexable terms.

    Args:
        text: A corpus line or a query. ``None``, empty and blank input give ``[]``.
        stopwords: Lowercased stopwords; tokens are compared case-insensitively.

    Returns:
        Terms in their original order and case, repeats included.
    """
    if not text or not text.strip():
        return []
    cleaned = strip_punctuation(strip_contractions(text))
    return [tok for tok in cleaned.split() if tok and not is_stopword(tok, stopwords)]
