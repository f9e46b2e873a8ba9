"""Line-oriented corpus and stopword loading.

Both readers recover from unreadable sources by logging and returning what
they have (an empty stopword set, a truncated corpus). Pass ``strict=True`` to
get a ``ConfigurationError`` instead.
"""

from __future__ import annotations
import logging
from pathlib import Path
from typing import AbstractSet, Iterable, List, Optional, Union

from .errors import ConfigurationError
from .index import CorpusIndex
from .normalize import EMPTY_STOPWORDS, stopword_set
from .selector import Matcher

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

PROGRESS_EVERY = 1000


def read_stopwords(path: PathLike, strict: bool = False) -> frozenset:
    try:
        with open(path, "r", encoding="utf-8") as f:
            words = stopword_set(f)
    except (OSError, UnicodeDecodeError) as e:
        if strict:
            raise ConfigurationError(f"cannot read stopwords from {path}: {e}") from e
        logger.warning("Cannot read stopwords from %s (%s); continuing without stopwords", path, e)
        return EMPTY_STOPWORDS
    logger.info("Loaded %d stopwords from %s", len(words), path)
    return words


def read_corpus_lines(path: PathLike, strict: bool = False) -> List[str]:
    """Return the non-blank lines of ``path`` in order, without line endings."""
    lines: List[str] = []
    try:
        with open(path, "r", encoding="utf-8") as f:
            for n, raw in enumerate(f, start=1):
                if n % PROGRESS_EVERY == 0:
                    logger.debug("%s: read %d lines", path, n)
                line = raw.rstrip("\r\n")
                if line.strip():
                    lines.append(line)
    except (OSError, UnicodeDecodeError) as e:
        if strict:
            raise ConfigurationError(f"cannot read corpus {path}: {e}") from e
        logger.warning("Error reading corpus %s after %d lines (%s); keeping what was read", path, len(lines), e)
    return lines


def build_index(
    corpus_paths: Iterable[PathLike],
    stopwords: AbstractSet[str] = EMPTY_STOPWORDS,
    strict: bool = False,
) -> CorpusIndex:
    """Load every corpus file into one finalized index; ids continue across files."""
    index = CorpusIndex(stopwords)
    for path in corpus_paths:
        for line in read_corpus_lines(path, strict=strict):
            index.add_document(line)
    return index.finalize()


def build_matcher(
    corpus_paths: Iterable[PathLike],
    stopwords_path: Optional[PathLike] = None,
    alternating: bool = False,
    random_state=None,
    strict: bool = False,
) -> Matcher:
    stopwords = read_stopwords(stopwords_path, strict=strict) if stopwords_path else EMPTY_STOPWORDS
    index = build_index(corpus_paths, stopwords, strict=strict)
    return Matcher(index, alternating=alternating, random_state=random_state)
