"""Shared fixtures for the line matcher tests."""
from __future__ import annotations

import os
from pathlib import Path
from typing import Callable, List

import pytest

from matcher.index import CorpusIndex
from matcher.selector import Matcher


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep LINE_MATCHER_* settings from the outer shell out of the tests."""
    for key in list(os.environ):
        if key.startswith("LINE_MATCHER_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture()
def make_index() -> Callable[..., CorpusIndex]:
    def _make(lines: List[str], stopwords=frozenset()) -> CorpusIndex:
        index = CorpusIndex(stopwords)
        for line in lines:
            index.add_document(line)
        return index.finalize()
    return _make


@pytest.fixture()
def make_matcher(make_index) -> Callable[..., Matcher]:
    def _make(lines: List[str], stopwords=frozenset(), alternating: bool = False, seed=0) -> Matcher:
        return Matcher(make_index(lines, stopwords), alternating=alternating, random_state=seed)
    return _make


@pytest.fixture()
def dialog_files(tmp_path: Path) -> dict:
    """A small dialog corpus and stopword list on disk."""
    corpus = tmp_path / "dialog.txt"
    corpus.write_text(
        "Hello there, how are you?\n"
        "\n"
        "I'm fine, thanks. How's the weather?\n"
        "It's raining cats and dogs.\n"
        "   \n"
        "Do you like dogs?\n"
        "Dogs are loyal animals.\n",
        encoding="utf-8",
    )
    stopwords = tmp_path / "stopwords.txt"
    stopwords.write_text("the\nand\nare\nyou\nhow\nI\n\n  a  \n", encoding="utf-8")
    return {"corpus": corpus, "stopwords": stopwords}
