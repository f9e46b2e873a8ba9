import logging
import os

import pytest

from matcher.config import DEFAULT_CORPUS, DEFAULT_STOPWORDS, Settings
from matcher.errors import ConfigurationError
from matcher.log import setup_logging


def test_defaults():
    s = Settings.from_env()
    assert s.corpus_paths == (DEFAULT_CORPUS,)
    assert s.stopwords_path == DEFAULT_STOPWORDS
    assert s.snapshot_path is None
    assert s.alternating is False
    assert s.seed is None
    assert s.log_level == "INFO"


def test_from_env(monkeypatch):
    monkeypatch.setenv("LINE_MATCHER_CORPUS", os.pathsep.join(["a.txt", "b.txt"]))
    monkeypatch.setenv("LINE_MATCHER_STOPWORDS", "")
    monkeypatch.setenv("LINE_MATCHER_SNAPSHOT", "index.joblib")
    monkeypatch.setenv("LINE_MATCHER_ALTERNATING", "1")
    monkeypatch.setenv("LINE_MATCHER_SEED", "7")
    monkeypatch.setenv("LINE_MATCHER_LOG_LEVEL", "debug")
    s = Settings.from_env()
    assert s.corpus_paths == ("a.txt", "b.txt")
    assert s.stopwords_path is None
    assert s.snapshot_path == "index.joblib"
    assert s.alternating is True
    assert s.seed == 7
    assert s.log_level == "DEBUG"


def test_bad_values(monkeypatch):
    monkeypatch.setenv("LINE_MATCHER_SEED", "seven")
    with pytest.raises(ConfigurationError):
        Settings.from_env()
    monkeypatch.delenv("LINE_MATCHER_SEED")
    monkeypatch.setenv("LINE_MATCHER_LOG_LEVEL", "LOUD")
    with pytest.raises(ConfigurationError):
        Settings.from_env()


def test_override_ignores_none():
    s = Settings().override(alternating=True, seed=None, corpus_paths=("x.txt",))
    assert s.alternating is True
    assert s.seed is None
    assert s.corpus_paths == ("x.txt",)


def test_setup_logging_writes_file(tmp_path):
    log_file = tmp_path / "logs" / "matcher.log"
    logger = setup_logging("INFO", str(log_file))
    logging.getLogger("matcher.index").info("hello log")
    for h in logger.handlers:
        h.flush()
    assert "hello log" in log_file.read_text(encoding="utf-8")
    # calling again replaces handlers instead of stacking them
    setup_logging("WARNING")
    assert len(logger.handlers) == 1


def test_setup_logging_covers_the_app_loggers(tmp_path):
    log_file = tmp_path / "app.log"
    setup_logging("INFO", str(log_file))
    logging.getLogger("app.batch").info("Loaded 3 batch cases")
    for h in logging.getLogger("app").handlers:
        h.flush()
    assert "app.batch: Loaded 3 batch cases" in log_file.read_text(encoding="utf-8")
    setup_logging("WARNING")
