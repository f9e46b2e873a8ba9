"""Settings read from the environment."""
from __future__ import annotations
import logging
import os
from dataclasses import dataclass, replace
from typing import Optional, Tuple

from .errors import ConfigurationError

ENV_PREFIX = "LINE_MATCHER_"

DEFAULT_CORPUS = "corpus.txt"
DEFAULT_STOPWORDS = "stopwords.txt"


def _env(key: str, default=None):
    return os.environ.get(ENV_PREFIX + key, default)


def _env_bool(key: str, default: bool) -> bool:
    val = _env(key)
    if val is None:
        return default
    return val.strip().lower() in ("1", "true", "yes", "on")


def _env_int(key: str) -> Optional[int]:
    val = _env(key)
    if val is None or not val.strip():
        return None
    try:
        return int(val)
    except ValueError:
        raise ConfigurationError(f"{ENV_PREFIX}{key} must be an integer, got {val!r}") from None


def _log_level(name: str) -> str:
    name = name.strip().upper()
    if not isinstance(logging.getLevelName(name), int):
        raise ConfigurationError(f"unknown log level {name!r}")
    return name


@dataclass(frozen=True)
class Settings:
    corpus_paths: Tuple[str, ...] = (DEFAULT_CORPUS,)
    stopwords_path: Optional[str] = DEFAULT_STOPWORDS
    snapshot_path: Optional[str] = None
    alternating: bool = False
    seed: Optional[int] = None
    log_level: str = "INFO"
    log_file: Optional[str] = None

    @classmethod
    def from_env(cls) -> "Settings":
        corpus = _env("CORPUS", DEFAULT_CORPUS)
        return cls(
            corpus_paths=tuple(p for p in corpus.split(os.pathsep) if p),
            stopwords_path=_env("STOPWORDS", DEFAULT_STOPWORDS) or None,
            snapshot_path=_env("SNAPSHOT") or None,
            alternating=_env_bool("ALTERNATING", False),
            seed=_env_int("SEED"),
            log_level=_log_level(_env("LOG_LEVEL", "INFO")),
            log_file=_env("LOG_FILE") or None,
        )

    def override(self, **changes) -> "Settings":
        """Return a copy with the non-``None`` entries of ``changes`` applied."""
        return replace(self, **{k: v for k, v in changes.items() if v is not None})
