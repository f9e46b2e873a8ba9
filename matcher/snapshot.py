"""Persist finalized indexes with joblib."""
from __future__ import annotations
import logging
from pathlib import Path
from typing import Union

from joblib import dump, load

from .errors import ConfigurationError
from .index import CorpusIndex

logger = logging.getLogger(__name__)


def save_index(index: CorpusIndex, path: Union[str, Path], compress: int = 3) -> Path:
    path = Path(path)
    index.finalize()
    path.parent.mkdir(parents=True, exist_ok=True)
    dump(index, path, compress=compress)
    logger.info("Wrote index snapshot (%d documents) to %s", len(index), path)
    return path


def load_index(path: Union[str, Path]) -> CorpusIndex:
    try:
        index = load(path)
    except FileNotFoundError as e:
        raise ConfigurationError(f"snapshot {path} does not exist") from e
    except Exception as e:
        raise ConfigurationError(f"cannot load snapshot {path}: {e}") from e
    if not isinstance(index, CorpusIndex) or not index.finalized:
        raise ConfigurationError(f"{path} does not hold a finalized index")
    logger.info("Loaded index snapshot (%d documents) from %s", len(index), path)
    return index
