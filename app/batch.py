"""JSON-driven batch runner.

The input is a JSON array of ``{"file": ..., "query": ..., "answer": ...}``
objects. One matcher is built per distinct corpus file and reused for every
case that names it; each case records whether the returned line equals the
expected answer.
"""

from __future__ import annotations
import json
import logging
from pathlib import Path
from typing import Dict, List, Optional, Union

from pydantic import ValidationError
from sklearn.utils import check_random_state

from matcher.errors import ConfigurationError, MatcherError
from matcher.loaders import build_matcher
from matcher.selector import Matcher

from .schemas import BatchCase, BatchOutcome

logger = logging.getLogger(__name__)


def load_cases(path: Union[str, Path]) -> List[BatchCase]:
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigurationError(f"cannot read batch file {path}: {e}") from e
    if not isinstance(data, list):
        raise ConfigurationError(f"batch file {path} must hold a JSON array")
    try:
        cases = [BatchCase(**item) for item in data]
    except (TypeError, ValidationError) as e:
        raise ConfigurationError(f"bad case in {path}: {e}") from e
    # corpus files are relative to the batch file
    for case in cases:
        p = Path(case.file)
        if not p.is_absolute():
            case.file = str(path.parent / p)
    logger.info("Loaded %d batch cases from %s", len(cases), path)
    return cases


def run_cases(
    cases: List[BatchCase],
    stopwords_path: Optional[str] = None,
    alternating: bool = False,
    random_state=None,
) -> List[BatchOutcome]:
    rng = check_random_state(random_state)
    matchers: Dict[str, Matcher] = {}
    outcomes: List[BatchOutcome] = []
    for case in cases:
        m = matchers.get(case.file)
        if m is None:
            m = build_matcher([case.file], stopwords_path, alternating=alternating, random_state=rng)
            matchers[case.file] = m
        try:
            actual = m.match(case.query)
        except MatcherError as e:
            outcomes.append(BatchOutcome(
                file=case.file, query=case.query, expected=case.answer, passed=False, error=str(e),
            ))
            continue
        outcomes.append(BatchOutcome(
            file=case.file, query=case.query, expected=case.answer, actual=actual,
            passed=(actual == case.answer),
        ))
    return outcomes


def run_batch(path: Union[str, Path], **kwargs) -> List[BatchOutcome]:
    return run_cases(load_cases(path), **kwargs)


def summarize(outcomes: List[BatchOutcome]) -> Dict[str, int]:
    passed = sum(1 for o in outcomes if o.passed)
    errors = sum(1 for o in outcomes if o.error)
    return {"total": len(outcomes), "passed": passed, "failed": len(outcomes) - passed, "errors": errors}
