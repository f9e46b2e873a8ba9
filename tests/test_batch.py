import json

import pytest

from app.batch import load_cases, run_batch, run_cases, summarize
from app.schemas import BatchCase
from matcher.errors import ConfigurationError


def _write_cases(path, cases):
    path.write_text(json.dumps(cases), encoding="utf-8")
    return path


def test_batch_resolves_relative_files(dialog_files, tmp_path):
    cases = _write_cases(tmp_path / "cases.json", [
        {"file": "dialog.txt", "query": "Do you like dogs?", "answer": "Do you like dogs?"},
    ])
    loaded = load_cases(cases)
    assert loaded[0].file == str(tmp_path / "dialog.txt")


def test_batch_run(dialog_files, tmp_path):
    cases = _write_cases(tmp_path / "cases.json", [
        {"file": "dialog.txt", "query": "Do you like dogs?", "answer": "Dogs are loyal animals."},
        {"file": "dialog.txt", "query": "raining cats", "answer": "Do you like dogs?"},
        {"file": "dialog.txt", "query": "loyal animals", "answer": "wrong answer"},
    ])
    outcomes = run_batch(cases, stopwords_path=str(dialog_files["stopwords"]), alternating=True, random_state=0)
    assert [o.passed for o in outcomes] == [True, True, False]
    assert outcomes[2].error is not None  # last line has no successor
    assert summarize(outcomes) == {"total": 3, "passed": 2, "failed": 1, "errors": 1}


def test_batch_reuses_one_matcher_per_file(dialog_files, monkeypatch):
    import app.batch as batch

    built = []
    real = batch.build_matcher

    def counting(paths, *args, **kwargs):
        built.append(list(paths))
        return real(paths, *args, **kwargs)

    monkeypatch.setattr(batch, "build_matcher", counting)
    corpus = str(dialog_files["corpus"])
    cases = [BatchCase(file=corpus, query=q, answer="") for q in ("dogs", "cats", "weather")]
    run_cases(cases)
    assert built == [[corpus]]


def test_missing_corpus_is_an_error_outcome(tmp_path):
    outcomes = run_cases([BatchCase(file=str(tmp_path / "missing.txt"), query="hi", answer="hello")])
    assert not outcomes[0].passed
    assert "no documents" in outcomes[0].error


@pytest.mark.parametrize("content", ["not json", '{"file": "x"}', '[{"file": "x", "query": "q"}]'])
def test_malformed_batch_file(tmp_path, content):
    path = tmp_path / "cases.json"
    path.write_text(content, encoding="utf-8")
    with pytest.raises(ConfigurationError):
        load_cases(path)
