import pytest
from fastapi.testclient import TestClient

from app.api import app, get_matcher, get_settings
from matcher.index import CorpusIndex
from matcher.selector import Matcher

DIALOG = ["hello there", "general kenobi", "you are a bold one"]


@pytest.fixture()
def client(make_matcher):
    holder = {"matcher": make_matcher(DIALOG)}
    app.dependency_overrides[get_matcher] = lambda: holder["matcher"]
    client = TestClient(app)
    client.holder = holder
    yield client
    app.dependency_overrides.clear()


def test_health(client):
    assert client.get("/").json() == {"ok": True}
    assert client.get("/healthz").json() == {"status": "ok"}


def test_stats(client):
    data = client.get("/stats").json()
    assert data == {"documents": 3, "vocabulary": 9, "empty_documents": 0, "alternating": False}


def test_match(client):
    response = client.post("/match", json={"query": "hello"})
    assert response.status_code == 200
    data = response.json()
    assert data["text"] == "hello there"
    assert data["document_id"] == data["answer_id"] == 0
    assert data["ties"] == [0]
    assert data["top"] is None


def test_match_alternating_with_top(client):
    data = client.post("/match", json={"query": "hello", "alternating": True, "top_k": 2}).json()
    assert data["text"] == "general kenobi"
    assert data["answer_id"] == 1
    assert [item["document_id"] for item in data["top"]] == [0, 1]
    assert data["top"][0]["text"] == "hello there"


def test_empty_query_is_400(client):
    response = client.post("/match", json={"query": "  "})
    assert response.status_code == 400


def test_no_successor_is_404(client):
    response = client.post("/match", json={"query": "bold one", "alternating": True})
    assert response.status_code == 404


def test_empty_corpus_is_503(client):
    client.holder["matcher"] = Matcher(CorpusIndex())
    assert client.post("/match", json={"query": "hi"}).status_code == 503


def test_invalid_top_k_is_422(client):
    assert client.post("/match", json={"query": "hi", "top_k": 0}).status_code == 422


def test_matcher_built_from_env(dialog_files, monkeypatch):
    monkeypatch.setenv("LINE_MATCHER_CORPUS", str(dialog_files["corpus"]))
    monkeypatch.setenv("LINE_MATCHER_STOPWORDS", str(dialog_files["stopwords"]))
    monkeypatch.setenv("LINE_MATCHER_ALTERNATING", "1")
    get_settings.cache_clear()
    get_matcher.cache_clear()
    try:
        data = TestClient(app).post("/match", json={"query": "Do you like dogs?"}).json()
        assert data["text"] == "Dogs are loyal animals."
        assert data["alternating"] is True
    finally:
        get_settings.cache_clear()
        get_matcher.cache_clear()
