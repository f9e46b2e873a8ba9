# app/api.py
"""FastAPI application serving the line matcher."""
from functools import lru_cache

from fastapi import Depends, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from matcher.config import Settings
from matcher.errors import NoMatchError, NoSuccessorError, UsageError
from matcher.loaders import build_matcher
from matcher.log import setup_logging
from matcher.selector import Matcher
from matcher.snapshot import load_index

from .schemas import MatchRequest, MatchResponse, ScoredLine, StatsResponse


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings.from_env()


@lru_cache(maxsize=1)
def get_matcher() -> Matcher:
    """Build the shared matcher on first use (snapshot if configured, else corpus files)."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_file)
    if settings.snapshot_path:
        return Matcher(load_index(settings.snapshot_path), alternating=settings.alternating, random_state=settings.seed)
    return build_matcher(
        settings.corpus_paths,
        settings.stopwords_path,
        alternating=settings.alternating,
        random_state=settings.seed,
    )


app = FastAPI(title="Line Matcher API", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.get("/")
def root():
    return {"ok": True}

@app.get("/healthz")
def healthz():
    return {"status": "ok"}

@app.get("/stats", response_model=StatsResponse)
def stats(matcher: Matcher = Depends(get_matcher)) -> StatsResponse:
    return StatsResponse(alternating=matcher.alternating, **matcher.index.stats())

@app.post("/match", response_model=MatchResponse)
def match(request: MatchRequest, matcher: Matcher = Depends(get_matcher)) -> MatchResponse:
    try:
        result = matcher.rank(request.query, alternating=request.alternating)
    except UsageError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except NoSuccessorError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except NoMatchError as e:
        raise HTTPException(status_code=503, detail=str(e))

    top = None
    if request.top_k:
        top = [
            ScoredLine(document_id=doc_id, score=score, text=matcher.index.get(doc_id).text)
            for doc_id, score in result.top(request.top_k)
        ]
    return MatchResponse(
        text=result.text,
        document_id=result.document_id,
        answer_id=result.answer_id,
        score=result.score,
        ties=result.ties,
        alternating=result.alternating,
        top=top,
    )
