# app/schemas.py
from typing import List, Optional
from pydantic import BaseModel, Field

class MatchRequest(BaseModel):
    query: str = Field(..., description="Free text to match against the corpus")
    # None -> use the server default (LINE_MATCHER_ALTERNATING)
    alternating: Optional[bool] = Field(None, description="Answer with the line after the match")
    top_k: Optional[int] = Field(None, ge=1, le=100, description="Also return the k best-scoring lines")

class ScoredLine(BaseModel):
    document_id: int
    score: float
    text: str

class MatchResponse(BaseModel):
    text: str
    document_id: int              # matched line
    answer_id: int                # returned line (document_id + 1 when alternating)
    score: float
    ties: List[int]
    alternating: bool
    top: Optional[List[ScoredLine]] = None

class StatsResponse(BaseModel):
    documents: int
    vocabulary: int
    empty_documents: int
    alternating: bool

class BatchCase(BaseModel):
    file: str
    query: str
    answer: str

class BatchOutcome(BaseModel):
    file: str
    query: str
    expected: str
    actual: Optional[str] = None
    passed: bool
    error: Optional[str] = None
