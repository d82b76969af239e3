"""Pydantic schemas for session stats, attempt results and profile totals."""
from pydantic import BaseModel

from rapid_capture.schemas.scenario import Difficulty, Label


class SessionStats(BaseModel):
    correct: int = 0
    total: int = 0
    accuracy: int = 0  # percent, rounded


class AttemptOutSchema(BaseModel):
    scenario_id: str
    action: str
    is_correct: bool
    unknown_action: bool = False
    score_delta: int
    correct_label: Label
    explanation: str
    red_flags: list[str]
    trust_indicators: list[str]
    stats: SessionStats


class ProfileOutSchema(BaseModel):
    total_score: int
    scenarios_attempted: int
    scenarios_correct: int
    accuracy: int
    rank: str


class BucketCountSchema(BaseModel):
    difficulty: Difficulty
    phishing: int
    legitimate: int


class CorpusSummarySchema(BaseModel):
    total: int
    phishing: int
    legitimate: int
    buckets: list[BucketCountSchema]
