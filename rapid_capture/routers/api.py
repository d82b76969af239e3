"""API routes: JSON for scenario selection, attempts, feedback and stats."""
import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request, Response
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from rapid_capture.core.config import get_settings
from rapid_capture.core.errors import CorpusExhausted
from rapid_capture.db.session import get_db
from rapid_capture.models.profile import Profile
from rapid_capture.schemas.feedback import FeedbackOutSchema
from rapid_capture.schemas.scenario import AttemptSubmitSchema, Difficulty, ScenarioOutSchema
from rapid_capture.schemas.stats import (
    AttemptOutSchema,
    CorpusSummarySchema,
    ProfileOutSchema,
    SessionStats,
)
from rapid_capture.services.persistence import flush_session_storage, load_session_storage
from rapid_capture.services.scoring import accuracy_percent, compute_rank
from rapid_capture.services.session import MemorySessionStorage, SessionBook
from rapid_capture.services.training import TrainingSession

router = APIRouter(prefix="/api", tags=["api"])
settings = get_settings()


# ---------- helpers ----------

def get_or_create_session_id(request: Request) -> str:
    sid = request.cookies.get(settings.session_cookie_name)
    if not sid:
        sid = str(uuid.uuid4())
    return sid


def _ensure_session_cookie(request: Request, response: Response, sid: str) -> None:
    if not request.cookies.get(settings.session_cookie_name):
        response.set_cookie(
            key=settings.session_cookie_name,
            value=sid,
            max_age=settings.session_cookie_max_age,
            httponly=True,
            samesite="lax",
        )


def _training(request: Request, sid: str, storage: MemorySessionStorage) -> TrainingSession:
    state = request.app.state
    book = SessionBook(storage, settings.session_state_key, settings.session_stats_key)
    return TrainingSession(
        state.corpus,
        book,
        sid,
        store=state.store_factory(sid) if state.store_factory else None,
        feedback_service=state.feedback_service,
        slot=state.feedback_slots.acquire(sid),
        pending=state.pending,
        rng=state.rng,
        feedback_timeout=settings.feedback_timeout_seconds,
        persistence_timeout=settings.persistence_timeout_seconds,
    )


# ---------- routes ----------

@router.get("/scenarios/next", response_model=ScenarioOutSchema)
async def next_scenario(
    request: Request,
    response: Response,
    db: Annotated[AsyncSession, Depends(get_db)],
    difficulty: Difficulty | None = None,
):
    """Select the next scenario for this session (random difficulty if none given)."""
    sid = get_or_create_session_id(request)
    storage = await load_session_storage(db, sid)
    training = _training(request, sid, storage)

    try:
        record = training.next_scenario(difficulty)
    except CorpusExhausted as exc:
        raise HTTPException(status_code=503, detail=str(exc))

    await flush_session_storage(db, sid, storage)
    _ensure_session_cookie(request, response, sid)
    return ScenarioOutSchema.from_record(record)


@router.post("/attempts", response_model=AttemptOutSchema)
async def submit_attempt(
    request: Request,
    response: Response,
    body: AttemptSubmitSchema,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Commit an action; return verdict, points and updated session stats."""
    record = request.app.state.corpus.get(body.scenario_id)
    if record is None:
        raise HTTPException(status_code=404, detail="Scenario not found")

    sid = get_or_create_session_id(request)
    storage = await load_session_storage(db, sid)
    training = _training(request, sid, storage)
    if not training.slot.can_commit(record.id):
        raise HTTPException(status_code=409, detail="Scenario is not awaiting an answer")

    outcome = training.evaluate(record, body.action, body.time_taken_seconds)
    await flush_session_storage(db, sid, storage)
    training.dispatch(record, outcome)
    _ensure_session_cookie(request, response, sid)

    return AttemptOutSchema(
        scenario_id=record.id,
        action=body.action,
        is_correct=outcome.is_correct,
        unknown_action=outcome.unknown_action,
        score_delta=outcome.score_delta,
        correct_label=record.correct_label,
        explanation=record.explanation,
        red_flags=list(record.red_flags),
        trust_indicators=list(record.trust_indicators),
        stats=outcome.stats,
    )


@router.get("/feedback/{scenario_id}", response_model=FeedbackOutSchema)
async def get_feedback(scenario_id: str, request: Request):
    """Feedback for the scenario on screen; `pending` until it arrives."""
    sid = get_or_create_session_id(request)
    slot = request.app.state.feedback_slots.get(sid)
    if slot is None or slot.scenario_id != scenario_id or not slot.committed:
        raise HTTPException(status_code=404, detail="No feedback for this scenario")
    if slot.feedback is None:
        return FeedbackOutSchema(scenario_id=scenario_id, status="pending")
    return FeedbackOutSchema(scenario_id=scenario_id, status="ready", feedback=slot.feedback)


@router.get("/stats", response_model=SessionStats)
async def get_stats(
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Running accuracy for this session."""
    sid = get_or_create_session_id(request)
    storage = await load_session_storage(db, sid)
    return SessionBook(storage, settings.session_state_key, settings.session_stats_key).stats


@router.post("/reset", response_model=SessionStats)
async def reset_session(
    request: Request,
    response: Response,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Forget seen scenarios and zero the session stats. Profile totals are kept."""
    sid = get_or_create_session_id(request)
    storage = await load_session_storage(db, sid)
    training = _training(request, sid, storage)
    training.reset()
    await flush_session_storage(db, sid, storage)
    _ensure_session_cookie(request, response, sid)
    return training.stats


@router.get("/profile", response_model=ProfileOutSchema)
async def get_profile(
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Durable totals; waits briefly for this session's pending writes."""
    sid = get_or_create_session_id(request)
    await request.app.state.pending.join(sid, timeout=settings.persistence_timeout_seconds)

    result = await db.execute(select(Profile).where(Profile.session_key == sid))
    profile = result.scalar_one_or_none()
    if profile is None:
        total_score = attempted = correct = 0
    else:
        total_score = profile.total_score
        attempted = profile.scenarios_attempted
        correct = profile.scenarios_correct

    return ProfileOutSchema(
        total_score=total_score,
        scenarios_attempted=attempted,
        scenarios_correct=correct,
        accuracy=accuracy_percent(correct, attempted),
        rank=compute_rank(total_score),
    )


@router.get("/corpus", response_model=CorpusSummarySchema)
async def corpus_summary(request: Request):
    """Scenario counts per difficulty and label."""
    return request.app.state.corpus.summary()
