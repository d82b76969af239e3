"""Rapid Capture - FastAPI app entry point."""
import logging
import random
from contextlib import asynccontextmanager
from functools import partial

from fastapi import FastAPI

from rapid_capture.core.config import get_settings
from rapid_capture.corpus.registry import load_corpus
from rapid_capture.db.base import Base
from rapid_capture.db.session import AsyncSessionLocal, engine
from rapid_capture.routers import api
from rapid_capture.services.feedback import FeedbackSlots
from rapid_capture.services.persistence import SqlPersistenceStore
from rapid_capture.services.training import PendingTasks

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    # Fails fast on duplicate ids or an empty (difficulty, label) bucket
    app.state.corpus = load_corpus()
    app.state.rng = random.Random(settings.random_seed)
    app.state.store_factory = partial(SqlPersistenceStore, AsyncSessionLocal)
    # No remote feedback service is wired in; attempts get the local fallback
    app.state.feedback_service = None
    app.state.feedback_slots = FeedbackSlots(settings.feedback_slot_capacity)
    app.state.pending = PendingTasks()

    yield

    await app.state.pending.join(timeout=settings.shutdown_grace_seconds)
    await engine.dispose()


app = FastAPI(
    title=settings.app_name,
    description="Phishing-awareness trainer: scenario selection, scoring and feedback",
    lifespan=lifespan,
)

app.include_router(api.router)


@app.get("/health")
async def health():
    return {"status": "ok"}
