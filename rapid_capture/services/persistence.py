"""Durable storage: attempts, profile totals and per-session key/value entries."""
import asyncio
import logging
from typing import Protocol

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from rapid_capture.core.errors import PersistenceFailure
from rapid_capture.models.attempt import Attempt
from rapid_capture.models.profile import Profile
from rapid_capture.models.session_entry import SessionEntry
from rapid_capture.services.session import MemorySessionStorage

logger = logging.getLogger(__name__)


class PersistenceStore(Protocol):
    async def record_attempt(
        self,
        scenario_id: str,
        selected_action: str,
        is_correct: bool,
        score_delta: int,
        time_taken_seconds: int,
    ) -> None: ...

    async def accumulate_profile(self, score_delta: int, correct: bool) -> None: ...

    async def record_outcome(
        self,
        scenario_id: str,
        selected_action: str,
        is_correct: bool,
        score_delta: int,
        time_taken_seconds: int,
    ) -> None:
        """Both writes above, applied together or not at all."""
        ...


async def get_or_create_profile(db: AsyncSession, session_key: str) -> Profile:
    """Fetch the session's profile, creating it on first use.

    Call before any other write in the transaction: losing the insert race
    to a concurrent writer rolls the session back and re-reads the winner.
    """
    result = await db.execute(select(Profile).where(Profile.session_key == session_key))
    profile = result.scalar_one_or_none()
    if profile is not None:
        return profile

    db.add(
        Profile(
            session_key=session_key,
            total_score=0,
            scenarios_attempted=0,
            scenarios_correct=0,
        )
    )
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        logger.debug("Profile for %s created concurrently; reloading", session_key)
    result = await db.execute(select(Profile).where(Profile.session_key == session_key))
    return result.scalar_one()


class SqlPersistenceStore:
    """PersistenceStore bound to one session key, each call in its own DB session."""

    def __init__(self, session_factory: async_sessionmaker, session_key: str):
        self.session_factory = session_factory
        self.session_key = session_key

    async def record_attempt(
        self,
        scenario_id: str,
        selected_action: str,
        is_correct: bool,
        score_delta: int,
        time_taken_seconds: int,
    ) -> None:
        async with self.session_factory() as db:
            profile = await get_or_create_profile(db, self.session_key)
            self._add_attempt(db, profile, scenario_id, selected_action, is_correct, score_delta, time_taken_seconds)
            await db.commit()

    async def accumulate_profile(self, score_delta: int, correct: bool) -> None:
        async with self.session_factory() as db:
            profile = await get_or_create_profile(db, self.session_key)
            await self._increment(db, profile, score_delta, correct)
            await db.commit()

    async def record_outcome(
        self,
        scenario_id: str,
        selected_action: str,
        is_correct: bool,
        score_delta: int,
        time_taken_seconds: int,
    ) -> None:
        async with self.session_factory() as db:
            profile = await get_or_create_profile(db, self.session_key)
            self._add_attempt(db, profile, scenario_id, selected_action, is_correct, score_delta, time_taken_seconds)
            await self._increment(db, profile, score_delta, is_correct)
            await db.commit()

    @staticmethod
    def _add_attempt(db, profile, scenario_id, selected_action, is_correct, score_delta, time_taken_seconds):
        db.add(
            Attempt(
                profile_id=profile.id,
                scenario_id=scenario_id,
                selected_action=selected_action,
                is_correct=is_correct,
                score_change=score_delta,
                time_taken_seconds=time_taken_seconds,
            )
        )

    @staticmethod
    async def _increment(db, profile, score_delta, correct):
        # Increment in SQL so concurrent writers cannot lose updates
        await db.execute(
            update(Profile)
            .where(Profile.id == profile.id)
            .values(
                total_score=Profile.total_score + score_delta,
                scenarios_attempted=Profile.scenarios_attempted + 1,
                scenarios_correct=Profile.scenarios_correct + (1 if correct else 0),
            )
        )


async def report_outcome(store: PersistenceStore, outcome, timeout: float) -> bool:
    """Write one outcome to the store. Failures are logged, never raised."""
    write = store.record_outcome(
        outcome.scenario_id,
        outcome.action,
        outcome.is_correct,
        outcome.score_delta,
        outcome.time_taken_seconds,
    )
    try:
        await asyncio.wait_for(write, timeout=timeout)
    except asyncio.TimeoutError:
        failure = PersistenceFailure(f"Persisting {outcome.scenario_id} timed out after {timeout:.1f}s")
        logger.warning("%s", failure)
        return False
    except Exception as exc:
        # Fire-and-forget: local stats are already updated and stay as they are
        failure = PersistenceFailure(f"Persisting {outcome.scenario_id} failed: {exc}")
        logger.warning("%s", failure, exc_info=True)
        return False
    return True


async def load_session_storage(db: AsyncSession, session_key: str) -> MemorySessionStorage:
    result = await db.execute(
        select(SessionEntry.key, SessionEntry.value).where(SessionEntry.session_key == session_key)
    )
    return MemorySessionStorage({key: value for key, value in result.all()})


async def flush_session_storage(db: AsyncSession, session_key: str, storage: MemorySessionStorage) -> None:
    """Write back the keys changed since load, then mark the storage clean."""
    if not storage.dirty:
        return
    for key in sorted(storage.dirty):
        result = await db.execute(
            select(SessionEntry).where(SessionEntry.session_key == session_key, SessionEntry.key == key)
        )
        entry = result.scalar_one_or_none()
        value = storage.data.get(key)
        if value is None:
            if entry is not None:
                await db.execute(delete(SessionEntry).where(SessionEntry.id == entry.id))
        elif entry is None:
            db.add(SessionEntry(session_key=session_key, key=key, value=value))
        else:
            entry.value = value
    await db.commit()
    storage.dirty.clear()
