"""Training session orchestration and the SQL-backed stores."""
import asyncio
import logging
import random

import pytest
import pytest_asyncio
from sqlalchemy import select
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine

from rapid_capture.corpus.registry import Corpus
from rapid_capture.db.base import Base
from rapid_capture.models.attempt import Attempt
from rapid_capture.models.profile import Profile
from rapid_capture.services.feedback import FeedbackSlot
from rapid_capture.services.persistence import (
    SqlPersistenceStore,
    flush_session_storage,
    load_session_storage,
    report_outcome,
)
from rapid_capture.services.session import MemorySessionStorage, SessionBook
from rapid_capture.services.training import Outcome, PendingTasks, TrainingSession


class RecordingStore:
    def __init__(self, error=None, delay=0.0):
        self.error = error
        self.delay = delay
        self.attempts = []
        self.profile_updates = []

    async def record_attempt(self, scenario_id, selected_action, is_correct, score_delta, time_taken_seconds):
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        self.attempts.append((scenario_id, selected_action, is_correct, score_delta, time_taken_seconds))

    async def accumulate_profile(self, score_delta, correct):
        self.profile_updates.append((score_delta, correct))

    async def record_outcome(self, scenario_id, selected_action, is_correct, score_delta, time_taken_seconds):
        await self.record_attempt(scenario_id, selected_action, is_correct, score_delta, time_taken_seconds)
        await self.accumulate_profile(score_delta, is_correct)


class GatedService:
    """Feedback service that answers only once released."""

    def __init__(self):
        self.release = asyncio.Event()

    async def explain(self, summary, user_action, correct_action, is_correct, time_taken_seconds):
        await self.release.wait()
        return {"feedback": f"About {summary.id}", "threatLevel": "high"}


def _session(corpus, **kwargs):
    kwargs.setdefault("rng", random.Random(42))
    return TrainingSession(corpus, SessionBook(MemorySessionStorage()), "sid-1", **kwargs)


class TestCommit:
    @pytest.mark.asyncio
    async def test_correct_action_scores_and_persists(self, small_corpus):
        store = RecordingStore()
        session = _session(small_corpus, store=store)
        record = session.next_scenario("medium")
        action = "report" if record.is_phishing else "correct_safe_action"

        outcome = session.commit(record, action, time_taken_seconds=9)
        await session.join(timeout=1)

        assert outcome.is_correct
        assert outcome.score_delta == 20
        assert outcome.stats.model_dump() == {"correct": 1, "total": 1, "accuracy": 100}
        assert store.attempts == [(record.id, action, True, 20, 9)]
        assert store.profile_updates == [(20, True)]

    @pytest.mark.asyncio
    async def test_wrong_action_penalised(self, small_corpus):
        session = _session(small_corpus, store=RecordingStore())
        record = session.next_scenario("hard")
        action = "link_click" if record.is_phishing else "report"

        outcome = session.commit(record, action)
        assert (outcome.is_correct, outcome.score_delta) == (False, -5)
        assert session.stats.accuracy == 0
        await session.join(timeout=1)

    @pytest.mark.asyncio
    async def test_unknown_action_flagged(self, small_corpus):
        session = _session(small_corpus)
        record = session.next_scenario("easy")
        outcome = session.commit(record, "double_click")
        assert outcome.unknown_action and not outcome.is_correct

    @pytest.mark.asyncio
    async def test_store_failure_does_not_block(self, small_corpus, caplog):
        session = _session(small_corpus, store=RecordingStore(error=RuntimeError("disk full")))
        record = session.next_scenario("easy")

        with caplog.at_level(logging.WARNING, logger="rapid_capture.services.persistence"):
            outcome = session.commit(record, "report")
            await session.join(timeout=1)

        assert outcome.stats.total == 1
        assert session.stats.total == 1
        assert "disk full" in caplog.text

    @pytest.mark.asyncio
    async def test_commit_returns_before_store_finishes(self, small_corpus):
        pending = PendingTasks()
        session = _session(small_corpus, store=RecordingStore(delay=0.2), pending=pending)
        record = session.next_scenario("easy")

        session.commit(record, "report")
        assert pending.count("sid-1") == 1
        await session.join(timeout=1)
        assert pending.count("sid-1") == 0
        assert "sid-1" not in pending


class TestFeedbackDelivery:
    @pytest.mark.asyncio
    async def test_no_service_fills_slot_immediately(self, small_corpus):
        session = _session(small_corpus)
        record = session.next_scenario("easy")
        session.commit(record, "report")
        assert session.slot.feedback is not None
        assert session.slot.feedback.source == "fallback"

    @pytest.mark.asyncio
    async def test_service_feedback_lands_in_slot(self, small_corpus):
        service = GatedService()
        session = _session(small_corpus, feedback_service=service)
        record = session.next_scenario("easy")
        session.commit(record, "report")
        assert session.slot.feedback is None

        service.release.set()
        await session.join(timeout=1)
        assert session.slot.feedback.feedback == f"About {record.id}"
        assert session.slot.feedback.source == "service"

    @pytest.mark.asyncio
    async def test_late_feedback_for_previous_scenario_is_dropped(self, small_corpus):
        service = GatedService()
        slot = FeedbackSlot()
        session = _session(small_corpus, feedback_service=service, slot=slot)

        first = session.next_scenario("easy")
        session.commit(first, "report")
        second = session.next_scenario("easy")

        service.release.set()
        await session.join(timeout=1)

        assert slot.scenario_id == second.id
        assert slot.feedback is None

    @pytest.mark.asyncio
    async def test_late_feedback_for_earlier_showing_of_same_scenario_is_dropped(self, make_record):
        service = GatedService()
        corpus = Corpus([make_record("only-one")])
        session = _session(corpus, feedback_service=service)

        first = session.next_scenario("easy")
        session.commit(first, "report")
        again = session.next_scenario("easy")
        assert again.id == first.id

        service.release.set()
        await session.join(timeout=1)
        assert session.slot.feedback is None

        session.commit(again, "report")
        await session.join(timeout=1)
        assert session.slot.feedback is not None

    @pytest.mark.asyncio
    async def test_feedback_timeout_uses_fallback(self, small_corpus):
        session = _session(small_corpus, feedback_service=GatedService(), feedback_timeout=0.05)
        record = session.next_scenario("easy")
        session.commit(record, "report")
        await session.join(timeout=1)
        assert session.slot.feedback.source == "fallback"


class TestReset:
    @pytest.mark.asyncio
    async def test_reset_clears_session(self, small_corpus):
        storage = MemorySessionStorage()
        session = TrainingSession(small_corpus, SessionBook(storage), "sid-1", rng=random.Random(1))
        record = session.next_scenario("easy")
        session.commit(record, "report")

        session.reset()

        assert session.stats.total == 0
        assert session.book.state.seen_ids == set()
        assert session.book.state.last_shown is None
        assert session.slot.scenario_id is None
        assert storage.data == {}

    @pytest.mark.asyncio
    async def test_reset_refuses_commits_until_next_serve(self, small_corpus):
        session = _session(small_corpus)
        record = session.next_scenario("easy")
        session.reset()

        assert not session.slot.can_commit(record.id)
        assert not session.slot.can_commit("easy-p1")

        served = session.next_scenario("easy")
        assert session.slot.can_commit(served.id)

    def test_selector_sees_reset_state(self, small_corpus):
        session = _session(small_corpus)
        for _ in range(10):
            session.next_scenario("easy")
        session.reset()
        ids = {session.next_scenario("easy").id for _ in range(10)}
        assert len(ids) == 10


class TestReportOutcome:
    def _outcome(self):
        session_stats = SessionBook(MemorySessionStorage()).stats
        return Outcome("easy-p0", "report", True, False, 10, 3, session_stats)

    @pytest.mark.asyncio
    async def test_success(self):
        store = RecordingStore()
        assert await report_outcome(store, self._outcome(), timeout=1) is True
        assert store.profile_updates == [(10, True)]

    @pytest.mark.asyncio
    async def test_timeout_reported_not_raised(self, caplog):
        store = RecordingStore(delay=1.0)
        with caplog.at_level(logging.WARNING):
            assert await report_outcome(store, self._outcome(), timeout=0.05) is False
        assert "timed out" in caplog.text
        assert store.profile_updates == []


@pytest_asyncio.fixture
async def session_factory(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path}/store.db")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield async_sessionmaker(engine, expire_on_commit=False)
    await engine.dispose()


class TestSqlStores:
    @pytest.mark.asyncio
    async def test_attempts_and_profile_totals(self, session_factory):
        store = SqlPersistenceStore(session_factory, "sid-1")
        await store.record_attempt("easy-p0", "report", True, 10, 4)
        await store.accumulate_profile(10, True)
        await store.record_attempt("hard-l0", "report", False, -5, 7)
        await store.accumulate_profile(-5, False)

        async with session_factory() as db:
            profile = (await db.execute(select(Profile).where(Profile.session_key == "sid-1"))).scalar_one()
            attempts = (await db.execute(select(Attempt).order_by(Attempt.id))).scalars().all()

        assert (profile.total_score, profile.scenarios_attempted, profile.scenarios_correct) == (5, 2, 1)
        assert [a.scenario_id for a in attempts] == ["easy-p0", "hard-l0"]
        assert all(a.profile_id == profile.id for a in attempts)

    @pytest.mark.asyncio
    async def test_profiles_are_per_session(self, session_factory):
        await SqlPersistenceStore(session_factory, "a").accumulate_profile(10, True)
        await SqlPersistenceStore(session_factory, "b").accumulate_profile(30, True)

        async with session_factory() as db:
            rows = (await db.execute(select(Profile.session_key, Profile.total_score))).all()
        assert sorted(tuple(row) for row in rows) == [("a", 10), ("b", 30)]

    @pytest.mark.asyncio
    async def test_session_storage_round_trip(self, session_factory):
        async with session_factory() as db:
            storage = await load_session_storage(db, "sid-1")
            book = SessionBook(storage)
            book.record_outcome(True)
            book.save_state()
            await flush_session_storage(db, "sid-1", storage)
            assert storage.dirty == set()

        async with session_factory() as db:
            reloaded = SessionBook(await load_session_storage(db, "sid-1"))
        assert reloaded.stats.total == 1

    @pytest.mark.asyncio
    async def test_removed_keys_deleted(self, session_factory):
        async with session_factory() as db:
            storage = await load_session_storage(db, "sid-1")
            SessionBook(storage).record_outcome(True)
            await flush_session_storage(db, "sid-1", storage)

            storage.remove("cyber_scenarios_stats")
            await flush_session_storage(db, "sid-1", storage)

        async with session_factory() as db:
            assert (await load_session_storage(db, "sid-1")).data == {}

    @pytest.mark.asyncio
    async def test_concurrent_first_writes_for_new_session(self, session_factory):
        store = SqlPersistenceStore(session_factory, "fresh")
        stats = SessionBook(MemorySessionStorage()).stats
        first = Outcome("easy-a", "report", True, False, 10, 2, stats)
        second = Outcome("easy-b", "link_click", False, False, -5, 3, stats)

        results = await asyncio.gather(
            report_outcome(store, first, timeout=10),
            report_outcome(store, second, timeout=10),
        )

        assert results == [True, True]
        async with session_factory() as db:
            profiles = (await db.execute(select(Profile).where(Profile.session_key == "fresh"))).scalars().all()
            attempts = (await db.execute(select(Attempt.scenario_id))).scalars().all()
        assert len(profiles) == 1
        assert (profiles[0].total_score, profiles[0].scenarios_attempted, profiles[0].scenarios_correct) == (5, 2, 1)
        assert sorted(attempts) == ["easy-a", "easy-b"]

    @pytest.mark.asyncio
    async def test_outcome_written_atomically(self, session_factory, monkeypatch):
        async def broken_increment(db, profile, score_delta, correct):
            raise RuntimeError("update rejected")

        monkeypatch.setattr(SqlPersistenceStore, "_increment", staticmethod(broken_increment))
        store = SqlPersistenceStore(session_factory, "sid-1")
        outcome = Outcome("easy-p0", "report", True, False, 10, 4, SessionBook(MemorySessionStorage()).stats)

        assert await report_outcome(store, outcome, timeout=1) is False
        async with session_factory() as db:
            attempts = (await db.execute(select(Attempt))).scalars().all()
            profile = (await db.execute(select(Profile).where(Profile.session_key == "sid-1"))).scalar_one()
        assert attempts == []
        assert profile.scenarios_attempted == 0
