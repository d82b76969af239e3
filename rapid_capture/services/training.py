"""One trainee's training run: serve, commit, and dispatch background side effects."""
import asyncio
import logging
import random
from collections.abc import Coroutine
from dataclasses import dataclass

from rapid_capture.corpus.registry import Corpus
from rapid_capture.schemas.scenario import ScenarioRecord
from rapid_capture.schemas.stats import SessionStats
from rapid_capture.services.feedback import FeedbackService, FeedbackSlot, build_fallback, request_feedback
from rapid_capture.services.outcome import classify, correct_action
from rapid_capture.services.persistence import PersistenceStore, report_outcome
from rapid_capture.services.scoring import score_delta
from rapid_capture.services.selector import ScenarioSelector
from rapid_capture.services.session import SessionBook

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Outcome:
    scenario_id: str
    action: str
    is_correct: bool
    unknown_action: bool
    score_delta: int
    time_taken_seconds: int
    stats: SessionStats
    # Feedback slot serving this outcome answers
    generation: int = 0


class PendingTasks:
    """Strong references to background tasks, grouped by session key."""

    def __init__(self):
        self._tasks: dict[str, set[asyncio.Task]] = {}

    def spawn(self, key: str, coro: Coroutine) -> asyncio.Task:
        task = asyncio.get_running_loop().create_task(coro)
        self._tasks.setdefault(key, set()).add(task)
        task.add_done_callback(lambda done: self._discard(key, done))
        return task

    def _discard(self, key: str, task: asyncio.Task) -> None:
        bucket = self._tasks.get(key)
        if bucket is None:
            return
        bucket.discard(task)
        if not bucket:
            del self._tasks[key]

    def __contains__(self, key: object) -> bool:
        return key in self._tasks

    def count(self, key: str | None = None) -> int:
        if key is not None:
            return len(self._tasks.get(key, ()))
        return sum(len(tasks) for tasks in self._tasks.values())

    async def join(self, key: str | None = None, timeout: float | None = None) -> None:
        """Wait for pending tasks of one session (or all). Never raises on timeout."""
        if key is not None:
            tasks = set(self._tasks.get(key, ()))
        else:
            tasks = {t for bucket in self._tasks.values() for t in bucket}
        if not tasks:
            return
        _, still_pending = await asyncio.wait(tasks, timeout=timeout)
        if still_pending:
            logger.warning("%d background task(s) still running after %.1fs", len(still_pending), timeout)


class TrainingSession:
    """Coordinates selector, bookkeeping, scoring and side effects for one session.

    Selection and scoring are synchronous. Persistence and feedback run as
    tasks on the current event loop and are never awaited here.
    """

    def __init__(
        self,
        corpus: Corpus,
        book: SessionBook,
        session_key: str,
        *,
        store: PersistenceStore | None = None,
        feedback_service: FeedbackService | None = None,
        slot: FeedbackSlot | None = None,
        pending: PendingTasks | None = None,
        rng: random.Random | None = None,
        feedback_timeout: float = 15.0,
        persistence_timeout: float = 10.0,
    ):
        self.corpus = corpus
        self.book = book
        self.session_key = session_key
        self.store = store
        self.feedback_service = feedback_service
        self.slot = slot or FeedbackSlot()
        self.pending = pending or PendingTasks()
        self.selector = ScenarioSelector(corpus, book.state, rng)
        self.feedback_timeout = feedback_timeout
        self.persistence_timeout = persistence_timeout

    @property
    def stats(self) -> SessionStats:
        return self.book.stats.model_copy()

    def next_scenario(self, difficulty: str | None = None) -> ScenarioRecord:
        record = self.selector.select_next(difficulty)
        self.book.save_state()
        self.slot.open(record.id)
        return record

    def evaluate(self, record: ScenarioRecord, action: str, time_taken_seconds: int = 0) -> Outcome:
        """Classify and score an action and update local stats."""
        verdict = classify(record.correct_label, action)
        delta = score_delta(record.difficulty, verdict.is_correct)
        stats = self.book.record_outcome(verdict.is_correct)
        generation = self.slot.commit(record.id)
        return Outcome(
            scenario_id=record.id,
            action=action,
            is_correct=verdict.is_correct,
            unknown_action=verdict.unknown,
            score_delta=delta,
            time_taken_seconds=time_taken_seconds,
            stats=stats,
            generation=generation,
        )

    def dispatch(self, record: ScenarioRecord, outcome: Outcome) -> None:
        """Schedule persistence and feedback; needs a running event loop."""
        if self.store is not None:
            self.pending.spawn(
                self.session_key,
                report_outcome(self.store, outcome, self.persistence_timeout),
            )

        if self.feedback_service is None:
            self.slot.fill(record.id, build_fallback(record, outcome.is_correct), outcome.generation)
            return
        self.pending.spawn(self.session_key, self._fetch_feedback(record, outcome))

    def commit(self, record: ScenarioRecord, action: str, time_taken_seconds: int = 0) -> Outcome:
        outcome = self.evaluate(record, action, time_taken_seconds)
        self.dispatch(record, outcome)
        return outcome

    async def _fetch_feedback(self, record: ScenarioRecord, outcome: Outcome) -> None:
        feedback = await request_feedback(
            self.feedback_service,
            record,
            outcome.action,
            correct_action(record.correct_label),
            outcome.is_correct,
            outcome.time_taken_seconds,
            self.feedback_timeout,
        )
        self.slot.fill(record.id, feedback, outcome.generation)

    def reset(self) -> None:
        self.book.reset()
        # Closed, not unopened: nothing may be answered before the next serve
        self.slot.close()

    async def join(self, timeout: float | None = None) -> None:
        await self.pending.join(self.session_key, timeout)
