"""Post-attempt feedback: external explain call with a deterministic local fallback."""
import asyncio
import json
import logging
from collections import OrderedDict
from collections.abc import Mapping
from typing import Any, Protocol

from pydantic import ValidationError

from rapid_capture.core.errors import FeedbackUnavailable
from rapid_capture.schemas.feedback import Feedback, ScenarioSummary
from rapid_capture.schemas.scenario import ScenarioRecord

logger = logging.getLogger(__name__)

DEFAULT_TIPS = {
    "phishing": [
        "Check the sender's address and the real domain of every link",
        "Be suspicious of urgency, threats and prizes",
        "Report suspicious messages instead of engaging",
    ],
    "legitimate": [
        "Expected, specific messages from known senders are usually safe",
        "Verify through the official app or site when unsure",
        "Not every message is an attack; over-reporting has a cost too",
    ],
}

DEFAULT_IMPACT = {
    "phishing": "Falling for this could lead to credential theft, fraud or a data breach.",
    "legitimate": "Treating genuine messages as threats can make you miss important information.",
}

# Threat level when the scenario carries no hint
THREAT_BY_DIFFICULTY = {
    "easy": "medium",
    "medium": "high",
    "hard": "critical",
}

MAX_TIPS = 3


class FeedbackService(Protocol):
    async def explain(
        self,
        summary: ScenarioSummary,
        user_action: str,
        correct_action: str,
        is_correct: bool,
        time_taken_seconds: int,
    ) -> Feedback | Mapping[str, Any] | str: ...


def summarize(record: ScenarioRecord) -> ScenarioSummary:
    return ScenarioSummary(
        id=record.id,
        title=record.title,
        type=record.type,
        difficulty=record.difficulty,
    )


def build_fallback(record: ScenarioRecord, is_correct: bool) -> Feedback:
    """Feedback assembled from the scenario's own authored fields."""
    verdict = "Well spotted." if is_correct else "Not quite."
    if record.is_phishing:
        reason = "This was a phishing attempt."
        indicators = list(record.red_flags)
    else:
        reason = "This was legitimate."
        indicators = list(record.trust_indicators)

    hints = record.analysis_hints
    if hints is not None:
        threat_level = hints.threat_level
    elif record.is_phishing:
        threat_level = THREAT_BY_DIFFICULTY[record.difficulty]
    else:
        threat_level = "low"

    impact = (hints.real_world_impact if hints else None) or DEFAULT_IMPACT[record.correct_label]

    return Feedback(
        feedback=f"{verdict} {reason} {record.explanation}",
        tips=(indicators or DEFAULT_TIPS[record.correct_label])[:MAX_TIPS],
        threat_level=threat_level,
        real_world_impact=impact,
        source="fallback",
    )


def parse_feedback(raw: Feedback | Mapping[str, Any] | str) -> Feedback:
    if isinstance(raw, Feedback):
        return raw
    try:
        if isinstance(raw, str):
            raw = json.loads(raw)
        return Feedback.model_validate(raw)
    except (ValueError, ValidationError) as exc:
        raise FeedbackUnavailable(f"Unparseable feedback payload: {exc}") from exc


async def request_feedback(
    service: FeedbackService | None,
    record: ScenarioRecord,
    user_action: str,
    correct_action: str,
    is_correct: bool,
    time_taken_seconds: int,
    timeout: float,
) -> Feedback:
    """Ask the service for feedback; any failure yields the local fallback."""
    if service is None:
        return build_fallback(record, is_correct)
    try:
        raw = await asyncio.wait_for(
            service.explain(summarize(record), user_action, correct_action, is_correct, time_taken_seconds),
            timeout=timeout,
        )
        return parse_feedback(raw)
    except asyncio.TimeoutError:
        logger.warning("Feedback for %s timed out after %.1fs; using fallback", record.id, timeout)
    except FeedbackUnavailable as exc:
        logger.warning("Feedback for %s unavailable: %s; using fallback", record.id, exc)
    except Exception:
        # The service is an external collaborator: any error degrades to the fallback
        logger.warning("Feedback service failed for %s; using fallback", record.id, exc_info=True)
    return build_fallback(record, is_correct)


class FeedbackSlot:
    """Display slot for the scenario currently on screen.

    Every `open()` starts a new serving with its own generation number.
    Feedback is only accepted for the serving it was requested for, so a slow
    response for an earlier scenario, or for an earlier showing of the same
    scenario, cannot overwrite the current one.

    A slot that was never opened (e.g. after a restart) accepts one commit for
    any scenario. A closed slot accepts none until the next `open()`.
    """

    def __init__(self):
        self.scenario_id: str | None = None
        self.committed = False
        self.generation = 0
        self.feedback: Feedback | None = None

    def open(self, scenario_id: str) -> int:
        self.generation += 1
        self.scenario_id = scenario_id
        self.committed = False
        self.feedback = None
        return self.generation

    def can_commit(self, scenario_id: str) -> bool:
        if self.scenario_id is None:
            return not self.committed
        return self.scenario_id == scenario_id and not self.committed

    def commit(self, scenario_id: str) -> int:
        """Mark the serving answered; returns its generation for `fill`."""
        self.scenario_id = scenario_id
        self.committed = True
        return self.generation

    def fill(self, scenario_id: str, feedback: Feedback, generation: int | None = None) -> bool:
        stale = scenario_id != self.scenario_id or (generation is not None and generation != self.generation)
        if stale:
            logger.debug(
                "Dropping stale feedback for %s#%s (showing %s#%s)",
                scenario_id, generation, self.scenario_id, self.generation,
            )
            return False
        self.feedback = feedback
        return True

    def close(self) -> None:
        """Forget the current serving and refuse commits until the next open."""
        self.generation += 1
        self.scenario_id = None
        self.committed = True
        self.feedback = None


class FeedbackSlots:
    """Per-session slots; the least recently used are evicted past `capacity`."""

    def __init__(self, capacity: int = 10_000):
        self.capacity = capacity
        self._slots: OrderedDict[str, FeedbackSlot] = OrderedDict()

    def __len__(self) -> int:
        return len(self._slots)

    def __contains__(self, session_key: object) -> bool:
        return session_key in self._slots

    def get(self, session_key: str) -> FeedbackSlot | None:
        slot = self._slots.get(session_key)
        if slot is not None:
            self._slots.move_to_end(session_key)
        return slot

    def acquire(self, session_key: str) -> FeedbackSlot:
        slot = self.get(session_key)
        if slot is not None:
            return slot
        slot = self._slots[session_key] = FeedbackSlot()
        while len(self._slots) > self.capacity:
            evicted, _ = self._slots.popitem(last=False)
            logger.debug("Evicted feedback slot for session %s", evicted)
        return slot
