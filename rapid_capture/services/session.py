"""Per-session bookkeeping: seen-set, last shown scenario and running accuracy.

State and stats are persisted through a pluggable SessionStorage under two
well-known keys, serialized as camelCase JSON documents.
"""
import logging
from typing import Protocol

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_serializer
from pydantic.alias_generators import to_camel

from rapid_capture.schemas.scenario import Label, ScenarioRecord
from rapid_capture.schemas.stats import SessionStats
from rapid_capture.services.scoring import accuracy_percent

logger = logging.getLogger(__name__)

SESSION_KEY = "cyber_scenarios_session"
STATS_KEY = "cyber_scenarios_stats"


class LastShown(BaseModel):
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    type: str
    correct_label: Label


class SessionState(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    seen_ids: set[str] = Field(default_factory=set)
    last_shown: LastShown | None = None

    @field_serializer("seen_ids")
    def _sorted_ids(self, seen_ids: set[str]) -> list[str]:
        return sorted(seen_ids)

    def mark_shown(self, record: ScenarioRecord) -> None:
        self.seen_ids.add(record.id)
        self.last_shown = LastShown(type=record.type, correct_label=record.correct_label)

    def forget(self, ids) -> None:
        self.seen_ids.difference_update(ids)

    def clear(self) -> None:
        self.seen_ids.clear()
        self.last_shown = None


class SessionStorage(Protocol):
    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def remove(self, key: str) -> None: ...


class MemorySessionStorage:
    """Dict-backed storage that remembers which keys changed since loading."""

    def __init__(self, data: dict[str, str] | None = None):
        self.data = dict(data or {})
        self.dirty: set[str] = set()

    def get(self, key: str) -> str | None:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value
        self.dirty.add(key)

    def remove(self, key: str) -> None:
        self.data.pop(key, None)
        self.dirty.add(key)


class SessionBook:
    """Owns SessionState and SessionStats for one trainee session."""

    def __init__(
        self,
        storage: SessionStorage,
        state_key: str = SESSION_KEY,
        stats_key: str = STATS_KEY,
    ):
        self.storage = storage
        self.state_key = state_key
        self.stats_key = stats_key
        self.state = self._load(SessionState, state_key)
        self.stats = self._load(SessionStats, stats_key)

    def _load(self, model, key):
        raw = self.storage.get(key)
        if raw is None:
            return model()
        try:
            return model.model_validate_json(raw)
        except ValidationError:
            logger.warning("Discarding unreadable session data under %r", key)
            return model()

    def save_state(self) -> None:
        self.storage.set(self.state_key, self.state.model_dump_json(by_alias=True))

    def record_outcome(self, is_correct: bool) -> SessionStats:
        correct = self.stats.correct + (1 if is_correct else 0)
        total = self.stats.total + 1
        self.stats = SessionStats(
            correct=correct,
            total=total,
            accuracy=accuracy_percent(correct, total),
        )
        self.storage.set(self.stats_key, self.stats.model_dump_json())
        return self.stats.model_copy()

    def reset(self) -> None:
        # State is cleared in place: the selector holds a reference to it
        self.state.clear()
        self.stats = SessionStats()
        self.storage.remove(self.state_key)
        self.storage.remove(self.stats_key)
