"""Scenario selection with per-difficulty exhaustion, anti-repetition and label balance."""
import logging
import random
from collections.abc import Sequence

from rapid_capture.core.errors import CorpusExhausted
from rapid_capture.corpus.registry import Corpus
from rapid_capture.schemas.scenario import DIFFICULTIES, ScenarioRecord
from rapid_capture.services.session import SessionState

logger = logging.getLogger(__name__)


class ScenarioSelector:
    """Picks the next scenario for one session and updates its SessionState.

    Every call narrows the chosen difficulty's pool in a fixed order:

    1. drop ids already seen this session;
    2. if nothing is left, forget this difficulty's history and start over
       with the whole pool (other difficulties keep their seen ids);
    3. when more than one candidate remains, avoid repeating the last
       (channel, label) pair, unless that would leave nothing;
    4. when both labels are present, prefer the opposite of the last label,
       or toss a coin if there is no previous label;
    5. shuffle the survivors and take the first.

    `rng` is any random.Random; pass a seeded one for reproducible runs.
    """

    def __init__(self, corpus: Corpus, state: SessionState, rng: random.Random | None = None):
        self.corpus = corpus
        self.state = state
        self.rng = rng or random.Random()

    def select_next(self, difficulty: str | None = None) -> ScenarioRecord:
        difficulty = difficulty or self.rng.choice(DIFFICULTIES)
        if difficulty not in DIFFICULTIES:
            raise ValueError(f"Unknown difficulty: {difficulty!r}")

        pool_all = self.corpus.by_difficulty(difficulty)
        if not pool_all:
            raise CorpusExhausted(difficulty)

        available = [r for r in pool_all if r.id not in self.state.seen_ids]
        if not available:
            logger.debug("All %d %s scenarios seen; resetting that difficulty", len(pool_all), difficulty)
            self.state.forget(r.id for r in pool_all)
            available = list(pool_all)

        available = self._vary(available)
        pool = self._balance(available)

        chosen = self._shuffled(pool)[0]
        self.state.mark_shown(chosen)
        return chosen

    def _vary(self, available: list[ScenarioRecord]) -> list[ScenarioRecord]:
        last = self.state.last_shown
        if len(available) <= 1 or last is None:
            return available
        varied = [
            r for r in available
            if r.type != last.type or r.correct_label != last.correct_label
        ]
        return varied or available

    def _balance(self, available: list[ScenarioRecord]) -> list[ScenarioRecord]:
        phishing = [r for r in available if r.correct_label == "phishing"]
        legitimate = [r for r in available if r.correct_label == "legitimate"]
        if not phishing or not legitimate:
            return available

        last = self.state.last_shown
        if last is not None and last.correct_label == "phishing":
            return legitimate
        if last is not None and last.correct_label == "legitimate":
            return phishing
        return phishing if self.rng.random() < 0.5 else legitimate

    def _shuffled(self, pool: Sequence[ScenarioRecord]) -> list[ScenarioRecord]:
        # random.shuffle is an in-place Fisher-Yates
        items = list(pool)
        self.rng.shuffle(items)
        return items
