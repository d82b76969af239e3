"""In-memory scenario corpus, partitioned by difficulty and ground-truth label."""
import logging
from collections.abc import Iterable, Iterator, Mapping, Sequence
from typing import Any

from pydantic import ValidationError

from rapid_capture.core.errors import CorpusExhausted, CorpusValidationError
from rapid_capture.schemas.scenario import DIFFICULTIES, LABELS, ScenarioRecord
from rapid_capture.schemas.stats import BucketCountSchema, CorpusSummarySchema

logger = logging.getLogger(__name__)


class Corpus:
    """Static table of ScenarioRecord keyed by id.

    Records keep their authored order inside each bucket, phishing before
    legitimate, so the same seed always yields the same selections.
    """

    def __init__(self, records: Iterable[ScenarioRecord]):
        self._by_id: dict[str, ScenarioRecord] = {}
        self._buckets: dict[tuple[str, str], list[ScenarioRecord]] = {
            (d, label): [] for d in DIFFICULTIES for label in LABELS
        }
        for record in records:
            if record.id in self._by_id:
                raise CorpusValidationError(f"Duplicate scenario id: {record.id!r}")
            self._by_id[record.id] = record
            self._buckets[(record.difficulty, record.correct_label)].append(record)

    def __len__(self) -> int:
        return len(self._by_id)

    def __iter__(self) -> Iterator[ScenarioRecord]:
        return iter(self._by_id.values())

    def __contains__(self, scenario_id: object) -> bool:
        return scenario_id in self._by_id

    def get(self, scenario_id: str) -> ScenarioRecord | None:
        return self._by_id.get(scenario_id)

    def bucket(self, difficulty: str, label: str) -> tuple[ScenarioRecord, ...]:
        return tuple(self._buckets.get((difficulty, label), ()))

    def by_difficulty(self, difficulty: str) -> tuple[ScenarioRecord, ...]:
        """All records of one difficulty, across both labels."""
        return self.bucket(difficulty, "phishing") + self.bucket(difficulty, "legitimate")

    def count(self, label: str | None = None) -> int:
        if label is None:
            return len(self._by_id)
        return sum(len(self._buckets[(d, label)]) for d in DIFFICULTIES)

    def validate(self) -> None:
        """Raise CorpusExhausted for the first empty (difficulty, label) bucket."""
        for difficulty in DIFFICULTIES:
            for label in LABELS:
                if not self._buckets[(difficulty, label)]:
                    raise CorpusExhausted(difficulty, label)

    def summary(self) -> CorpusSummarySchema:
        return CorpusSummarySchema(
            total=self.count(),
            phishing=self.count("phishing"),
            legitimate=self.count("legitimate"),
            buckets=[
                BucketCountSchema(
                    difficulty=d,
                    phishing=len(self._buckets[(d, "phishing")]),
                    legitimate=len(self._buckets[(d, "legitimate")]),
                )
                for d in DIFFICULTIES
            ],
        )


def build_corpus(raw: Sequence[Mapping[str, Any]], validate: bool = True) -> Corpus:
    """Validate authored dicts into records and assemble the corpus."""
    records = []
    for index, item in enumerate(raw):
        try:
            records.append(ScenarioRecord.model_validate(item))
        except ValidationError as exc:
            ident = item.get("id", f"#{index}")
            raise CorpusValidationError(f"Invalid scenario {ident}: {exc}") from exc

    corpus = Corpus(records)
    if validate:
        corpus.validate()
    return corpus


def load_corpus() -> Corpus:
    """Build the corpus from the authored content shipped with the package."""
    from rapid_capture.corpus.content import SCENARIOS

    corpus = build_corpus(SCENARIOS)
    logger.info(
        "Loaded %d scenarios (%d phishing, %d legitimate)",
        corpus.count(),
        corpus.count("phishing"),
        corpus.count("legitimate"),
    )
    return corpus
