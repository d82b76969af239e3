"""Corpus assembly, validation and the authored content."""
import pytest

from rapid_capture.core.errors import CorpusExhausted, CorpusValidationError
from rapid_capture.corpus.content import SCENARIOS
from rapid_capture.corpus.registry import Corpus, build_corpus, load_corpus
from rapid_capture.schemas.scenario import CHANNELS, DIFFICULTIES, LABELS, ScenarioOutSchema


class TestAuthoredContent:
    @pytest.fixture(scope="class")
    def corpus(self):
        return load_corpus()

    def test_loads_every_record(self, corpus):
        assert len(corpus) == len(SCENARIOS) == 24

    def test_every_bucket_stocked(self, corpus):
        for difficulty in DIFFICULTIES:
            for label in LABELS:
                assert len(corpus.bucket(difficulty, label)) == 4

    def test_every_channel_used(self, corpus):
        assert {record.type for record in corpus} == set(CHANNELS)

    def test_phishing_records_have_red_flags(self, corpus):
        for record in corpus:
            if record.is_phishing:
                assert record.red_flags, record.id
            else:
                assert record.trust_indicators, record.id

    def test_summary(self, corpus):
        summary = corpus.summary()
        assert summary.total == 24
        assert summary.phishing == summary.legitimate == 12
        assert [b.difficulty for b in summary.buckets] == list(DIFFICULTIES)

    def test_served_schema_hides_ground_truth(self, corpus):
        payload = ScenarioOutSchema.from_record(corpus.get("easy-phish-1")).model_dump()
        assert "correct_label" not in payload
        assert "explanation" not in payload
        assert payload["type"] == payload["content"]["type"] == "email"


class TestValidation:
    def test_duplicate_ids_rejected(self, make_record):
        with pytest.raises(CorpusValidationError, match="dup"):
            Corpus([make_record("dup"), make_record("dup", label="legitimate")])

    def test_invalid_record_names_scenario(self):
        bad = {
            "id": "broken-1",
            "difficulty": "easy",
            "correct_label": "phishing",
            "title": "Broken",
            "content": {"type": "email", "sender": "x"},
            "explanation": "",
        }
        with pytest.raises(CorpusValidationError, match="broken-1"):
            build_corpus([bad], validate=False)

    def test_unknown_channel_rejected(self):
        bad = {
            "id": "fax-1",
            "difficulty": "easy",
            "correct_label": "phishing",
            "title": "Fax",
            "content": {"type": "fax", "message": "hi"},
            "explanation": "",
        }
        with pytest.raises(CorpusValidationError):
            build_corpus([bad], validate=False)

    def test_empty_bucket_named(self, make_record):
        corpus = Corpus([make_record("easy-p1"), make_record("easy-l1", label="legitimate")])
        with pytest.raises(CorpusExhausted) as excinfo:
            corpus.validate()
        assert (excinfo.value.difficulty, excinfo.value.label) == ("medium", "phishing")
        assert "medium/phishing" in str(excinfo.value)

    def test_records_are_immutable(self, make_record):
        record = make_record("easy-p1")
        with pytest.raises(Exception):
            record.difficulty = "hard"


class TestLookups:
    def test_by_difficulty_orders_phishing_first(self, small_corpus):
        labels = [r.correct_label for r in small_corpus.by_difficulty("easy")]
        assert labels == ["phishing"] * 5 + ["legitimate"] * 5

    def test_get_and_contains(self, small_corpus):
        assert "easy-p0" in small_corpus
        assert small_corpus.get("easy-p0").id == "easy-p0"
        assert small_corpus.get("missing") is None

    def test_counts(self, small_corpus):
        assert small_corpus.count() == 18
        assert small_corpus.count("phishing") == 9
        assert small_corpus.count("legitimate") == 9
