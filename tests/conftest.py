"""Shared fixtures. The database location is set before the app is imported."""
import os
import random
import tempfile

_DB_DIR = tempfile.mkdtemp(prefix="rapid_capture_tests_")
os.environ.setdefault("DATABASE_URL", f"sqlite+aiosqlite:///{_DB_DIR}/test.db")

import pytest  # noqa: E402

from rapid_capture.corpus.registry import Corpus  # noqa: E402
from rapid_capture.schemas.scenario import ScenarioRecord  # noqa: E402

CONTENT_BY_TYPE = {
    "email": {
        "from_address": "sender@example.com",
        "to_address": "you@example.com",
        "subject": "Subject",
        "body": "Body",
    },
    "sms": {"sender": "12345", "message": "Message"},
    "website": {
        "url": "https://example.com",
        "website_title": "Example",
        "website_content": "Content",
        "brand_name": "Example",
    },
    "social": {"platform": "Mastodon", "username": "user", "display_name": "User", "post": "Post"},
    "voice": {"caller_number": "+1-555-0100", "caller_name": "Caller", "transcript": "Hello"},
    "qrcode": {"qr_context": "Poster", "qr_destination": "Site", "location": "Street"},
    "ransomware": {"title": "Alert", "message": "Pay up"},
}

TYPES = list(CONTENT_BY_TYPE)


def build_record(scenario_id, difficulty="easy", label="phishing", type="email", **extra) -> ScenarioRecord:
    data = {
        "id": scenario_id,
        "difficulty": difficulty,
        "correct_label": label,
        "title": scenario_id,
        "content": {"type": type, **CONTENT_BY_TYPE[type]},
        "explanation": f"Explanation for {scenario_id}",
    }
    data.update(extra)
    return ScenarioRecord.model_validate(data)


def build_bucket(difficulty, label, size):
    prefix = "p" if label == "phishing" else "l"
    return [
        build_record(f"{difficulty}-{prefix}{i}", difficulty, label, TYPES[i % len(TYPES)])
        for i in range(size)
    ]


@pytest.fixture
def make_record():
    return build_record


@pytest.fixture
def rng():
    return random.Random(42)


@pytest.fixture
def small_corpus():
    """10 easy scenarios (5 phishing, 5 legitimate) and 2 per other bucket."""
    records = build_bucket("easy", "phishing", 5) + build_bucket("easy", "legitimate", 5)
    for difficulty in ("medium", "hard"):
        records += build_bucket(difficulty, "phishing", 2) + build_bucket(difficulty, "legitimate", 2)
    return Corpus(records)


@pytest.fixture
def balanced_corpus():
    """50 easy scenarios split evenly across labels."""
    return Corpus(build_bucket("easy", "phishing", 25) + build_bucket("easy", "legitimate", 25))
