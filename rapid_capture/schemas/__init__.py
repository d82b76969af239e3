from rapid_capture.schemas.feedback import Feedback, FeedbackOutSchema, ScenarioSummary
from rapid_capture.schemas.scenario import (
    AttemptSubmitSchema,
    ScenarioOutSchema,
    ScenarioRecord,
)
from rapid_capture.schemas.stats import (
    AttemptOutSchema,
    CorpusSummarySchema,
    ProfileOutSchema,
    SessionStats,
)

__all__ = [
    "AttemptOutSchema",
    "AttemptSubmitSchema",
    "CorpusSummarySchema",
    "Feedback",
    "FeedbackOutSchema",
    "ProfileOutSchema",
    "ScenarioOutSchema",
    "ScenarioRecord",
    "ScenarioSummary",
    "SessionStats",
]
