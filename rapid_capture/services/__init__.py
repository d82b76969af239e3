from rapid_capture.services.outcome import classify
from rapid_capture.services.scoring import accuracy_percent, compute_rank, score_delta
from rapid_capture.services.selector import ScenarioSelector
from rapid_capture.services.session import MemorySessionStorage, SessionBook, SessionState
from rapid_capture.services.training import Outcome, PendingTasks, TrainingSession

__all__ = [
    "MemorySessionStorage",
    "Outcome",
    "PendingTasks",
    "ScenarioSelector",
    "SessionBook",
    "SessionState",
    "TrainingSession",
    "accuracy_percent",
    "classify",
    "compute_rank",
    "score_delta",
]
