"""Fixed-rule classifier mapping (ground truth, user action) to correctness."""
import logging
from typing import NamedTuple

from rapid_capture.core.errors import UnknownAction
from rapid_capture.schemas.scenario import LABELS

logger = logging.getLogger(__name__)

# Flag the content as a threat
FLAG_ACTIONS = frozenset({"report"})

# Walk away without engaging
DISENGAGE_ACTIONS = frozenset({"hangup", "close", "ignore", "leave"})

# Interact with the content as if it were genuine
ENGAGE_ACTIONS = frozenset({
    "link_click",
    "click_link",
    "reply",
    "forward",
    "call",
    "callback",
    "answer",
    "share",
    "scan",
    "submit_credentials",
    "pay",
    "task_complete",
    "correct_safe_action",
})

ACTION_VOCABULARY = FLAG_ACTIONS | DISENGAGE_ACTIONS | ENGAGE_ACTIONS

# Canonical expected action per label, reported to the feedback service
CORRECT_ACTION = {
    "phishing": "report",
    "legitimate": "correct_safe_action",
}


class Verdict(NamedTuple):
    is_correct: bool
    action: str
    unknown: bool = False


def classify(correct_label: str, action: str, strict: bool = False) -> Verdict:
    """Decide correctness of an action.

    Unknown tags count as incorrect and are logged with the raw tag; with
    strict=True they raise UnknownAction instead (for corpus/UI audits).
    """
    if correct_label not in LABELS:
        raise ValueError(f"Unknown label: {correct_label!r}")

    if action not in ACTION_VOCABULARY:
        if strict:
            raise UnknownAction(action)
        logger.warning("Unknown action %r on %s scenario; scored as incorrect", action, correct_label)
        return Verdict(is_correct=False, action=action, unknown=True)

    if correct_label == "phishing":
        return Verdict(action in FLAG_ACTIONS or action in DISENGAGE_ACTIONS, action)
    return Verdict(action in ENGAGE_ACTIONS, action)


def correct_action(correct_label: str) -> str:
    return CORRECT_ACTION[correct_label]
