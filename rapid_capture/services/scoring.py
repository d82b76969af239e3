"""Point deltas per attempt, accuracy and display rank."""
import math

# Correct: reward scales with difficulty; incorrect: flat penalty
CORRECT_POINTS = {
    "easy": 10,
    "medium": 20,
    "hard": 30,
}
INCORRECT_PENALTY = -5

# (minimum total score, rank); checked from the top down
RANK_BANDS = [
    (1000, "Guardian"),
    (600, "Sentinel"),
    (300, "Defender"),
    (100, "Analyst"),
]
DEFAULT_RANK = "Recruit"


def score_delta(difficulty: str, is_correct: bool) -> int:
    """Return the point change for one attempt."""
    if not is_correct:
        return INCORRECT_PENALTY
    try:
        return CORRECT_POINTS[difficulty]
    except KeyError:
        raise ValueError(f"Unknown difficulty: {difficulty!r}") from None


def accuracy_percent(correct: int, total: int) -> int:
    """round(100 * correct / total), halves rounded up; 0 with no attempts."""
    if total <= 0:
        return 0
    return math.floor(100 * correct / total + 0.5)


def compute_rank(total_score: int) -> str:
    """Return rank label from accumulated score."""
    for minimum, label in RANK_BANDS:
        if total_score >= minimum:
            return label
    return DEFAULT_RANK
