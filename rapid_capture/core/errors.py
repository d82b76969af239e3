"""Domain errors. Only CorpusExhausted is meant to reach the caller."""


class CorpusValidationError(ValueError):
    """Authored content does not form a valid corpus (bad record, duplicate id)."""


class CorpusExhausted(Exception):
    """A requested difficulty bucket has no scenarios in the corpus itself."""

    def __init__(self, difficulty: str, label: str | None = None):
        self.difficulty = difficulty
        self.label = label
        bucket = f"{difficulty}/{label}" if label else difficulty
        super().__init__(f"No scenarios authored for bucket '{bucket}'")


class PersistenceFailure(Exception):
    """Writing an attempt or profile update to the store failed or timed out."""


class FeedbackUnavailable(Exception):
    """The feedback service failed, timed out or returned unusable data."""


class UnknownAction(Exception):
    """An action tag outside the classifier vocabulary."""

    def __init__(self, action: str):
        self.action = action
        super().__init__(f"Unknown action tag: {action!r}")
