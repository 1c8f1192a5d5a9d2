"""
Exceptions raised by the leaderboard core.
"""

from enum import Enum


class QuizboardError(Exception):
    """Base class for leaderboard errors."""


class ValidationKind(str, Enum):
    MISSING_IDENTITY = "MissingIdentity"
    INVALID_MODE = "InvalidMode"


# Client-facing messages, one per rejection kind
VALIDATION_MESSAGES = {
    ValidationKind.MISSING_IDENTITY: "name/school required",
    ValidationKind.INVALID_MODE: "invalid mode",
}


class ValidationError(QuizboardError):
    """A submission was rejected before touching stored state."""

    def __init__(self, kind: ValidationKind):
        self.kind = kind
        super().__init__(VALIDATION_MESSAGES[kind])

    @property
    def message(self) -> str:
        return VALIDATION_MESSAGES[self.kind]


class StorageError(QuizboardError):
    """The leaderboard file could not be written."""
