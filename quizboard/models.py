"""
Domain types - quiz modes and leaderboard entries.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional


class Mode(str, Enum):
    """The closed set of quiz categories that get a leaderboard."""

    HUMANITIES = "humanities"
    SCIENCE = "science"
    MIXED = "mixed"

    @classmethod
    def parse(cls, text) -> Optional["Mode"]:
        """Return the mode whose identifier is exactly `text`, or None."""
        for mode in cls:
            if mode.value == text:
                return mode
        return None


MODES = tuple(Mode)


@dataclass(frozen=True)
class Entry:
    name: str
    school: str
    score: int
    timestamp: str

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "school": self.school,
            "score": self.score,
            "timestamp": self.timestamp,
        }


Board = List[Entry]
Snapshot = Dict[Mode, Board]