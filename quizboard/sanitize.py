"""
Input sanitizing - the only place untrusted request values become Entry fields.
"""

import math
from typing import Optional

from quizboard.models import Mode


MAX_NAME_LENGTH = 30
MAX_SCHOOL_LENGTH = 40
MAX_MODE_LENGTH = 20
MAX_SCORE = 9999


def safe_text(raw, max_len: int) -> str:
    """Coerce to text, trim whitespace and cut to max_len characters."""
    if raw is None:
        return ""
    text = str(raw).strip()
    return text[:max_len]


def _to_number(raw) -> float:
    if isinstance(raw, bool):
        return float(raw)
    if isinstance(raw, (int, float)):
        return float(raw)
    if isinstance(raw, str):
        raw = raw.strip()
        if not raw:
            return 0.0
        # float() also reads digit separators like "1_000"
        if "_" in raw:
            return math.nan
        try:
            return float(raw)
        except ValueError:
            return math.nan
    return math.nan


def safe_score(raw) -> int:
    """
    Coerce a raw score to an int in [0, MAX_SCORE].
    Non-numeric and non-finite input scores 0.
    """
    try:
        value = _to_number(raw)
    except OverflowError:
        return 0
    if not math.isfinite(value):
        return 0
    return max(0, min(MAX_SCORE, math.floor(value)))


def validate_mode(text) -> bool:
    return Mode.parse(text) is not None


def parse_mode(raw) -> Optional[Mode]:
    """Map raw request input to a Mode, or None when it names no mode."""
    return Mode.parse(safe_text(raw, MAX_MODE_LENGTH))
