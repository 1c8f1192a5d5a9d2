"""
Ranking engine - keeps each board at its best score per player, sorted, top 3.

Everything here is pure: boards go in, new boards come out.
"""

from dataclasses import replace
from datetime import datetime, timezone
from numbers import Number
from typing import Optional, Tuple

from quizboard.models import MODES, Board, Entry, Snapshot
from quizboard.sanitize import (
    MAX_NAME_LENGTH,
    MAX_SCHOOL_LENGTH,
    safe_score,
    safe_text,
)


BOARD_SIZE = 3

# Sort key for timestamps that cannot be read
EARLIEST = datetime.min.replace(tzinfo=timezone.utc)


def now_iso() -> str:
    """Current UTC time, e.g. 2024-05-01T09:30:00.123Z"""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_timestamp(text) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp into an aware datetime, or None."""
    if not isinstance(text, str) or not text:
        return None
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def identity_key(entry: Entry) -> Tuple[str, str]:
    return (entry.name.lower(), entry.school.lower())


def merge(board: Board, entry: Entry) -> Board:
    """
    Record `entry` on the board, keeping only the best score per identity.

    A higher score takes over the score and timestamp but keeps the name and
    school as first written. An equal or lower score leaves the board
    untouched, so the earlier record at a given score wins.
    """
    key = identity_key(entry)
    for i, current in enumerate(board):
        if identity_key(current) != key:
            continue
        if entry.score > current.score:
            merged = list(board)
            merged[i] = replace(current, score=entry.score, timestamp=entry.timestamp)
            return merged
        return board
    return [*board, entry]


def _sort_key(entry: Entry):
    return (-entry.score, parse_timestamp(entry.timestamp) or EARLIEST)


def rank(board: Board) -> Board:
    """Score descending, then earliest timestamp first."""
    return sorted(board, key=_sort_key)


def truncate(board: Board, n: int = BOARD_SIZE) -> Board:
    return list(board[:n])


def _is_number(value) -> bool:
    return isinstance(value, Number) and not isinstance(value, bool)


def _heal_entry(record, fallback_ts: str) -> Optional[Entry]:
    if not isinstance(record, dict):
        return None
    name = record.get("name")
    school = record.get("school")
    score = record.get("score")
    if not isinstance(name, str) or not isinstance(school, str):
        return None
    if not _is_number(score):
        return None

    name = safe_text(name, MAX_NAME_LENGTH)
    school = safe_text(school, MAX_SCHOOL_LENGTH)
    if not name or not school:
        return None

    # older files stored the submission time under "ts"
    timestamp = record.get("timestamp", record.get("ts"))
    if parse_timestamp(timestamp) is None:
        timestamp = fallback_ts

    return Entry(name=name, school=school, score=safe_score(score), timestamp=timestamp)


def normalize(raw_board, now: Optional[str] = None) -> Board:
    """
    Turn whatever was stored for one mode into a valid board.

    Malformed records are dropped, fields re-sanitized, missing or unreadable
    timestamps replaced by `now`, repeated identities collapsed to their best
    record, and the result ranked and cut to size.
    """
    if not isinstance(raw_board, list):
        return []
    fallback_ts = now or now_iso()
    entries = []
    for record in raw_board:
        entry = _heal_entry(record, fallback_ts)
        if entry is not None:
            entries.append(entry)

    board = []
    for entry in rank(entries):
        board = merge(board, entry)
    return truncate(board)


def normalize_snapshot(raw, now: Optional[str] = None) -> Snapshot:
    """Normalize every mode's board; unknown modes are ignored."""
    if not isinstance(raw, dict):
        raw = {}
    now = now or now_iso()
    return {mode: normalize(raw.get(mode.value), now) for mode in MODES}
