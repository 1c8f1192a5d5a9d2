"""
Leaderboard module - persists the per-mode top 3 boards to a JSON file.
"""

import json
import logging
import os
import tempfile
import threading
from pathlib import Path
from typing import Tuple

from quizboard.errors import StorageError, ValidationError, ValidationKind
from quizboard.models import MODES, Board, Entry, Mode, Snapshot
from quizboard.ranking import merge, normalize_snapshot, now_iso, rank, truncate
from quizboard.sanitize import (
    MAX_NAME_LENGTH,
    MAX_SCHOOL_LENGTH,
    parse_mode,
    safe_score,
    safe_text,
)


logger = logging.getLogger(__name__)


def snapshot_to_dict(snapshot: Snapshot) -> dict:
    """Plain JSON-ready form, modes and fields in a fixed order."""
    return {
        mode.value: [entry.to_dict() for entry in snapshot.get(mode, [])]
        for mode in MODES
    }


class BoardStore:
    """
    Reads and rewrites the whole leaderboard file.

    Loading never fails: an unreadable file is an empty leaderboard.
    Saving replaces the file in one step and raises StorageError on failure.
    """

    def __init__(self, path):
        self.path = Path(path)
        self._lock = threading.Lock()

    def load(self) -> Snapshot:
        """Load all boards, healing anything malformed on disk."""
        if not self.path.exists():
            return normalize_snapshot({})

        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (ValueError, RecursionError, OSError) as e:
            logger.warning("Could not read %s, starting empty: %s", self.path, e)
            data = {}

        return normalize_snapshot(data)

    def save(self, snapshot: Snapshot) -> None:
        """Write all boards, replacing the previous file contents."""
        tmp_path = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(
                dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
            )
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                json.dump(snapshot_to_dict(snapshot), f, indent=2, ensure_ascii=False)
            os.chmod(tmp_path, 0o644)
            os.replace(tmp_path, self.path)
        except OSError as e:
            logger.error("Error saving leaderboard to %s: %s", self.path, e)
            if tmp_path is not None and os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise StorageError(f"could not write {self.path}") from e

    def update(self, mode: Mode, entry: Entry) -> Snapshot:
        """
        Merge one entry into a mode's board and persist the result.
        Concurrent updates through this store are applied one at a time.
        """
        with self._lock:
            snapshot = self.load()
            board = merge(snapshot[mode], entry)
            snapshot[mode] = truncate(rank(board))
            self.save(snapshot)
        return snapshot


def get_leaderboard(store: BoardStore) -> Snapshot:
    """Get the current boards for every mode."""
    return store.load()


def submit(store: BoardStore, raw_name, raw_school, raw_mode, raw_score) -> Tuple[Board, Snapshot]:
    """
    Submit a score.
    Returns the updated board for the mode plus every board.
    Raises ValidationError before any file access if the input is rejected.
    """
    name = safe_text(raw_name, MAX_NAME_LENGTH)
    school = safe_text(raw_school, MAX_SCHOOL_LENGTH)
    mode = parse_mode(raw_mode)
    score = safe_score(raw_score)

    if not name or not school:
        raise ValidationError(ValidationKind.MISSING_IDENTITY)
    if mode is None:
        raise ValidationError(ValidationKind.INVALID_MODE)

    entry = Entry(name=name, school=school, score=score, timestamp=now_iso())
    snapshot = store.update(mode, entry)
    logger.info("Recorded %s / %s: %d in %s", name, school, score, mode.value)
    return snapshot[mode], snapshot
