import json

import pytest

from quizboard.app import create_app
from quizboard.leaderboard import BoardStore
from quizboard.models import Entry


@pytest.fixture
def db_file(tmp_path):
    return tmp_path / "leaderboard.json"


@pytest.fixture
def store(db_file):
    return BoardStore(db_file)


@pytest.fixture
def client(db_file):
    app = create_app(db_file)
    app.config["TESTING"] = True
    return app.test_client()


@pytest.fixture
def write_raw(db_file):
    """Write arbitrary JSON (or text) to the leaderboard file."""
    def _write(data):
        text = data if isinstance(data, str) else json.dumps(data)
        db_file.write_text(text, encoding="utf-8")
    return _write


@pytest.fixture
def make_entry():
    def _make(name="Ann", school="X", score=10, timestamp="2024-01-01T00:00:00.000Z"):
        return Entry(name=name, school=school, score=score, timestamp=timestamp)
    return _make
