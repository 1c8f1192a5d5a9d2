"""
Quiz leaderboard server - Flask app.

Endpoints:
    GET  /health       -> { ok, ts }
    GET  /leaderboard  -> { humanities: [...], science: [...], mixed: [...] } (each max 3)
    POST /submit       -> body: { name, school, mode, score }
"""

import logging
import os

from flask import Blueprint, Flask, current_app, jsonify, request
from flask_cors import CORS

from quizboard import config
from quizboard.errors import StorageError, ValidationError
from quizboard.leaderboard import BoardStore, get_leaderboard, snapshot_to_dict, submit
from quizboard.ranking import now_iso


logger = logging.getLogger(__name__)

bp = Blueprint("leaderboard", __name__)


def get_store() -> BoardStore:
    return current_app.extensions["board_store"]


@bp.route('/health', methods=['GET'])
def health():
    return jsonify({"ok": True, "ts": now_iso()})


@bp.route('/leaderboard', methods=['GET'])
def leaderboard():
    """Get every mode's current top 3."""
    return jsonify(snapshot_to_dict(get_leaderboard(get_store())))


@bp.route('/submit', methods=['POST'])
def submit_score():
    """Submit a final quiz score."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        data = {}

    try:
        board, snapshot = submit(
            get_store(),
            data.get('name'),
            data.get('school'),
            data.get('mode'),
            data.get('score'),
        )
    except ValidationError as e:
        return jsonify({"error": e.message}), 400
    except StorageError:
        return jsonify({"error": "storage failure"}), 500

    return jsonify({
        "ok": True,
        "board": [entry.to_dict() for entry in board],
        "all": snapshot_to_dict(snapshot),
    })


def request_too_large(e):
    return jsonify({"error": "request too large"}), 413


def create_app(db_file=None) -> Flask:
    """Build the app, storing boards in `db_file` (defaults to config.DB_FILE)."""
    app = Flask(__name__)
    app.config["MAX_CONTENT_LENGTH"] = config.MAX_CONTENT_LENGTH
    app.config["DB_FILE"] = str(db_file or config.DB_FILE)
    app.json.sort_keys = False

    CORS(app)
    app.extensions["board_store"] = BoardStore(app.config["DB_FILE"])
    app.register_blueprint(bp)
    app.register_error_handler(413, request_too_large)
    return app


def main():
    from waitress import serve

    logging.basicConfig(
        level=config.LOG_LEVEL,
        format="[quiz-server] %(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = create_app()
    logger.info("Process ID: %s", os.getpid())
    logger.info("listening on http://%s:%s", config.HOST, config.PORT)
    logger.info("DB_FILE=%s", app.config["DB_FILE"])
    serve(app, host=config.HOST, port=config.PORT, threads=config.THREADS)


if __name__ == '__main__':
    main()
