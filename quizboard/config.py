"""
Server settings, read from the environment at import.

Env:
    HOST=0.0.0.0
    PORT=3000
    DB_FILE=<package dir>/leaderboard.json
    THREADS=4
    LOG_LEVEL=INFO
"""

import os
import sys
from pathlib import Path


# Determine base path (works for both dev and PyInstaller exe)
if getattr(sys, 'frozen', False):
    BASE_DIR = Path(sys.executable).parent
else:
    BASE_DIR = Path(__file__).parent

HOST = os.environ.get("HOST", "0.0.0.0")
PORT = int(os.environ.get("PORT", "3000"))
DB_FILE = Path(os.environ.get("DB_FILE") or BASE_DIR / "leaderboard.json")
THREADS = int(os.environ.get("THREADS", "4"))
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()

# Request bodies larger than this are refused
MAX_CONTENT_LENGTH = 64 * 1024
