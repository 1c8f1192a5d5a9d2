"""
quizboard - top-3 quiz leaderboards per mode, persisted to a single JSON file.
"""

__version__ = "1.0.0"
