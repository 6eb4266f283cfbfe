"""
Leaderboard module.

Persists completed-game scores and the logged-in player.
"""
from .scores import Score, ScoreStore, format_time
from .session import SessionStore, InvalidUsernameError
from .storage import KeyValueStore, MemoryStore, JsonFileStore, StorageError

__all__ = [
    "Score",
    "ScoreStore",
    "format_time",
    "SessionStore",
    "InvalidUsernameError",
    "KeyValueStore",
    "MemoryStore",
    "JsonFileStore",
    "StorageError",
]
