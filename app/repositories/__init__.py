from .kv_store import KeyValueStore, MemoryStore, ReplitDatabase, build_store
from .leaderboard_repository import LeaderboardRepository

__all__ = [
    "KeyValueStore",
    "MemoryStore",
    "ReplitDatabase",
    "build_store",
    "LeaderboardRepository",
]
