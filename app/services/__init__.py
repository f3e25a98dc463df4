from .leaderboard_service import LeaderboardService, merge_entry

__all__ = [
    "LeaderboardService",
    "merge_entry",
]
