from typing import List, Optional

from pydantic import ValidationError

from app.logger import logger
from app.models import LeaderboardEntry
from app.repositories.kv_store import KeyValueStore


class LeaderboardRepository:
    """Reads and rewrites the single leaderboard record in a key-value store."""

    def __init__(self, store: KeyValueStore, key: str = "global_leaderboard"):
        self.store = store
        self.key = key

    def fetch(self) -> Optional[List[LeaderboardEntry]]:
        """Return the stored entries, or ``None`` when the record is absent or not a list."""
        raw = self.store.get(self.key)
        if raw is None:
            return None
        if not isinstance(raw, list):
            logger.warning(
                f"Leaderboard record {self.key} is {type(raw).__name__}, not a list; treating as empty"
            )
            return None

        entries: List[LeaderboardEntry] = []
        for idx, item in enumerate(raw):
            try:
                entries.append(LeaderboardEntry.model_validate(item))
            except ValidationError:
                logger.warning(f"Dropping malformed leaderboard row #{idx} in {self.key}: {item!r}")
        return entries

    def save(self, entries: List[LeaderboardEntry]) -> None:
        self.store.set(self.key, [entry.model_dump() for entry in entries])

    def ensure_initialized(self) -> bool:
        """Write an empty list when the record is missing. Returns True if it wrote."""
        if self.store.get(self.key) is not None:
            return False
        self.store.set(self.key, [])
        return True
