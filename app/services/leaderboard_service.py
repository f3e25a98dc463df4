import asyncio
import time
from typing import Callable, List, Optional

from app.core.async_utils import retry_in_thread, run_in_thread
from app.core.config import Settings
from app.core.errors import StoreUnavailableError
from app.models import LeaderboardEntry, ScoreSubmission
from app.repositories.kv_store import KeyValueStore
from app.repositories.leaderboard_repository import LeaderboardRepository

LEADERBOARD_SIZE = 10


def merge_entry(
    current: Optional[List[LeaderboardEntry]],
    entry: LeaderboardEntry,
    limit: int = LEADERBOARD_SIZE,
) -> List[LeaderboardEntry]:
    """Merge one submission into a ranked leaderboard and return the new list.

    An existing row with the same name is replaced only by a strictly higher
    score; otherwise the submission is appended. The result is ordered by
    score, then timestamp, both descending, and cut to ``limit`` rows.
    ``current`` is not modified.
    """
    rows = list(current) if isinstance(current, list) else []

    for idx, row in enumerate(rows):
        if row.name == entry.name:
            if entry.score > row.score:
                rows[idx] = entry
            break
    else:
        rows.append(entry)

    rows.sort(key=lambda row: (row.score, row.timestamp), reverse=True)
    return rows[:max(1, int(limit))]


def _now_ms() -> int:
    return int(time.time() * 1000)


class LeaderboardService:
    """Fetch, merge and persist the global leaderboard.

    There is no lock around fetch-merge-persist. Two submissions that fetch
    the same state concurrently both persist, and the later write wins.
    """

    def __init__(
        self,
        store: KeyValueStore,
        *,
        key: str = "global_leaderboard",
        limit: int = LEADERBOARD_SIZE,
        retry_attempts: int = 3,
        retry_delay_seconds: float = 1.0,
        clock: Callable[[], int] = _now_ms,
        sleep=asyncio.sleep,
    ):
        self.repo = LeaderboardRepository(store, key=key)
        self.limit = limit
        self.retry_attempts = retry_attempts
        self.retry_delay_seconds = retry_delay_seconds
        self._clock = clock
        self._sleep = sleep

    @classmethod
    def from_settings(cls, store: KeyValueStore, settings: Settings) -> "LeaderboardService":
        return cls(
            store,
            key=settings.leaderboard_key,
            limit=settings.leaderboard_size,
            retry_attempts=settings.store_retry_attempts,
            retry_delay_seconds=settings.store_retry_delay_seconds,
        )

    async def get_leaderboard(self) -> List[LeaderboardEntry]:
        entries = await run_in_thread(self.repo.fetch)
        if entries is None:
            # 记录缺失或损坏时写回空榜
            await run_in_thread(self.repo.save, [])
            return []
        return entries

    async def submit_score(self, submission: ScoreSubmission) -> List[LeaderboardEntry]:
        fetched = await retry_in_thread(
            self.repo.fetch,
            attempts=self.retry_attempts,
            delay_seconds=self.retry_delay_seconds,
            label="leaderboard fetch",
            sleep=self._sleep,
        )
        if not fetched.ok:
            raise StoreUnavailableError("leaderboard fetch", fetched.attempts) from fetched.error

        entry = LeaderboardEntry(
            name=submission.name.strip(),
            score=submission.score,
            timestamp=self._clock(),
        )
        updated = merge_entry(fetched.value, entry, self.limit)

        saved = await retry_in_thread(
            self.repo.save,
            updated,
            attempts=self.retry_attempts,
            delay_seconds=self.retry_delay_seconds,
            label="leaderboard save",
            sleep=self._sleep,
        )
        if not saved.ok:
            raise StoreUnavailableError("leaderboard save", saved.attempts) from saved.error
        return updated
