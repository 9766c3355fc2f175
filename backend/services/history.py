from typing import List, Optional

from starlette.concurrency import run_in_threadpool

from config import Settings
from db.history_store import HistoryStore
from models.records import AnalysisRecord, TrendingClaim
from .trending import aggregate_trending


class HistoryService:
    """Async facade over the blocking HistoryStore, plus the trending query."""

    def __init__(self, store: HistoryStore, settings: Settings):
        self.store = store
        self.settings = settings

    async def list_recent(self, owner_id: Optional[str] = None, limit: Optional[int] = None) -> List[AnalysisRecord]:
        if limit is None:
            limit = self.settings.HISTORY_LIMIT
        limit = max(1, min(limit, self.settings.HISTORY_MAX_LIMIT))
        return await run_in_threadpool(self.store.list_recent, owner_id=owner_id, limit=limit)

    async def get(self, record_id: str, owner_id: Optional[str] = None) -> AnalysisRecord:
        return await run_in_threadpool(self.store.get, record_id, owner_id=owner_id)

    async def delete(self, record_id: str, owner_id: Optional[str] = None) -> str:
        return await run_in_threadpool(self.store.delete_by_id, record_id, owner_id=owner_id)

    async def trending(self) -> List[TrendingClaim]:
        # Trending is global in every deployment mode.
        rows = await run_in_threadpool(self.store.scan_for_trending)
        return aggregate_trending(
            rows,
            limit=self.settings.TRENDING_LIMIT,
            min_count=self.settings.TRENDING_MIN_COUNT,
        )
