"""Query layer over the paper store: list, get, search, stats and sync."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from arxiv_feed import PaperSource
from config import DEFAULT_MAX_AGE_DAYS, DEFAULT_QUERY
from filters import DEFAULT_MIN_SCORE, QualityFilter, filter_by_age
from models import Paper
from paper_store import PaperStore, SyncLog

LOGGER = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100


@dataclass(frozen=True, slots=True)
class SyncSummary:
    query: str
    fetched: int
    passed: int
    new: int
    updated: int


def _page_size(limit: int) -> int:
    if limit <= 0 or limit > MAX_PAGE_SIZE:
        return DEFAULT_PAGE_SIZE
    return limit


class PaperService:
    def __init__(
        self,
        store: PaperStore,
        source: PaperSource,
        sync_log: SyncLog | None = None,
        min_score: int = DEFAULT_MIN_SCORE,
        max_age_days: int = DEFAULT_MAX_AGE_DAYS,
    ) -> None:
        self.store = store
        self.source = source
        self.sync_log = sync_log
        self.quality_filter = QualityFilter(min_score=min_score)
        self.max_age_days = max_age_days

    def list_papers(self, limit: int = DEFAULT_PAGE_SIZE, offset: int = 0) -> list[Paper]:
        return self.store.list(limit=_page_size(limit), offset=max(offset, 0))

    def get_paper(self, paper_id: str) -> Paper:
        """Raises NotFoundError when the id is not stored."""
        return self.store.get(paper_id)

    def search(self, query: str, limit: int = DEFAULT_PAGE_SIZE) -> list[Paper]:
        if not query.strip():
            raise ValueError("search query must not be empty")
        return self.store.search(query.strip(), limit=_page_size(limit))

    def stats(self) -> dict[str, Any]:
        latest = self.store.latest_update_time()
        last_sync = self.sync_log.latest_sync() if self.sync_log else None
        return {
            "total_papers": self.store.count(),
            "last_update": latest.isoformat() if latest else None,
            "last_sync": last_sync.completed_at if last_sync else None,
            "storage": str(self.store.path),
            "data_source": "arXiv API",
        }

    def sync(self, query: str = DEFAULT_QUERY, limit: int = DEFAULT_PAGE_SIZE) -> SyncSummary:
        """Fetch, age-filter, quality-filter and upsert one query's papers.

        Any failure after the run starts is recorded in the sync log and
        re-raised unchanged.
        """
        query = query.strip() or DEFAULT_QUERY
        limit = _page_size(limit)
        sync_id = self.sync_log.start_sync(query) if self.sync_log else None

        try:
            papers = self.source.fetch_papers(query, limit)
            recent = filter_by_age(papers, self.max_age_days)
            passed = self.quality_filter.filter_passed(recent)
            new_count, updated_count = self.store.save_batch_with_stats(passed)
        except Exception as exc:
            LOGGER.error("Sync failed for query=%r: %s", query, exc)
            if sync_id is not None:
                self.sync_log.fail_sync(sync_id, str(exc))
            raise

        if sync_id is not None:
            self.sync_log.complete_sync(sync_id, len(papers), new_count, updated_count)

        summary = SyncSummary(
            query=query,
            fetched=len(papers),
            passed=len(passed),
            new=new_count,
            updated=updated_count,
        )
        LOGGER.info("Sync complete: %s", summary)
        return summary
