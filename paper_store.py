"""CSV-backed paper store and JSON-lines sync log."""

from __future__ import annotations

import csv
import json
import logging
from collections.abc import Iterable
from dataclasses import asdict, dataclass
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from errors import NotFoundError
from models import Paper

LOGGER = logging.getLogger(__name__)

CSV_COLUMNS = [
    "paper_id",
    "title",
    "abstract",
    "authors",        # JSON list
    "categories",     # JSON list
    "updated_at",
    "published_at",
    "comments",
    "doi",
    "journal_ref",
    "links",          # JSON list of {url, type, title}
    "score",
    "score_details",  # JSON list
    "created_at",
]
_JSON_COLUMNS = frozenset({"authors", "categories", "links", "score_details"})


class PaperStore:
    """Idempotent upsert store keyed by paper_id.

    The whole file is rewritten on every save; fine for the few thousand rows
    a daily arXiv sweep produces.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def save(self, paper: Paper) -> None:
        self.save_batch([paper])

    def save_batch(self, papers: Iterable[Paper]) -> None:
        self.save_batch_with_stats(papers)

    def save_batch_with_stats(self, papers: Iterable[Paper]) -> tuple[int, int]:
        """Upsert papers and return (new_count, updated_count)."""
        rows = self._read_rows()
        now = datetime.now(UTC).isoformat()
        new_count = 0
        updated_count = 0

        for paper in papers:
            existing = rows.get(paper.paper_id)
            row = _paper_to_row(paper)
            if existing is None:
                row["created_at"] = now
                new_count += 1
            else:
                row["created_at"] = existing.get("created_at") or now
                updated_count += 1
            rows[paper.paper_id] = row

        if new_count or updated_count:
            self._write_rows(rows)
        LOGGER.info(
            "Upserted papers into %s: new=%s updated=%s",
            self.path,
            new_count,
            updated_count,
        )
        return new_count, updated_count

    def get(self, paper_id: str) -> Paper:
        row = self._read_rows().get(paper_id)
        if row is None:
            raise NotFoundError(paper_id)
        return _row_to_paper(row)

    def exists(self, paper_id: str) -> bool:
        return paper_id in self._read_rows()

    def delete(self, paper_id: str) -> None:
        rows = self._read_rows()
        if paper_id not in rows:
            raise NotFoundError(paper_id)
        del rows[paper_id]
        self._write_rows(rows)
        LOGGER.info("Deleted paper_id=%s from %s", paper_id, self.path)

    def list(self, limit: int = 20, offset: int = 0) -> list[Paper]:
        """Papers ordered by updated_at, newest first."""
        papers = self._sorted_papers()
        return papers[offset:offset + limit]

    def search(self, query: str, limit: int = 20) -> list[Paper]:
        """Case-insensitive substring match on title or abstract, newest first."""
        needle = query.lower()
        matches = [
            p for p in self._sorted_papers()
            if needle in p.title.lower() or needle in p.abstract.lower()
        ]
        return matches[:limit]

    def count(self) -> int:
        return len(self._read_rows())

    def latest_update_time(self) -> datetime | None:
        papers = self._sorted_papers()
        return papers[0].updated_at if papers else None

    def _sorted_papers(self) -> list[Paper]:
        papers = [_row_to_paper(row) for row in self._read_rows().values()]
        papers.sort(key=lambda p: p.updated_at, reverse=True)
        return papers

    def _read_rows(self) -> dict[str, dict[str, str]]:
        if not self.path.exists():
            return {}
        with self.path.open(newline="", encoding="utf-8") as fh:
            return {row["paper_id"]: row for row in csv.DictReader(fh) if row.get("paper_id")}

    def _write_rows(self, rows: dict[str, dict[str, str]]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        with tmp_path.open("w", newline="", encoding="utf-8") as fh:
            writer = csv.DictWriter(fh, fieldnames=CSV_COLUMNS)
            writer.writeheader()
            writer.writerows(rows.values())
        tmp_path.replace(self.path)


def _paper_to_row(paper: Paper) -> dict[str, str]:
    data = paper.to_dict()
    row: dict[str, str] = {}
    for column in CSV_COLUMNS:
        if column == "created_at":
            continue
        value = data[column]
        row[column] = json.dumps(value) if column in _JSON_COLUMNS else str(value)
    return row


def _row_to_paper(row: dict[str, str]) -> Paper:
    data: dict[str, Any] = dict(row)
    for column in _JSON_COLUMNS:
        data[column] = json.loads(row.get(column) or "[]")
    return Paper.from_dict(data)


@dataclass(slots=True)
class SyncRecord:
    sync_id: int
    query: str
    started_at: str
    status: str = "running"
    papers_fetched: int = 0
    papers_new: int = 0
    papers_updated: int = 0
    completed_at: str = ""
    error: str = ""


class SyncLog:
    """Append-only JSON-lines log of sync runs; the last line per id wins."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def start_sync(self, query: str) -> int:
        records = self._load()
        sync_id = max(records, default=0) + 1
        self._append(SyncRecord(sync_id=sync_id, query=query, started_at=_now()))
        return sync_id

    def complete_sync(self, sync_id: int, fetched: int, new_count: int, updated_count: int) -> None:
        record = self._require(sync_id)
        record.status = "completed"
        record.papers_fetched = fetched
        record.papers_new = new_count
        record.papers_updated = updated_count
        record.completed_at = _now()
        self._append(record)

    def fail_sync(self, sync_id: int, error: str) -> None:
        record = self._require(sync_id)
        record.status = "failed"
        record.error = error
        record.completed_at = _now()
        self._append(record)

    def latest_sync(self) -> SyncRecord | None:
        completed = [r for r in self._load().values() if r.status == "completed"]
        if not completed:
            return None
        return max(completed, key=lambda r: r.completed_at)

    def history(self, limit: int = 10) -> list[SyncRecord]:
        records = sorted(self._load().values(), key=lambda r: r.started_at, reverse=True)
        return records[:limit]

    def _require(self, sync_id: int) -> SyncRecord:
        record = self._load().get(sync_id)
        if record is None:
            raise KeyError(f"unknown sync id: {sync_id}")
        return record

    def _load(self) -> dict[int, SyncRecord]:
        if not self.path.exists():
            return {}
        records: dict[int, SyncRecord] = {}
        with self.path.open(encoding="utf-8") as fh:
            for line in fh:
                if not line.strip():
                    continue
                record = SyncRecord(**json.loads(line))
                records[record.sync_id] = record
        return records

    def _append(self, record: SyncRecord) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("a", encoding="utf-8") as fh:
            fh.write(json.dumps(asdict(record)) + "\n")


def _now() -> str:
    return datetime.now(UTC).isoformat()
