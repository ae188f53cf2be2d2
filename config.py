"""Environment-driven configuration.

Values come from the process environment; main() calls load_dotenv() first so
a local .env file can supply them.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from arxiv_feed import DEFAULT_BASE_URL, DEFAULT_TIMEOUT_SECONDS
from filters import DEFAULT_MIN_SCORE

DEFAULT_QUERY = "machine learning"
DEFAULT_FETCH_LIMIT = 10
DEFAULT_MAX_AGE_DAYS = 365
DEFAULT_STORE_PATH = "papers.csv"
DEFAULT_SYNC_LOG_PATH = "sync_log.jsonl"


@dataclass(frozen=True, slots=True)
class PipelineConfig:
    default_query: str = DEFAULT_QUERY
    default_limit: int = DEFAULT_FETCH_LIMIT
    min_score: int = DEFAULT_MIN_SCORE
    # 0 disables the recency pre-filter.
    max_age_days: int = DEFAULT_MAX_AGE_DAYS
    arxiv_api_url: str = DEFAULT_BASE_URL
    arxiv_timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    store_path: str = DEFAULT_STORE_PATH
    sync_log_path: str = DEFAULT_SYNC_LOG_PATH

    @classmethod
    def from_env(cls) -> PipelineConfig:
        return cls(
            default_query=os.getenv("DEFAULT_QUERY", DEFAULT_QUERY),
            default_limit=_env_int("DEFAULT_LIMIT", DEFAULT_FETCH_LIMIT),
            min_score=_env_int("DEFAULT_MIN_SCORE", DEFAULT_MIN_SCORE),
            max_age_days=_env_int("DEFAULT_MAX_AGE", DEFAULT_MAX_AGE_DAYS),
            arxiv_api_url=os.getenv("ARXIV_API_URL", DEFAULT_BASE_URL),
            arxiv_timeout_seconds=_env_float("ARXIV_TIMEOUT_SECONDS", DEFAULT_TIMEOUT_SECONDS),
            store_path=os.getenv("PAPER_STORE_PATH", DEFAULT_STORE_PATH),
            sync_log_path=os.getenv("SYNC_LOG_PATH", DEFAULT_SYNC_LOG_PATH),
        )


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from exc


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be a number, got {raw!r}") from exc
