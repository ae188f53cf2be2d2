"""Timing report for fetch and validation against a live or stubbed source."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from datetime import UTC, datetime

from arxiv_feed import PaperSource
from models import Paper
from validation import ValidationResult, validate_papers


@dataclass(frozen=True, slots=True)
class BenchmarkResult:
    operation: str
    duration_seconds: float
    item_count: int
    validation: ValidationResult | None = None

    @property
    def items_per_second(self) -> float:
        if self.duration_seconds <= 0:
            return 0.0
        return self.item_count / self.duration_seconds

    def __str__(self) -> str:
        return (
            f"{self.operation}: {self.duration_seconds:.3f}s "
            f"({self.item_count} items, {self.items_per_second:.2f} items/sec)"
        )


@dataclass(frozen=True, slots=True)
class BenchmarkSummary:
    total_papers: int
    valid_papers: int
    invalid_papers: int
    total_duration_seconds: float


@dataclass(slots=True)
class BenchmarkReport:
    timestamp: datetime
    results: list[BenchmarkResult] = field(default_factory=list)
    summary: BenchmarkSummary | None = None


class BenchmarkRunner:
    def __init__(self, source: PaperSource) -> None:
        self.source = source

    def benchmark_fetch(self, query: str, limit: int) -> tuple[BenchmarkResult, list[Paper]]:
        """Time one fetch; feed errors propagate."""
        start = time.perf_counter()
        papers = self.source.fetch_papers(query, limit)
        duration = time.perf_counter() - start

        result = BenchmarkResult(
            operation="Fetch",
            duration_seconds=duration,
            item_count=len(papers),
            validation=validate_papers(papers),
        )
        return result, papers

    def benchmark_validation(self, papers: list[Paper]) -> BenchmarkResult:
        start = time.perf_counter()
        validation = validate_papers(papers)
        duration = time.perf_counter() - start
        return BenchmarkResult(
            operation="Validation",
            duration_seconds=duration,
            item_count=len(papers),
            validation=validation,
        )

    def generate_report(self, query: str, limit: int) -> BenchmarkReport:
        report = BenchmarkReport(timestamp=datetime.now(UTC))

        fetch_result, papers = self.benchmark_fetch(query, limit)
        report.results.append(fetch_result)
        report.results.append(self.benchmark_validation(papers))

        validation = fetch_result.validation or ValidationResult()
        report.summary = BenchmarkSummary(
            total_papers=len(papers),
            valid_papers=validation.valid,
            invalid_papers=validation.invalid,
            total_duration_seconds=sum(r.duration_seconds for r in report.results),
        )
        return report
