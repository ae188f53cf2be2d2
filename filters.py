"""Two-level quality filter for normalized papers (no LLM calls).

Level 1 is a hard gate: at least one strong signal (acceptance language, DOI,
journal reference, or three evaluation keywords) AND at least two evaluation
keywords in the abstract. Level 2 is an additive 0-100 score with fixed
weights. Both are pure functions of the paper, so papers can be evaluated in
any order or in parallel as long as results are collected back in input order.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass, replace
from datetime import UTC, datetime, timedelta

from models import FilterResult, LinkType, Paper

LOGGER = logging.getLogger(__name__)

DEFAULT_MIN_SCORE = 60

# Weights and keyword lists are hand-tuned; keep them as data.
EVALUATION_KEYWORDS: tuple[str, ...] = (
    "evaluation",
    "experiment",
    "benchmark",
    "ablation",
    "baseline",
    "dataset",
    "metric",
)
ABLATION_KEYWORDS: tuple[str, ...] = ("ablation", "baseline")
DATASET_KEYWORDS: tuple[str, ...] = ("dataset", "benchmark")
LIMITATION_KEYWORDS: tuple[str, ...] = ("limitation", "assumption", "constraint")
HYPE_KEYWORDS: tuple[str, ...] = ("revolutionary", "groundbreaking", "first ever", "first-ever")
FRAMEWORK_KEYWORDS: tuple[str, ...] = ("framework", "perspective")

_ACCEPTED_PATTERN = re.compile(r"(accepted|to appear|camera[- ]?ready|proceedings)", re.IGNORECASE)
_CODE_REPO_PATTERN = re.compile(r"https?://(github\.com|gitlab\.com)/\S+")

WEIGHT_ACCEPTED = 30
WEIGHT_DOI_OR_JOURNAL = 20
WEIGHT_STRONG_EVIDENCE = 15
WEIGHT_ABLATION = 10
WEIGHT_DATASET = 10
WEIGHT_CODE_LINK = 10
WEIGHT_LIMITATIONS = 5
WEIGHT_MULTI_VERSION = 5
PENALTY_HYPE = -10
PENALTY_UNVALIDATED_FRAMEWORK = -25

MIN_EVAL_KEYWORDS = 2
STRONG_EVAL_KEYWORDS = 3


@dataclass(frozen=True, slots=True)
class _Signals:
    """Per-paper facts shared by both levels; fields lower-cased once."""

    title: str
    abstract: str
    eval_count: int
    accepted: bool
    has_doi: bool
    has_journal_ref: bool


def _collect_signals(paper: Paper) -> _Signals:
    abstract = paper.abstract.lower()
    return _Signals(
        title=paper.title.lower(),
        abstract=abstract,
        eval_count=_count_lowered(abstract, EVALUATION_KEYWORDS),
        accepted=has_accepted_signal(paper.comments),
        has_doi=paper.doi != "",
        has_journal_ref=paper.journal_ref != "",
    )


def _count_lowered(lowered: str, keywords: Iterable[str]) -> int:
    return sum(1 for kw in keywords if kw in lowered)


def _any_lowered(lowered: str, keywords: Iterable[str]) -> bool:
    return any(kw in lowered for kw in keywords)


def count_eval_keywords(text: str) -> int:
    """Number of distinct evaluation keywords present in text (case-insensitive)."""
    return _count_lowered(text.lower(), EVALUATION_KEYWORDS)


def has_accepted_signal(comments: str) -> bool:
    return _ACCEPTED_PATTERN.search(comments) is not None


def has_code_link(paper: Paper) -> bool:
    """True if a GitHub/GitLab URL appears in the abstract, comments or links."""
    if _CODE_REPO_PATTERN.search(paper.abstract):
        return True
    if _CODE_REPO_PATTERN.search(paper.comments):
        return True
    for link in paper.links:
        if link.type == LinkType.CODE:
            return True
        if _CODE_REPO_PATTERN.search(link.url):
            return True
    return False


def _passes_level1(signals: _Signals) -> bool:
    has_strong_signal = (
        signals.accepted
        or signals.has_doi
        or signals.has_journal_ref
        or signals.eval_count >= STRONG_EVAL_KEYWORDS
    )
    # A strong signal alone is not enough without evaluation wording.
    return has_strong_signal and signals.eval_count >= MIN_EVAL_KEYWORDS


def passes_level1(paper: Paper) -> bool:
    """Level 1 hard gate."""
    return _passes_level1(_collect_signals(paper))


def _score(paper: Paper, signals: _Signals) -> tuple[int, list[str]]:
    score = 0
    details: list[str] = []

    def add(delta: int, label: str) -> None:
        nonlocal score
        score += delta
        details.append(f"{delta:+d} {label}")

    if signals.accepted:
        add(WEIGHT_ACCEPTED, "acceptance signal")
    if signals.has_doi or signals.has_journal_ref:
        add(WEIGHT_DOI_OR_JOURNAL, "DOI/journal reference")
    if signals.eval_count >= STRONG_EVAL_KEYWORDS:
        add(WEIGHT_STRONG_EVIDENCE, "strong empirical evidence")
    if _any_lowered(signals.abstract, ABLATION_KEYWORDS):
        add(WEIGHT_ABLATION, "ablation/baseline study")
    if _any_lowered(signals.abstract, DATASET_KEYWORDS):
        add(WEIGHT_DATASET, "dataset/benchmark")
    if has_code_link(paper):
        add(WEIGHT_CODE_LINK, "code link present")
    if _any_lowered(signals.abstract, LIMITATION_KEYWORDS):
        add(WEIGHT_LIMITATIONS, "limitation discussion")
    if paper.version >= 2:
        add(WEIGHT_MULTI_VERSION, "multi-version iteration")

    if _any_lowered(signals.abstract, HYPE_KEYWORDS) or _any_lowered(signals.title, HYPE_KEYWORDS):
        add(PENALTY_HYPE, "hype language")
    # Abstract only; the title is deliberately not consulted here.
    if _any_lowered(signals.abstract, FRAMEWORK_KEYWORDS) and signals.eval_count == 0:
        add(PENALTY_UNVALIDATED_FRAMEWORK, "unvalidated framework claim")

    return max(0, min(100, score)), details


def score_paper(paper: Paper) -> tuple[int, list[str]]:
    """Level 2 score clamped to [0, 100], plus the ordered contribution list."""
    return _score(paper, _collect_signals(paper))


class QualityFilter:
    """Applies both quality levels with a configurable minimum score."""

    def __init__(self, min_score: int = DEFAULT_MIN_SCORE) -> None:
        self.min_score = min_score

    def evaluate(self, paper: Paper) -> FilterResult:
        signals = _collect_signals(paper)
        score, details = _score(paper, signals)
        return FilterResult(
            paper=paper,
            passed_level1=_passes_level1(signals),
            score=score,
            details=tuple(details),
        )

    def apply(self, papers: Iterable[Paper]) -> list[FilterResult]:
        return [self.evaluate(paper) for paper in papers]

    def passed(self, result: FilterResult) -> bool:
        return result.passed_level1 and result.score >= self.min_score

    def filter_passed(self, papers: Iterable[Paper]) -> list[Paper]:
        """Return papers passing both levels, in input order, with score attached.

        Input papers are not modified; each survivor is a copy.
        """
        survivors: list[Paper] = []
        total = 0
        for result in self.apply(papers):
            total += 1
            if self.passed(result):
                survivors.append(
                    replace(result.paper, score=result.score, score_details=list(result.details))
                )

        LOGGER.info(
            "Quality filter: total=%s passed=%s min_score=%s",
            total,
            len(survivors),
            self.min_score,
        )
        return survivors


def filter_by_age(
    papers: Iterable[Paper],
    max_age_days: int,
    now: datetime | None = None,
) -> list[Paper]:
    """Keep papers updated within max_age_days; 0 or less means no limit."""
    papers = list(papers)
    if max_age_days <= 0:
        return papers

    cutoff = (now or datetime.now(UTC)) - timedelta(days=max_age_days)
    recent = [paper for paper in papers if paper.updated_at > cutoff]
    LOGGER.info(
        "Age filter: %s/%s papers within %s days",
        len(recent),
        len(papers),
        max_age_days,
    )
    return recent
