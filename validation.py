"""Structural checks on normalized papers."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from models import EPOCH, Paper


@dataclass(frozen=True, slots=True)
class ValidationIssue:
    paper_id: str
    field: str
    message: str

    def __str__(self) -> str:
        return f"{self.field}: {self.message}"


@dataclass(slots=True)
class ValidationResult:
    valid: int = 0
    invalid: int = 0
    issues: list[ValidationIssue] = field(default_factory=list)


def validate_paper(paper: Paper) -> list[ValidationIssue]:
    """Return every problem found on one paper; empty list means valid."""
    issues: list[ValidationIssue] = []

    if not paper.paper_id.strip():
        issues.append(ValidationIssue(paper.paper_id, "paper_id", "cannot be empty"))
    if not paper.title.strip():
        issues.append(ValidationIssue(paper.paper_id, "title", "cannot be empty"))
    if not paper.authors:
        issues.append(ValidationIssue(paper.paper_id, "authors", "must have at least one author"))
    if paper.updated_at is None or paper.updated_at == EPOCH:
        issues.append(ValidationIssue(paper.paper_id, "updated_at", "cannot be unset"))

    return issues


def validate_papers(papers: Iterable[Paper]) -> ValidationResult:
    result = ValidationResult()
    for paper in papers:
        issues = validate_paper(paper)
        if issues:
            result.invalid += 1
            result.issues.extend(issues)
        else:
            result.valid += 1
    return result


def is_valid(paper: Paper) -> bool:
    return not validate_paper(paper)
