"""Shared typed models for the pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import Any

ARXIV_ABS_URL = "https://arxiv.org/abs/"
ARXIV_PDF_URL = "https://arxiv.org/pdf/"

EPOCH = datetime(1970, 1, 1, tzinfo=UTC)


class LinkType(str, Enum):
    PDF = "pdf"
    ABSTRACT = "abstract"
    CODE = "code"
    OTHER = "other"


@dataclass(frozen=True, slots=True)
class Link:
    url: str
    type: LinkType
    title: str = ""


@dataclass(frozen=True, slots=True)
class RawLink:
    """Link attributes exactly as they appear in the feed."""

    href: str = ""
    rel: str = ""
    type: str = ""
    title: str = ""


@dataclass(frozen=True, slots=True)
class RawEntry:
    """One decoded Atom entry before normalization.

    Every text field defaults to an empty string and every timestamp to None,
    so a sparse entry still normalizes.
    """

    entry_id: str = ""
    title: str = ""
    summary: str = ""
    published: datetime | None = None
    updated: datetime | None = None
    authors: tuple[str, ...] = ()
    categories: tuple[str, ...] = ()
    links: tuple[RawLink, ...] = ()
    comment: str = ""
    journal_ref: str = ""
    doi: str = ""


@dataclass(slots=True)
class Paper:
    """Normalized paper record used across ingestion, filtering and storage."""

    paper_id: str
    title: str
    abstract: str
    updated_at: datetime
    authors: list[str] = field(default_factory=list)
    categories: list[str] = field(default_factory=list)
    published_at: datetime | None = None
    comments: str = ""
    doi: str = ""
    journal_ref: str = ""
    links: list[Link] = field(default_factory=list)
    # Populated only on papers that survive QualityFilter.filter_passed.
    score: int = 0
    score_details: list[str] = field(default_factory=list)

    @property
    def version(self) -> int:
        return paper_version(self.paper_id)

    @property
    def abs_url(self) -> str:
        return f"{ARXIV_ABS_URL}{self.paper_id}"

    @property
    def pdf_url(self) -> str:
        return f"{ARXIV_PDF_URL}{self.paper_id}.pdf"

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-serializable dict of every stored field."""
        return {
            "paper_id": self.paper_id,
            "title": self.title,
            "abstract": self.abstract,
            "authors": list(self.authors),
            "categories": list(self.categories),
            "updated_at": self.updated_at.isoformat(),
            "published_at": self.published_at.isoformat() if self.published_at else "",
            "comments": self.comments,
            "doi": self.doi,
            "journal_ref": self.journal_ref,
            "links": [
                {"url": link.url, "type": link.type.value, "title": link.title}
                for link in self.links
            ],
            "score": self.score,
            "score_details": list(self.score_details),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Paper:
        published_raw = data.get("published_at") or ""
        return cls(
            paper_id=data["paper_id"],
            title=data.get("title", ""),
            abstract=data.get("abstract", ""),
            authors=list(data.get("authors") or []),
            categories=list(data.get("categories") or []),
            updated_at=_parse_iso(data.get("updated_at")) or EPOCH,
            published_at=_parse_iso(published_raw),
            comments=data.get("comments", ""),
            doi=data.get("doi", ""),
            journal_ref=data.get("journal_ref", ""),
            links=[
                Link(
                    url=item.get("url", ""),
                    type=LinkType(item.get("type", LinkType.OTHER.value)),
                    title=item.get("title", ""),
                )
                for item in data.get("links") or []
            ],
            score=int(data.get("score") or 0),
            score_details=list(data.get("score_details") or []),
        )


@dataclass(frozen=True, slots=True)
class FilterResult:
    """Outcome of evaluating one paper against both quality levels."""

    paper: Paper
    passed_level1: bool
    score: int
    details: tuple[str, ...] = ()


def paper_version(paper_id: str) -> int:
    """Return the revision number encoded in an arXiv id, defaulting to 1.

    "2301.00001v2" -> 2, "2301.00001" -> 1, "cs/0001001v3" -> 3.
    A trailing "v" with no digits, or "v0", also yields 1.
    """
    idx = paper_id.rfind("v")
    if idx < 0:
        return 1

    digits = ""
    for char in paper_id[idx + 1:]:
        if char not in "0123456789":
            break
        digits += char

    version = int(digits) if digits else 0
    return version if version > 0 else 1


def _parse_iso(raw: Any) -> datetime | None:
    if not isinstance(raw, str) or not raw.strip():
        return None
    try:
        parsed = datetime.fromisoformat(raw.strip().replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)
    return parsed.astimezone(UTC)
