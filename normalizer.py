"""Normalization of raw arXiv feed entries into canonical Paper records.

Everything here is total: missing or malformed fields degrade to empty values
instead of raising, so one odd entry never sinks a whole feed page.
"""

from __future__ import annotations

from collections.abc import Iterable

from models import EPOCH, Link, LinkType, Paper, RawEntry, RawLink

_ABS_SEGMENT = "/abs/"
_CODE_HOSTS: tuple[str, ...] = ("github.com", "gitlab.com")


def extract_id(raw_id: str) -> str:
    """Return the id after the /abs/ path segment, or raw_id unchanged.

    "http://arxiv.org/abs/2301.00001v1" -> "2301.00001v1"
    "http://arxiv.org/abs/cs/0001001"   -> "cs/0001001"
    """
    parts = raw_id.split(_ABS_SEGMENT)
    if len(parts) == 2:
        return parts[1]
    return raw_id


def clean_text(text: str) -> str:
    """Trim, turn newlines into spaces and collapse runs of spaces."""
    text = text.strip().replace("\n", " ")
    while "  " in text:
        text = text.replace("  ", " ")
    return text


def extract_authors(names: Iterable[str]) -> list[str]:
    return [name.strip() for name in names if name.strip()]


def extract_categories(terms: Iterable[str]) -> list[str]:
    return [term.strip() for term in terms if term.strip()]


def classify_link(href: str, rel: str = "", mime_type: str = "") -> LinkType:
    """Classify a feed link; the first matching rule wins.

    pdf (MIME type or .pdf suffix) beats abstract (rel="alternate"), which
    beats code (GitHub/GitLab host). Everything else is "other".
    """
    if "pdf" in mime_type or href.endswith(".pdf"):
        return LinkType.PDF
    if rel == "alternate":
        return LinkType.ABSTRACT
    if any(host in href for host in _CODE_HOSTS):
        return LinkType.CODE
    return LinkType.OTHER


def extract_links(raw_links: Iterable[RawLink]) -> list[Link]:
    links: list[Link] = []
    for raw in raw_links:
        if not raw.href:
            continue
        links.append(
            Link(
                url=raw.href,
                type=classify_link(raw.href, raw.rel, raw.type),
                title=raw.title,
            )
        )
    return links


def normalize_entry(entry: RawEntry) -> Paper:
    """Convert one raw feed entry into a canonical Paper."""
    return Paper(
        paper_id=extract_id(entry.entry_id),
        title=clean_text(entry.title),
        abstract=clean_text(entry.summary),
        authors=extract_authors(entry.authors),
        categories=extract_categories(entry.categories),
        updated_at=entry.updated or entry.published or EPOCH,
        published_at=entry.published,
        comments=clean_text(entry.comment),
        doi=entry.doi.strip(),
        journal_ref=entry.journal_ref.strip(),
        links=extract_links(entry.links),
    )


def normalize_entries(entries: Iterable[RawEntry]) -> list[Paper]:
    return [normalize_entry(entry) for entry in entries]
