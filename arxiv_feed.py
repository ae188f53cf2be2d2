"""arXiv Atom API ingestion helpers."""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from datetime import UTC, datetime
from typing import Any, Protocol
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

import requests

from errors import DecodeError, FetchError, UnexpectedStatusError
from models import Paper, RawEntry, RawLink
from normalizer import normalize_entries

DEFAULT_BASE_URL = "http://export.arxiv.org/api/query"
DEFAULT_TIMEOUT_SECONDS = 30
DEFAULT_LIMIT = 10

_ATOM_NS = "http://www.w3.org/2005/Atom"
_ARXIV_NS = "http://arxiv.org/schemas/atom"
_NS = {"atom": _ATOM_NS, "arxiv": _ARXIV_NS}

LOGGER = logging.getLogger(__name__)


class PaperSource(Protocol):
    """Anything that can turn a search query into normalized papers."""

    def fetch_papers(self, query: str, limit: int) -> list[Paper]: ...


def build_query_params(query: str, limit: int) -> dict[str, Any]:
    if limit <= 0:
        limit = DEFAULT_LIMIT
    return {
        "search_query": f"all:{query}",
        "start": 0,
        "max_results": limit,
    }


def build_query_url(base_url: str, query: str, limit: int) -> str:
    """Return base_url with the search parameters merged into its query string."""
    parts = urlsplit(base_url)
    params = dict(parse_qsl(parts.query))
    params.update({k: str(v) for k, v in build_query_params(query, limit).items()})
    return urlunsplit(parts._replace(query=urlencode(params)))


class ArxivClient:
    """Single-request client for the arXiv query API.

    One GET per call, no retries; callers own retry and cancellation policy.
    """

    def __init__(
        self,
        session: requests.Session | None = None,
        base_url: str | None = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        self._session = session
        self.base_url = base_url or DEFAULT_BASE_URL
        self.timeout = timeout

    def fetch_entries(self, query: str, limit: int = DEFAULT_LIMIT) -> list[RawEntry]:
        """Fetch and decode raw feed entries.

        Raises:
            FetchError: transport failure (DNS, connection, timeout).
            UnexpectedStatusError: any status other than 200.
            DecodeError: body is not an Atom feed.
        """
        params = build_query_params(query, limit)
        url = build_query_url(self.base_url, query, limit)
        getter = self._session.get if self._session is not None else requests.get

        try:
            response = getter(url, timeout=self.timeout)
        except requests.RequestException as exc:
            raise FetchError(f"arXiv request failed: {exc}") from exc

        if response.status_code != 200:
            raise UnexpectedStatusError(response.status_code)

        entries = parse_feed(response.content)
        LOGGER.info(
            "arXiv fetch: query=%r limit=%s returned=%s",
            query,
            params["max_results"],
            len(entries),
        )
        return entries

    def fetch_papers(self, query: str, limit: int = DEFAULT_LIMIT) -> list[Paper]:
        return normalize_entries(self.fetch_entries(query, limit))


def parse_feed(body: str | bytes) -> list[RawEntry]:
    """Decode an Atom feed document into raw entries."""
    try:
        root = ET.fromstring(body)
    except ET.ParseError as exc:
        raise DecodeError(f"decode XML: {exc}") from exc

    if root.tag != f"{{{_ATOM_NS}}}feed":
        raise DecodeError(f"decode XML: unexpected root element {root.tag!r}")

    return [_parse_entry(node) for node in root.findall("atom:entry", _NS)]


def _parse_entry(node: ET.Element) -> RawEntry:
    return RawEntry(
        entry_id=_text(node, "atom:id"),
        title=_text(node, "atom:title"),
        summary=_text(node, "atom:summary"),
        published=_parse_timestamp(_text(node, "atom:published")),
        updated=_parse_timestamp(_text(node, "atom:updated")),
        authors=tuple(
            author.findtext("atom:name", default="", namespaces=_NS)
            for author in node.findall("atom:author", _NS)
        ),
        categories=tuple(
            category.get("term", "") for category in node.findall("atom:category", _NS)
        ),
        links=tuple(
            RawLink(
                href=link.get("href", ""),
                rel=link.get("rel", ""),
                type=link.get("type", ""),
                title=link.get("title", ""),
            )
            for link in node.findall("atom:link", _NS)
        ),
        comment=_text(node, "arxiv:comment"),
        journal_ref=_text(node, "arxiv:journal_ref"),
        doi=_text(node, "arxiv:doi"),
    )


def _text(node: ET.Element, path: str) -> str:
    return node.findtext(path, default="", namespaces=_NS) or ""


def _parse_timestamp(raw: str) -> datetime | None:
    raw = raw.strip()
    if not raw:
        return None

    # arXiv returns RFC3339 timestamps with a trailing Z.
    try:
        parsed = datetime.fromisoformat(raw.replace("Z", "+00:00"))
    except ValueError:
        return None

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)
    return parsed.astimezone(UTC)
