"""Exception types raised across the pipeline."""

from __future__ import annotations


class PipelineError(Exception):
    """Base class for every error the pipeline raises on purpose."""


class FeedError(PipelineError):
    """The upstream feed could not deliver a usable response."""


class FetchError(FeedError):
    """Transport-level failure: DNS, connection refused, timeout."""


class UnexpectedStatusError(FeedError):
    def __init__(self, status_code: int) -> None:
        super().__init__(f"unexpected status code: {status_code}")
        self.status_code = status_code


class DecodeError(FeedError):
    """Response body is not a parsable Atom feed."""


class NotFoundError(PipelineError):
    def __init__(self, paper_id: str) -> None:
        super().__init__(f"paper not found: {paper_id}")
        self.paper_id = paper_id
