"""Failure taxonomy for the extraction service."""

from __future__ import annotations

from enum import Enum


class ScrapeErrorKind(str, Enum):
    INVALID_INPUT = "InvalidInput"
    SELECTOR_NOT_FOUND = "SelectorNotFound"
    HOST_NOT_FOUND = "HostNotFound"
    TIMEOUT = "Timeout"
    FETCH_FAILED = "FetchFailed"
    UNEXPECTED = "Unexpected"

    @property
    def status_code(self) -> int:
        """HTTP status reported to callers for this kind of failure."""
        return _STATUS_CODES[self]


_STATUS_CODES = {
    ScrapeErrorKind.INVALID_INPUT: 400,
    ScrapeErrorKind.SELECTOR_NOT_FOUND: 404,
    ScrapeErrorKind.HOST_NOT_FOUND: 404,
    ScrapeErrorKind.TIMEOUT: 408,
    ScrapeErrorKind.FETCH_FAILED: 500,
    ScrapeErrorKind.UNEXPECTED: 500,
}


class ScrapeError(Exception):
    """A classified, caller-facing failure.

    *message* is a single human-readable line; it is what the API and CLI show.
    """

    def __init__(self, kind: ScrapeErrorKind, message: str) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message

    @property
    def status_code(self) -> int:
        return self.kind.status_code

    def __repr__(self) -> str:
        return f"ScrapeError(kind={self.kind.value!r}, message={self.message!r})"
