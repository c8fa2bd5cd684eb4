"""Data models for the scraper pipeline."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List


@dataclass
class ScrapeRequest:
    """A single extraction request.  An empty *selector* means the whole body."""

    url: str
    selector: str = ""


@dataclass
class RawPage:
    """The raw HTTP response for a single URL fetch."""

    url: str
    html: str
    status_code: int


@dataclass
class Link:
    text: str
    href: str


@dataclass
class Image:
    alt: str
    src: str


@dataclass
class PageMetadata:
    description: str = ""
    keywords: str = ""


@dataclass
class ScrapeResult:
    """Structured content extracted from one page.

    Every string is trimmed; missing values are empty strings, never ``None``.
    """

    title: str
    headings: List[str] = field(default_factory=list)
    paragraphs: List[str] = field(default_factory=list)
    links: List[Link] = field(default_factory=list)
    images: List[Image] = field(default_factory=list)
    metadata: PageMetadata = field(default_factory=PageMetadata)

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serialisable ``dict`` with the same shape as the result."""
        return asdict(self)
