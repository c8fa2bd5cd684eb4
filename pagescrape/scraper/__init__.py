"""Scraper package: web fetch & structured content extraction."""

from pagescrape.scraper.errors import ScrapeError, ScrapeErrorKind
from pagescrape.scraper.extractor import extract_content, resolve_url
from pagescrape.scraper.fetcher import fetch_url
from pagescrape.scraper.models import (
    Image,
    Link,
    PageMetadata,
    RawPage,
    ScrapeRequest,
    ScrapeResult,
)
from pagescrape.scraper.service import scrape

__all__ = [
    "scrape",
    "fetch_url",
    "extract_content",
    "resolve_url",
    "ScrapeRequest",
    "ScrapeResult",
    "RawPage",
    "Link",
    "Image",
    "PageMetadata",
    "ScrapeError",
    "ScrapeErrorKind",
]
