"""The extraction service: validate → fetch → parse → scope → extract.

:func:`scrape` is the only boundary callers use.  Every failure leaves it as a
:class:`ScrapeError`; nothing else propagates.
"""

from __future__ import annotations

import logging
from typing import Optional
from urllib.parse import urlsplit

import httpx

from pagescrape.config import Settings, settings as default_settings
from pagescrape.scraper.errors import ScrapeError, ScrapeErrorKind
from pagescrape.scraper.extractor import extract_content, is_valid_host
from pagescrape.scraper.fetcher import fetch_url
from pagescrape.scraper.models import ScrapeRequest, ScrapeResult

logger = logging.getLogger(__name__)

INVALID_URL_MESSAGE = "Invalid URL format"
UNEXPECTED_MESSAGE = "An unexpected error occurred"

_FETCHABLE_SCHEMES = {"http", "https"}


def validate_url(url: str) -> str:
    """Return *url* trimmed if it is an absolute http(s) URL with a usable host.

    Everything the fetcher would choke on is rejected here, before any
    network activity: whitespace or control characters, an unparsable port
    or authority, and hosts failing :func:`is_valid_host`.

    Raises:
        ScrapeError: ``InvalidInput`` for an empty or malformed URL.
    """
    candidate = (url or "").strip()
    if not candidate:
        raise ScrapeError(ScrapeErrorKind.INVALID_INPUT, "URL is required")
    if any(ch.isspace() or not ch.isprintable() for ch in candidate):
        raise ScrapeError(ScrapeErrorKind.INVALID_INPUT, INVALID_URL_MESSAGE)
    try:
        parts = urlsplit(candidate)
        parts.port  # noqa: B018 - raises ValueError on a malformed port
        httpx.URL(candidate)
    except (ValueError, httpx.InvalidURL) as exc:
        raise ScrapeError(ScrapeErrorKind.INVALID_INPUT, INVALID_URL_MESSAGE) from exc
    if parts.scheme.lower() not in _FETCHABLE_SCHEMES or not parts.hostname:
        raise ScrapeError(ScrapeErrorKind.INVALID_INPUT, INVALID_URL_MESSAGE)
    if not is_valid_host(parts.hostname):
        raise ScrapeError(ScrapeErrorKind.INVALID_INPUT, INVALID_URL_MESSAGE)
    return candidate


def scrape(request: ScrapeRequest, settings: Optional[Settings] = None) -> ScrapeResult:
    """Fetch ``request.url`` and extract its structured content.

    A whitespace-only selector counts as no selector.

    Raises:
        ScrapeError: classified by kind; see :class:`ScrapeErrorKind`.
    """
    cfg = settings or default_settings
    selector = (request.selector or "").strip()
    logger.info("scrape requested", extra={"url": request.url, "selector": selector})

    try:
        url = validate_url(request.url)
        raw = fetch_url(url, cfg)
        result = extract_content(raw, selector, cfg)
    except ScrapeError as exc:
        logger.warning(
            "scrape failed",
            extra={"url": request.url, "kind": exc.kind.value, "error": exc.message},
        )
        raise
    except Exception as exc:
        logger.exception("unexpected scrape failure", extra={"url": request.url})
        raise ScrapeError(ScrapeErrorKind.UNEXPECTED, UNEXPECTED_MESSAGE) from exc

    logger.info(
        "scrape completed",
        extra={
            "url": url,
            "headings": len(result.headings),
            "paragraphs": len(result.paragraphs),
            "links": len(result.links),
            "images": len(result.images),
        },
    )
    return result
