"""HTTP fetcher: one GET per call, with failure classification."""

from __future__ import annotations

import asyncio
import logging
import socket
from typing import Optional

import httpx

from pagescrape.config import Settings, settings as default_settings
from pagescrape.scraper.errors import ScrapeError, ScrapeErrorKind
from pagescrape.scraper.models import RawPage

logger = logging.getLogger(__name__)

TIMEOUT_MESSAGE = "Request timeout - website took too long to respond"
HOST_NOT_FOUND_MESSAGE = "Website not found"

# Resolver error texts (glibc, macOS, Windows), for when the ``socket.gaierror``
# cause did not survive the wrapping.
_DNS_ERROR_MARKERS = (
    "name or service not known",
    "temporary failure in name resolution",
    "no address associated with hostname",
    "nodename nor servname",
    "getaddrinfo failed",
)


def _is_dns_failure(exc: BaseException) -> bool:
    """Return ``True`` if *exc* (or anything in its cause chain) is a DNS miss."""
    seen: set[int] = set()
    current: Optional[BaseException] = exc
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        if isinstance(current, socket.gaierror):
            return True
        message = str(current).lower()
        if any(marker in message for marker in _DNS_ERROR_MARKERS):
            return True
        current = current.__cause__ or current.__context__
    return False


def _describe(exc: BaseException) -> str:
    """First line of *exc*'s message, or its class name when the message is blank."""
    lines = str(exc).strip().splitlines()
    return lines[0] if lines else type(exc).__name__


async def _get(url: str, cfg: Settings) -> RawPage:
    async with httpx.AsyncClient(
        headers={"User-Agent": cfg.user_agent},
        timeout=cfg.request_timeout,
        follow_redirects=True,
    ) as client:
        response = await client.get(url)
        response.raise_for_status()
        return RawPage(url=url, html=response.text, status_code=response.status_code)


def fetch_url(url: str, settings: Optional[Settings] = None) -> RawPage:
    """Fetch *url* and return a :class:`RawPage`.

    A single attempt is made; redirects are followed.  The whole exchange
    (connect, headers, body) runs under one ``asyncio.wait_for`` deadline of
    ``request_timeout_ms``; httpx's own timeouts only bound each network
    operation, so a peer sending bytes slowly would otherwise never expire.
    When the deadline fires the request is cancelled and its connection closed.

    Must be called from synchronous code (no running event loop).

    Raises:
        ScrapeError: ``Timeout`` when the configured bound elapses,
            ``HostNotFound`` when DNS resolution fails, and ``FetchFailed`` for
            any other transport error or a 4xx/5xx status.
    """
    cfg = settings or default_settings

    try:
        return asyncio.run(asyncio.wait_for(_get(url, cfg), timeout=cfg.request_timeout))
    except (asyncio.TimeoutError, httpx.TimeoutException) as exc:
        logger.debug("fetch timed out", extra={"url": url, "error": _describe(exc)})
        raise ScrapeError(ScrapeErrorKind.TIMEOUT, TIMEOUT_MESSAGE) from exc
    except httpx.ConnectError as exc:
        if _is_dns_failure(exc):
            logger.debug("host not found", extra={"url": url, "error": _describe(exc)})
            raise ScrapeError(ScrapeErrorKind.HOST_NOT_FOUND, HOST_NOT_FOUND_MESSAGE) from exc
        logger.debug("fetch failed", extra={"url": url, "error": _describe(exc)})
        raise ScrapeError(
            ScrapeErrorKind.FETCH_FAILED, f"Failed to fetch website: {_describe(exc)}"
        ) from exc
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        logger.debug("fetch failed", extra={"url": url, "error": _describe(exc)})
        raise ScrapeError(
            ScrapeErrorKind.FETCH_FAILED, f"Failed to fetch website: {_describe(exc)}"
        ) from exc
