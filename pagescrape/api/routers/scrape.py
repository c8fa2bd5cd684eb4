"""Scrape endpoint.

Routes
------
POST /scrape    Body: {"url": "https://...", "selector": "main"}    → scrape
"""

from __future__ import annotations

from typing import Any, List, Optional

from fastapi import APIRouter
from pydantic import BaseModel

from pagescrape.scraper import ScrapeRequest, scrape

router = APIRouter()


# ---------------------------------------------------------------------------
# Schemas
# ---------------------------------------------------------------------------

class ScrapeBody(BaseModel):
    # Plain str: the service validates the URL and reports a 400 ``{"error": ...}``.
    url: str = ""
    selector: Optional[str] = None


class LinkOut(BaseModel):
    text: str
    href: str


class ImageOut(BaseModel):
    alt: str
    src: str


class MetadataOut(BaseModel):
    description: str
    keywords: str


class ScrapeResponse(BaseModel):
    title: str
    headings: List[str]
    paragraphs: List[str]
    links: List[LinkOut]
    images: List[ImageOut]
    metadata: MetadataOut


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@router.post("", response_model=ScrapeResponse)
def scrape_endpoint(body: ScrapeBody) -> dict[str, Any]:
    """Fetch a page and return its structured content.

    Failures are raised as ``ScrapeError`` and rendered by the app-level
    handler as ``{"error": message}`` with the kind's status code.
    """
    result = scrape(ScrapeRequest(url=body.url, selector=body.selector or ""))
    return result.to_dict()
