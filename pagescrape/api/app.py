"""FastAPI application factory.

Lifespan
--------
On startup the app configures logging from ``LOG_LEVEL`` / ``LOG_FORMAT``.  No
other state is held: each request is scraped independently.

Routers
-------
    /scrape   structured extraction of a single page
    /health   liveness probe

Errors
------
Every failure is rendered as ``{"error": "<message>"}``.  ``ScrapeError``
carries its own status code; a malformed request body is a 400.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from pagescrape import __version__
from pagescrape.logging_config import setup_logging
from pagescrape.scraper import ScrapeError

from pagescrape.api.routers import scrape as scrape_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Configure logging on startup."""
    setup_logging()
    logger.info("starting pagescrape api", extra={"version": __version__})
    try:
        yield
    finally:
        logger.info("shutting down pagescrape api")


async def _scrape_error_handler(request: Request, exc: ScrapeError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def _validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    return JSONResponse(status_code=400, content={"error": "Invalid request body"})


def create_app() -> FastAPI:
    """Return a fully-configured FastAPI application instance."""
    app = FastAPI(
        title="pagescrape API",
        description=(
            "Fetches a single web page and returns its title, headings, "
            "paragraphs, links, images and meta description/keywords, "
            "optionally scoped to a CSS selector."
        ),
        version=__version__,
        lifespan=lifespan,
    )

    # Allow browser frontends on any origin (tighten for production).
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(ScrapeError, _scrape_error_handler)
    app.add_exception_handler(RequestValidationError, _validation_error_handler)

    app.include_router(scrape_router.router, prefix="/scrape", tags=["scrape"])

    @app.get("/health", tags=["health"])
    def health() -> dict[str, str]:
        return {"status": "ok"}

    return app


# Module-level instance used by uvicorn:
#   uvicorn pagescrape.api.app:app --reload
app = create_app()
