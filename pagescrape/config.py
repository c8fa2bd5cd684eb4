"""Centralised settings for the pagescrape service.

All runtime configuration is resolved here in one place.  Values can be
overridden via environment variables or a `.env` file in the project root
(loaded automatically when this module is imported).
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load .env from the project root (two levels up from this file)
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_env_path, override=False)

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
)


@dataclass
class Settings:
    # ------------------------------------------------------------------
    # Fetcher
    # ------------------------------------------------------------------
    request_timeout_ms: int = field(
        default_factory=lambda: int(os.environ.get("REQUEST_TIMEOUT_MS", "10000"))
    )
    user_agent: str = field(
        default_factory=lambda: os.environ.get("SCRAPER_USER_AGENT", DEFAULT_USER_AGENT)
    )

    # ------------------------------------------------------------------
    # Extractor
    # ------------------------------------------------------------------
    min_paragraph_length: int = field(
        default_factory=lambda: int(os.environ.get("MIN_PARAGRAPH_LENGTH", "20"))
    )
    html_parser: str = field(
        default_factory=lambda: os.environ.get("HTML_PARSER", "html.parser")
    )

    # ------------------------------------------------------------------
    # Logging
    # ------------------------------------------------------------------
    log_level: str = field(
        default_factory=lambda: os.environ.get("LOG_LEVEL", "INFO")
    )
    log_format: str = field(
        default_factory=lambda: os.environ.get("LOG_FORMAT", "json")
    )

    @property
    def request_timeout(self) -> float:
        """Request timeout in seconds, as httpx expects it."""
        return self.request_timeout_ms / 1000


# Module-level singleton, import this everywhere:
#   from pagescrape.config import settings
settings = Settings()
