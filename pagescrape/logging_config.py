"""Logging setup for the API and the CLI.

Level and format come from :class:`~pagescrape.config.Settings`
(``LOG_LEVEL``, ``LOG_FORMAT``).  ``json`` emits one JSON object per record;
``text`` is a plain single-line format for interactive CLI use.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional, TextIO

from pythonjsonlogger.json import JsonFormatter

from pagescrape.config import Settings, settings as default_settings

# httpx logs every request line at INFO; the scraper already logs its own.
_NOISY_LOGGERS = ("httpx", "httpcore")


def _build_formatter(log_format: str) -> logging.Formatter:
    if log_format.lower() == "text":
        return logging.Formatter("%(asctime)s %(levelname)-7s %(name)s: %(message)s")
    return JsonFormatter(
        fmt="%(asctime)s %(levelname)s %(name)s %(message)s",
        rename_fields={
            "asctime": "timestamp",
            "levelname": "level",
            "name": "logger",
        },
        datefmt="%Y-%m-%dT%H:%M:%S%z",
    )


def setup_logging(
    log_level: Optional[str] = None,
    stream: Optional[TextIO] = None,
    settings: Optional[Settings] = None,
) -> logging.Handler:
    """Install a single root handler and return it.

    *log_level* overrides ``settings.log_level``.  Records go to *stream*, or
    stdout when omitted; the CLI passes stderr so log lines never mix with the
    JSON it prints.  Uvicorn's loggers are routed through the same handler.
    """
    cfg = settings or default_settings
    level = getattr(logging, (log_level or cfg.log_level).upper(), logging.INFO)

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(_build_formatter(cfg.log_format))

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()
    root.addHandler(handler)

    for name in ("uvicorn", "uvicorn.access", "uvicorn.error"):
        uv_logger = logging.getLogger(name)
        uv_logger.handlers.clear()
        uv_logger.addHandler(handler)
        uv_logger.propagate = False

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    return handler
