"""pagescrape CLI: scrape a single page from the terminal.

Usage:
    python cli/main.py scrape --url https://example.com --selector main
    python cli/main.py scrape --url https://example.com --output scraped-data.json
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the project root is on sys.path so that `from pagescrape.xxx import ...`
# works when the CLI is invoked as `python cli/main.py` from any working directory.
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import json
from typing import Optional

import typer

from pagescrape.logging_config import setup_logging
from pagescrape.scraper import ScrapeError, ScrapeRequest, scrape

app = typer.Typer(
    name="pagescrape",
    help="Extract structured content from a single web page.",
    no_args_is_help=True,
)


@app.callback()
def main(
    log_level: Optional[str] = typer.Option(
        None, "--log-level", help="Override LOG_LEVEL (DEBUG, INFO, WARNING, ...)."
    ),
) -> None:
    """Configure logging before any command runs."""
    setup_logging(log_level, stream=sys.stderr)


@app.command("scrape")
def scrape_cmd(
    url: str = typer.Option(..., help="URL to scrape."),
    selector: str = typer.Option("", help="CSS selector to scope extraction to."),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Write the JSON result to this file instead of stdout."
    ),
    compact: bool = typer.Option(False, "--compact", help="Emit single-line JSON."),
) -> None:
    """Scrape a URL and print the extracted content as JSON."""
    try:
        result = scrape(ScrapeRequest(url=url, selector=selector))
    except ScrapeError as exc:
        typer.echo(f"Error ({exc.status_code}): {exc.message}", err=True)
        raise typer.Exit(code=1)

    payload = json.dumps(result.to_dict(), ensure_ascii=False, indent=None if compact else 2)

    if output is None:
        typer.echo(payload)
        return

    output.write_text(payload + "\n", encoding="utf-8")
    typer.echo(
        f"[scrape] Saved {len(result.links)} links, {len(result.images)} images "
        f"to {output}",
        err=True,
    )


# ---------------------------------------------------------------------------
# Entry-point
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    app()
