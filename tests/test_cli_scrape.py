"""Tests for the 'scrape' CLI command."""

import json
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from cli.main import app
from pagescrape.scraper import Image, Link, PageMetadata, ScrapeError, ScrapeErrorKind, ScrapeResult

runner = CliRunner()


@pytest.fixture(autouse=True)
def quiet_logging(monkeypatch):
    """Keep the CLI callback from rebinding root logging to the runner's stderr."""
    monkeypatch.setattr("cli.main.setup_logging", lambda *args, **kwargs: None)


def _result() -> ScrapeResult:
    return ScrapeResult(
        title="Example",
        headings=["Welcome"],
        paragraphs=["A paragraph that is long enough to keep."],
        links=[Link(text="Other", href="https://example.com/other")],
        images=[Image(alt="Pic", src="https://example.com/pic.jpg")],
        metadata=PageMetadata(description="Described.", keywords="a, b"),
    )


def test_scrape_prints_json():
    with patch("cli.main.scrape", return_value=_result()) as mock_scrape:
        result = runner.invoke(app, ["scrape", "--url", "https://example.com/", "--compact"])

    assert result.exit_code == 0
    data = json.loads(result.stdout.strip())
    assert data["title"] == "Example"
    assert data["links"] == [{"text": "Other", "href": "https://example.com/other"}]

    request = mock_scrape.call_args.args[0]
    assert request.url == "https://example.com/"
    assert request.selector == ""


def test_scrape_passes_selector():
    with patch("cli.main.scrape", return_value=_result()) as mock_scrape:
        result = runner.invoke(
            app, ["scrape", "--url", "https://example.com/", "--selector", "main article"]
        )

    assert result.exit_code == 0
    assert mock_scrape.call_args.args[0].selector == "main article"


def test_scrape_writes_output_file(tmp_path):
    out = tmp_path / "scraped-data.json"
    with patch("cli.main.scrape", return_value=_result()):
        result = runner.invoke(
            app, ["scrape", "--url", "https://example.com/", "--output", str(out)]
        )

    assert result.exit_code == 0
    data = json.loads(out.read_text(encoding="utf-8"))
    assert data == _result().to_dict()
    assert "Saved 1 links, 1 images" in result.output


def test_scrape_error_exits_nonzero():
    error = ScrapeError(ScrapeErrorKind.SELECTOR_NOT_FOUND, "Selector not found on page")
    with patch("cli.main.scrape", side_effect=error):
        result = runner.invoke(
            app, ["scrape", "--url", "https://example.com/", "--selector", "#nope"]
        )

    assert result.exit_code == 1
    assert "Error (404): Selector not found on page" in result.output


def test_invalid_url_reports_400():
    result = runner.invoke(app, ["scrape", "--url", "not a url"])

    assert result.exit_code == 1
    assert "Error (400): Invalid URL format" in result.output
