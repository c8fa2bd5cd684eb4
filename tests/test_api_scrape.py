"""Tests for the /scrape API endpoint.

Requests go through the FastAPI TestClient; outbound page fetches are mocked
with ``respx`` so no network calls are made.
"""

from __future__ import annotations

import socket

import httpx
import pytest
import respx
from fastapi.testclient import TestClient

from pagescrape.api.app import create_app


_PAGE_URL = "https://example.com/dir/page.html"

_PAGE_HTML = """\
<html>
<head>
  <title>Example</title>
  <meta name="description" content="Described.">
</head>
<body>
  <main>
    <h1>Welcome</h1>
    <p>The main paragraph has more than twenty characters.</p>
    <a href="../other">Other</a>
    <img src="pic.jpg" alt="Pic">
  </main>
  <footer><p>Footer text that is also fairly long.</p></footer>
</body>
</html>
"""


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture()
def client():
    """Return a TestClient for a fresh app instance (lifespan included)."""
    app = create_app()
    with TestClient(app, raise_server_exceptions=True) as c:
        yield c


def _mock_page(status: int = 200, text: str = _PAGE_HTML) -> None:
    respx.get(_PAGE_URL).mock(return_value=httpx.Response(status, text=text))


# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------

class TestScrapeSuccess:
    @respx.mock
    def test_returns_result(self, client):
        _mock_page()
        resp = client.post("/scrape", json={"url": _PAGE_URL})

        assert resp.status_code == 200
        data = resp.json()
        assert data["title"] == "Example"
        assert data["headings"] == ["Welcome"]
        assert data["paragraphs"] == [
            "The main paragraph has more than twenty characters.",
            "Footer text that is also fairly long.",
        ]
        assert data["links"] == [{"text": "Other", "href": "https://example.com/other"}]
        assert data["images"] == [{"alt": "Pic", "src": "https://example.com/dir/pic.jpg"}]
        assert data["metadata"] == {"description": "Described.", "keywords": ""}

    @respx.mock
    def test_selector_scopes_result(self, client):
        _mock_page()
        resp = client.post("/scrape", json={"url": _PAGE_URL, "selector": "footer"})

        assert resp.status_code == 200
        data = resp.json()
        assert data["title"] == "Example"
        assert data["headings"] == []
        assert data["paragraphs"] == ["Footer text that is also fairly long."]
        assert data["links"] == []

    @respx.mock
    def test_null_selector_means_body(self, client):
        _mock_page()
        resp = client.post("/scrape", json={"url": _PAGE_URL, "selector": None})
        assert resp.status_code == 200
        assert resp.json()["headings"] == ["Welcome"]


class TestScrapeErrors:
    def test_missing_url_is_400(self, client):
        resp = client.post("/scrape", json={})
        assert resp.status_code == 400
        assert resp.json() == {"error": "URL is required"}

    def test_malformed_url_is_400(self, client):
        resp = client.post("/scrape", json={"url": "not a url"})
        assert resp.status_code == 400
        assert resp.json() == {"error": "Invalid URL format"}

    def test_malformed_host_is_400(self, client):
        resp = client.post("/scrape", json={"url": "http://a..b/"})
        assert resp.status_code == 400
        assert resp.json() == {"error": "Invalid URL format"}

    def test_non_json_body_is_400(self, client):
        resp = client.post(
            "/scrape", content=b"url=https://example.com", headers={"Content-Type": "text/plain"}
        )
        assert resp.status_code == 400
        assert resp.json() == {"error": "Invalid request body"}

    def test_wrong_type_is_400(self, client):
        resp = client.post("/scrape", json={"url": ["https://example.com"]})
        assert resp.status_code == 400
        assert "error" in resp.json()

    @respx.mock
    def test_selector_not_found_is_404(self, client):
        _mock_page()
        resp = client.post("/scrape", json={"url": _PAGE_URL, "selector": "#missing"})
        assert resp.status_code == 404
        assert resp.json() == {"error": "Selector not found on page"}

    @respx.mock
    def test_dns_failure_is_404(self, client):
        def _fail(request):
            try:
                raise socket.gaierror(socket.EAI_NONAME, "Name or service not known")
            except socket.gaierror as exc:
                raise httpx.ConnectError("Name or service not known", request=request) from exc

        respx.get(_PAGE_URL).mock(side_effect=_fail)
        resp = client.post("/scrape", json={"url": _PAGE_URL})
        assert resp.status_code == 404
        assert resp.json() == {"error": "Website not found"}

    @respx.mock
    def test_timeout_is_408(self, client):
        respx.get(_PAGE_URL).mock(side_effect=httpx.ReadTimeout)
        resp = client.post("/scrape", json={"url": _PAGE_URL})
        assert resp.status_code == 408
        assert resp.json() == {"error": "Request timeout - website took too long to respond"}

    @respx.mock
    def test_upstream_error_is_500_with_detail(self, client):
        _mock_page(status=502, text="bad gateway")
        resp = client.post("/scrape", json={"url": _PAGE_URL})
        assert resp.status_code == 500
        error = resp.json()["error"]
        assert error.startswith("Failed to fetch website: ")
        assert "502" in error


class TestHealth:
    def test_health(self, client):
        resp = client.get("/health")
        assert resp.status_code == 200
        assert resp.json() == {"status": "ok"}
