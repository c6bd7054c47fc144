"""Tests for the /analyze endpoint.

All tests run through the FastAPI TestClient (which drives the app
lifespan, so the shared link-check client is real).  ``respx`` patches the
outbound ``httpx`` transport; the TestClient's own in-process transport is
not affected.
"""

from __future__ import annotations

from typing import Generator
from unittest.mock import AsyncMock, patch

import httpx
import pytest
import respx
from fastapi.testclient import TestClient

from seo_analyzer.api.app import create_app
from seo_analyzer.scraper.fetcher import PageFetchError


_PAGE_URL = "https://example.com/"

_PAGE_HTML = """\
<!DOCTYPE html>
<html>
<head>
  <title>Example Domain</title>
  <meta name="description" content="An example page used to exercise the SEO analysis endpoint end to end.">
  <script type="application/ld+json">{"@context": "https://schema.org", "@type": "Organization"}</script>
</head>
<body>
  <h1>Welcome</h1>
  <p>Example content for the analysis endpoint.</p>
  <img src="/logo.png" alt="Logo">
  <a href="/about">About</a>
  <a href="/about">About again</a>
  <a href="/missing">Missing</a>
  <a href="https://partner.example.org/">Partner</a>
  <a href="https://ads.example.net/" rel="sponsored">Ad</a>
  <a href="mailto:hello@example.com">Mail</a>
</body>
</html>
"""


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture()
def client() -> Generator[TestClient, None, None]:
    app = create_app()
    with TestClient(app, raise_server_exceptions=True) as c:
        yield c


@pytest.fixture()
def site() -> Generator[respx.MockRouter, None, None]:
    """Mock the analysed page and every link on it."""
    with respx.mock(assert_all_called=False) as respx_mock:
        respx_mock.get(_PAGE_URL).mock(return_value=httpx.Response(200, text=_PAGE_HTML))
        respx_mock.get("https://example.com/about").mock(return_value=httpx.Response(200))
        respx_mock.get("https://example.com/missing").mock(return_value=httpx.Response(404))
        respx_mock.get("https://partner.example.org/").mock(return_value=httpx.Response(200))
        respx_mock.get("https://ads.example.net/").mock(side_effect=httpx.ConnectTimeout)
        yield respx_mock


# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------

class TestAnalyze:
    def test_full_analysis(self, client: TestClient, site: respx.MockRouter) -> None:
        resp = client.get("/analyze", params={"url": _PAGE_URL, "keywords": "false"})
        assert resp.status_code == 200
        data = resp.json()

        assert data["url"] == _PAGE_URL
        assert data["title"] == "Example Domain"
        assert data["h1Tags"] == ["Welcome"]
        assert data["totalImages"] == 1
        assert data["imagesWithAlt"] == 1
        assert data["imageData"] == [{"src": "/logo.png", "alt": "Logo", "hasAlt": True}]
        assert data["schemaData"] == ["Organization"]
        assert data["keywordSuggestions"] == []

        assert data["internalLinks"] == [
            "https://example.com/about",
            "https://example.com/about",
            "https://example.com/missing",
        ]
        assert data["externalDofollowLinks"] == ["https://partner.example.org/"]
        assert data["externalNofollowLinks"] == ["https://ads.example.net/"]

        assert data["brokenLinks"] == [
            {"url": "https://example.com/missing", "status": 404, "category": "Client Error"},
            {"url": "https://ads.example.net/", "status": "Timeout", "category": "Network Issue"},
        ]
        assert data["confirmedBrokenLinksCount"] == 1
        assert data["networkIssueLinksCount"] == 1

        assert data["performanceScore"] == 100
        assert data["status"] == "good"
        assert "Found 1 broken links. Fix them! ❌" in data["issues"]
        assert isinstance(data["loadTime"], int)

    def test_duplicate_link_checked_once(self, client: TestClient, site: respx.MockRouter) -> None:
        client.get("/analyze", params={"url": _PAGE_URL, "keywords": "false"})

        about_calls = [
            call for call in site.calls if call.request.url == "https://example.com/about"
        ]
        assert len(about_calls) == 1

    def test_link_checks_can_be_skipped(self, client: TestClient, site: respx.MockRouter) -> None:
        resp = client.get(
            "/analyze",
            params={"url": _PAGE_URL, "keywords": "false", "check_links": "false"},
        )
        assert resp.status_code == 200
        data = resp.json()
        assert data["brokenLinks"] == []
        assert len(data["internalLinks"]) == 3
        assert [str(call.request.url) for call in site.calls] == [_PAGE_URL]

    def test_keyword_suggestions_included(self, client: TestClient, site: respx.MockRouter) -> None:
        with patch(
            "seo_analyzer.seo.analyzer.suggest_keywords",
            new=AsyncMock(return_value=["example page", "seo analysis"]),
        ) as mock_suggest:
            resp = client.get("/analyze", params={"url": _PAGE_URL})

        assert resp.json()["keywordSuggestions"] == ["example page", "seo analysis"]
        mock_suggest.assert_awaited_once()


class TestAnalyzeErrors:
    def test_missing_url_returns_400(self, client: TestClient) -> None:
        resp = client.get("/analyze")
        assert resp.status_code == 400
        assert resp.json()["detail"] == "URL is required"

    @pytest.mark.parametrize("url", ["example.com", "ftp://example.com/", "https://"])
    def test_invalid_url_returns_400(self, client: TestClient, url: str) -> None:
        resp = client.get("/analyze", params={"url": url})
        assert resp.status_code == 400

    def test_page_fetch_failure_returns_502(self, client: TestClient) -> None:
        with respx.mock:
            respx.get("https://example.com/gone").mock(return_value=httpx.Response(404))
            resp = client.get("/analyze", params={"url": "https://example.com/gone"})

        assert resp.status_code == 502
        assert resp.json()["detail"] == "The URL returned a 404 Not Found error."

    def test_fetch_error_message_passed_through(self, client: TestClient) -> None:
        error = PageFetchError("Website took too long to respond or could not be reached.")
        with patch(
            "seo_analyzer.api.routers.analyze.analyze_url", new=AsyncMock(side_effect=error)
        ):
            resp = client.get("/analyze", params={"url": _PAGE_URL})

        assert resp.status_code == 502
        assert "too long" in resp.json()["detail"]


class TestHealth:
    def test_health(self, client: TestClient) -> None:
        assert client.get("/health").json() == {"status": "ok"}
