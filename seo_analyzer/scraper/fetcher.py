"""HTTP fetcher for the page under analysis."""

from __future__ import annotations

import logging
import time
from typing import Optional

import httpx

from seo_analyzer.config import settings
from seo_analyzer.scraper.models import RawPage

logger = logging.getLogger(__name__)

_DEFAULT_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/122.0.0.0 Safari/537.36"
    )
}

_GENERIC_FAILURE = (
    "Failed to analyze website. Some websites block scraping or URL is invalid."
)


class PageFetchError(Exception):
    """Raised when the page under analysis cannot be retrieved."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)


def _failure_message(exc: httpx.HTTPError) -> str:
    if isinstance(exc, httpx.TimeoutException):
        return "Website took too long to respond or could not be reached."
    if isinstance(exc, httpx.HTTPStatusError):
        if exc.response.status_code == 404:
            return "The URL returned a 404 Not Found error."
        if exc.response.status_code == 403:
            return "Access to the URL was denied (403 Forbidden)."
    return _GENERIC_FAILURE


async def fetch_page(url: str) -> RawPage:
    """Fetch *url* and return a :class:`RawPage`.

    Redirects are followed.  ``load_time_ms`` is the wall-clock duration of
    the request including the body download.

    Raises:
        PageFetchError: On any transport failure or a non-2xx status.
    """
    started = time.perf_counter()
    try:
        async with httpx.AsyncClient(
            headers=_DEFAULT_HEADERS,
            timeout=settings.page_fetch_timeout,
            follow_redirects=True,
        ) as client:
            response = await client.get(url)
            response.raise_for_status()
    except httpx.HTTPError as exc:
        logger.error("[FETCH] %s failed: %s", url, exc)
        status = exc.response.status_code if isinstance(exc, httpx.HTTPStatusError) else None
        raise PageFetchError(_failure_message(exc), status_code=status) from exc
    except httpx.InvalidURL as exc:
        logger.error("[FETCH] %s is not a valid URL: %s", url, exc)
        raise PageFetchError(_GENERIC_FAILURE) from exc

    load_time_ms = int((time.perf_counter() - started) * 1000)
    logger.info("[FETCH] %s -> %d in %d ms", url, response.status_code, load_time_ms)
    return RawPage(
        url=url,
        html=response.text,
        status_code=response.status_code,
        load_time_ms=load_time_ms,
    )
