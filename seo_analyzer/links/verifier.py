"""Bounded concurrent reachability checks for resolved links.

Every URL is fetched with a plain ``GET`` (servers answer ``HEAD`` too
inconsistently to be trusted) through one shared ``httpx.AsyncClient``.
Only the status matters, so at most ``settings.link_check_max_bytes`` of
the body are read before the connection is released.

Outcome taxonomy
----------------
Every check settles into exactly one :class:`LinkCategory`:

``Reachable``            2xx, or 3xx once redirects are exhausted
``Client Error``         4xx
``Server Error``         5xx
``Network Issue``        timeout, DNS failure, refused connection, other
                         transport faults (``status`` holds a label)
``Request Setup Error``  the request could not be built or sent at all
``Unknown Error``        anything else

Checks never raise; failures are data.
"""

from __future__ import annotations

import asyncio
import logging
import socket
from typing import Iterable, Iterator, List, Optional

import httpx

from seo_analyzer.config import settings
from seo_analyzer.links.models import LinkCategory, VerificationOutcome

logger = logging.getLogger(__name__)

# Statuses in this window complete the transaction normally.  Anything
# outside it is raised as ``HTTPStatusError`` and categorised on the
# failure path, through the same ``categorize_status``.
_ACCEPTED_STATUS = range(200, 500)

_BROWSER_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/122.0.0.0 Safari/537.36"
    ),
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8",
    "Accept-Encoding": "gzip, deflate",
    "Accept-Language": "en-US,en;q=0.5",
}

TIMEOUT = "Timeout"
DNS_RESOLUTION_FAILED = "DNS Resolution Failed"
CONNECTION_REFUSED = "Connection Refused"
GENERIC_NETWORK_ERROR = "Generic Network Error"

_DNS_MESSAGES = (
    "name or service not known",
    "nodename nor servname",
    "getaddrinfo failed",
    "temporary failure in name resolution",
    "no address associated with hostname",
)
_REFUSED_MESSAGES = ("connection refused", "actively refused")


# ---------------------------------------------------------------------------
# Shared transport
# ---------------------------------------------------------------------------

def build_client() -> httpx.AsyncClient:
    """Return the client used for link checks.

    The API opens one of these at startup and reuses it for every analysis,
    so keep-alive connections are shared between checks on the same host.
    The pool has no connection cap, so a check never waits on a local
    connection; the in-flight cap is applied per analysis by :func:`verify_urls`.
    The caller owns it and must ``aclose()`` it.
    """
    return httpx.AsyncClient(
        headers=_BROWSER_HEADERS,
        timeout=settings.link_check_timeout,
        limits=httpx.Limits(max_connections=None, max_keepalive_connections=20),
        follow_redirects=True,
        max_redirects=settings.link_check_max_redirects,
    )


# ---------------------------------------------------------------------------
# Categorisation
# ---------------------------------------------------------------------------

def categorize_status(status_code: int) -> LinkCategory:
    """Map a completed HTTP transaction's status to a category."""
    if 200 <= status_code < 400:
        return LinkCategory.REACHABLE
    if 400 <= status_code < 500:
        return LinkCategory.CLIENT_ERROR
    if 500 <= status_code < 600:
        return LinkCategory.SERVER_ERROR
    return LinkCategory.UNKNOWN_ERROR


def _describe(exc: BaseException) -> str:
    return str(exc) or type(exc).__name__


def _exception_chain(exc: BaseException) -> Iterator[BaseException]:
    """Yield *exc*, its causes/contexts and any exception-group members."""
    seen: set[int] = set()
    stack: list[BaseException] = [exc]
    while stack:
        current = stack.pop()
        if id(current) in seen:
            continue
        seen.add(id(current))
        yield current
        stack.extend(getattr(current, "exceptions", ()))
        for linked in (current.__cause__, current.__context__):
            if linked is not None:
                stack.append(linked)


def _mentions(chain: list[BaseException], needles: tuple[str, ...]) -> bool:
    for exc in chain:
        message = str(exc).lower()
        if any(needle in message for needle in needles):
            return True
    return False


def _network_label(exc: httpx.TransportError) -> str:
    """Return the status label for a transport fault (no response received)."""
    if isinstance(exc, httpx.TimeoutException):
        return TIMEOUT

    chain = list(_exception_chain(exc))
    if any(isinstance(e, socket.gaierror) for e in chain) or _mentions(chain, _DNS_MESSAGES):
        return DNS_RESOLUTION_FAILED
    if any(isinstance(e, ConnectionRefusedError) for e in chain) or _mentions(
        chain, _REFUSED_MESSAGES
    ):
        return CONNECTION_REFUSED
    if any(isinstance(e, TimeoutError) for e in chain):
        return TIMEOUT
    if isinstance(exc, httpx.NetworkError):
        return GENERIC_NETWORK_ERROR
    return f"Request Error: {_describe(exc)}"


def categorize_fault(url: str, exc: BaseException) -> VerificationOutcome:
    """Turn any exception raised while checking *url* into an outcome."""
    if isinstance(exc, httpx.HTTPStatusError):
        status = exc.response.status_code
        return VerificationOutcome(url=url, status=status, category=categorize_status(status))

    # Rejected before anything was sent.
    if isinstance(exc, (httpx.InvalidURL, httpx.UnsupportedProtocol)):
        return VerificationOutcome(
            url=url, status=_describe(exc), category=LinkCategory.REQUEST_SETUP_ERROR
        )

    if isinstance(exc, httpx.TransportError):
        return VerificationOutcome(
            url=url, status=_network_label(exc), category=LinkCategory.NETWORK_ISSUE
        )

    # TooManyRedirects, DecodingError and other request-level faults.
    if isinstance(exc, httpx.RequestError):
        return VerificationOutcome(
            url=url,
            status=f"Request Error: {_describe(exc)}",
            category=LinkCategory.NETWORK_ISSUE,
        )

    return VerificationOutcome(url=url, status=_describe(exc), category=LinkCategory.UNKNOWN_ERROR)


# ---------------------------------------------------------------------------
# Checks
# ---------------------------------------------------------------------------

async def _read_capped(response: httpx.Response, limit: int) -> None:
    """Consume at most roughly *limit* bytes of the body."""
    if limit <= 0:
        return
    received = 0
    async for chunk in response.aiter_raw():
        received += len(chunk)
        if received >= limit:
            break


async def verify_url(client: httpx.AsyncClient, url: str) -> VerificationOutcome:
    """Check a single URL.  Never raises."""
    try:
        async with client.stream("GET", url) as response:
            await _read_capped(response, settings.link_check_max_bytes)
            if response.status_code not in _ACCEPTED_STATUS:
                raise httpx.HTTPStatusError(
                    f"Status {response.status_code} for url {url!r}",
                    request=response.request,
                    response=response,
                )
            status = response.status_code
    except Exception as exc:
        outcome = categorize_fault(url, exc)
    else:
        outcome = VerificationOutcome(url=url, status=status, category=categorize_status(status))

    if outcome.is_broken:
        logger.debug("[LINKS] %s -> %s (%s)", url, outcome.status, outcome.category.value)
    return outcome


async def verify_urls(
    urls: Iterable[str],
    client: Optional[httpx.AsyncClient] = None,
    concurrency: Optional[int] = None,
) -> List[VerificationOutcome]:
    """Check every URL concurrently and return one outcome per URL.

    At most *concurrency* checks (default ``settings.link_check_concurrency``)
    are in flight at once.  The call returns only after every check has
    settled; one failure never cancels or skips the others.  Outcomes are in
    the same order as *urls*.

    Args:
        urls: Absolute URLs, expected to be unique already.
        client: Shared client to reuse.  When omitted a client is built with
            :func:`build_client` and closed before returning.
        concurrency: Override for the in-flight cap.
    """
    targets = list(urls)
    if not targets:
        return []

    semaphore = asyncio.Semaphore(max(1, concurrency or settings.link_check_concurrency))

    async def _bounded(c: httpx.AsyncClient, url: str) -> VerificationOutcome:
        async with semaphore:
            return await verify_url(c, url)

    async def _settle_all(c: httpx.AsyncClient) -> list:
        return await asyncio.gather(
            *(_bounded(c, url) for url in targets), return_exceptions=True
        )

    if client is None:
        async with build_client() as own_client:
            settled = await _settle_all(own_client)
    else:
        settled = await _settle_all(client)

    outcomes: List[VerificationOutcome] = []
    for url, result in zip(targets, settled):
        if isinstance(result, BaseException):
            logger.error("[LINKS] Check for %s escaped with %r", url, result)
            outcomes.append(
                VerificationOutcome(
                    url=url, status=_describe(result), category=LinkCategory.UNKNOWN_ERROR
                )
            )
        else:
            outcomes.append(result)

    broken = sum(1 for outcome in outcomes if outcome.is_broken)
    logger.info("[LINKS] Verified %d URL(s): %d broken or unreachable.", len(outcomes), broken)
    return outcomes
