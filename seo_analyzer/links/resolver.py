"""Resolve anchor hrefs against the analysed page and classify them.

A link is *internal* when its scheme and host (including any explicit
port) equal those of the page.  External links are *unfollowed* when their
``rel`` value contains ``nofollow``, ``ugc`` or ``sponsored``.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional, Tuple
from urllib.parse import urljoin, urlsplit

from seo_analyzer.links.models import (
    AnchorReference,
    ClassifiedLinks,
    FollowPolicy,
    ResolvedLink,
)

logger = logging.getLogger(__name__)

_UNFOLLOWED_MARKERS = ("nofollow", "ugc", "sponsored")

# Hrefs that never address a network resource.
_NON_NETWORK_SCHEMES = ("mailto:", "tel:", "javascript:", "data:")

# (scheme, host, explicit port or None)
Origin = Tuple[str, str, Optional[int]]


def _origin(url: str) -> Origin:
    """Return the origin of *url*.

    Raises:
        ValueError: If *url* has no scheme or host, or an invalid port.
    """
    parts = urlsplit(url)
    # .port raises ValueError for non-numeric or out-of-range ports
    port = parts.port
    if not parts.scheme or not parts.hostname:
        raise ValueError(f"not an absolute URL: {url!r}")
    return parts.scheme.lower(), parts.hostname.lower(), port


def base_origin(page_url: str) -> str:
    """Return ``scheme://host[:port]`` of *page_url*, the base for resolution.

    Scheme and host are lowercased and any ``user:password@`` is dropped.

    Raises:
        ValueError: If *page_url* is not an absolute URL.
    """
    scheme, host, port = _origin(page_url)
    if ":" in host:
        host = f"[{host}]"
    if port is None:
        return f"{scheme}://{host}"
    return f"{scheme}://{host}:{port}"


def follow_policy(rel: str) -> FollowPolicy:
    """Classify a raw ``rel`` attribute value (case-sensitive substring match)."""
    if any(marker in rel for marker in _UNFOLLOWED_MARKERS):
        return FollowPolicy.UNFOLLOWED
    return FollowPolicy.FOLLOWABLE


def resolve_link(base: str, raw_href: str, rel: str = "") -> ResolvedLink:
    """Resolve *raw_href* against *base* and classify the result.

    Args:
        base: The page's base origin as returned by :func:`base_origin`.
        raw_href: The ``href`` value, relative or absolute.
        rel: The raw ``rel`` attribute value, possibly empty.

    Raises:
        ValueError: If the href cannot be turned into an absolute URL.
    """
    absolute = urljoin(base, raw_href.strip())
    link_origin = _origin(absolute)
    return ResolvedLink(
        absolute_url=absolute,
        origin_matches_base=link_origin == _origin(base),
        follow_policy=follow_policy(rel),
    )


def classify_anchors(base: str, anchors: Iterable[AnchorReference]) -> ClassifiedLinks:
    """Resolve every anchor and sort it into the three link lists.

    Anchors whose href cannot be resolved are logged and dropped.
    """
    classified = ClassifiedLinks()
    for anchor in anchors:
        href = anchor.raw_href.strip()
        if not href:
            continue
        if href.lower().startswith(_NON_NETWORK_SCHEMES):
            logger.debug("[LINKS] Skipping non-network href: %r", href)
            continue
        try:
            link = resolve_link(base, href, anchor.rel)
        except ValueError as exc:
            logger.warning("[LINKS] Could not parse link href: %r - %s", href, exc)
            continue
        classified.add(link)
    return classified
