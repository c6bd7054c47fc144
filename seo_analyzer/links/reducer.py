"""Reduce verification outcomes to the broken-link list and its counts."""

from __future__ import annotations

from typing import Iterable, List, Tuple

from seo_analyzer.links.models import BrokenLink, LinkCategory, VerificationOutcome

# Categories that count as a definitely broken link (penalised by scoring).
CONFIRMED_BROKEN = frozenset({LinkCategory.CLIENT_ERROR, LinkCategory.SERVER_ERROR})


def reduce_outcomes(
    outcomes: Iterable[VerificationOutcome],
) -> Tuple[List[BrokenLink], int, int]:
    """Drop reachable outcomes and count the rest.

    Returns:
        ``(broken_links, confirmed_broken_count, network_issue_count)``.
        ``broken_links`` keeps the order of *outcomes*.
    """
    broken: List[BrokenLink] = [
        BrokenLink(url=o.url, status=o.status, category=o.category)
        for o in outcomes
        if o.is_broken
    ]
    confirmed = sum(1 for b in broken if b.category in CONFIRMED_BROKEN)
    network = sum(1 for b in broken if b.category is LinkCategory.NETWORK_ISSUE)
    return broken, confirmed, network
