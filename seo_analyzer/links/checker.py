"""End-to-end link pipeline: anchors in, :class:`LinkReport` out.

    anchors -> classify_anchors -> unique_urls -> verify_urls -> reduce_outcomes
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

import httpx

from seo_analyzer.links.dedupe import unique_urls
from seo_analyzer.links.models import AnchorReference, LinkReport
from seo_analyzer.links.reducer import reduce_outcomes
from seo_analyzer.links.resolver import classify_anchors
from seo_analyzer.links.verifier import verify_urls

logger = logging.getLogger(__name__)


async def check_links(
    base: str,
    anchors: Iterable[AnchorReference],
    client: Optional[httpx.AsyncClient] = None,
    verify: bool = True,
) -> LinkReport:
    """Classify the page's anchors and, if *verify*, check each unique URL once.

    Args:
        base: Base origin of the analysed page (see ``resolver.base_origin``).
        anchors: Anchors in document order.
        client: Shared verification client; one is built per call if omitted.
        verify: When ``False`` no request is issued and ``broken_links`` is empty.
    """
    links = classify_anchors(base, anchors)
    report = LinkReport(links=links)
    if not verify:
        return report

    targets = unique_urls(links.all_urls)
    logger.info(
        "[LINKS] %d link(s) on page, %d unique URL(s) to verify.",
        len(links.resolved),
        len(targets),
    )
    outcomes = await verify_urls(targets, client=client)
    report.broken_links, report.confirmed_broken_count, report.network_issue_count = (
        reduce_outcomes(outcomes)
    )
    report.checked_count = len(outcomes)
    return report
