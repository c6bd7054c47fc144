"""Single-page analysis: fetch, extract, check links, suggest keywords, score."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import List, Optional

import httpx

from seo_analyzer.links.checker import check_links
from seo_analyzer.links.models import LinkReport
from seo_analyzer.links.resolver import base_origin
from seo_analyzer.scraper.extractor import extract_signals
from seo_analyzer.scraper.fetcher import fetch_page
from seo_analyzer.scraper.models import PageSignals, RawPage
from seo_analyzer.seo.keywords import suggest_keywords
from seo_analyzer.seo.scoring import ScoreResult, score_page

logger = logging.getLogger(__name__)


@dataclass
class PageAnalysis:
    raw: RawPage
    signals: PageSignals
    links: LinkReport
    score: ScoreResult
    keyword_suggestions: List[str] = field(default_factory=list)


async def _no_keywords() -> List[str]:
    return []


async def analyze_url(
    url: str,
    link_client: Optional[httpx.AsyncClient] = None,
    verify_links: bool = True,
    keywords: bool = True,
) -> PageAnalysis:
    """Run the full analysis for *url*.

    Link verification and keyword suggestion are independent and run
    concurrently once the page has been parsed.

    Raises:
        ValueError: If *url* is not an absolute http(s) URL.
        PageFetchError: If the page itself cannot be retrieved.
    """
    base = base_origin(url)
    raw = await fetch_page(url)
    signals = extract_signals(raw)

    link_report, keyword_suggestions = await asyncio.gather(
        check_links(base, signals.anchors, client=link_client, verify=verify_links),
        suggest_keywords(signals.main_text) if keywords else _no_keywords(),
    )

    score = score_page(signals, link_report)
    logger.info("[ANALYZE] %s scored %d (%s).", url, score.score, score.status)
    return PageAnalysis(
        raw=raw,
        signals=signals,
        links=link_report,
        score=score,
        keyword_suggestions=keyword_suggestions,
    )
