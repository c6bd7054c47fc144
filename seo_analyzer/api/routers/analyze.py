"""Analysis endpoint.

Routes
------
GET /analyze?url=<page>&check_links=true&keywords=true
"""

from __future__ import annotations

from typing import List, Optional, Union
from urllib.parse import urlsplit

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from seo_analyzer.links.resolver import base_origin
from seo_analyzer.scraper.fetcher import PageFetchError
from seo_analyzer.seo.analyzer import PageAnalysis, analyze_url

router = APIRouter()


# ---------------------------------------------------------------------------
# Schemas
# ---------------------------------------------------------------------------

class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ImageOut(_CamelModel):
    src: str
    alt: str
    has_alt: bool


class BrokenLinkOut(_CamelModel):
    url: str
    status: Union[int, str]
    category: str


class AnalysisResponse(_CamelModel):
    url: str
    title: str
    meta_description: str
    performance_score: int
    status: str
    strengths: List[str]
    issues: List[str]
    h1_tags: List[str]
    total_images: int
    images_with_alt: int
    images_without_alt: int
    image_data: List[ImageOut]
    load_time: int
    internal_links: List[str]
    external_dofollow_links: List[str]
    external_nofollow_links: List[str]
    broken_links: List[BrokenLinkOut]
    confirmed_broken_links_count: int
    network_issue_links_count: int
    schema_data: List[str]
    keyword_suggestions: List[str]


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _is_http_url(url: str) -> bool:
    try:
        base_origin(url)
    except ValueError:
        return False
    return urlsplit(url).scheme.lower() in ("http", "https")


def _analysis_response(analysis: PageAnalysis) -> AnalysisResponse:
    signals = analysis.signals
    links = analysis.links
    return AnalysisResponse(
        url=signals.url,
        title=signals.title,
        meta_description=signals.meta_description,
        performance_score=analysis.score.score,
        status=analysis.score.status,
        strengths=analysis.score.strengths,
        issues=analysis.score.issues,
        h1_tags=signals.h1_tags,
        total_images=len(signals.image_data),
        images_with_alt=signals.images_with_alt,
        images_without_alt=signals.images_without_alt,
        image_data=[
            ImageOut(src=img.src, alt=img.alt, has_alt=img.has_alt)
            for img in signals.image_data
        ],
        load_time=analysis.raw.load_time_ms,
        internal_links=links.links.internal,
        external_dofollow_links=links.links.external_followable,
        external_nofollow_links=links.links.external_unfollowed,
        broken_links=[
            BrokenLinkOut(url=b.url, status=b.status, category=b.category.value)
            for b in links.broken_links
        ],
        confirmed_broken_links_count=links.confirmed_broken_count,
        network_issue_links_count=links.network_issue_count,
        schema_data=signals.schema_types,
        keyword_suggestions=analysis.keyword_suggestions,
    )


# ---------------------------------------------------------------------------
# Endpoint
# ---------------------------------------------------------------------------

@router.get("/analyze", response_model=AnalysisResponse)
async def analyze(
    request: Request,
    url: Optional[str] = None,
    check_links: bool = True,
    keywords: bool = True,
) -> AnalysisResponse:
    """Analyse a single page.

    Args:
        url: Absolute http(s) URL of the page.
        check_links: Verify every unique link on the page for reachability.
        keywords: Ask the language model for keyword suggestions.
    """
    if not url:
        raise HTTPException(status_code=400, detail="URL is required")
    if not _is_http_url(url):
        raise HTTPException(
            status_code=400, detail="URL must be an absolute http(s) URL"
        )

    try:
        analysis = await analyze_url(
            url,
            link_client=request.app.state.link_client,
            verify_links=check_links,
            keywords=keywords,
        )
    except PageFetchError as exc:
        raise HTTPException(status_code=502, detail=exc.message) from exc

    return _analysis_response(analysis)
