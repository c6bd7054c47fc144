"""Link classification and broken-link verification."""

from seo_analyzer.links.checker import check_links
from seo_analyzer.links.dedupe import unique_urls
from seo_analyzer.links.models import (
    AnchorReference,
    BrokenLink,
    ClassifiedLinks,
    FollowPolicy,
    LinkCategory,
    LinkReport,
    ResolvedLink,
    VerificationOutcome,
)
from seo_analyzer.links.reducer import reduce_outcomes
from seo_analyzer.links.resolver import base_origin, classify_anchors, resolve_link
from seo_analyzer.links.verifier import build_client, verify_url, verify_urls

__all__ = [
    "check_links",
    "unique_urls",
    "reduce_outcomes",
    "base_origin",
    "classify_anchors",
    "resolve_link",
    "build_client",
    "verify_url",
    "verify_urls",
    "AnchorReference",
    "BrokenLink",
    "ClassifiedLinks",
    "FollowPolicy",
    "LinkCategory",
    "LinkReport",
    "ResolvedLink",
    "VerificationOutcome",
]
