"""Heuristic on-page SEO score.

The score starts at ``BASE_SCORE``, earns points for each healthy signal,
loses ``BROKEN_LINK_PENALTY`` per confirmed broken link and is clamped to
0-100.  Every rule also contributes a human-readable strength or issue.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from seo_analyzer.links.models import LinkReport
from seo_analyzer.scraper.models import PageSignals

BASE_SCORE = 50
BROKEN_LINK_PENALTY = 5

TITLE_MAX_CHARS = 60
META_DESCRIPTION_MIN_CHARS = 50
META_DESCRIPTION_MAX_CHARS = 160

GOOD_THRESHOLD = 80
AVERAGE_THRESHOLD = 60


@dataclass
class ScoreResult:
    score: int
    status: str
    strengths: List[str] = field(default_factory=list)
    issues: List[str] = field(default_factory=list)


def score_status(score: int) -> str:
    if score >= GOOD_THRESHOLD:
        return "good"
    if score >= AVERAGE_THRESHOLD:
        return "average"
    return "bad"


def score_page(signals: PageSignals, links: LinkReport) -> ScoreResult:
    """Score *signals* and the link report of the same page."""
    score = BASE_SCORE
    strengths: List[str] = []
    issues: List[str] = []

    # Title
    if not signals.has_title:
        issues.append("No Title ❌")
    elif len(signals.title) <= TITLE_MAX_CHARS:
        score += 10
        strengths.append("Title is present and suitable length ✅")
    else:
        issues.append(
            f"Title is too long (preferably less than {TITLE_MAX_CHARS} characters) ❌"
        )

    # Meta description
    if signals.has_meta_description:
        score += 10
        strengths.append("Meta description is present ✅")
        length = len(signals.meta_description)
        if length < META_DESCRIPTION_MIN_CHARS or length > META_DESCRIPTION_MAX_CHARS:
            issues.append("Meta description is too short or too long ❌")
    else:
        issues.append("No Meta description ❌")

    # Headings
    h1_count = len(signals.h1_tags)
    if h1_count == 1:
        score += 10
        strengths.append("One H1 is good ✅")
    elif h1_count == 0:
        issues.append("No H1 ❌")
    else:
        issues.append(f"Number of H1 = {h1_count} (one is preferred) ❌")

    # Images
    if signals.images_without_alt == 0 and signals.image_data:
        score += 10
        strengths.append("All images have alt attributes ✅")
    elif signals.images_without_alt > 0:
        issues.append(f"Missing alt attributes on {signals.images_without_alt} images ❌")
    else:
        strengths.append("No images found on the page.")

    # Links
    internal = len(links.links.internal)
    if internal > 0:
        score += 5
        strengths.append(f"Found {internal} internal links. Good for navigation. ✅")
    else:
        issues.append("No internal links found on the page. ❌")

    followable = len(links.links.external_followable)
    if followable > 0:
        score += 5
        strengths.append(
            f"Found {followable} dofollow external links. "
            "Good for linking to authority sites. ✅"
        )

    if links.confirmed_broken_count > 0:
        issues.append(f"Found {links.confirmed_broken_count} broken links. Fix them! ❌")
        score -= links.confirmed_broken_count * BROKEN_LINK_PENALTY

    # Network trouble is reported but not penalised.
    if links.network_issue_count > 0:
        issues.append(
            f"Found {links.network_issue_count} links with network issues or timeouts. "
            "Check network or server configuration. ⚠️"
        )

    # Structured data
    if signals.schema_types:
        score += 5
        strengths.append(f"Found Schema Markup ({', '.join(signals.schema_types)}) ✅")
    else:
        issues.append("No Schema Markup found. Consider adding it for rich results. ⚠️")

    score = max(0, min(100, score))
    return ScoreResult(score=score, status=score_status(score), strengths=strengths, issues=issues)
