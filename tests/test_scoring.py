"""Tests for the heuristic page score."""

from __future__ import annotations

from seo_analyzer.links.models import (
    BrokenLink,
    ClassifiedLinks,
    LinkCategory,
    LinkReport,
)
from seo_analyzer.scraper.models import NO_DESCRIPTION, NO_TITLE, ImageInfo, PageSignals
from seo_analyzer.seo.scoring import score_page, score_status

_GOOD_META = "A description that is comfortably between fifty and one hundred sixty characters."


def _signals(**overrides) -> PageSignals:
    values = dict(
        url="https://example.com/",
        title="A good title",
        meta_description=_GOOD_META,
        h1_tags=["Heading"],
        images_with_alt=1,
        images_without_alt=0,
        image_data=[ImageInfo(src="/a.png", alt="A", has_alt=True)],
        schema_types=["Article"],
    )
    values.update(overrides)
    return PageSignals(**values)


def _links(
    internal: int = 1,
    followable: int = 1,
    confirmed: int = 0,
    network: int = 0,
) -> LinkReport:
    links = ClassifiedLinks(
        internal=[f"https://example.com/{i}" for i in range(internal)],
        external_followable=[f"https://other.com/{i}" for i in range(followable)],
    )
    broken = [
        BrokenLink(f"https://example.com/b{i}", 404, LinkCategory.CLIENT_ERROR)
        for i in range(confirmed)
    ] + [
        BrokenLink(f"https://slow.com/{i}", "Timeout", LinkCategory.NETWORK_ISSUE)
        for i in range(network)
    ]
    return LinkReport(
        links=links,
        broken_links=broken,
        confirmed_broken_count=confirmed,
        network_issue_count=network,
    )


class TestScoreStatus:
    def test_thresholds(self) -> None:
        assert score_status(100) == "good"
        assert score_status(80) == "good"
        assert score_status(79) == "average"
        assert score_status(60) == "average"
        assert score_status(59) == "bad"


class TestScorePage:
    def test_healthy_page_hits_ceiling(self) -> None:
        result = score_page(_signals(), _links())

        assert result.score == 100
        assert result.status == "good"
        assert result.issues == []
        assert "One H1 is good ✅" in result.strengths

    def test_bare_page(self) -> None:
        signals = _signals(
            title=NO_TITLE,
            meta_description=NO_DESCRIPTION,
            h1_tags=[],
            images_with_alt=0,
            image_data=[],
            schema_types=[],
        )
        result = score_page(signals, _links(internal=0, followable=0))

        assert result.score == 50
        assert result.status == "bad"
        assert "No Title ❌" in result.issues
        assert "No Meta description ❌" in result.issues
        assert "No H1 ❌" in result.issues
        assert "No images found on the page." in result.strengths
        assert "No internal links found on the page. ❌" in result.issues
        # Missing description is not also reported as badly sized.
        assert "Meta description is too short or too long ❌" not in result.issues

    def test_long_title_not_rewarded(self) -> None:
        result = score_page(_signals(title="x" * 61), _links())
        assert result.score == 95
        assert any("Title is too long" in issue for issue in result.issues)

    def test_short_meta_description_flagged_but_rewarded(self) -> None:
        result = score_page(_signals(meta_description="Too short."), _links())
        assert "Meta description is present ✅" in result.strengths
        assert "Meta description is too short or too long ❌" in result.issues

    def test_multiple_h1(self) -> None:
        result = score_page(_signals(h1_tags=["a", "b"]), _links())
        assert "Number of H1 = 2 (one is preferred) ❌" in result.issues

    def test_missing_alt(self) -> None:
        result = score_page(_signals(images_without_alt=3), _links())
        assert "Missing alt attributes on 3 images ❌" in result.issues

    def test_confirmed_broken_links_penalised(self) -> None:
        result = score_page(_signals(), _links(confirmed=4))
        assert result.score == 85
        assert "Found 4 broken links. Fix them! ❌" in result.issues

    def test_network_issues_warned_not_penalised(self) -> None:
        result = score_page(_signals(), _links(network=3))
        assert result.score == 100
        assert any("3 links with network issues" in issue for issue in result.issues)

    def test_score_clamped_at_zero(self) -> None:
        signals = _signals(
            title=NO_TITLE,
            meta_description=NO_DESCRIPTION,
            h1_tags=[],
            image_data=[],
            schema_types=[],
        )
        result = score_page(signals, _links(internal=0, followable=0, confirmed=20))
        assert result.score == 0
        assert result.status == "bad"

    def test_schema_listed(self) -> None:
        result = score_page(_signals(schema_types=["Product", "Offer"]), _links())
        assert "Found Schema Markup (Product, Offer) ✅" in result.strengths
