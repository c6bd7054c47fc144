"""Signal extraction: turns a :class:`RawPage` into :class:`PageSignals`."""

from __future__ import annotations

import json
import logging
import re
from typing import Any, List

import trafilatura
from bs4 import BeautifulSoup

from seo_analyzer.links.models import AnchorReference
from seo_analyzer.scraper.models import (
    NO_DESCRIPTION,
    NO_TITLE,
    ImageInfo,
    PageSignals,
    RawPage,
)

logger = logging.getLogger(__name__)

# Checked in order; the first non-empty ``content`` wins.
_META_DESCRIPTION_SELECTORS = [
    {"name": "description"},
    {"name": "Description"},
    {"property": "og:description"},
    {"name": "og:description"},
]

_TEXT_CONTAINERS = "p, h1, h2, h3, h4, h5, h6, li, blockquote, article, main"


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _extract_title(soup: BeautifulSoup) -> str:
    """Return the text of the first ``<title>`` tag, or ``"No title"``."""
    if soup.title is None:
        return NO_TITLE
    return soup.title.get_text().strip() or NO_TITLE


def _extract_meta_description(soup: BeautifulSoup) -> str:
    for attrs in _META_DESCRIPTION_SELECTORS:
        tag = soup.find("meta", attrs=attrs)
        if tag is not None and tag.get("content"):
            return tag["content"]
    return NO_DESCRIPTION


def _extract_images(soup: BeautifulSoup) -> tuple[int, int, List[ImageInfo]]:
    """Return ``(with_alt, without_alt, image_data)``.

    Every ``<img>`` is counted; only images with a ``src`` are listed.
    """
    with_alt = without_alt = 0
    images: List[ImageInfo] = []
    for img in soup.find_all("img"):
        alt = img.get("alt")
        has_alt = alt is not None and alt.strip() != ""
        if has_alt:
            with_alt += 1
        else:
            without_alt += 1
        src = img.get("src")
        if src:
            images.append(ImageInfo(src=src, alt=alt or "", has_alt=has_alt))
    return with_alt, without_alt, images


def _extract_anchors(soup: BeautifulSoup) -> List[AnchorReference]:
    """Return ``(href, rel)`` for every ``<a>`` with a non-empty href."""
    anchors: List[AnchorReference] = []
    for a in soup.find_all("a"):
        href = a.get("href")
        if not href:
            continue
        # bs4 parses rel as a multi-valued attribute
        rel = a.get("rel") or ""
        if isinstance(rel, list):
            rel = " ".join(rel)
        anchors.append(AnchorReference(raw_href=href, rel=rel))
    return anchors


def _schema_types_of(item: Any) -> List[str]:
    if not isinstance(item, dict):
        return []
    types: List[str] = []
    schema_type = item.get("@type")
    if isinstance(schema_type, list):
        types.extend(str(t) for t in schema_type)
    elif schema_type:
        types.append(str(schema_type))
    for node in item.get("@graph", []) or []:
        types.extend(_schema_types_of(node))
    return types


def _extract_schema_types(soup: BeautifulSoup) -> List[str]:
    """Collect ``@type`` values from every JSON-LD block.

    Unparseable blocks are logged and skipped.
    """
    types: List[str] = []
    for script in soup.find_all("script", attrs={"type": "application/ld+json"}):
        try:
            data = json.loads(script.string or script.get_text())
        except json.JSONDecodeError as exc:
            logger.warning("[SCHEMA] Could not parse JSON-LD schema: %s", exc)
            continue
        items = data if isinstance(data, list) else [data]
        for item in items:
            types.extend(_schema_types_of(item))
    return types


def _container_text(soup: BeautifulSoup) -> str:
    """Whitespace-collapsed text of the usual content containers."""
    text = "\n".join(el.get_text() for el in soup.select(_TEXT_CONTAINERS))
    return re.sub(r"\s+", " ", text).strip()


def _extract_main_text(html: str, soup: BeautifulSoup, url: str) -> str:
    """Readable body text for keyword suggestions.

    Tries ``trafilatura`` first; falls back to the content containers when it
    returns nothing (minimal or unusual markup).
    """
    text: str | None = trafilatura.extract(
        html,
        include_links=False,
        include_images=False,
        include_tables=True,
        url=url,
    )
    if text:
        return re.sub(r"\s+", " ", text).strip()
    return _container_text(soup)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def extract_signals(raw: RawPage) -> PageSignals:
    """Parse *raw* and collect every signal the analysis needs."""
    soup = BeautifulSoup(raw.html, "html.parser")
    with_alt, without_alt, images = _extract_images(soup)

    return PageSignals(
        url=raw.url,
        title=_extract_title(soup),
        meta_description=_extract_meta_description(soup),
        h1_tags=[h1.get_text().strip() for h1 in soup.find_all("h1")],
        images_with_alt=with_alt,
        images_without_alt=without_alt,
        image_data=images,
        anchors=_extract_anchors(soup),
        schema_types=_extract_schema_types(soup),
        main_text=_extract_main_text(raw.html, soup, raw.url),
    )
