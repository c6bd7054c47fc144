"""Data models for the scraper pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from seo_analyzer.links.models import AnchorReference

NO_TITLE = "No title"
NO_DESCRIPTION = "No description"


@dataclass
class RawPage:
    """The raw HTTP response for the analysed URL."""

    url: str
    html: str
    status_code: int
    load_time_ms: int = 0


@dataclass
class ImageInfo:
    src: str
    alt: str
    has_alt: bool


@dataclass
class PageSignals:
    """SEO-relevant signals extracted from a :class:`RawPage`."""

    url: str
    title: str
    meta_description: str
    h1_tags: List[str] = field(default_factory=list)
    images_with_alt: int = 0
    images_without_alt: int = 0
    image_data: List[ImageInfo] = field(default_factory=list)
    anchors: List[AnchorReference] = field(default_factory=list)
    schema_types: List[str] = field(default_factory=list)
    main_text: str = ""

    @property
    def has_title(self) -> bool:
        return self.title != NO_TITLE

    @property
    def has_meta_description(self) -> bool:
        return self.meta_description != NO_DESCRIPTION
