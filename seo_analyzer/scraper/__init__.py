"""Scraper package: page fetch & signal extraction."""

from seo_analyzer.scraper.extractor import extract_signals
from seo_analyzer.scraper.fetcher import PageFetchError, fetch_page
from seo_analyzer.scraper.models import ImageInfo, PageSignals, RawPage

__all__ = ["fetch_page", "extract_signals", "PageFetchError", "RawPage", "PageSignals", "ImageInfo"]
