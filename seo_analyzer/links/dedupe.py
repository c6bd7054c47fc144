"""Collapse resolved links to the population scheduled for verification."""

from __future__ import annotations

from typing import Iterable, List


def unique_urls(urls: Iterable[str]) -> List[str]:
    """Deduplicate *urls* by string equality, preserving first-seen order."""
    seen: set[str] = set()
    unique: List[str] = []
    for url in urls:
        if url not in seen:
            seen.add(url)
            unique.append(url)
    return unique
