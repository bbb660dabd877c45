"""Helpers that shape crawl output for storage."""

from __future__ import annotations

from typing import Sequence
from urllib.parse import urlparse

from harvester.scraper.models import ScrapedPage

NO_CONTENT = "No content scraped"


def format_for_storage(pages: Sequence[ScrapedPage]) -> str:
    """Concatenate *pages* in order, each under a title/URL header block.

    Returns :data:`NO_CONTENT` rather than an empty string when *pages* is
    empty, so an empty artifact is never mistaken for one that was not run.
    """
    if not pages:
        return NO_CONTENT

    parts = []
    for page in pages:
        parts.append(f"\n\n--- Page: {page.title} ---\n")
        parts.append(f"URL: {page.url}\n\n")
        parts.append(page.content)
        parts.append("\n")
    return "".join(parts).strip()


def extract_domain(url: str) -> str:
    """Return the hostname of *url*, or ``""`` if it cannot be parsed."""
    try:
        return urlparse(url).hostname or ""
    except ValueError:
        return ""


def format_size(num_bytes: int) -> str:
    """Render a byte count as ``"12.3 KB"``, or ``"1.2 MB"`` above 1024 KB."""
    kilobytes = num_bytes / 1024
    if kilobytes > 1024:
        return f"{kilobytes / 1024:.1f} MB"
    return f"{kilobytes:.1f} KB"
