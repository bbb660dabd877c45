"""Knowledge-record assembly.

``harvest_url`` runs a crawl and packages the result into a single record
ready to hand to a storage layer:

    validate → crawl → check for content → format → measure
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from harvester.config import settings
from harvester.scraper.crawler import Crawler
from harvester.scraper.errors import NoContentError
from harvester.scraper.extractor import UNTITLED
from harvester.scraper.formatting import extract_domain, format_for_storage, format_size
from harvester.scraper.models import CrawlOptions


@dataclass
class KnowledgeRecord:
    """A harvested site, flattened for storage."""

    name: str
    url: str
    domain: str
    content: str
    page_count: int
    size: str
    scraped_at: str


def default_harvest_options() -> CrawlOptions:
    """Return the smaller budgets used for knowledge-store harvesting."""
    return CrawlOptions(
        max_depth=settings.harvest_max_depth,
        max_pages=settings.harvest_max_pages,
    )


def harvest_url(
    url: str,
    options: Optional[CrawlOptions] = None,
    *,
    crawler: Optional[Crawler] = None,
) -> KnowledgeRecord:
    """Crawl *url* and return a :class:`KnowledgeRecord`.

    Args:
        url: Seed URL.
        options: Crawl budgets; defaults to :func:`default_harvest_options`.
        crawler: Crawler to use; a default one is created when omitted.

    Raises:
        InvalidSeedURLError: *url* is not an absolute http(s) URL.
        SeedFetchError: The seed page could not be loaded.
        NoContentError: The crawl succeeded but yielded no readable text.
    """
    crawler = crawler or Crawler()
    pages = crawler.crawl(url, options or default_harvest_options())

    if not pages or not any(page.content.strip() for page in pages):
        raise NoContentError(url)

    content = format_for_storage(pages)
    domain = extract_domain(url)
    title = pages[0].title

    return KnowledgeRecord(
        name=title if title and title != UNTITLED else domain,
        url=url,
        domain=domain,
        content=content,
        page_count=len(pages),
        size=format_size(len(content.encode("utf-8"))),
        scraped_at=datetime.now(timezone.utc).isoformat(),
    )
