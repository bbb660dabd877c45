"""Bounded same-site web harvester."""

from harvester.knowledge import KnowledgeRecord, harvest_url
from harvester.scraper import (
    CrawlOptions,
    Crawler,
    ScrapedPage,
    crawl,
    format_for_storage,
)

__version__ = "0.1.0"
__all__ = [
    "CrawlOptions",
    "Crawler",
    "KnowledgeRecord",
    "ScrapedPage",
    "crawl",
    "format_for_storage",
    "harvest_url",
]
