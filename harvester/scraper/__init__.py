"""Scraper package: fetch, extract, filter and crawl."""

from harvester.scraper.crawler import Crawler, CrawlStats, crawl
from harvester.scraper.errors import (
    HarvestError,
    InvalidSeedURLError,
    NoContentError,
    SeedFetchError,
)
from harvester.scraper.extractor import extract_content
from harvester.scraper.fetcher import fetch_url
from harvester.scraper.formatting import extract_domain, format_for_storage, format_size
from harvester.scraper.link_filter import is_eligible
from harvester.scraper.models import CleanPage, CrawlOptions, RawPage, ScrapedPage

__all__ = [
    "Crawler",
    "CrawlStats",
    "crawl",
    "HarvestError",
    "InvalidSeedURLError",
    "NoContentError",
    "SeedFetchError",
    "extract_content",
    "fetch_url",
    "extract_domain",
    "format_for_storage",
    "format_size",
    "is_eligible",
    "CleanPage",
    "CrawlOptions",
    "RawPage",
    "ScrapedPage",
]
