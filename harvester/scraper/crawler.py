"""Bounded depth-first crawler.

``Crawler.crawl`` fetches a seed page, then recursively follows eligible links
up to ``max_depth`` hops away, stopping as soon as ``max_pages`` pages have
been collected.  Requests are strictly sequential and their *starts* are
spaced at least ``min_delay`` seconds apart.

Failure policy:

- the seed URL failing validation raises :class:`InvalidSeedURLError`;
- the seed page failing to load raises :class:`SeedFetchError`;
- any other page failing to load is logged and its branch is pruned.
"""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass, field
from typing import Callable, List, Mapping, Optional, Set
from urllib.parse import urlparse

import httpx

from harvester.config import settings
from harvester.scraper.errors import InvalidSeedURLError, SeedFetchError
from harvester.scraper.extractor import extract_content
from harvester.scraper.fetcher import BROWSER_HEADERS, fetch_url
from harvester.scraper.link_filter import is_eligible, is_valid_url, normalize_url
from harvester.scraper.models import CleanPage, CrawlOptions, RawPage, ScrapedPage

logger = logging.getLogger(__name__)

Fetcher = Callable[[str, Mapping[str, str]], RawPage]
Extractor = Callable[[RawPage], CleanPage]


@dataclass
class CrawlStats:
    """Counters for a single crawl, kept for diagnostics."""

    fetched: int = 0
    failed: int = 0
    skipped: int = 0


@dataclass
class CrawlState:
    """Mutable state owned by one ``crawl`` call and discarded afterwards."""

    seed_host: str
    started_at: float
    visited: Set[str] = field(default_factory=set)
    collected: List[ScrapedPage] = field(default_factory=list)
    last_request_at: Optional[float] = None
    stats: CrawlStats = field(default_factory=CrawlStats)


class Crawler:
    """Recursive same-site crawler with global page and depth budgets.

    Args:
        fetcher: ``fetcher(url, headers) -> RawPage``.  Must raise
            ``httpx.HTTPError`` or ``httpx.InvalidURL`` for transport failures
            and report HTTP errors through ``RawPage.status_code``.
        extractor: ``extractor(raw) -> CleanPage``.
        headers: Request headers handed to the fetcher.
        min_delay: Minimum seconds between the starts of two requests.
        max_content_chars: Page content is truncated to this many characters.
        clock: Monotonic time source, in seconds.
        sleep: Blocking sleep function, in seconds.
    """

    def __init__(
        self,
        fetcher: Optional[Fetcher] = None,
        extractor: Optional[Extractor] = None,
        *,
        headers: Optional[Mapping[str, str]] = None,
        min_delay: Optional[float] = None,
        max_content_chars: Optional[int] = None,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._fetcher = fetcher or fetch_url
        self._extractor = extractor or extract_content
        self._headers = dict(headers) if headers is not None else dict(BROWSER_HEADERS)
        self._min_delay = settings.rate_limit_delay if min_delay is None else min_delay
        self._max_content_chars = (
            settings.max_content_chars if max_content_chars is None else max_content_chars
        )
        self._clock = clock
        self._sleep = sleep
        self.last_stats = CrawlStats()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def crawl(
        self,
        seed_url: str,
        options: Optional[CrawlOptions] = None,
        *,
        cancel: Optional[threading.Event] = None,
    ) -> List[ScrapedPage]:
        """Crawl from *seed_url* and return the collected pages, seed first.

        Setting *cancel* stops the crawl before its next request; the pages
        collected so far are returned.

        Raises:
            InvalidSeedURLError: *seed_url* is not an absolute http(s) URL.
            SeedFetchError: The seed page could not be loaded.
        """
        options = options or CrawlOptions()
        seed = normalize_url(seed_url) if is_valid_url(seed_url.strip()) else None
        if seed is None:
            raise InvalidSeedURLError(seed_url)

        state = CrawlState(
            seed_host=(urlparse(seed).hostname or "").lower(),
            started_at=self._clock(),
        )
        self.last_stats = state.stats

        logger.info(
            "Starting crawl of %s (max_depth=%d, max_pages=%d)",
            seed, options.max_depth, options.max_pages,
        )
        self._visit(seed, 0, options, state, cancel)
        logger.info(
            "Crawl of %s finished: %d page(s) collected, %d failed fetch(es)",
            seed, len(state.collected), state.stats.failed,
        )
        return state.collected

    # ------------------------------------------------------------------
    # Traversal
    # ------------------------------------------------------------------

    def _visit(
        self,
        url: str,
        depth: int,
        options: CrawlOptions,
        state: CrawlState,
        cancel: Optional[threading.Event],
    ) -> None:
        if self._should_prune(url, depth, options, state, cancel):
            return

        state.visited.add(url)
        logger.info("Scraping %s at depth %d", url, depth)

        raw = self._fetch(url, depth, state)
        if raw is None:
            return

        clean = self._extractor(raw)
        links = [
            link for link in dict.fromkeys(clean.links)
            if is_eligible(link, state.seed_host, options)
        ]
        page = ScrapedPage(
            url=url,
            title=clean.title,
            content=clean.text[: self._max_content_chars],
            links=links,
        )
        state.collected.append(page)

        if depth >= options.max_depth:
            return
        for link in page.links:
            if len(state.collected) >= options.max_pages:
                break
            self._visit(link, depth + 1, options, state, cancel)

    def _should_prune(
        self,
        url: str,
        depth: int,
        options: CrawlOptions,
        state: CrawlState,
        cancel: Optional[threading.Event],
    ) -> bool:
        reason = None
        if depth > options.max_depth:
            reason = "depth limit"
        elif len(state.collected) >= options.max_pages:
            reason = "page limit"
        elif url in state.visited:
            reason = "already visited"
        elif cancel is not None and cancel.is_set():
            reason = "cancelled"
        elif (
            options.time_budget is not None
            and self._clock() - state.started_at >= options.time_budget
        ):
            reason = "time budget exhausted"

        if reason is None:
            return False
        state.stats.skipped += 1
        logger.debug("Skipping %s at depth %d: %s", url, depth, reason)
        return True

    # ------------------------------------------------------------------
    # Fetching
    # ------------------------------------------------------------------

    def _wait_for_slot(self, state: CrawlState) -> None:
        """Block until ``min_delay`` has passed since the previous request start."""
        if state.last_request_at is not None:
            remaining = self._min_delay - (self._clock() - state.last_request_at)
            if remaining > 0:
                logger.debug("Rate limit: sleeping %.3fs", remaining)
                self._sleep(remaining)
        state.last_request_at = self._clock()

    def _fetch(self, url: str, depth: int, state: CrawlState) -> Optional[RawPage]:
        """Fetch *url*; return ``None`` on failure unless *url* is the seed."""
        self._wait_for_slot(state)
        try:
            raw = self._fetcher(url, self._headers)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            state.stats.failed += 1
            logger.warning("Error fetching %s: %s", url, exc)
            if depth == 0:
                raise SeedFetchError(url, reason=str(exc) or type(exc).__name__) from exc
            return None

        state.stats.fetched += 1
        if raw.ok:
            return raw

        state.stats.failed += 1
        logger.warning("Failed to fetch %s: HTTP %d", url, raw.status_code)
        if raw.status_code == 403:
            logger.warning(
                "Access forbidden for %s; the site is likely blocking automated requests.",
                url,
            )
        if depth == 0:
            reason = "likely blocked as a bot" if raw.status_code == 403 else ""
            raise SeedFetchError(url, status_code=raw.status_code, reason=reason)
        return None


def crawl(
    seed_url: str,
    options: Optional[CrawlOptions] = None,
    *,
    cancel: Optional[threading.Event] = None,
) -> List[ScrapedPage]:
    """Crawl *seed_url* with a default :class:`Crawler`."""
    return Crawler().crawl(seed_url, options, cancel=cancel)
