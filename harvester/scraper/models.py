"""Data models for the scraper pipeline."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import FrozenSet, List, Optional, Pattern, Tuple

from harvester.config import settings

# Binary/media downloads and pseudo-URLs that never lead to readable pages.
DEFAULT_EXCLUDE_PATTERNS: Tuple[Pattern[str], ...] = (
    re.compile(r"\.(jpg|jpeg|png|gif|pdf|zip|exe|dmg|svg|ico)$", re.IGNORECASE),
    re.compile(r"^mailto:", re.IGNORECASE),
    re.compile(r"^tel:", re.IGNORECASE),
    re.compile(r"^javascript:", re.IGNORECASE),
    re.compile(r"#$"),
)


@dataclass
class RawPage:
    """The raw HTTP response for a single URL fetch."""

    url: str
    html: str
    status_code: int

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


@dataclass
class CleanPage:
    """Cleaned, readable content extracted from a :class:`RawPage`.

    ``links`` holds every hyperlink target on the page resolved to an absolute
    URL, before any eligibility filtering.
    """

    url: str
    title: str
    text: str
    links: List[str] = field(default_factory=list)


@dataclass
class ScrapedPage:
    """One harvested page, as returned by the crawler."""

    url: str
    title: str
    content: str
    links: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class CrawlOptions:
    """Caller-supplied budgets and link rules for a single crawl.

    ``allowed_domains`` empty means "stay on the seed's own hostname".
    ``time_budget`` (seconds) stops further expansion once exceeded.
    """

    max_depth: int = field(default_factory=lambda: settings.crawl_max_depth)
    max_pages: int = field(default_factory=lambda: settings.crawl_max_pages)
    allowed_domains: FrozenSet[str] = frozenset()
    exclude_patterns: Tuple[Pattern[str], ...] = DEFAULT_EXCLUDE_PATTERNS
    time_budget: Optional[float] = None

    def __post_init__(self) -> None:
        if self.max_depth < 0:
            raise ValueError(f"max_depth must be >= 0, got {self.max_depth}")
        if self.max_pages < 1:
            raise ValueError(f"max_pages must be >= 1, got {self.max_pages}")
        if self.time_budget is not None and self.time_budget <= 0:
            raise ValueError(f"time_budget must be positive, got {self.time_budget}")
        # Accept any iterable from callers but store immutable, normalised forms.
        object.__setattr__(
            self,
            "allowed_domains",
            frozenset(d.strip().lower() for d in self.allowed_domains if d.strip()),
        )
        object.__setattr__(
            self,
            "exclude_patterns",
            tuple(
                re.compile(p, re.IGNORECASE) if isinstance(p, str) else p
                for p in self.exclude_patterns
            ),
        )
