"""Link eligibility rules.

Everything here is pure: no function reads or mutates crawl state.
"""

from __future__ import annotations

from typing import Optional
from urllib.parse import urldefrag, urljoin, urlparse, urlunparse

import httpx

from harvester.scraper.models import CrawlOptions

_WEB_SCHEMES = ("http", "https")


def _fetchable(url: str) -> bool:
    """Return ``True`` if httpx will accept *url* for a request."""
    try:
        httpx.URL(url)
    except httpx.InvalidURL:
        return False
    return True


def is_valid_url(url: str) -> bool:
    """Return ``True`` if *url* is an absolute http(s) URL with a hostname."""
    try:
        parsed = urlparse(url)
        # Accessing .port validates it and raises ValueError when malformed.
        parsed.port
    except ValueError:
        return False
    if parsed.scheme.lower() not in _WEB_SCHEMES or not parsed.hostname:
        return False
    return _fetchable(url)


def normalize_url(href: str, base: Optional[str] = None) -> Optional[str]:
    """Resolve *href* against *base* into a canonical absolute URL.

    - Joins relative URLs against base
    - Drops fragments (#...)
    - Lowercases scheme and host
    - Turns an empty path into ``/``

    Non-http(s) targets (``mailto:``, ``tel:`` ...) are returned unchanged so
    the exclusion patterns can reject them.  Returns ``None`` when the href
    cannot be resolved at all or httpx would refuse to request it.
    """
    href = href.strip()
    if not href:
        return None
    try:
        joined = urljoin(base, href) if base else href
        parsed = urlparse(joined)
        if parsed.scheme.lower() not in _WEB_SCHEMES:
            return joined
        if not parsed.hostname:
            return None
        parsed.port
    except ValueError:
        return None

    joined, _ = urldefrag(joined)
    parsed = urlparse(joined)
    normalized = urlunparse((
        parsed.scheme.lower(),
        parsed.netloc.lower(),
        parsed.path or "/",
        parsed.params,
        parsed.query,
        "",
    ))
    # Control characters, overlong URLs and bad IDNA hosts pass urlparse but
    # cannot be requested.
    return normalized if _fetchable(normalized) else None


def _domain_allowed(hostname: str, seed_host: str, allowed_domains) -> bool:
    if not allowed_domains:
        return hostname == seed_host.lower()
    return any(
        hostname == domain or hostname.endswith(f".{domain}")
        for domain in allowed_domains
    )


def is_eligible(candidate_url: str, seed_host: str, options: CrawlOptions) -> bool:
    """Decide whether *candidate_url* may be followed.

    All of the following must hold:

    1. it is a syntactically valid absolute http(s) URL;
    2. it matches none of ``options.exclude_patterns``;
    3. its hostname equals *seed_host* when ``options.allowed_domains`` is
       empty, otherwise it equals or is a subdomain of an allowed domain.
    """
    if not is_valid_url(candidate_url):
        return False

    if any(pattern.search(candidate_url) for pattern in options.exclude_patterns):
        return False

    hostname = (urlparse(candidate_url).hostname or "").lower()
    return _domain_allowed(hostname, seed_host, options.allowed_domains)
