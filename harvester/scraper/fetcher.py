"""HTTP page fetcher with a desktop-browser header set."""

from __future__ import annotations

from typing import Mapping, Optional

import httpx

from harvester.config import settings
from harvester.scraper.models import RawPage

# Many sites answer 403 to anything that does not look like a real browser.
BROWSER_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
    ),
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.5",
    "Accept-Encoding": "gzip, deflate",
    "Upgrade-Insecure-Requests": "1",
    "Sec-Fetch-Dest": "document",
    "Sec-Fetch-Mode": "navigate",
    "Sec-Fetch-Site": "none",
    "Sec-Fetch-User": "?1",
    "Cache-Control": "max-age=0",
}


def fetch_url(url: str, headers: Optional[Mapping[str, str]] = None) -> RawPage:
    """Fetch *url* and return a :class:`RawPage`.

    HTTP error statuses are *not* raised; the status is reported on the
    returned page so the caller can decide whether the failure is fatal.
    Rate limiting is the caller's job, this function never sleeps.

    Raises:
        httpx.HTTPError: On transport failures and timeouts.
    """
    with httpx.Client(
        headers=dict(headers) if headers is not None else BROWSER_HEADERS,
        timeout=settings.request_timeout,
        follow_redirects=True,
    ) as client:
        response = client.get(url)
        html = response.text
        status_code = response.status_code

    return RawPage(url=url, html=html, status_code=status_code)
