"""Content extraction: turns a :class:`RawPage` into a :class:`CleanPage`."""

from __future__ import annotations

import re
from typing import List

from bs4 import BeautifulSoup

from harvester.scraper.link_filter import normalize_url
from harvester.scraper.models import CleanPage, RawPage

# Tried in order; the first selector that matches becomes the content region.
CONTENT_SELECTORS = (
    "main",
    "article",
    '[role="main"]',
    ".content",
    "#content",
    ".post",
    ".entry-content",
    "body",
)

UNTITLED = "Untitled"

_INLINE_WS = re.compile(r"[^\S\n]+")
_WS_AROUND_NEWLINE = re.compile(r" *\n *")
_EXTRA_NEWLINES = re.compile(r"\n{3,}")


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _extract_title(soup: BeautifulSoup) -> str:
    """Return the ``<title>`` text, else the first ``<h1>``, else ``"Untitled"``."""
    if soup.title is not None:
        title = soup.title.get_text(strip=True)
        if title:
            return title
    h1 = soup.find("h1")
    if h1 is not None:
        heading = h1.get_text(" ", strip=True)
        if heading:
            return heading
    return UNTITLED


def _main_text(soup: BeautifulSoup) -> str:
    for tag in soup(["script", "style", "noscript"]):
        tag.decompose()
    for selector in CONTENT_SELECTORS:
        container = soup.select_one(selector)
        if container is not None:
            return container.get_text()
    return soup.get_text()


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def clean_text(text: str) -> str:
    """Collapse whitespace runs and squeeze 3+ consecutive newlines down to 2."""
    text = _INLINE_WS.sub(" ", text)
    text = _WS_AROUND_NEWLINE.sub("\n", text)
    text = _EXTRA_NEWLINES.sub("\n\n", text)
    return text.strip()


def _collect_links(soup: BeautifulSoup, base_url: str) -> List[str]:
    seen: set[str] = set()
    links: List[str] = []
    for anchor in soup.find_all("a", href=True):
        href = anchor["href"].strip()
        if not href or href.startswith("#"):
            continue
        url = normalize_url(href, base_url)
        if url and url not in seen:
            seen.add(url)
            links.append(url)
    return links


def extract_links(html: str, base_url: str) -> List[str]:
    """Return de-duplicated absolute link targets from ``<a href>`` tags.

    Fragment-only links (``#anchor``) and empty hrefs are excluded; everything
    else is resolved against *base_url*.  Order follows the document.
    """
    return _collect_links(BeautifulSoup(html, "html.parser"), base_url)


def extract_content(raw: RawPage) -> CleanPage:
    """Extract a title, readable text and the page's links from *raw*.

    Script, style and noscript elements are stripped, then the text of the
    first matching region in :data:`CONTENT_SELECTORS` is kept.
    """
    soup = BeautifulSoup(raw.html, "html.parser")
    title = _extract_title(soup)
    # Links are read before _main_text strips noscript and friends.
    links = _collect_links(soup, raw.url)
    text = clean_text(_main_text(soup))

    return CleanPage(url=raw.url, title=title, text=text, links=links)
