"""Harvest endpoint: crawl a site into a knowledge record.

Routes
------
POST /harvest/url    Body: {"url": "https://...", "options": {...}}  → harvest_url
"""

from __future__ import annotations

import logging
from dataclasses import asdict
from typing import Any, Optional

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel, Field

from harvester.config import settings
from harvester.knowledge import harvest_url
from harvester.scraper.errors import InvalidSeedURLError, NoContentError, SeedFetchError
from harvester.scraper.models import CrawlOptions

logger = logging.getLogger(__name__)

router = APIRouter()


# ---------------------------------------------------------------------------
# Schemas
# ---------------------------------------------------------------------------

class HarvestOptions(BaseModel):
    max_depth: Optional[int] = Field(default=None, ge=0)
    max_pages: Optional[int] = Field(default=None, ge=1)
    allowed_domains: list[str] = Field(default_factory=list)


class HarvestRequest(BaseModel):
    url: str
    options: HarvestOptions = Field(default_factory=HarvestOptions)


class HarvestResponse(BaseModel):
    name: str
    url: str
    domain: str
    page_count: int
    size: str
    scraped_at: str
    content: str


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _crawl_options(opts: HarvestOptions) -> CrawlOptions:
    return CrawlOptions(
        max_depth=settings.harvest_max_depth if opts.max_depth is None else opts.max_depth,
        max_pages=settings.harvest_max_pages if opts.max_pages is None else opts.max_pages,
        allowed_domains=frozenset(opts.allowed_domains),
    )


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@router.post("/url", response_model=HarvestResponse)
def harvest_url_endpoint(body: HarvestRequest, request: Request) -> dict[str, Any]:
    """Crawl a URL and return the harvested text as a knowledge record.

    Nothing is persisted; storing the record is the caller's concern.
    """
    crawler = getattr(request.app.state, "crawler", None)
    try:
        record = harvest_url(body.url, _crawl_options(body.options), crawler=crawler)
    except InvalidSeedURLError as exc:
        raise HTTPException(status_code=422, detail="Invalid URL") from exc
    except SeedFetchError as exc:
        logger.warning("Harvest of %s failed: %s", body.url, exc)
        detail = (
            "Failed to access the website. It may be unreachable, blocking "
            "automated requests, or require authentication."
        )
        if exc.blocked:
            detail = "Access forbidden: the website is blocking automated requests."
        raise HTTPException(status_code=502, detail=detail) from exc
    except NoContentError as exc:
        raise HTTPException(
            status_code=422,
            detail="No content could be extracted from the URL.",
        ) from exc
    return asdict(record)
