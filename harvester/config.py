"""Centralised settings for the harvester.

All runtime configuration is resolved here in one place.  Values can be
overridden via environment variables or a `.env` file in the project root
(loaded automatically when this module is imported).
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load .env from the project root (two levels up from this file)
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_env_path, override=False)


@dataclass
class Settings:
    # ------------------------------------------------------------------
    # Fetching / politeness
    # ------------------------------------------------------------------
    rate_limit_delay: float = field(
        default_factory=lambda: float(os.environ.get("RATE_LIMIT_DELAY", "1.0"))
    )
    request_timeout: float = field(
        default_factory=lambda: float(os.environ.get("REQUEST_TIMEOUT", "30.0"))
    )

    # ------------------------------------------------------------------
    # Extraction
    # ------------------------------------------------------------------
    max_content_chars: int = field(
        default_factory=lambda: int(os.environ.get("MAX_CONTENT_CHARS", "50000"))
    )

    # ------------------------------------------------------------------
    # Crawl budgets
    # ------------------------------------------------------------------
    crawl_max_depth: int = field(
        default_factory=lambda: int(os.environ.get("CRAWL_MAX_DEPTH", "2"))
    )
    crawl_max_pages: int = field(
        default_factory=lambda: int(os.environ.get("CRAWL_MAX_PAGES", "10"))
    )
    # Smaller budgets used when harvesting a URL into a knowledge record.
    harvest_max_depth: int = field(
        default_factory=lambda: int(os.environ.get("HARVEST_MAX_DEPTH", "1"))
    )
    harvest_max_pages: int = field(
        default_factory=lambda: int(os.environ.get("HARVEST_MAX_PAGES", "5"))
    )

    # ------------------------------------------------------------------
    # Logging
    # ------------------------------------------------------------------
    log_level: str = field(
        default_factory=lambda: os.environ.get("LOG_LEVEL", "INFO").upper()
    )


# Module-level singleton, import this everywhere:
#   from harvester.config import settings
settings = Settings()
