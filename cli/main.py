"""Harvester CLI: crawl a site from the command line.

Usage:
    python cli/main.py --help

Commands:
    crawl     → crawl a seed URL and print the harvested pages
    harvest   → crawl a seed URL into a knowledge record
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the project root is on sys.path so that `from harvester.xxx import ...`
# works when the CLI is invoked as `python cli/main.py` from any directory.
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import json
import logging
from dataclasses import asdict
from typing import List, Optional

import typer

from harvester.config import settings
from harvester.knowledge import harvest_url
from harvester.scraper import (
    CrawlOptions,
    HarvestError,
    InvalidSeedURLError,
    NoContentError,
    crawl,
    format_for_storage,
)

EXIT_FATAL = 1
EXIT_NO_CONTENT = 2

app = typer.Typer(
    name="harvester",
    help="Bounded same-site web harvester.",
    no_args_is_help=True,
)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug output."),
) -> None:
    """Configure logging before any command runs."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


def _options(
    max_depth: Optional[int],
    max_pages: Optional[int],
    allowed_domains: Optional[List[str]],
    default_depth: int,
    default_pages: int,
) -> CrawlOptions:
    try:
        return CrawlOptions(
            max_depth=default_depth if max_depth is None else max_depth,
            max_pages=default_pages if max_pages is None else max_pages,
            allowed_domains=frozenset(allowed_domains or ()),
        )
    except ValueError as exc:
        typer.echo(f"[options] {exc}", err=True)
        raise typer.Exit(code=EXIT_FATAL)


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

@app.command("crawl")
def crawl_cmd(
    url: str = typer.Option(..., help="Seed URL to crawl."),
    max_depth: Optional[int] = typer.Option(None, help="Link hops to follow (0 = seed only)."),
    max_pages: Optional[int] = typer.Option(None, help="Maximum pages to collect."),
    allowed_domain: Optional[List[str]] = typer.Option(
        None, "--allowed-domain", help="Domain that links may lead to (repeatable)."
    ),
    as_json: bool = typer.Option(False, "--json", help="Print pages as JSON."),
) -> None:
    """Crawl a URL and print the harvested text to stdout."""
    options = _options(
        max_depth, max_pages, allowed_domain,
        settings.crawl_max_depth, settings.crawl_max_pages,
    )
    typer.echo(f"[crawl] Crawling {url!r} …", err=True)
    try:
        pages = crawl(url, options)
    except HarvestError as exc:
        typer.echo(f"[crawl] {exc}", err=True)
        raise typer.Exit(code=EXIT_FATAL)

    typer.echo(f"[crawl] Collected {len(pages)} page(s)", err=True)
    if not pages:
        raise typer.Exit(code=EXIT_NO_CONTENT)

    if as_json:
        typer.echo(json.dumps([asdict(p) for p in pages], ensure_ascii=False, indent=2))
    else:
        typer.echo(format_for_storage(pages))


@app.command("harvest")
def harvest_cmd(
    url: str = typer.Option(..., help="Seed URL to harvest."),
    max_depth: Optional[int] = typer.Option(None, help="Link hops to follow (0 = seed only)."),
    max_pages: Optional[int] = typer.Option(None, help="Maximum pages to collect."),
    allowed_domain: Optional[List[str]] = typer.Option(
        None, "--allowed-domain", help="Domain that links may lead to (repeatable)."
    ),
    output: Optional[Path] = typer.Option(None, help="Write the formatted content here."),
) -> None:
    """Harvest a URL into a knowledge record and print its summary."""
    options = _options(
        max_depth, max_pages, allowed_domain,
        settings.harvest_max_depth, settings.harvest_max_pages,
    )
    try:
        record = harvest_url(url, options)
    except InvalidSeedURLError as exc:
        typer.echo(f"[harvest] {exc}", err=True)
        raise typer.Exit(code=EXIT_FATAL)
    except NoContentError as exc:
        typer.echo(f"[harvest] {exc}", err=True)
        raise typer.Exit(code=EXIT_NO_CONTENT)
    except HarvestError as exc:
        typer.echo(f"[harvest] Failed to access the website: {exc}", err=True)
        raise typer.Exit(code=EXIT_FATAL)

    typer.echo(f"[harvest] Name   : {record.name}")
    typer.echo(f"[harvest] Domain : {record.domain}")
    typer.echo(f"[harvest] Pages  : {record.page_count}")
    typer.echo(f"[harvest] Size   : {record.size}")

    if output is not None:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(record.content, encoding="utf-8")
        typer.echo(f"[harvest] Content written to {output}")


# ---------------------------------------------------------------------------
# Entry-point
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    app()
