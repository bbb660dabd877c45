"""Tests for the harvester CLI."""

from __future__ import annotations

import json
from unittest.mock import patch

from typer.testing import CliRunner

from cli.main import EXIT_FATAL, EXIT_NO_CONTENT, app
from harvester.knowledge import KnowledgeRecord
from harvester.scraper.errors import InvalidSeedURLError, NoContentError, SeedFetchError
from harvester.scraper.models import ScrapedPage

runner = CliRunner()

_PAGES = [
    ScrapedPage(url="https://example.com/", title="Home", content="Welcome.", links=[]),
    ScrapedPage(url="https://example.com/a", title="A", content="Page A.", links=[]),
]


class TestCrawlCommand:
    def test_prints_formatted_content(self):
        with patch("cli.main.crawl", return_value=_PAGES) as mock_crawl:
            result = runner.invoke(
                app,
                ["crawl", "--url", "https://example.com/", "--max-depth", "1",
                 "--allowed-domain", "example.com"],
            )

        assert result.exit_code == 0
        assert "--- Page: Home ---" in result.output
        assert "URL: https://example.com/a" in result.output
        options = mock_crawl.call_args.args[1]
        assert options.max_depth == 1
        assert options.allowed_domains == frozenset({"example.com"})

    def test_json_output(self):
        with patch("cli.main.crawl", return_value=_PAGES):
            result = runner.invoke(app, ["crawl", "--url", "https://example.com/", "--json"])

        assert result.exit_code == 0
        start = result.output.index("[\n")
        payload = json.loads(result.output[start:])
        assert [p["title"] for p in payload] == ["Home", "A"]

    def test_seed_failure_exits_fatal(self):
        error = SeedFetchError("https://example.com/", 403)
        with patch("cli.main.crawl", side_effect=error):
            result = runner.invoke(app, ["crawl", "--url", "https://example.com/"])

        assert result.exit_code == EXIT_FATAL
        assert "HTTP 403" in result.output

    def test_empty_result_exits_no_content(self):
        with patch("cli.main.crawl", return_value=[]):
            result = runner.invoke(app, ["crawl", "--url", "https://example.com/"])

        assert result.exit_code == EXIT_NO_CONTENT

    def test_invalid_budget(self):
        result = runner.invoke(app, ["crawl", "--url", "https://example.com/", "--max-pages", "0"])
        assert result.exit_code == EXIT_FATAL


class TestHarvestCommand:
    def _record(self) -> KnowledgeRecord:
        return KnowledgeRecord(
            name="Home",
            url="https://example.com/",
            domain="example.com",
            content="--- Page: Home ---\nURL: https://example.com/\n\nWelcome.",
            page_count=1,
            size="0.1 KB",
            scraped_at="2026-01-01T00:00:00+00:00",
        )

    def test_prints_summary_and_writes_output(self, tmp_path):
        out = tmp_path / "out" / "site.txt"
        with patch("cli.main.harvest_url", return_value=self._record()):
            result = runner.invoke(
                app, ["harvest", "--url", "https://example.com/", "--output", str(out)]
            )

        assert result.exit_code == 0
        assert "Pages  : 1" in result.output
        assert out.read_text(encoding="utf-8").endswith("Welcome.")

    def test_no_content(self):
        with patch("cli.main.harvest_url", side_effect=NoContentError("https://example.com/")):
            result = runner.invoke(app, ["harvest", "--url", "https://example.com/"])

        assert result.exit_code == EXIT_NO_CONTENT
        assert "No content could be extracted" in result.output

    def test_invalid_url(self):
        with patch("cli.main.harvest_url", side_effect=InvalidSeedURLError("nope")):
            result = runner.invoke(app, ["harvest", "--url", "nope"])

        assert result.exit_code == EXIT_FATAL

    def test_unreachable(self):
        with patch("cli.main.harvest_url", side_effect=SeedFetchError("https://example.com/")):
            result = runner.invoke(app, ["harvest", "--url", "https://example.com/"])

        assert result.exit_code == EXIT_FATAL
        assert "Failed to access the website" in result.output
