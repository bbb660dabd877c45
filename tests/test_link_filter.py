"""Tests for link eligibility and URL normalisation."""

from __future__ import annotations

import re

import pytest

from harvester.scraper.link_filter import is_eligible, is_valid_url, normalize_url
from harvester.scraper.models import CrawlOptions

SEED_HOST = "seed-domain.example"


@pytest.fixture()
def options() -> CrawlOptions:
    return CrawlOptions()


class TestIsValidUrl:
    @pytest.mark.parametrize("url", [
        "https://example.com/",
        "http://example.com:8080/path?q=1",
    ])
    def test_valid(self, url: str) -> None:
        assert is_valid_url(url) is True

    @pytest.mark.parametrize("url", [
        "",
        "/relative/path",
        "example.com/page",
        "ftp://example.com/file",
        "mailto:a@b.com",
        "https://",
        "http://example.com:notaport/",
        "https://a.com/bad\x01link",
        "https://example.com/" + "a" * 70000,
    ])
    def test_invalid(self, url: str) -> None:
        assert is_valid_url(url) is False


class TestNormalizeUrl:
    def test_adds_root_path(self) -> None:
        assert normalize_url("https://Example.COM") == "https://example.com/"

    def test_drops_fragment_keeps_query(self) -> None:
        assert normalize_url("https://a.com/p?x=1#top") == "https://a.com/p?x=1"

    def test_resolves_against_base(self) -> None:
        assert normalize_url("../b", "https://a.com/x/y/") == "https://a.com/x/b"

    def test_blank_href(self) -> None:
        assert normalize_url("   ", "https://a.com/") is None

    def test_pseudo_urls_unchanged(self) -> None:
        assert normalize_url("javascript:void(0)", "https://a.com/") == "javascript:void(0)"

    def test_control_character_href_is_dropped(self) -> None:
        assert normalize_url("/bad\x01link", "https://a.com/") is None


class TestIsEligible:
    def test_only_same_domain_page_is_eligible(self, options: CrawlOptions) -> None:
        candidates = [
            "mailto:a@b.com",
            "#section",
            "https://other-domain.example/x",
            "https://seed-domain.example/page2",
        ]
        eligible = [c for c in candidates if is_eligible(c, SEED_HOST, options)]
        assert eligible == ["https://seed-domain.example/page2"]

    def test_control_character_url_not_eligible(self, options: CrawlOptions) -> None:
        assert is_eligible(f"https://{SEED_HOST}/bad\x01link", SEED_HOST, options) is False

    def test_subdomain_not_crossed_by_default(self, options: CrawlOptions) -> None:
        assert is_eligible("https://blog.seed-domain.example/", SEED_HOST, options) is False

    @pytest.mark.parametrize("url", [
        "https://seed-domain.example/photo.JPG",
        "https://seed-domain.example/report.pdf",
        "https://seed-domain.example/setup.exe",
        "https://seed-domain.example/page#",
        "tel:+15551234",
        "javascript:void(0)",
    ])
    def test_default_exclusions(self, url: str, options: CrawlOptions) -> None:
        assert is_eligible(url, SEED_HOST, options) is False

    def test_allowed_domains_admit_subdomains(self) -> None:
        opts = CrawlOptions(allowed_domains={"docs.example"})
        assert is_eligible("https://docs.example/a", SEED_HOST, opts) is True
        assert is_eligible("https://api.docs.example/a", SEED_HOST, opts) is True
        assert is_eligible("https://notdocs.example/a", SEED_HOST, opts) is False

    def test_allowed_domains_replace_seed_host(self) -> None:
        opts = CrawlOptions(allowed_domains={"docs.example"})
        assert is_eligible("https://seed-domain.example/a", SEED_HOST, opts) is False

    def test_custom_exclude_patterns(self) -> None:
        opts = CrawlOptions(exclude_patterns=[r"/private/", re.compile(r"\?print=")])
        assert is_eligible("https://seed-domain.example/private/x", SEED_HOST, opts) is False
        assert is_eligible("https://seed-domain.example/a?print=1", SEED_HOST, opts) is False
        assert is_eligible("https://seed-domain.example/public", SEED_HOST, opts) is True


class TestCrawlOptions:
    def test_defaults(self) -> None:
        opts = CrawlOptions()
        assert opts.max_depth == 2
        assert opts.max_pages == 10
        assert opts.allowed_domains == frozenset()

    def test_allowed_domains_normalised(self) -> None:
        opts = CrawlOptions(allowed_domains=["Docs.Example ", ""])
        assert opts.allowed_domains == frozenset({"docs.example"})

    @pytest.mark.parametrize("kwargs", [
        {"max_depth": -1},
        {"max_pages": 0},
        {"time_budget": 0},
    ])
    def test_rejects_bad_budgets(self, kwargs: dict) -> None:
        with pytest.raises(ValueError):
            CrawlOptions(**kwargs)
