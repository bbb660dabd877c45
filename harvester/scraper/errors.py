"""Exceptions raised by the harvester."""

from __future__ import annotations

from typing import Optional


class HarvestError(Exception):
    """Base class for all harvester errors."""


class InvalidSeedURLError(HarvestError, ValueError):
    """The seed URL is not an absolute http(s) URL with a host."""

    def __init__(self, url: str) -> None:
        super().__init__(f"Invalid seed URL: {url!r}")
        self.url = url


class SeedFetchError(HarvestError):
    """The seed page itself could not be loaded.

    ``status_code`` is ``None`` for transport errors and timeouts.
    """

    def __init__(self, url: str, status_code: Optional[int] = None, reason: str = "") -> None:
        self.url = url
        self.status_code = status_code
        self.reason = reason
        if status_code is not None:
            message = f"Failed to fetch {url}: HTTP {status_code}"
        else:
            message = f"Failed to fetch {url}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)

    @property
    def blocked(self) -> bool:
        """``True`` when the site most likely rejected an automated client."""
        return self.status_code == 403


class NoContentError(HarvestError):
    """A crawl finished without error but collected zero pages."""

    def __init__(self, url: str) -> None:
        super().__init__(f"No content could be extracted from {url}")
        self.url = url
