"""RubyGems release index fetcher.

Lists every released version of a gem through the RubyGems versions API::

    GET https://rubygems.org/api/v1/versions/<name>.json

Each element carries ``number``, ``prerelease`` and ``platform``. Only
strict ``X.Y.Z`` releases are kept; platform-specific builds of the same
number collapse to one version.

Usage::

    fetcher = RubyGemsFetcher()
    versions = fetcher.fetch_released_versions("puppet")
"""

from __future__ import annotations

import logging
from typing import Any

from pinpoint.core.catalog import ReleaseFetcher, sorted_unique
from pinpoint.core.version import SemanticVersion, is_exact
from pinpoint.exceptions import CatalogUnavailable
from pinpoint.registry.http_client import DEFAULT_TIMEOUT, fetch_json

logger = logging.getLogger(__name__)

RUBYGEMS_URL: str = "https://rubygems.org"
VERSIONS_PATH: str = "/api/v1/versions/{package}.json"


class RubyGemsFetcher(ReleaseFetcher):
    """Fetch released versions from a RubyGems-compatible index.

    Args:
        index_url: Base URL of the index.
        timeout: Request timeout in seconds.
    """

    def __init__(self, index_url: str = RUBYGEMS_URL, timeout: float = DEFAULT_TIMEOUT) -> None:
        self.index_url = index_url.rstrip("/")
        self.timeout = timeout

    def versions_url(self, package_name: str) -> str:
        return self.index_url + VERSIONS_PATH.format(package=package_name)

    def fetch_released_versions(self, package_name: str) -> list[SemanticVersion]:
        url = self.versions_url(package_name)
        data = fetch_json(url, timeout=self.timeout)
        if not isinstance(data, list):
            raise CatalogUnavailable(f"Unexpected response from {url}: expected a list")
        versions = _released_versions(data)
        logger.debug("%s: %d released versions", package_name, len(versions))
        return list(versions)


def _released_versions(entries: list[Any]) -> tuple[SemanticVersion, ...]:
    """Strict, non-prerelease version numbers from a versions API payload."""
    found: list[SemanticVersion] = []
    for entry in entries:
        if not isinstance(entry, dict) or entry.get("prerelease"):
            continue
        number = entry.get("number")
        if is_exact(number):
            found.append(SemanticVersion.parse(number))
    return sorted_unique(found)
