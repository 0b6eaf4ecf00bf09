"""Shared HTTP client utilities for remote release indexes.

Provides a thin wrapper around ``httpx.Client`` with standardised timeouts,
user-agent headers and error handling, so every index fetcher behaves the
same way and can be tested by patching one function.

Raises ``CatalogUnavailable`` (a subclass of ``PinpointError``) on any
transport failure, error status or undecodable body. Nothing is retried.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from pinpoint import __version__
from pinpoint.exceptions import CatalogUnavailable

logger = logging.getLogger(__name__)

# Timeout for all index HTTP requests (seconds).
DEFAULT_TIMEOUT: float = 30.0

# User-Agent sent with every request.
USER_AGENT: str = f"pinpoint/{__version__}"


def fetch_json(
    url: str,
    *,
    params: dict[str, str] | None = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> dict[str, Any] | list[Any]:
    """Fetch a URL and parse the response as JSON.

    Args:
        url: The URL to fetch.
        params: Optional query parameters.
        timeout: Request timeout in seconds.

    Returns:
        Parsed JSON response (dict or list).

    Raises:
        CatalogUnavailable: On HTTP errors, timeouts, or invalid JSON.
    """
    try:
        with httpx.Client(
            timeout=timeout,
            headers={"User-Agent": USER_AGENT},
            follow_redirects=True,
        ) as client:
            resp = client.get(url, params=params)
            resp.raise_for_status()
            return resp.json()
    except httpx.TimeoutException as exc:
        logger.warning("Timeout fetching %s", url)
        raise CatalogUnavailable(f"Timed out fetching {url}") from exc
    except httpx.HTTPStatusError as exc:
        logger.warning("HTTP %d from %s", exc.response.status_code, url)
        raise CatalogUnavailable(
            f"HTTP {exc.response.status_code} fetching {url}"
        ) from exc
    except httpx.RequestError as exc:
        logger.warning("Request error for %s: %s", url, exc)
        raise CatalogUnavailable(f"Unable to fetch {url}: {exc}") from exc
    except ValueError as exc:
        logger.warning("Invalid JSON from %s", url)
        raise CatalogUnavailable(f"Invalid JSON from {url}") from exc
