"""Tests for the shared index HTTP helper -- all requests mocked."""

from __future__ import annotations

from unittest.mock import patch

import httpx
import pytest

from pinpoint import __version__
from pinpoint.exceptions import CatalogUnavailable
from pinpoint.registry.http_client import USER_AGENT, fetch_json

URL = "https://index.example/api/v1/versions/puppet.json"


def _response(status: int = 200, **kwargs) -> httpx.Response:
    return httpx.Response(status, request=httpx.Request("GET", URL), **kwargs)


def _patch_get(**kwargs):
    return patch.object(httpx.Client, "get", **kwargs)


class TestFetchJson:

    def test_returns_parsed_body(self) -> None:
        with _patch_get(return_value=_response(json=[{"number": "5.4.0"}])) as get:
            assert fetch_json(URL) == [{"number": "5.4.0"}]
        get.assert_called_once_with(URL, params=None)

    def test_passes_query_params(self) -> None:
        with _patch_get(return_value=_response(json={})) as get:
            fetch_json(URL, params={"page": "2"})
        get.assert_called_once_with(URL, params={"page": "2"})

    def test_http_error_status(self) -> None:
        with _patch_get(return_value=_response(503)):
            with pytest.raises(CatalogUnavailable, match="HTTP 503"):
                fetch_json(URL)

    def test_not_found(self) -> None:
        with _patch_get(return_value=_response(404)):
            with pytest.raises(CatalogUnavailable, match="404"):
                fetch_json(URL)

    def test_timeout(self) -> None:
        error = httpx.ReadTimeout("timed out", request=httpx.Request("GET", URL))
        with _patch_get(side_effect=error):
            with pytest.raises(CatalogUnavailable, match="Timed out"):
                fetch_json(URL)

    def test_connection_error(self) -> None:
        error = httpx.ConnectError("connection refused", request=httpx.Request("GET", URL))
        with _patch_get(side_effect=error):
            with pytest.raises(CatalogUnavailable, match="Unable to fetch"):
                fetch_json(URL)

    def test_invalid_json(self) -> None:
        with _patch_get(return_value=_response(content=b"<html>maintenance</html>")):
            with pytest.raises(CatalogUnavailable, match="Invalid JSON"):
                fetch_json(URL)

    def test_original_error_is_chained(self) -> None:
        error = httpx.ConnectError("connection refused", request=httpx.Request("GET", URL))
        with _patch_get(side_effect=error):
            with pytest.raises(CatalogUnavailable) as exc_info:
                fetch_json(URL)
        assert exc_info.value.__cause__ is error


def test_user_agent_names_the_tool() -> None:
    assert USER_AGENT == f"pinpoint/{__version__}"
