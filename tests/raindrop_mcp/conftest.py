"""Test fixtures for Raindrop MCP bridge tests."""

from collections.abc import AsyncGenerator
from typing import Any

import pytest
import respx

from raindrop_mcp.api_client import RaindropClient
from raindrop_mcp.server import Dispatcher
from raindrop_mcp.tools import build_registry

API_URL = "https://api.raindrop.io/rest/v1"


class SpyClient:
    """Stands in for RaindropClient and records every upstream call."""

    def __init__(
        self,
        response: dict[str, Any] | None = None,
        error: Exception | None = None,
    ) -> None:
        self.response = response if response is not None else {}
        self.error = error
        self.calls: list[dict[str, Any]] = []

    async def get(self, path: str, params: dict[str, Any] | None = None) -> dict[str, Any]:
        return await self._record("GET", path, params=params)

    async def post(self, path: str, json: dict[str, Any] | None = None) -> dict[str, Any]:
        return await self._record("POST", path, json=json)

    async def _record(
        self,
        method: str,
        path: str,
        json: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        self.calls.append({"method": method, "path": path, "json": json, "params": params})
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture
def spy_client_factory() -> type[SpyClient]:
    """Factory for spy upstream clients with canned responses or errors."""
    return SpyClient


@pytest.fixture
def mock_api() -> respx.MockRouter:
    """Context manager for mocking API responses."""
    with respx.mock(assert_all_called=False) as respx_mock:
        yield respx_mock


@pytest.fixture
async def api_client(mock_api: respx.MockRouter) -> AsyncGenerator[RaindropClient]:  # noqa: ARG001
    """RaindropClient pointed at the mocked API."""
    async with RaindropClient("test-token", base_url=API_URL, timeout=5.0) as client:
        yield client


@pytest.fixture
def dispatcher(api_client: RaindropClient) -> Dispatcher:
    """Dispatcher wired to the real client and the default registry."""
    return Dispatcher(api_client, build_registry())


@pytest.fixture
def sample_bookmark() -> dict[str, Any]:
    """Sample bookmark item as returned by the Raindrop API."""
    return {
        "_id": 123456,
        "title": "Example Site",
        "link": "https://example.com",
        "excerpt": "An example website",
        "tags": ["example", "test"],
        "type": "link",
        "collection": {"$id": -1},
        "created": "2024-01-01T00:00:00Z",
        "lastUpdate": "2024-01-01T00:00:00Z",
    }


@pytest.fixture
def sample_search_result(sample_bookmark: dict[str, Any]) -> dict[str, Any]:
    """Sample ``GET /raindrops/0`` response with two items."""
    return {
        "result": True,
        "items": [
            sample_bookmark,
            {
                "_id": 123457,
                "title": "Python Docs",
                "link": "https://docs.python.org",
                "tags": [],
            },
        ],
        "count": 2,
        "collectionId": 0,
    }


@pytest.fixture
def sample_created(sample_bookmark: dict[str, Any]) -> dict[str, Any]:
    """Sample ``POST /raindrop`` response."""
    return {"result": True, "item": sample_bookmark}
