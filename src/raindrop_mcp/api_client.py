"""HTTP client for forwarding requests to the Raindrop.io REST API."""

import logging
from types import TracebackType
from typing import Any

import httpx

from core.config import DEFAULT_API_URL
from shared.api_errors import ErrorCategory, parse_http_error

logger = logging.getLogger(__name__)


class RaindropAPIError(Exception):
    """
    Raised when an upstream call does not yield a JSON object.

    Covers non-2xx statuses, transport failures (including timeouts), and
    malformed response bodies. 4xx and 5xx are not told apart here; the
    category is informational.
    """

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory = "internal",
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.category = category
        self.status_code = status_code


def _get_headers(token: str) -> dict[str, str]:
    """Get common headers for API requests."""
    return {
        "Authorization": f"Bearer {token}",
        "Content-Type": "application/json",
    }


class RaindropClient:
    """
    Authenticated client for the Raindrop.io REST API.

    Holds the token and one pooled ``httpx.AsyncClient`` for the lifetime of
    the process. Each call is attempted exactly once.
    """

    def __init__(
        self,
        token: str,
        base_url: str = DEFAULT_API_URL,
        timeout: float = 30.0,
    ) -> None:
        self._token = token
        self.base_url = base_url.rstrip("/")
        self._http_client = httpx.AsyncClient(timeout=timeout)

    async def __aenter__(self) -> "RaindropClient":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        if not self._http_client.is_closed:
            await self._http_client.aclose()

    async def request(
        self,
        method: str,
        path: str,
        json: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """
        Make an authenticated request and return the decoded JSON object.

        Args:
            method: HTTP method, e.g. "GET" or "POST".
            path: Endpoint path relative to the base URL, e.g. "/raindrop".
            json: Optional JSON-serializable request body.
            params: Optional query parameters.

        Raises:
            RaindropAPIError: On a non-2xx status, a transport failure, or a
                body that is not a JSON object.
        """
        url = f"{self.base_url}{path}"
        try:
            response = await self._http_client.request(
                method,
                url,
                json=json,
                params=params,
                headers=_get_headers(self._token),
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            info = parse_http_error(e)
            logger.warning(
                "%s %s failed (%s): %s", method, path, info.category, info.message,
            )
            raise RaindropAPIError(
                info.message, category=info.category, status_code=info.status_code,
            ) from e
        except httpx.RequestError as e:
            logger.warning("%s %s failed: %s", method, path, e)
            raise RaindropAPIError(f"Raindrop API unavailable: {e}") from e

        try:
            body = response.json()
        except ValueError as e:
            raise RaindropAPIError(f"Invalid JSON in Raindrop API response: {e}") from e
        if not isinstance(body, dict):
            raise RaindropAPIError(
                f"Unexpected Raindrop API response: expected an object, got {type(body).__name__}",
            )
        return body

    async def get(self, path: str, params: dict[str, Any] | None = None) -> dict[str, Any]:
        """Make an authenticated GET request to the API."""
        return await self.request("GET", path, params=params)

    async def post(self, path: str, json: dict[str, Any] | None = None) -> dict[str, Any]:
        """Make an authenticated POST request to the API."""
        return await self.request("POST", path, json=json)
