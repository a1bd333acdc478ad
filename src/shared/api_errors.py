"""
Shared API error parsing for the Raindrop bridge.

The parsing extracts semantic meaning from HTTP errors returned by the
Raindrop.io REST API. Callers decide how each category is reported; the
protocol layer reports all of them as internal errors.
"""

from dataclasses import dataclass
from typing import Literal

import httpx

ErrorCategory = Literal[
    "auth",          # 401 - Invalid or expired token
    "forbidden",     # 403 - Access denied
    "not_found",     # 404 - Resource or collection not found
    "validation",    # 400/422 - Request rejected by the API
    "rate_limited",  # 429 - Too many requests
    "internal",      # 5xx or unexpected errors
]


@dataclass
class ParsedApiError:
    """Parsed API error with semantic category and message."""

    category: ErrorCategory
    message: str
    status_code: int | None = None


def status_text(response: httpx.Response) -> str:
    """Return the HTTP status line text, e.g. ``500 Internal Server Error``."""
    reason = response.reason_phrase
    return f"{response.status_code} {reason}" if reason else str(response.status_code)


def parse_http_error(e: httpx.HTTPStatusError) -> ParsedApiError:
    """
    Parse HTTP error into semantic categories.

    Args:
        e: The HTTP status error from httpx

    Returns:
        ParsedApiError with category, message, and status code. The message
        always embeds the status text; the upstream ``errorMessage`` is
        appended when the body carries one.
    """
    status = e.response.status_code
    message = f"Raindrop API error: {status_text(e.response)}"
    detail = _safe_get_error_message(e)
    if detail:
        message = f"{message} ({detail})"

    if status == 401:
        category: ErrorCategory = "auth"
    elif status == 403:
        category = "forbidden"
    elif status == 404:
        category = "not_found"
    elif status in (400, 422):
        category = "validation"
    elif status == 429:
        category = "rate_limited"
    else:
        category = "internal"

    return ParsedApiError(category, message, status_code=status)


def _safe_get_error_message(e: httpx.HTTPStatusError) -> str:
    """Safely extract the API's error message from an error response."""
    try:
        body = e.response.json()
    except ValueError:
        return ""
    # Raindrop errors look like {"result": false, "errorMessage": "..."}
    if not isinstance(body, dict):
        return ""
    detail = body.get("errorMessage") or body.get("error")
    return detail if isinstance(detail, str) else ""
