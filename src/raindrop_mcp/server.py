"""
JSON-RPC dispatcher and stdio protocol loop.

Reads one request per line, routes it by method name, and writes exactly one
response line per decodable request, in input order. Lines that are not a
request envelope are logged and skipped, since no id can be recovered to
answer them.
"""

import asyncio
import io
import json
import logging
from collections.abc import Awaitable, Callable
from typing import Any, TextIO

from mcp.shared.exceptions import McpError
from pydantic import ValidationError

from .protocol import (
    CALL_TOOL,
    INTERNAL_ERROR,
    INVALID_PARAMS,
    LIST_TOOLS,
    METHOD_NOT_FOUND,
    CallToolParams,
    Request,
    Response,
    tool_error,
)
from .tools import ToolRegistry, Upstream

logger = logging.getLogger(__name__)


def decode_request(line: str) -> Request | None:
    """Decode a request line, or return None if it is not a request envelope."""
    try:
        return Request.model_validate_json(line)
    except ValidationError as e:
        logger.warning("Error parsing request: %s", e)
        return None


def encode_response(response: Response) -> str:
    """
    Encode a response as a single JSON line (without the newline).

    A result that cannot be serialized is replaced by an internal error for
    the same id.
    """
    try:
        return json.dumps(response.to_wire(), separators=(",", ":"))
    except (TypeError, ValueError) as e:
        logger.error("Error encoding response for id %r: %s", response.id, e)
        fallback = Response.failure(response.id, INTERNAL_ERROR, f"Internal error: {e}")
        return json.dumps(fallback.to_wire(), separators=(",", ":"))


class Dispatcher:
    """Routes requests to the tool listing or to a tool handler."""

    def __init__(self, client: Upstream, registry: ToolRegistry) -> None:
        self.client = client
        self.registry = registry
        # Dispatch table for protocol methods
        self._methods: dict[str, Callable[[Any], Awaitable[Any]]] = {
            LIST_TOOLS: self._list_tools,
            CALL_TOOL: self._call_tool,
        }

    async def handle(self, request: Request) -> Response:
        """Produce the response for a request. Never raises for per-request failures."""
        logger.debug("Dispatching %s (id=%r)", request.method, request.id)

        method = self._methods.get(request.method)
        if method is None:
            return Response.failure(
                request.id, METHOD_NOT_FOUND, f"Method not found: {request.method}",
            )

        try:
            result = await method(request.params)
        except McpError as e:
            return Response.failure(request.id, e.error.code, e.error.message)
        except Exception as e:
            logger.exception(
                "Unhandled error while handling %s (id=%r)", request.method, request.id,
            )
            return Response.failure(request.id, INTERNAL_ERROR, f"Internal error: {e}")

        if result is None:
            return Response.failure(request.id, INTERNAL_ERROR, "Internal error: empty result")
        return Response.success(request.id, result)

    async def _list_tools(self, params: Any) -> dict[str, Any]:  # noqa: ARG002
        return {
            "tools": [
                tool.model_dump(exclude_none=True, by_alias=True)
                for tool in self.registry.descriptors()
            ],
        }

    async def _call_tool(self, params: Any) -> dict[str, Any]:
        try:
            call = CallToolParams.model_validate(params)
        except ValidationError as e:
            raise tool_error(INVALID_PARAMS, f"Invalid params: {e}") from e

        tool = self.registry.get(call.name)
        if tool is None:
            raise tool_error(METHOD_NOT_FOUND, f"Unknown tool: {call.name}")

        return await tool(self.client, call.arguments)


def write_response(output_stream: TextIO, response: Response) -> bool:
    """Write one response line. Returns False if the write failed."""
    try:
        output_stream.write(encode_response(response) + "\n")
        output_stream.flush()
    except OSError as e:
        logger.error("Error writing response for id %r: %s", response.id, e)
        return False
    return True


async def serve(
    dispatcher: Dispatcher,
    input_stream: TextIO,
    output_stream: TextIO,
) -> None:
    """
    Run the protocol loop until the input is exhausted.

    Each line is handled to completion, including its upstream call, before
    the next one is read. Bytes that are not valid UTF-8 are replaced, so such
    a line fails to decode and is skipped like any other malformed line.

    Raises:
        OSError: If the input stream cannot be read.
    """
    if isinstance(input_stream, io.TextIOWrapper):
        input_stream.reconfigure(errors="replace")

    while True:
        try:
            line = await asyncio.to_thread(input_stream.readline)
        except OSError:
            logger.critical("Error reading input", exc_info=True)
            raise

        if not line:
            logger.info("Input closed, shutting down")
            return
        line = line.strip()
        if not line:
            continue

        request = decode_request(line)
        if request is None:
            continue

        response = await dispatcher.handle(request)
        write_response(output_stream, response)
