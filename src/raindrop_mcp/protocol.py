"""
JSON-RPC envelopes for the stdio bridge.

Requests and responses travel one JSON object per line. Error codes come
from the MCP SDK so they match what MCP hosts expect.
"""

from typing import Any

from mcp import types
from mcp.shared.exceptions import McpError
from pydantic import BaseModel, ConfigDict, model_validator

JSONRPC_VERSION = "2.0"

LIST_TOOLS = "mcp.listTools"
CALL_TOOL = "mcp.callTool"

# Closed set of error codes this bridge reports
METHOD_NOT_FOUND = types.METHOD_NOT_FOUND  # -32601
INVALID_PARAMS = types.INVALID_PARAMS  # -32602
INTERNAL_ERROR = types.INTERNAL_ERROR  # -32603

RequestId = int | str | None


class Request(BaseModel):
    """A decoded request line."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    jsonrpc: str = JSONRPC_VERSION
    id: RequestId = None
    method: str
    params: Any = None


class CallToolParams(BaseModel):
    """Params of an ``mcp.callTool`` request."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    name: str
    arguments: Any = None


class Response(BaseModel):
    """
    A response line.

    Carries exactly one of ``result`` or ``error``. Only the populated branch
    is written to the wire.
    """

    jsonrpc: str = JSONRPC_VERSION
    id: RequestId = None
    result: Any = None
    error: types.ErrorData | None = None

    @model_validator(mode="after")
    def check_single_outcome(self) -> "Response":
        """Reject responses carrying both or neither of result and error."""
        if (self.result is None) == (self.error is None):
            raise ValueError("Response must carry exactly one of result or error")
        return self

    @classmethod
    def success(cls, request_id: RequestId, result: Any) -> "Response":
        """Build a success response."""
        return cls(id=request_id, result=result)

    @classmethod
    def failure(cls, request_id: RequestId, code: int, message: str) -> "Response":
        """Build an error response."""
        return cls(id=request_id, error=types.ErrorData(code=code, message=message))

    def to_wire(self) -> dict[str, Any]:
        """Return the JSON-ready mapping for this response."""
        payload: dict[str, Any] = {"jsonrpc": self.jsonrpc, "id": self.id}
        if self.error is not None:
            payload["error"] = {"code": self.error.code, "message": self.error.message}
        else:
            payload["result"] = self.result
        return payload


def text_result(text: str) -> dict[str, Any]:
    """Wrap text in the ``{"content": [{"type": "text", ...}]}`` result shape."""
    content = types.TextContent(type="text", text=text)
    return {"content": [content.model_dump(exclude_none=True)]}


def tool_error(code: int, message: str) -> McpError:
    """Build an McpError carrying the given code and message."""
    return McpError(types.ErrorData(code=code, message=message))
