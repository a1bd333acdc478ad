"""
Tool registry and handlers.

Each tool owns its descriptor (name, description, input schema) and its
handler. The schema's ``required`` list is checked before the handler runs,
so the advertised calling convention and the enforced one cannot drift.
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterator
from pathlib import Path
from typing import Any, ClassVar, Protocol

from mcp import types
from pydantic import BaseModel, ValidationError

from shared.mcp_format import format_search_results
from shared.mcp_utils import load_tool_descriptions

from .api_client import RaindropAPIError
from .protocol import INTERNAL_ERROR, INVALID_PARAMS, text_result, tool_error
from .schemas import CreateBookmarkArgs, SearchBookmarksArgs, parse_bookmarks

logger = logging.getLogger(__name__)

_DIR = Path(__file__).parent
_TOOLS = load_tool_descriptions(_DIR)


class Upstream(Protocol):
    """The part of RaindropClient the handlers depend on."""

    async def get(self, path: str, params: dict[str, Any] | None = None) -> dict[str, Any]: ...

    async def post(self, path: str, json: dict[str, Any] | None = None) -> dict[str, Any]: ...


class Tool(ABC):
    """A named, schema-described operation callable through ``mcp.callTool``."""

    name: ClassVar[str]
    arguments_model: ClassVar[type[BaseModel]]

    @property
    def description(self) -> str:
        return _TOOLS[self.name]["description"]

    @property
    @abstractmethod
    def input_schema(self) -> dict[str, Any]:
        """JSON Schema advertised in ``mcp.listTools``."""

    def descriptor(self) -> types.Tool:
        return types.Tool(
            name=self.name,
            description=self.description,
            inputSchema=self.input_schema,
        )

    def validate(self, arguments: Any) -> BaseModel:
        """
        Decode raw arguments into the tool's argument model.

        Raises:
            McpError: INVALID_PARAMS when arguments are not an object, a
                required key is missing, or a field has the wrong type.
        """
        if arguments is None:
            arguments = {}
        if not isinstance(arguments, dict):
            raise tool_error(
                INVALID_PARAMS,
                f"Invalid arguments: expected an object, got {type(arguments).__name__}",
            )
        for field in self.input_schema.get("required", []):
            if field not in arguments:
                raise tool_error(INVALID_PARAMS, f"Missing required argument: {field}")
        try:
            return self.arguments_model.model_validate(arguments)
        except ValidationError as e:
            raise tool_error(INVALID_PARAMS, f"Invalid arguments: {e}") from e

    @abstractmethod
    async def execute(self, client: Upstream, args: Any) -> dict[str, Any]:
        """Run the tool against the upstream API and return the result payload."""

    async def __call__(self, client: Upstream, arguments: Any) -> dict[str, Any]:
        return await self.execute(client, self.validate(arguments))


class CreateBookmarkTool(Tool):
    """Save a URL to a Raindrop collection."""

    name = "create-bookmark"
    arguments_model = CreateBookmarkArgs

    @property
    def input_schema(self) -> dict[str, Any]:
        params = _TOOLS[self.name]["parameters"]
        return {
            "type": "object",
            "properties": {
                "url": {
                    "type": "string",
                    "description": params["url"],
                },
                "title": {
                    "type": "string",
                    "description": params["title"],
                },
                "tags": {
                    "type": "array",
                    "description": params["tags"],
                    "items": {"type": "string"},
                },
                "collection": {
                    "type": "number",
                    "description": params["collection"],
                },
            },
            "required": ["url"],
        }

    async def execute(self, client: Upstream, args: CreateBookmarkArgs) -> dict[str, Any]:
        if not args.url.strip():
            raise tool_error(INVALID_PARAMS, "URL is required")

        payload = args.to_payload()
        try:
            result = await client.post("/raindrop", json=payload)
        except RaindropAPIError as e:
            raise tool_error(INTERNAL_ERROR, f"Internal error: {e}") from e

        link = _created_link(result, payload["link"])
        return text_result(f"Bookmark created successfully: {link}")


def _created_link(result: dict[str, Any], fallback: str) -> str:
    """Find the stored link; the API nests the new bookmark under ``item``."""
    item = result.get("item")
    if isinstance(item, dict) and isinstance(item.get("link"), str):
        return item["link"]
    if isinstance(result.get("link"), str):
        return result["link"]
    return fallback


class SearchBookmarksTool(Tool):
    """Full-text search across all collections."""

    name = "search-bookmarks"
    arguments_model = SearchBookmarksArgs

    @property
    def input_schema(self) -> dict[str, Any]:
        params = _TOOLS[self.name]["parameters"]
        return {
            "type": "object",
            "properties": {
                "query": {
                    "type": "string",
                    "description": params["query"],
                },
                "tags": {
                    "type": "array",
                    "description": params["tags"],
                    "items": {"type": "string"},
                },
            },
            "required": ["query"],
        }

    async def execute(self, client: Upstream, args: SearchBookmarksArgs) -> dict[str, Any]:
        if not args.query.strip():
            raise tool_error(INVALID_PARAMS, "Query is required")

        # Collection 0 means "all items"
        try:
            result = await client.get("/raindrops/0", params=args.to_params())
        except RaindropAPIError as e:
            raise tool_error(INTERNAL_ERROR, f"Internal error: {e}") from e

        items = result.get("items")
        if not isinstance(items, list):
            raise tool_error(INTERNAL_ERROR, "Unable to parse results")

        bookmarks = parse_bookmarks(items)
        logger.debug("search %r returned %d items", args.query, len(items))
        return text_result(format_search_results(bookmarks, total=len(items)))


class ToolRegistry:
    """Mapping from tool name to tool, in registration order."""

    def __init__(self, tools: list[Tool] | None = None) -> None:
        self._tools: dict[str, Tool] = {}
        for tool in tools or []:
            self.register(tool)

    def register(self, tool: Tool) -> None:
        if tool.name in self._tools:
            raise ValueError(f"Tool already registered: {tool.name}")
        self._tools[tool.name] = tool

    def get(self, name: str) -> Tool | None:
        return self._tools.get(name)

    def names(self) -> list[str]:
        return list(self._tools)

    def descriptors(self) -> list[types.Tool]:
        return [tool.descriptor() for tool in self]

    def __iter__(self) -> Iterator[Tool]:
        return iter(self._tools.values())


def build_registry() -> ToolRegistry:
    """Return the registry of tools this server exposes."""
    return ToolRegistry([CreateBookmarkTool(), SearchBookmarksTool()])
