"""MCP bridge exposing Raindrop.io bookmarks as JSON-RPC tools over stdio."""

from .api_client import RaindropAPIError, RaindropClient
from .auth import AuthenticationError, get_bearer_token
from .server import Dispatcher, serve
from .tools import ToolRegistry, build_registry

__all__ = [
    "AuthenticationError",
    "Dispatcher",
    "RaindropAPIError",
    "RaindropClient",
    "ToolRegistry",
    "build_registry",
    "get_bearer_token",
    "serve",
]
