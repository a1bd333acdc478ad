"""
Process wiring for the Raindrop MCP bridge.

Loads settings, builds the API client and tool registry, and runs the stdio
protocol loop. Logs go to stderr because stdout carries the protocol.
"""

import asyncio
import logging
import sys

from pydantic import ValidationError

from core.config import Settings, get_settings

from .api_client import RaindropClient
from .auth import AuthenticationError, get_bearer_token
from .server import Dispatcher, serve
from .tools import build_registry

logger = logging.getLogger(__name__)

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Route all log output to stderr at the given level."""
    logging.basicConfig(stream=sys.stderr, level=level, format=_LOG_FORMAT, force=True)


async def run(settings: Settings, token: str) -> int:
    """Serve stdin/stdout until end of input. Returns the process exit status."""
    async with RaindropClient(
        token,
        base_url=settings.raindrop_api_url,
        timeout=settings.raindrop_timeout,
    ) as client:
        dispatcher = Dispatcher(client, build_registry())
        logger.info(
            "Serving tools %s over stdio", ", ".join(dispatcher.registry.names()),
        )
        try:
            await serve(dispatcher, sys.stdin, sys.stdout)
        except OSError:
            # Already logged by serve()
            return 1
    return 0


def main() -> int:
    """Entry point for the ``raindrop-mcp`` console script."""
    configure_logging()

    try:
        settings = get_settings()
    except ValidationError as e:
        logger.critical("Invalid configuration: %s", e)
        return 1
    configure_logging(settings.log_level)

    try:
        token = get_bearer_token(settings)
    except AuthenticationError as e:
        logger.critical("Failed to create Raindrop client: %s", e)
        return 1

    try:
        return asyncio.run(run(settings, token))
    except KeyboardInterrupt:
        logger.info("Interrupted")
        return 130
