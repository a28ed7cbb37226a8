"""MCP server wiring and process entry point.

stdout carries the MCP protocol, so all logging goes to stderr.
"""

from __future__ import annotations

import asyncio
import logging
import sys
from typing import Any

from mcp import types
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server

from . import __version__
from .capability import probe
from .config import Settings
from .dispatcher import Dispatcher
from .errors import ConfigurationError
from .registry import list_tools

logger = logging.getLogger(__name__)

SERVER_NAME = "x402-places-client"
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Send all log records to stderr at the given level."""
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        stream=sys.stderr,
        force=True,
    )


def create_server(dispatcher: Dispatcher) -> Server:
    """Create the MCP server exposing the registered tools.

    Input validation is left to the dispatcher so that a missing query gets
    the guidance response instead of a protocol error.
    """
    server = Server(SERVER_NAME, version=__version__)

    @server.list_tools()
    async def handle_list_tools() -> list[types.Tool]:
        return list_tools()

    @server.call_tool(validate_input=False)
    async def handle_call_tool(name: str, arguments: dict[str, Any]) -> list[types.TextContent]:
        return await dispatcher.invoke(name, arguments)

    return server


async def serve(settings: Settings) -> None:
    """Probe payment capability once, then serve MCP over stdio until EOF."""
    capability = probe(settings)
    dispatcher = Dispatcher(capability, settings)
    server = create_server(dispatcher)

    async with capability.client:
        async with stdio_server() as (read_stream, write_stream):
            logger.info("X402 Places MCP Server started")
            logger.info(
                "Payment enabled: %s",
                "Yes" if capability.payment_enabled else "No (demo mode)",
            )
            logger.info("Base URL: %s", settings.resource_server_url)
            logger.info("Endpoint: %s", settings.endpoint_path)
            await server.run(
                read_stream,
                write_stream,
                server.create_initialization_options(),
            )


def main() -> None:
    """Console entry point."""
    try:
        settings = Settings.from_env()
    except ConfigurationError as e:
        configure_logging()
        logger.error("%s", e)
        sys.exit(1)

    configure_logging(settings.log_level)

    try:
        asyncio.run(serve(settings))
    except KeyboardInterrupt:
        pass
    except Exception:
        logger.exception("Server startup error")
        sys.exit(1)


if __name__ == "__main__":
    main()
