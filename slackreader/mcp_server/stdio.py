"""Stdio MCP server implementation using the base class pattern.

This module implements the stdio (stdin/stdout) JSON-RPC protocol for MCP
with the official SDK, inheriting configuration and dispatch from
MCPServerBase.

CRITICAL: NO stdout output allowed - breaks JSON-RPC protocol
"""

from __future__ import annotations

import asyncio
import sys
from typing import Any

import mcp.server.stdio
import mcp.types as types
from loguru import logger
from mcp.server import Server
from mcp.server.lowlevel import NotificationOptions
from mcp.server.models import InitializationOptions

from slackreader.core.config.server_config import ServerConfig
from slackreader.utils.logging_setup import configure_logging
from slackreader.version import __version__

from .base import MCPServerBase

SERVER_NAME = "slackreader"


class StdioMCPServer(MCPServerBase):
    """MCP server implementation for stdio protocol.

    Holds no per-call state: credentials and the Slack client are built for
    each tool call.
    """

    def __init__(self, config: ServerConfig, **kwargs: Any):
        super().__init__(config, **kwargs)
        self.server: Server = Server(SERVER_NAME)
        self._register_tools()

    def _register_tools(self) -> None:
        """Register tool handlers with the stdio server."""

        # The MCP SDK's call_tool decorator expects a SINGLE handler function
        # with signature (tool_name: str, arguments: dict) that handles ALL tools.
        # Input is validated by the pipeline so errors keep one format.
        @self.server.call_tool(validate_input=False)
        async def handle_all_tools(
            tool_name: str, arguments: dict[str, Any]
        ) -> list[types.TextContent]:
            """Universal tool handler that routes to the dispatch pipeline."""
            return await self.call_tool(tool_name, arguments)

        self._register_list_tools()

    def _register_list_tools(self) -> None:
        """Register list_tools handler."""

        @self.server.list_tools()
        async def list_tools() -> list[types.Tool]:
            """List available tools."""
            return self.list_tool_descriptors()

    async def run(self) -> None:
        """Run the stdio server until stdin closes."""
        init_options = InitializationOptions(
            server_name=SERVER_NAME,
            server_version=__version__,
            capabilities=self.server.get_capabilities(
                notification_options=NotificationOptions(),
                experimental_capabilities={},
            ),
        )

        try:
            async with mcp.server.stdio.stdio_server() as (read_stream, write_stream):
                self.debug_log("Stdio server started, awaiting requests")
                await self.server.run(read_stream, write_stream, init_options)
        except KeyboardInterrupt:
            self.debug_log("Server interrupted by user")


async def main(args: Any = None) -> None:
    """Main entry point for the MCP stdio server.

    Args:
        args: Pre-parsed CLI arguments carrying server config overrides.
    """
    config = ServerConfig.from_sources(args)
    configure_logging(debug=config.debug, debug_file=config.debug_file)

    try:
        server = StdioMCPServer(config)
        logger.debug(f"Starting {SERVER_NAME} {__version__} over stdio")
        await server.run()
    except Exception:
        # CRITICAL: Cannot print to stderr in MCP mode - breaks JSON-RPC protocol
        logger.exception("Stdio server terminated with an error")
        sys.exit(1)


def main_sync() -> None:
    """Synchronous wrapper for CLI entry point."""
    asyncio.run(main())


if __name__ == "__main__":
    main_sync()
