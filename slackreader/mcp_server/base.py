"""Base class for MCP servers providing common configuration and dispatch.

This module provides a base class that handles:
- Server configuration and debug logging
- Routing tool calls through the shared dispatch pipeline

Transports subclass it and only add protocol-specific registration and the
run loop.
"""

import os
from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any

import mcp.types as types
from loguru import logger

from slackreader.core.config.server_config import ServerConfig
from slackreader.providers.slack_client import ClientFactory, create_slack_client

from .common import handle_tool_call
from .tools import TOOL_REGISTRY


class MCPServerBase(ABC):
    """Base class for MCP server implementations.

    Subclasses must implement:
    - _register_tools(): Register protocol-specific tool handlers
    - run(): Main server execution loop
    """

    def __init__(
        self,
        config: ServerConfig,
        environ: Mapping[str, str] | None = None,
        client_factory: ClientFactory = create_slack_client,
    ):
        """Initialize base MCP server.

        Args:
            config: Validated server configuration
            environ: Environment mapping read on every call (defaults to os.environ)
            client_factory: Builds the Slack client for each call
        """
        self.config = config
        self.environ = os.environ if environ is None else environ
        self.client_factory = client_factory
        self.debug_mode = config.debug

    def debug_log(self, message: str) -> None:
        """Log debug message; only reaches the debug file sink when enabled."""
        if self.debug_mode:
            logger.debug(f"[MCP] {message}")

    def list_tool_descriptors(self) -> list[types.Tool]:
        """Descriptors for every registered tool, in registration order."""
        return [
            types.Tool(
                name=tool_name,
                description=tool.description,
                inputSchema=tool.parameters,
            )
            for tool_name, tool in TOOL_REGISTRY.items()
        ]

    async def call_tool(
        self, tool_name: str, arguments: Any
    ) -> list[types.TextContent]:
        """Dispatch one tool call with this server's environment and timeout."""
        self.debug_log(f"call_tool {tool_name}")
        return await handle_tool_call(
            tool_name=tool_name,
            arguments=arguments,
            environ=self.environ,
            client_factory=self.client_factory,
            timeout=self.config.request_timeout,
        )

    @abstractmethod
    def _register_tools(self) -> None:
        """Register tool handlers with the protocol server."""

    @abstractmethod
    async def run(self) -> None:
        """Run the server until the transport closes."""
