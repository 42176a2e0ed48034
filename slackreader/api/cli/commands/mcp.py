"""MCP command: run the stdio server."""

from __future__ import annotations

import argparse

from slackreader.mcp_server.stdio import main as stdio_main


async def mcp_command(args: argparse.Namespace) -> int:
    # stdio_main owns logging setup; nothing may reach stdout from here on
    await stdio_main(args)
    return 0
