"""MCP command argument parser for slackreader CLI."""

import argparse
from typing import Any, cast

from slackreader.core.config.server_config import ServerConfig


def add_mcp_subparser(subparsers: Any) -> argparse.ArgumentParser:
    parser = subparsers.add_parser(
        "mcp",
        help="Run the MCP server over stdio",
        description=(
            "Serve the read-only Slack tools over the MCP stdio transport. "
            "Tokens are read from SLACK_USER_OAUTH_TOKEN on every tool call."
        ),
    )

    ServerConfig.add_cli_arguments(parser)

    return cast(argparse.ArgumentParser, parser)


__all__: list[str] = ["add_mcp_subparser"]
