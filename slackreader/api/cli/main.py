"""slackreader command line entry point."""

from __future__ import annotations

import argparse
import asyncio
import sys

from slackreader.core.config.server_config import ServerConfig
from slackreader.utils.logging_setup import configure_logging
from slackreader.version import __version__

from .parsers.diagnose_parser import add_diagnose_subparser
from .parsers.mcp_parser import add_mcp_subparser


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="slackreader",
        description="Read-only Slack workspace access over MCP",
    )
    parser.add_argument(
        "--version", action="version", version=f"slackreader {__version__}"
    )

    subparsers = parser.add_subparsers(dest="command")
    add_mcp_subparser(subparsers)
    add_diagnose_subparser(subparsers)
    return parser


async def async_main(argv: list[str] | None = None) -> int:
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command == "mcp":
        from .commands.mcp import mcp_command

        return await mcp_command(args)

    if args.command == "diagnose":
        from .commands.diagnose import diagnose_command

        config = ServerConfig.from_sources()
        configure_logging(debug=config.debug, debug_file=config.debug_file, stderr=True)
        return await diagnose_command(args, config)

    parser.print_help()
    return 2


def main() -> None:
    """Console script entry point."""
    try:
        sys.exit(asyncio.run(async_main()))
    except KeyboardInterrupt:
        sys.exit(130)


if __name__ == "__main__":
    main()
