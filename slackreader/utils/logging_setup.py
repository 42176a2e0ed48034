"""Loguru configuration.

In MCP stdio mode stdout carries JSON-RPC, so nothing may be logged there.
``configure_logging`` removes loguru's default sink and, when debugging is
on, logs to a file instead. Library loggers using the stdlib ``logging``
module (``mcp``, ``slack_sdk``) are silenced the same way.
"""

import logging
import sys
from pathlib import Path

from loguru import logger

LOG_FORMAT = "{time:YYYY-MM-DDTHH:mm:ss.SSSZZ} | {level: <8} | {name}:{function} - {message}"


def configure_logging(
    debug: bool = False, debug_file: Path | None = None, stderr: bool = False
) -> None:
    """Install loguru sinks for the current process.

    Args:
        debug: Enable the DEBUG file sink
        debug_file: Destination for the DEBUG sink
        stderr: Also log warnings to stderr (CLI commands, never the server)
    """
    logger.remove()

    if debug and debug_file is not None:
        logger.add(
            str(debug_file),
            level="DEBUG",
            format=LOG_FORMAT,
            enqueue=False,
            backtrace=False,
            diagnose=False,
        )

    if stderr:
        logger.add(sys.stderr, level="DEBUG" if debug else "WARNING")

    # Keep library loggers off stdout
    logging.getLogger().handlers.clear()
    for name in ("", "mcp", "slack_sdk", "aiohttp"):
        logging.getLogger(name).setLevel(logging.CRITICAL + 1)
