"""Server configuration for slackreader.

Process-wide settings: debug logging and the Slack HTTP timeout. Values come
from environment variables (SLACKREADER_*) and can be overridden on the
command line.
"""

import argparse
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator

from slackreader.utils.mcp_env import debug_enabled

DEFAULT_DEBUG_FILE = Path("/tmp/slackreader_mcp_debug.log")
DEFAULT_REQUEST_TIMEOUT = 30


class ServerConfig(BaseModel):
    """Runtime configuration for the MCP server.

    Configuration can be provided via:
    - Environment variables (SLACKREADER_*)
    - CLI arguments
    - Default values
    """

    debug: bool = Field(default=False, description="Write debug logs to a file")

    debug_file: Path = Field(
        default=DEFAULT_DEBUG_FILE, description="Debug log destination"
    )

    request_timeout: int = Field(
        default=DEFAULT_REQUEST_TIMEOUT,
        ge=1,
        le=600,
        description="Slack HTTP request timeout in seconds",
    )

    @field_validator("debug_file", mode="before")
    def validate_debug_file(cls, v: Any) -> Path:
        """Convert string paths to Path objects."""
        if not isinstance(v, Path):
            return Path(v)
        return v

    @classmethod
    def add_cli_arguments(cls, parser: argparse.ArgumentParser) -> None:
        """Add server-related CLI arguments."""
        parser.add_argument(
            "--debug",
            action="store_true",
            help="Enable debug logging to the debug file",
        )

        parser.add_argument(
            "--debug-file",
            type=Path,
            help=f"Debug log path (default: {DEFAULT_DEBUG_FILE})",
        )

        parser.add_argument(
            "--request-timeout",
            type=int,
            help=f"Slack HTTP timeout in seconds (default: {DEFAULT_REQUEST_TIMEOUT})",
        )

    @classmethod
    def load_from_env(cls, environ: Mapping[str, str] | None = None) -> dict[str, Any]:
        """Load server config from environment variables."""
        env = os.environ if environ is None else environ
        config: dict[str, Any] = {}
        if env.get("SLACKREADER_DEBUG"):
            config["debug"] = debug_enabled(env)
        if debug_file := env.get("SLACKREADER_DEBUG_FILE"):
            config["debug_file"] = Path(debug_file)
        if timeout := env.get("SLACKREADER_REQUEST_TIMEOUT"):
            config["request_timeout"] = int(timeout)
        return config

    @classmethod
    def extract_cli_overrides(cls, args: Any) -> dict[str, Any]:
        """Extract server config from CLI arguments."""
        overrides: dict[str, Any] = {}
        if getattr(args, "debug", False):
            overrides["debug"] = True
        if getattr(args, "debug_file", None):
            overrides["debug_file"] = args.debug_file
        if getattr(args, "request_timeout", None) is not None:
            overrides["request_timeout"] = args.request_timeout
        return overrides

    @classmethod
    def from_sources(
        cls, args: Any = None, environ: Mapping[str, str] | None = None
    ) -> "ServerConfig":
        """Merge defaults, environment and CLI overrides (later wins)."""
        values = cls.load_from_env(environ)
        if args is not None:
            values.update(cls.extract_cli_overrides(args))
        return cls(**values)

    def __repr__(self) -> str:
        return (
            f"ServerConfig(debug={self.debug}, debug_file={self.debug_file}, "
            f"request_timeout={self.request_timeout})"
        )
