"""slackreader - read-only Slack workspace tools served over MCP."""

from slackreader.version import __version__

__all__ = ["__version__"]
