"""MCP server for read-only Slack access."""

from .common import ToolResult, execute_tool, handle_tool_call
from .tools import TOOL_DEFINITIONS, TOOL_REGISTRY, Tool

__all__ = [
    "TOOL_DEFINITIONS",
    "TOOL_REGISTRY",
    "Tool",
    "ToolResult",
    "execute_tool",
    "handle_tool_call",
]
