"""Tool dispatch pipeline shared by the MCP transport.

Every tool call runs the same steps:

1. look up the tool descriptor (unknown names raise ``ValueError``)
2. validate arguments against the tool's input model
3. resolve Slack credentials from the given environment mapping
4. build a client and invoke the implementation exactly once
5. route any failure through the error normalizer

Steps 2 and 3 fail before a client exists, so rejected calls never touch the
network.
"""

import json
import os
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

import mcp.types as types
from loguru import logger
from pydantic import ValidationError

from slackreader.core.config.server_config import DEFAULT_REQUEST_TIMEOUT
from slackreader.core.config.slack_config import resolve_credentials
from slackreader.core.errors import ToolFailure, ValidationFailure, raise_slack_error
from slackreader.providers.slack_client import ClientFactory, create_slack_client

from .tools import TOOL_REGISTRY

NON_OBJECT_ARGUMENTS_MESSAGE = "input: arguments must be a JSON object"


@dataclass
class ToolResult:
    """Outcome of one tool call: exactly one of payload or failure is set."""

    payload: dict[str, Any] | None = None
    failure: ToolFailure | None = None

    @property
    def is_error(self) -> bool:
        return self.failure is not None


def format_validation_error(error: ValidationError) -> ValidationFailure:
    """Turn a pydantic error into ``<field>: <reason>`` pairs joined by ``; ``."""
    violations = []
    for item in error.errors():
        field = ".".join(str(part) for part in item.get("loc", ())) or "input"
        violations.append(f"{field}: {item.get('msg', 'invalid value')}")
    return ValidationFailure("; ".join(violations), violations)


def parse_mcp_arguments(arguments: Any) -> Any:
    """Decode raw MCP arguments.

    Some clients send the arguments object as a JSON string. Anything that is
    not an object is returned as-is and rejected by ``execute_tool``.
    """
    if arguments is None:
        return {}
    if isinstance(arguments, str):
        if not arguments.strip():
            return {}
        try:
            arguments = json.loads(arguments)
        except json.JSONDecodeError:
            return arguments
    if isinstance(arguments, Mapping):
        return dict(arguments)
    return arguments


async def execute_tool(
    tool_name: str,
    arguments: Any,
    environ: Mapping[str, str],
    client_factory: ClientFactory = create_slack_client,
    timeout: int = DEFAULT_REQUEST_TIMEOUT,
) -> ToolResult:
    """Execute a tool from the registry.

    Args:
        tool_name: Name of the tool to execute
        arguments: Raw tool arguments from the request (must be a JSON object)
        environ: Environment mapping holding the Slack tokens
        client_factory: Builds the Slack client from credentials and timeout
        timeout: Slack HTTP timeout in seconds

    Returns:
        ToolResult with either the payload or a normalized failure

    Raises:
        ValueError: If tool not found in registry
    """
    if tool_name not in TOOL_REGISTRY:
        raise ValueError(f"Unknown tool: {tool_name}")

    tool = TOOL_REGISTRY[tool_name]

    try:
        if not isinstance(arguments, Mapping):
            raise ValidationFailure(
                NON_OBJECT_ARGUMENTS_MESSAGE, [NON_OBJECT_ARGUMENTS_MESSAGE]
            )
        logger.debug(f"Tool {tool_name} called with keys={sorted(arguments)}")
        try:
            params = tool.input_model.model_validate(arguments)
        except ValidationError as e:
            raise format_validation_error(e) from e

        credentials = resolve_credentials(environ)
        try:
            client = client_factory(credentials, timeout)
            payload = await tool.implementation(client, params)
        except Exception as e:
            raise_slack_error(e)
    except ToolFailure as failure:
        logger.warning(f"Tool {tool_name} failed: {failure.to_dict()}")
        return ToolResult(failure=failure)

    logger.debug(f"Tool {tool_name} completed")
    return ToolResult(payload=payload)


async def handle_tool_call(
    tool_name: str,
    arguments: Any,
    environ: Mapping[str, str] | None = None,
    client_factory: ClientFactory = create_slack_client,
    timeout: int = DEFAULT_REQUEST_TIMEOUT,
) -> list[types.TextContent]:
    """Run a tool and render the result as MCP text content.

    Failures are raised as ``RuntimeError`` so the MCP SDK reports them as an
    error result (``isError: true``) carrying only the message.
    """
    result = await execute_tool(
        tool_name=tool_name,
        arguments=parse_mcp_arguments(arguments),
        environ=os.environ if environ is None else environ,
        client_factory=client_factory,
        timeout=timeout,
    )
    if result.failure is not None:
        raise RuntimeError(f"Tool execution failed: {result.failure.message}")

    return [
        types.TextContent(
            type="text", text=json.dumps(result.payload, indent=2, ensure_ascii=False)
        )
    ]
