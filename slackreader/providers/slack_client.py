"""Slack Web API client boundary.

Tools never talk to ``slack_sdk`` directly; they go through ``call_slack``
which drops unset arguments, performs exactly one request and normalizes
every failure into a ``ToolFailure``.
"""

from collections.abc import Callable
from typing import Any

from loguru import logger
from slack_sdk.web.async_client import AsyncWebClient

from slackreader.core.config.server_config import DEFAULT_REQUEST_TIMEOUT
from slackreader.core.config.slack_config import SlackCredentials
from slackreader.core.errors import check_slack_response, raise_slack_error

# (credentials, timeout) -> client
ClientFactory = Callable[[SlackCredentials, int], Any]


def create_slack_client(
    credentials: SlackCredentials, timeout: int = DEFAULT_REQUEST_TIMEOUT
) -> AsyncWebClient:
    """Create an async Web API client bound to the user token."""
    return AsyncWebClient(token=credentials.user_token, timeout=timeout)


def _method_callable(client: Any, method: str) -> Callable[..., Any]:
    """Resolve ``"conversations.history"`` to ``client.conversations_history``."""
    attr = method.replace(".", "_")
    func = getattr(client, attr, None)
    if func is None:
        raise AttributeError(f"Slack client has no method {method!r}")
    return func


async def call_slack(client: Any, method: str, **kwargs: Any) -> dict[str, Any]:
    """Invoke one Slack Web API method and return the response payload.

    ``None`` arguments are omitted so Slack applies its own defaults.

    Raises:
        ToolFailure: remote error envelope, transport error or anything else
    """
    params = {key: value for key, value in kwargs.items() if value is not None}
    logger.debug(f"Slack call {method} params={sorted(params)}")
    func = _method_callable(client, method)
    try:
        response = await func(**params)
    except Exception as e:
        raise_slack_error(e)
    return check_slack_response(response)
