"""Slack credential configuration.

Credentials are resolved per tool call from an explicit environment mapping
so that a token rotated in the host environment is picked up without a
restart, and so tests can supply their own mapping.
"""

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from slackreader.core.errors import CredentialFailure

USER_TOKEN_ENV = "SLACK_USER_OAUTH_TOKEN"
BOT_TOKEN_ENV = "SLACK_BOT_TOKEN"

# xoxp- user token, xoxb- bot token
TOKEN_PREFIXES = ("xoxp-", "xoxb-")

MISSING_TOKEN_MESSAGE = f"Server error: {USER_TOKEN_ENV} is not set."
INVALID_TOKEN_MESSAGE = "Invalid Slack token format."


class SlackCredentials(BaseModel):
    """Tokens used to call the Slack Web API."""

    model_config = ConfigDict(frozen=True)

    user_token: str = Field(description="User-scoped OAuth token")
    bot_token: str | None = Field(
        default=None, description="Bot-scoped token (optional, unused by tools)"
    )

    @property
    def token_kind(self) -> str:
        """Return ``user``, ``bot`` or ``unknown`` based on the token prefix."""
        if self.user_token.startswith("xoxp-"):
            return "user"
        if self.user_token.startswith("xoxb-"):
            return "bot"
        return "unknown"

    def has_valid_format(self) -> bool:
        return self.user_token.startswith(TOKEN_PREFIXES)

    @classmethod
    def load_from_env(cls, environ: Mapping[str, str]) -> dict[str, Any]:
        """Load credential fields from an environment mapping."""
        config: dict[str, Any] = {}
        if user_token := environ.get(USER_TOKEN_ENV):
            config["user_token"] = user_token
        if bot_token := environ.get(BOT_TOKEN_ENV):
            config["bot_token"] = bot_token
        return config

    def __repr__(self) -> str:
        # Never echo tokens
        return f"SlackCredentials(kind={self.token_kind}, bot_token={self.bot_token is not None})"


def resolve_credentials(environ: Mapping[str, str]) -> SlackCredentials:
    """Build credentials from ``environ`` or raise ``CredentialFailure``.

    Runs before any client is constructed, so a failure here guarantees no
    network access took place.
    """
    fields = SlackCredentials.load_from_env(environ)
    if not fields.get("user_token", "").strip():
        raise CredentialFailure(MISSING_TOKEN_MESSAGE)

    credentials = SlackCredentials(**fields)
    if not credentials.has_valid_format():
        raise CredentialFailure(INVALID_TOKEN_MESSAGE)
    return credentials
