"""Configuration models for slackreader."""

from .server_config import ServerConfig
from .slack_config import SlackCredentials, resolve_credentials

__all__ = ["ServerConfig", "SlackCredentials", "resolve_credentials"]
