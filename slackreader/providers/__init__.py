"""Remote API providers."""

from .slack_client import call_slack, create_slack_client

__all__ = ["call_slack", "create_slack_client"]
