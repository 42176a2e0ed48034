"""Reshape raw Slack records into the compact forms returned by tools.

All functions are total: missing or empty fields fall back to defaults and
nothing here raises for a well-typed mapping.
"""

from collections.abc import Mapping
from typing import Any, NotRequired, TypedDict

from slackreader.core.timestamps import format_timestamp

UNKNOWN_USER = "Unknown User"
UNKNOWN_CHANNEL = "Unknown Channel"


class TransformedUser(TypedDict):
    id: str
    name: str
    is_bot: bool


class TransformedChannel(TypedDict):
    id: str
    name: str
    topic: str
    purpose: str


class TransformedMessage(TypedDict):
    user_id: str
    text: str
    timestamp: str
    thread_timestamp: NotRequired[str]
    reply_count: int


def _nested_value(record: Mapping[str, Any], key: str) -> str:
    """Return ``record[key]["value"]`` or ``""``."""
    block = record.get(key)
    if isinstance(block, Mapping):
        return block.get("value") or ""
    return ""


def transform_user(user: Mapping[str, Any]) -> TransformedUser:
    """Name preference: real_name, name, profile.display_name."""
    profile = user.get("profile")
    display_name = profile.get("display_name") if isinstance(profile, Mapping) else None
    return {
        "id": user.get("id", ""),
        "name": user.get("real_name") or user.get("name") or display_name or UNKNOWN_USER,
        "is_bot": bool(user.get("is_bot", False)),
    }


def transform_channel(channel: Mapping[str, Any]) -> TransformedChannel:
    return {
        "id": channel.get("id", ""),
        "name": channel.get("name") or UNKNOWN_CHANNEL,
        "topic": _nested_value(channel, "topic"),
        "purpose": _nested_value(channel, "purpose"),
    }


def transform_message(message: Mapping[str, Any]) -> TransformedMessage:
    transformed: TransformedMessage = {
        "user_id": message.get("user") or UNKNOWN_USER,
        "text": message.get("text") or "",
        "timestamp": format_timestamp(message.get("ts")),
        "reply_count": message.get("reply_count") or 0,
    }
    if message.get("thread_ts"):
        transformed["thread_timestamp"] = format_timestamp(message["thread_ts"])
    return transformed
