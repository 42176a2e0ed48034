"""Conversion between calendar dates and Slack timestamps.

Slack identifies messages by epoch-second strings such as
``"1355517523.000005"``. Human input arrives as dates (``"2025-08-25"``) or
date-times (``"2025-08-25 12:30:00"``). Naive inputs and all display output
use UTC so a date survives the round trip unchanged.
"""

from __future__ import annotations

import re
from datetime import datetime, timezone

DISPLAY_TIMEZONE = timezone.utc
DISPLAY_FORMAT = "%Y-%m-%d %H:%M:%S"

_EPOCH_PATTERN = re.compile(r"\d{10}(\.\d+)?")
_SLASH_DATE = re.compile(r"^(\d{4})/(\d{1,2})/(\d{1,2})")


def _parse_calendar(value: str) -> datetime | None:
    text = value.strip()
    if not text:
        return None
    # 2025/8/5 -> 2025-08-05
    match = _SLASH_DATE.match(text)
    if match:
        year, month, day = match.groups()
        text = f"{year}-{int(month):02d}-{int(day):02d}{text[match.end():]}"
    if text.endswith(("z", "Z")):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=DISPLAY_TIMEZONE)
    return parsed


def to_slack_timestamp(value: str | None) -> str | None:
    """Convert a date string to a Slack timestamp.

    Returns ``value`` unchanged when it already is an epoch-seconds string,
    ``None`` when it is empty or cannot be parsed (the caller must then omit
    the field), otherwise epoch seconds with six decimals.
    """
    if not value:
        return None
    if _EPOCH_PATTERN.fullmatch(value):
        return value
    parsed = _parse_calendar(value)
    if parsed is None:
        return None
    return f"{parsed.timestamp():.6f}"


def format_timestamp(ts: str | None) -> str:
    """Render a Slack timestamp as ``YYYY-MM-DD HH:MM:SS`` (UTC).

    Empty or unparseable input yields ``""``.
    """
    if not ts:
        return ""
    try:
        seconds = float(ts)
        return datetime.fromtimestamp(seconds, tz=DISPLAY_TIMEZONE).strftime(
            DISPLAY_FORMAT
        )
    except (TypeError, ValueError, OverflowError, OSError):
        return ""
