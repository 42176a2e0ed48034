"""Failure envelope and error normalization for Slack tool calls.

Every failure that leaves the tool pipeline is a ``ToolFailure``. Handlers may
raise anything; the pipeline routes the raised value through
``raise_slack_error`` which classifies it into exactly one envelope:

- remote failure envelope (``{"ok": false, "error": "<code>"}`` or a
  ``SlackApiError`` carrying one) -> ``remote`` with the Slack error code
- any other exception -> ``transport`` with the exception message
- anything else -> ``unknown`` with a fixed message
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Any, NoReturn

from slack_sdk.errors import SlackApiError

UNKNOWN_API_ERROR_MESSAGE = "An unknown API error occurred"


class FailureKind(str, Enum):
    """Where a tool call failed."""

    VALIDATION = "validation"
    CREDENTIAL = "credential"
    REMOTE = "remote"
    TRANSPORT = "transport"
    UNKNOWN = "unknown"


class ToolFailure(Exception):
    """Normalized tool failure returned to the protocol layer."""

    def __init__(
        self,
        message: str,
        kind: FailureKind = FailureKind.UNKNOWN,
        remote_error_code: str | None = None,
        status_code: int | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.kind = kind
        self.remote_error_code = remote_error_code
        self.status_code = status_code

    def to_dict(self) -> dict[str, Any]:
        """Serialize as the outbound error envelope."""
        out: dict[str, Any] = {
            "isError": True,
            "message": self.message,
            "kind": self.kind.value,
        }
        if self.remote_error_code:
            out["remote_error_code"] = self.remote_error_code
        if self.status_code is not None:
            out["status_code"] = self.status_code
        return out

    def __repr__(self) -> str:
        return (
            f"ToolFailure(kind={self.kind.value}, message={self.message!r}, "
            f"remote_error_code={self.remote_error_code!r})"
        )


class ValidationFailure(ToolFailure):
    """Tool input did not match the declared schema."""

    def __init__(self, message: str, violations: list[str] | None = None):
        super().__init__(message, FailureKind.VALIDATION)
        self.violations = violations or []


class CredentialFailure(ToolFailure):
    """User token missing or malformed; raised before any network access."""

    def __init__(self, message: str):
        super().__init__(message, FailureKind.CREDENTIAL)


def _remote_error_code(value: Any) -> str | None:
    """Return the Slack error code if ``value`` is a failure envelope."""
    if not isinstance(value, Mapping):
        return None
    if "ok" not in value or value.get("ok") is not False:
        return None
    code = value.get("error")
    if isinstance(code, str) and code:
        return code
    return None


def raise_slack_error(error: object) -> NoReturn:
    """Classify ``error`` and raise the matching ``ToolFailure``.

    Never returns. Already-normalized failures are re-raised unchanged.
    """
    if isinstance(error, ToolFailure):
        raise error

    if isinstance(error, SlackApiError):
        response = error.response
        payload = getattr(response, "data", response)
        code = _remote_error_code(payload)
        if code:
            raise ToolFailure(
                f"Slack API Error: {code}",
                FailureKind.REMOTE,
                remote_error_code=code,
                status_code=getattr(response, "status_code", None),
            ) from error

    code = _remote_error_code(error)
    if code:
        raise ToolFailure(
            f"Slack API Error: {code}",
            FailureKind.REMOTE,
            remote_error_code=code,
        )

    if isinstance(error, BaseException):
        detail = str(error) or type(error).__name__
        raise ToolFailure(
            f"API call failed: {detail}",
            FailureKind.TRANSPORT,
            status_code=getattr(error, "status", None),
        ) from error

    raise ToolFailure(UNKNOWN_API_ERROR_MESSAGE, FailureKind.UNKNOWN)


def check_slack_response(response: Any) -> dict[str, Any]:
    """Unwrap a Slack response, raising a ``ToolFailure`` unless it is ok.

    Accepts ``SlackResponse`` objects (via ``.data``) and plain mappings.
    """
    payload = getattr(response, "data", response)
    if not isinstance(payload, Mapping) or not payload.get("ok"):
        raise_slack_error(payload)
    return dict(payload)
