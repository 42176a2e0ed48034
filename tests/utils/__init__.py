"""Test helpers."""

from .fake_slack import VALID_ENV, FakeSlackClient
from .subprocess_jsonrpc import (
    JsonRpcResponseError,
    JsonRpcTimeoutError,
    SubprocessCrashError,
    SubprocessJsonRpcClient,
)

__all__ = [
    "VALID_ENV",
    "FakeSlackClient",
    "JsonRpcResponseError",
    "JsonRpcTimeoutError",
    "SubprocessCrashError",
    "SubprocessJsonRpcClient",
]
