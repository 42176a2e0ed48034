"""Tests for error normalization into the failure envelope."""

import pytest
from slack_sdk.errors import SlackApiError
from slack_sdk.web.slack_response import SlackResponse

from slackreader.core.errors import (
    UNKNOWN_API_ERROR_MESSAGE,
    FailureKind,
    ToolFailure,
    check_slack_response,
    raise_slack_error,
)


def _slack_response(data: dict, status_code: int = 200) -> SlackResponse:
    return SlackResponse(
        client=None,
        http_verb="POST",
        api_url="https://slack.com/api/conversations.history",
        req_args={},
        data=data,
        headers={},
        status_code=status_code,
    )


def _normalize(error) -> ToolFailure:
    with pytest.raises(ToolFailure) as exc_info:
        raise_slack_error(error)
    return exc_info.value


class TestRaiseSlackError:
    def test_remote_envelope(self):
        failure = _normalize({"ok": False, "error": "channel_not_found"})
        assert failure.kind is FailureKind.REMOTE
        assert failure.remote_error_code == "channel_not_found"
        assert failure.message == "Slack API Error: channel_not_found"

    def test_slack_api_error(self):
        response = _slack_response({"ok": False, "error": "not_authed"}, status_code=401)
        failure = _normalize(SlackApiError("The request to the Slack API failed.", response))
        assert failure.kind is FailureKind.REMOTE
        assert failure.remote_error_code == "not_authed"
        assert failure.status_code == 401

    def test_transport_error(self):
        failure = _normalize(ConnectionError("connection reset"))
        assert failure.kind is FailureKind.TRANSPORT
        assert failure.message == "API call failed: connection reset"

    def test_transport_error_without_message_uses_class_name(self):
        failure = _normalize(TimeoutError())
        assert failure.message == "API call failed: TimeoutError"

    @pytest.mark.parametrize("value", [None, 42, "boom", {"ok": False}, {"unexpected": 1}])
    def test_unknown(self, value):
        failure = _normalize(value)
        assert failure.kind is FailureKind.UNKNOWN
        assert failure.message == UNKNOWN_API_ERROR_MESSAGE

    def test_idempotent(self):
        failure = ToolFailure("Slack API Error: x", FailureKind.REMOTE, "x")
        assert _normalize(failure) is failure


class TestCheckSlackResponse:
    def test_ok_mapping_is_returned(self):
        assert check_slack_response({"ok": True, "members": []}) == {"ok": True, "members": []}

    def test_ok_slack_response_is_unwrapped(self):
        payload = check_slack_response(_slack_response({"ok": True, "channels": []}))
        assert payload == {"ok": True, "channels": []}

    def test_not_ok_raises_remote(self):
        with pytest.raises(ToolFailure) as exc_info:
            check_slack_response({"ok": False, "error": "ratelimited"})
        assert exc_info.value.remote_error_code == "ratelimited"


def test_to_dict():
    failure = ToolFailure("Slack API Error: x", FailureKind.REMOTE, "x", 404)
    assert failure.to_dict() == {
        "isError": True,
        "message": "Slack API Error: x",
        "kind": "remote",
        "remote_error_code": "x",
        "status_code": 404,
    }
    assert ToolFailure("oops").to_dict() == {
        "isError": True,
        "message": "oops",
        "kind": "unknown",
    }
