"""Shared fixtures for slackreader tests."""

from __future__ import annotations

from typing import Any

import pytest

from tests.utils.fake_slack import FakeSlackClient


@pytest.fixture
def fake_client() -> FakeSlackClient:
    return FakeSlackClient()


@pytest.fixture
def client_factory(fake_client):
    """Client factory handing out ``fake_client`` and recording credentials."""
    created: list[Any] = []

    def factory(credentials, timeout):
        created.append((credentials, timeout))
        return fake_client

    factory.created = created  # type: ignore[attr-defined]
    return factory
