"""Shared fixtures for unit tests."""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import Any
from unittest.mock import MagicMock

import pytest

from cdp.queryservice.runtime.rest import RequestsTransport, Response


@pytest.fixture
def make_response() -> Callable[..., Response]:
    """Factory for responses whose body is ``payload`` serialized as JSON."""

    def _make(payload: Any, status: int = 200, reason: str = "OK", **headers: str) -> Response:
        body = payload if isinstance(payload, str) else json.dumps(payload)
        return Response(status, body, reason=reason, headers=headers)

    return _make


@pytest.fixture
def mock_transport() -> MagicMock:
    """Transport double; set ``proceed.side_effect`` per test."""
    return MagicMock(spec=RequestsTransport)


@pytest.fixture
def query_payload() -> dict[str, Any]:
    """Complete two-row page without column metadata."""
    return {
        "data": [
            {"telephonenumber__c": "001 6723213"},
            {"telephonenumber__c": "001 8892311"},
        ],
        "startTime": "2021-06-01T10:00:00.000000Z",
        "endTime": "2021-06-01T10:00:01.000000Z",
        "rowCount": 2,
        "queryId": "2c2e5f6a-1b2b-4d8c-9d9e-7f0d4b6c8a11",
        "done": True,
    }


@pytest.fixture
def pagination_payload(query_payload: dict[str, Any]) -> dict[str, Any]:
    """Same rows as ``query_payload`` but announcing more pages."""
    return {**query_payload, "done": False}
