"""Shared fixtures for integration tests."""

import os

import pytest

from cdp.queryservice import ConnectionConfig, QueryServiceConnection

# Skip all integration tests unless RUN_CDP_QUERYSERVICE_NETWORK_TESTS=1
pytestmark = pytest.mark.skipif(
    os.environ.get("RUN_CDP_QUERYSERVICE_NETWORK_TESTS") != "1",
    reason="Requires network access. Set RUN_CDP_QUERYSERVICE_NETWORK_TESTS=1 to run",
)


@pytest.fixture
def live_connection():
    """Connection built from CDP_QUERYSERVICE_HOST / CDP_QUERYSERVICE_TOKEN."""
    host = os.environ.get("CDP_QUERYSERVICE_HOST")
    token = os.environ.get("CDP_QUERYSERVICE_TOKEN")
    if not host or not token:
        pytest.skip("CDP_QUERYSERVICE_HOST and CDP_QUERYSERVICE_TOKEN must be set")
    config = ConnectionConfig(
        host=host,
        tenant_id=os.environ.get("CDP_QUERYSERVICE_TENANT_ID"),
        headers={"Authorization": f"Bearer {token}"},
        max_pages=20,
    )
    with QueryServiceConnection(config) as connection:
        yield connection
