"""Shared fixtures for integration tests."""

import os

import pytest

# Skip all integration tests unless RUN_FIAP_NETWORK_TESTS=1
pytestmark = pytest.mark.skipif(
    os.environ.get("RUN_FIAP_NETWORK_TESTS") != "1",
    reason="Requires network access. Set RUN_FIAP_NETWORK_TESTS=1 to run",
)


@pytest.fixture
def storage_url() -> str:
    url = os.environ.get("FIAP_STORAGE_URL")
    if not url:
        pytest.skip("FIAP_STORAGE_URL is not set")
    return url


@pytest.fixture
def point_id() -> str:
    point = os.environ.get("FIAP_POINT_ID")
    if not point:
        pytest.skip("FIAP_POINT_ID is not set")
    return point
