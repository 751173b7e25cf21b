"""
Unit Test Fixtures.

Fixtures for unit tests - the API is stubbed with httpx.MockTransport.
Unit tests should be fast and isolated, never opening a real socket.
"""

from collections.abc import Callable
from pathlib import Path

import httpx
import pytest

from pivnet.core.config import save_rc_file
from pivnet.core.config_schema import ProfileSchema, RCFileSchema

TEST_HOST = "http://pivnet.test"


@pytest.fixture
def logged_in_config(config_path: Path, api_token: str) -> Path:
    """rc file holding a default profile for TEST_HOST."""
    rc_file = RCFileSchema(
        profiles=[ProfileSchema(name="default", api_token=api_token, host=TEST_HOST)],
    )
    save_rc_file(config_path, rc_file)
    return config_path


@pytest.fixture
def recorded_requests() -> list[httpx.Request]:
    """Requests seen by mock_transport, in order."""
    return []


@pytest.fixture
def mock_transport(
    recorded_requests: list[httpx.Request],
) -> Callable[[Callable[[httpx.Request], httpx.Response]], httpx.MockTransport]:
    """
    Build an httpx.MockTransport that records every request.

    Usage:
        transport = mock_transport(lambda request: httpx.Response(200, json={}))
    """
    def factory(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.MockTransport:
        def recording_handler(request: httpx.Request) -> httpx.Response:
            recorded_requests.append(request)
            return handler(request)

        return httpx.MockTransport(recording_handler)

    return factory
