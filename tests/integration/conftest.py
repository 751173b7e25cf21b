"""
Integration Test Fixtures.

Fixtures for integration tests - the real CLI runs as a subprocess and talks
HTTP to a mock Pivotal Network server running in a background thread.

The mock server serves a FIFO queue of expected requests. Each incoming
request must match the next expected method and path; anything else is
recorded as a failure and answered with 500. Tests assert on both the CLI's
output and the requests the server saw.
"""

import os
import socket
import subprocess
import sys
import threading
import time
from collections import deque
from collections.abc import Generator
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import pytest
import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, Response

PROJECT_ROOT = Path(__file__).parent.parent.parent
EXECUTABLE_TIMEOUT = 30


# =============================================================================
# Mock Server
# =============================================================================


@dataclass
class ExpectedRequest:
    """One canned response, served when method and path match."""

    method: str
    path: str
    status_code: int = 200
    json_body: Any = None


@dataclass
class ReceivedRequest:
    method: str
    path: str
    headers: dict[str, str] = field(default_factory=dict)


class MockPivnetServer:
    """
    Test-only HTTP stub for the Pivotal Network API.

    Usage:
        server.append_handler("GET", "/api/v2/authentication")
        server.append_handler("GET", "/api/v2/products/p-mysql", json_body={...})
        ... run the CLI against server.url ...
        server.verify()
    """

    def __init__(self, host: str = "127.0.0.1") -> None:
        self.host = host
        self.port = _free_port(host)
        self.received: list[ReceivedRequest] = []
        self.failures: list[str] = []
        self._handlers: deque[ExpectedRequest] = deque()
        self._lock = threading.Lock()
        self._server: uvicorn.Server | None = None
        self._thread: threading.Thread | None = None
        self.app = self._create_app()

    @property
    def url(self) -> str:
        return f"http://{self.host}:{self.port}"

    def append_handler(
        self,
        method: str,
        path: str,
        status_code: int = 200,
        json_body: Any = None,
    ) -> None:
        """Queue a response for the next request."""
        with self._lock:
            self._handlers.append(ExpectedRequest(method, path, status_code, json_body))

    def pending(self) -> list[ExpectedRequest]:
        with self._lock:
            return list(self._handlers)

    def verify(self) -> None:
        """Fail if any request was unexpected or any handler was never used."""
        assert self.failures == [], f"Unexpected requests: {self.failures}"
        assert self.pending() == [], f"Handlers never called: {self.pending()}"

    def _create_app(self) -> FastAPI:
        app = FastAPI()

        @app.api_route("/{path:path}", methods=["GET", "POST", "PUT", "PATCH", "DELETE"])
        async def dispatch(request: Request, path: str) -> Response:
            return self._dispatch(request)

        return app

    def _dispatch(self, request: Request) -> Response:
        method = request.method
        path = request.url.path

        with self._lock:
            self.received.append(ReceivedRequest(method, path, dict(request.headers)))
            expected = self._handlers[0] if self._handlers else None

            if expected is None or (expected.method, expected.path) != (method, path):
                self.failures.append(f"{method} {path}")
                return JSONResponse({"message": f"Unexpected request: {method} {path}"}, status_code=500)

            self._handlers.popleft()

        if expected.json_body is None:
            return Response(status_code=expected.status_code)
        return JSONResponse(expected.json_body, status_code=expected.status_code)

    def start(self) -> None:
        config = uvicorn.Config(self.app, host=self.host, port=self.port, log_level="error")
        self._server = uvicorn.Server(config)
        self._thread = threading.Thread(target=self._server.run, daemon=True)
        self._thread.start()

        deadline = time.monotonic() + 10
        while not self._server.started:
            if time.monotonic() > deadline:
                raise RuntimeError("Mock server did not start")
            time.sleep(0.01)

    def stop(self) -> None:
        if self._server is not None:
            self._server.should_exit = True
        if self._thread is not None:
            self._thread.join(timeout=10)


def _free_port(host: str) -> int:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind((host, 0))
        return sock.getsockname()[1]


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def server() -> Generator[MockPivnetServer, None, None]:
    """A running mock server, stopped after the test."""
    mock_server = MockPivnetServer()
    mock_server.start()
    yield mock_server
    mock_server.stop()


@pytest.fixture
def run_pivnet(config_path: Path):
    """
    Run the CLI as a subprocess with --verbose and --config prepended.

    Usage:
        result = run_pivnet("--format=json", "product", "--product-slug", "p-mysql")
        assert result.returncode == 0
    """
    env = {key: value for key, value in os.environ.items() if not key.startswith("PIVNET_")}

    def run(*args: str) -> subprocess.CompletedProcess:
        all_args = ["--verbose", f"--config={config_path}", *args]
        return subprocess.run(
            [sys.executable, "-m", "pivnet", *all_args],
            cwd=PROJECT_ROOT,
            env=env,
            capture_output=True,
            text=True,
            timeout=EXECUTABLE_TIMEOUT,
        )

    return run


@pytest.fixture
def login(run_pivnet, server: MockPivnetServer, api_token: str):
    """Log in against the mock server. Expects an authentication handler to be queued."""

    def do_login() -> None:
        result = run_pivnet("login", f"--api-token={api_token}", f"--host={server.url}")
        assert result.returncode == 0, result.stderr

    return do_login
