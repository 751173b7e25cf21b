"""
Root Pytest Fixtures.

Shared fixtures available to all test types.

Every test runs with PIVNET_* environment variables removed and the
settings cache cleared, so a developer's real ~/.pivnetrc or environment
never leaks into a test.
"""

import os
from collections.abc import Generator
from pathlib import Path
from typing import Any

import pytest

from pivnet.api.models import Product, Release
from pivnet.core.config import get_settings

API_TOKEN = "some-api-token"


# =============================================================================
# Environment Isolation
# =============================================================================


@pytest.fixture(autouse=True)
def _isolate_environment(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: Path,
) -> Generator[None, None, None]:
    """Strip PIVNET_* variables and point HOME at a temp directory."""
    for key in list(os.environ):
        if key.startswith("PIVNET_"):
            monkeypatch.delenv(key)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))

    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


# =============================================================================
# Config File Fixtures
# =============================================================================


@pytest.fixture
def config_path(tmp_path: Path) -> Path:
    """Path of a not-yet-existing rc file inside the test's temp directory."""
    return tmp_path / ".pivnetrc"


# =============================================================================
# Record Fixtures
# =============================================================================


@pytest.fixture
def product() -> Product:
    """A product as returned by the API."""
    return Product(id=1234, slug="some-product-slug", name="some-product-name")


@pytest.fixture
def product_payload(product: Product) -> dict[str, Any]:
    """JSON body of GET /products/{slug}, including fields the CLI ignores."""
    payload = product.model_dump()
    payload["_links"] = {"self": {"href": "/api/v2/products/some-product-slug"}}
    return payload


@pytest.fixture
def releases() -> list[Release]:
    """Releases of the test product."""
    return [
        Release(id=1, version="1.0.0", release_type="Major Release", release_date="2016-01-01"),
        Release(id=2, version="1.1.0-rc1", release_type="Developer Release"),
    ]


@pytest.fixture
def api_token() -> str:
    """Token used for login in tests."""
    return API_TOKEN
