"""
HTTP Client for the Pivotal Network API.

Provides an async HTTP client for the /api/v2 endpoints.
Every request carries the profile's API token and a pivnet-cli User-Agent.
HTTP error statuses are translated into PivnetError subclasses here, so
commands never look at status codes. A body that is not the expected JSON
shape is reported the same way as an upstream error.
"""

from typing import Any, TypeVar
from urllib.parse import quote

import httpx
from pydantic import BaseModel, ValidationError

from pivnet.api.models import Product, Release
from pivnet.core.config import get_settings
from pivnet.core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ExternalServiceError,
    NotFoundError,
)
from pivnet.core.logging import get_logger, log_with_source
from pivnet.core.resilience import retry_transport_errors
from pivnet.version import VERSION

logger = get_logger(__name__)

API_PREFIX = "/api/v2"

ModelT = TypeVar("ModelT", bound=BaseModel)


class PivnetClient:
    """
    HTTP client for Pivotal Network API communication.

    Features:
    - Token authentication header on every request
    - Retry of transport failures (tenacity)
    - Structured logging of requests/responses
    - Status code to exception mapping

    Usage:
        async with PivnetClient(host="https://network.pivotal.io", api_token="...") as client:
            await client.authenticate()
            product = await client.product("some-product-slug")
    """

    def __init__(
        self,
        host: str,
        api_token: str,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize the API client.

        Args:
            host: API host, e.g. https://network.pivotal.io. The /api/v2 prefix is appended.
            api_token: Token sent in the Authorization header.
            timeout: Request timeout in seconds. If None, reads PIVNET_TIMEOUT.
            transport: Optional httpx transport, used by tests to stub the API.
        """
        self.host = host.rstrip("/")
        self.base_url = f"{self.host}{API_PREFIX}"
        self.api_token = api_token
        self.timeout = timeout if timeout is not None else get_settings().timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> "PivnetClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                transport=self._transport,
                headers={
                    "Authorization": f"Token {self.api_token}",
                    "Accept": "application/json",
                    "Content-Type": "application/json",
                    "User-Agent": f"pivnet-cli/{VERSION}",
                },
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    @retry_transport_errors()
    async def _send(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        client = await self._get_client()
        return await client.request(method, path, **kwargs)

    async def request(
        self,
        method: str,
        path: str,
        **kwargs: Any,
    ) -> httpx.Response:
        """
        Make an HTTP request to the API.

        Args:
            method: HTTP method (GET, POST, etc.)
            path: API path below /api/v2 (e.g., /products)
            **kwargs: Additional arguments for httpx

        Returns:
            httpx.Response with a 2xx status

        Raises:
            AuthenticationError: On 401
            AuthorizationError: On 403
            NotFoundError: On 404
            ExternalServiceError: On any other error status or transport failure
        """
        log_with_source(logger, "api", "debug", "API request", method=method, path=path)

        try:
            response = await self._send(method, path, **kwargs)
        except httpx.HTTPError as e:
            log_with_source(
                logger,
                "api",
                "error",
                "API request failed",
                method=method,
                path=path,
                error=str(e),
            )
            raise ExternalServiceError(
                f"Could not reach {self.host}: {e}"
            ) from e

        log_with_source(
            logger,
            "api",
            "debug",
            "API response",
            method=method,
            path=path,
            status_code=response.status_code,
        )

        _raise_for_status(response, path)
        return response

    async def get(self, path: str, **kwargs: Any) -> httpx.Response:
        """Make a GET request."""
        return await self.request("GET", path, **kwargs)

    async def authenticate(self) -> None:
        """
        Check that the token is accepted by the API.

        Raises:
            AuthenticationError: If the token is rejected
        """
        await self.get("/authentication")

    async def products(self) -> list[Product]:
        """List all products visible to the token."""
        path = "/products"
        response = await self.get(path)
        items = _list_field(_json_object(response, path), "products", path)
        return [_validate(Product, item, path) for item in items]

    async def product(self, slug: str) -> Product:
        """Fetch a single product by slug."""
        path = f"/products/{_segment(slug)}"
        response = await self.get(path)
        return _validate(Product, _json_object(response, path), path)

    async def releases(self, product_slug: str) -> list[Release]:
        """List all releases of a product."""
        path = f"/products/{_segment(product_slug)}/releases"
        response = await self.get(path)
        items = _list_field(_json_object(response, path), "releases", path)
        return [_validate(Release, item, path) for item in items]

    async def release_for_version(self, product_slug: str, version: str) -> Release:
        """
        Find the release of a product with the given version.

        Raises:
            NotFoundError: If no release has that version
        """
        for release in await self.releases(product_slug):
            if release.version == version:
                return release
        raise NotFoundError(
            f"Release for version '{version}' not found for product '{product_slug}'"
        )


def _json(response: httpx.Response) -> Any:
    """Decode a JSON body, treating undecodable content as an upstream error."""
    try:
        return response.json()
    except ValueError as e:
        raise ExternalServiceError(
            f"Invalid JSON in response from {response.request.url}",
            status_code=response.status_code,
        ) from e


def _segment(value: str) -> str:
    """Percent-encode a value for use as a single path segment."""
    return quote(value, safe="")


def _json_object(response: httpx.Response, path: str) -> dict[str, Any]:
    """Decode a JSON body that must be an object."""
    body = _json(response)
    if not isinstance(body, dict):
        raise ExternalServiceError(
            f"Unexpected response from {path}: expected a JSON object",
            status_code=response.status_code,
        )
    return body


def _list_field(body: dict[str, Any], key: str, path: str) -> list[Any]:
    """Read a list-valued field, absent meaning empty."""
    items = body.get(key, [])
    if not isinstance(items, list):
        raise ExternalServiceError(f"Unexpected response from {path}: '{key}' is not a list")
    return items


def _validate(model: type[ModelT], data: Any, path: str) -> ModelT:
    """Build a model from response data, treating a shape mismatch as an upstream error."""
    try:
        return model.model_validate(data)
    except ValidationError as e:
        log_with_source(logger, "api", "error", "Unexpected response shape", path=path, error=str(e))
        raise ExternalServiceError(f"Unexpected response from {path}") from e


def _error_message(response: httpx.Response) -> str | None:
    """Extract the API's error message from a response body, if it has one."""
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict) and isinstance(body.get("message"), str):
        return body["message"]
    return None


def _raise_for_status(response: httpx.Response, path: str) -> None:
    """Translate an error status into the matching PivnetError."""
    status = response.status_code
    if status < 400:
        return

    message = _error_message(response)

    if status == 401:
        raise AuthenticationError(message) if message else AuthenticationError()
    if status == 403:
        raise AuthorizationError(message or f"Permission denied for {path}")
    if status == 404:
        raise NotFoundError(message or f"Resource not found: {path}")

    raise ExternalServiceError(
        message or f"Unexpected response from {path}: HTTP {status}",
        status_code=status,
    )
