"""Async HTTP client wrapper.

Wraps httpx with RequestPolicy enforcement:
- Configurable timeouts
- Auth and default headers
- Error mapping to the ConnectorError hierarchy

Each request is a single attempt. Tests inject an `httpx.MockTransport`.
"""

import json as json_module
import logging
import time
from dataclasses import dataclass
from typing import Any, Dict, Optional

import httpx

from .base import (
    AuthenticationError,
    AuthorizationError,
    AuthStrategy,
    ConnectionError,
    ConnectorError,
    RateLimitError,
    RequestPolicy,
    ResourceNotFoundError,
    ServiceUnavailableError,
    TimeoutError,
    ValidationError,
)

logger = logging.getLogger(__name__)


@dataclass
class HTTPResponse:
    """Simplified HTTP response wrapper."""

    status_code: int
    headers: Dict[str, str]
    body: bytes
    json_data: Optional[Any] = None
    elapsed_seconds: float = 0.0

    @property
    def ok(self) -> bool:
        """Check if status code indicates success (2xx)."""
        return 200 <= self.status_code < 300

    def json(self) -> Any:
        """Get JSON data (parsed body)."""
        if self.json_data is None and self.body:
            self.json_data = json_module.loads(self.body)
        return self.json_data


def _error_message(body: bytes) -> str:
    """Pull a readable message out of an Attio error body."""
    text = body.decode("utf-8", errors="replace")
    try:
        payload = json_module.loads(text)
    except ValueError:
        return text[:200]
    if isinstance(payload, dict) and payload.get("message"):
        return str(payload["message"])
    return text[:200]


def map_error(
    status_code: int,
    body: bytes,
    headers: Dict[str, str],
    connector_name: str = "http_client",
) -> ConnectorError:
    """Map HTTP status code to appropriate ConnectorError."""
    message = _error_message(body)

    if status_code == 401:
        return AuthenticationError(f"Authentication failed: {message}", connector_name)
    elif status_code == 403:
        return AuthorizationError(f"Permission denied: {message}", connector_name)
    elif status_code == 404:
        return ResourceNotFoundError(f"Resource not found: {message}", connector_name)
    elif status_code in (400, 422):
        return ValidationError(f"Validation failed: {message}", connector_name)
    elif status_code == 429:
        retry_after = headers.get("retry-after") or headers.get("Retry-After")
        try:
            retry_seconds = float(retry_after) if retry_after else None
        except ValueError:
            retry_seconds = None
        return RateLimitError(
            f"Rate limit exceeded: {message}",
            connector_name=connector_name,
            retry_after=retry_seconds,
        )
    elif status_code >= 500:
        return ServiceUnavailableError(f"Service error ({status_code}): {message}", connector_name)
    else:
        return ConnectorError(f"HTTP error {status_code}: {message}", connector_name)


class AsyncHTTPClient:
    """Async HTTP client with policy-driven timeouts and error mapping."""

    def __init__(
        self,
        auth: Optional[AuthStrategy] = None,
        policy: Optional[RequestPolicy] = None,
        base_url: str = "",
        connector_name: str = "http_client",
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize async HTTP client.

        Args:
            auth: Authentication strategy for requests
            policy: Request policy (timeouts, headers)
            base_url: Base URL for all requests
            connector_name: Name attached to raised errors
            transport: Optional httpx transport (tests use MockTransport)
        """
        self.auth = auth
        self.policy = policy or RequestPolicy()
        self.base_url = base_url.rstrip("/")
        self.connector_name = connector_name
        self._transport = transport

    def _build_headers(self, extra_headers: Optional[Dict[str, str]] = None) -> Dict[str, str]:
        """Build request headers including auth and defaults."""
        headers = {"User-Agent": self.policy.user_agent}
        headers.update(self.policy.default_headers)

        if self.auth:
            headers.update(self.auth.get_headers())

        if extra_headers:
            headers.update(extra_headers)

        return headers

    def _get_url(self, path: str) -> str:
        """Build full URL from path."""
        if path.startswith("http://") or path.startswith("https://"):
            return path
        return f"{self.base_url}/{path.lstrip('/')}"

    async def request(
        self,
        method: str,
        path: str,
        *,
        json: Optional[Any] = None,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
        raise_for_status: bool = True,
    ) -> HTTPResponse:
        """Make an async HTTP request.

        Raises:
            ConnectorError: On HTTP errors (if raise_for_status=True)
            TimeoutError: On request timeout
            ConnectionError: On connection failure
        """
        url = self._get_url(path)
        timeout = httpx.Timeout(
            connect=self.policy.connect_timeout,
            read=self.policy.read_timeout,
            write=self.policy.read_timeout,
            pool=self.policy.total_timeout,
        )
        if params:
            params = {k: v for k, v in params.items() if v is not None}

        start_time = time.monotonic()
        try:
            async with httpx.AsyncClient(timeout=timeout, transport=self._transport) as client:
                response = await client.request(
                    method=method,
                    url=url,
                    json=json,
                    params=params,
                    headers=self._build_headers(headers),
                )
        except httpx.TimeoutException as e:
            raise TimeoutError(
                f"Request timed out after {self.policy.read_timeout}s",
                connector_name=self.connector_name,
                timeout_seconds=self.policy.read_timeout,
            ) from e
        except httpx.ConnectError as e:
            raise ConnectionError(f"Failed to connect to {url}: {e}", self.connector_name) from e
        except httpx.HTTPError as e:
            raise ConnectorError(f"HTTP error: {e}", self.connector_name) from e

        result = HTTPResponse(
            status_code=response.status_code,
            headers=dict(response.headers),
            body=response.content,
            elapsed_seconds=time.monotonic() - start_time,
        )
        logger.debug(
            f"{method} {path} -> {result.status_code} ({result.elapsed_seconds:.3f}s)"
        )

        if raise_for_status and not result.ok:
            raise map_error(result.status_code, result.body, result.headers, self.connector_name)

        return result

    async def get(self, path: str, **kwargs) -> HTTPResponse:
        """Async HTTP GET request."""
        return await self.request("GET", path, **kwargs)

    async def post(self, path: str, **kwargs) -> HTTPResponse:
        """Async HTTP POST request."""
        return await self.request("POST", path, **kwargs)
