"""Connector layer for the Attio API.

Key components:
- AuthStrategy: Authentication abstraction (NoAuth, ApiKeyAuth)
- RequestPolicy: Timeouts and default headers
- AsyncHTTPClient: httpx wrapper with error mapping
- AttioConnector: Attio v2 REST operations used by the tools
- DummyConnector: Test connector without network calls
"""

from .attio import AttioConnector
from .base import (
    DEFAULT_POLICY,
    ApiKeyAuth,
    AuthenticationError,
    AuthorizationError,
    AuthStrategy,
    AuthType,
    BaseConnector,
    ConnectionError,
    ConnectorError,
    NoAuth,
    RateLimitError,
    RequestPolicy,
    ResourceNotFoundError,
    ServiceUnavailableError,
    TimeoutError,
    ValidationError,
)
from .dummy import DummyConnector, DummyResponse, FailingConnector
from .http_client import AsyncHTTPClient, HTTPResponse, map_error

__all__ = [
    # Base
    "BaseConnector",
    "AttioConnector",
    # Auth
    "AuthType",
    "AuthStrategy",
    "NoAuth",
    "ApiKeyAuth",
    # Policy
    "RequestPolicy",
    "DEFAULT_POLICY",
    # Errors
    "ConnectorError",
    "ConnectionError",
    "TimeoutError",
    "AuthenticationError",
    "AuthorizationError",
    "RateLimitError",
    "ValidationError",
    "ResourceNotFoundError",
    "ServiceUnavailableError",
    # Dummy connectors
    "DummyConnector",
    "DummyResponse",
    "FailingConnector",
    # HTTP client
    "AsyncHTTPClient",
    "HTTPResponse",
    "map_error",
]
