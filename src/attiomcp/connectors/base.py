"""Core connector abstractions.

Defines the foundation for the Attio connector:
- AuthStrategy: Authentication method abstraction
- RequestPolicy: Timeouts and default headers
- ConnectorError hierarchy: Typed exceptions
- BaseConnector: Abstract base for connectors

Requests are single-attempt; failures surface as typed ConnectorErrors.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

# =============================================================================
# Authentication Strategies
# =============================================================================


class AuthType(str, Enum):
    """Type of authentication strategy."""

    NONE = "none"
    API_KEY = "api_key"


@dataclass
class AuthStrategy:
    """Base authentication strategy (data holder)."""

    auth_type: AuthType = AuthType.NONE

    def is_configured(self) -> bool:
        """Check if authentication is properly configured."""
        return True

    def get_headers(self) -> Dict[str, str]:
        """Get authentication headers for requests."""
        return {}


@dataclass
class NoAuth(AuthStrategy):
    """No authentication required."""

    auth_type: AuthType = field(default=AuthType.NONE, init=False)


@dataclass
class ApiKeyAuth(AuthStrategy):
    """API key authentication.

    The key is opaque: sent as `Authorization: Bearer <key>` by default.
    """

    auth_type: AuthType = field(default=AuthType.API_KEY, init=False)
    api_key: str = ""
    header_name: str = "Authorization"
    header_prefix: str = "Bearer"

    def is_configured(self) -> bool:
        """Check if API key is set."""
        return bool(self.api_key)

    def get_headers(self) -> Dict[str, str]:
        """Get authorization header."""
        if not self.api_key:
            return {}
        if self.header_prefix:
            return {self.header_name: f"{self.header_prefix} {self.api_key}"}
        return {self.header_name: self.api_key}


# =============================================================================
# Request Policy
# =============================================================================


@dataclass
class RequestPolicy:
    """Policy for HTTP requests: timeouts and headers."""

    # Timeouts
    connect_timeout: float = 10.0  # seconds
    read_timeout: float = 30.0  # seconds
    total_timeout: float = 60.0  # seconds

    # Headers
    user_agent: str = "attio-mcp/0.1"
    default_headers: Dict[str, str] = field(
        default_factory=lambda: {"Accept": "application/json"}
    )


DEFAULT_POLICY = RequestPolicy()


# =============================================================================
# Connector Error Hierarchy
# =============================================================================


class ConnectorError(Exception):
    """Base exception for connector errors."""

    def __init__(self, message: str, connector_name: str = "", details: Optional[Dict[str, Any]] = None):
        self.connector_name = connector_name
        self.details = details or {}
        super().__init__(message)


class ConnectionError(ConnectorError):
    """Failed to connect to the service."""

    pass


class TimeoutError(ConnectorError):
    """Request timed out."""

    def __init__(
        self,
        message: str = "Request timed out",
        connector_name: str = "",
        timeout_seconds: Optional[float] = None,
    ):
        super().__init__(message, connector_name, {"timeout_seconds": timeout_seconds})
        self.timeout_seconds = timeout_seconds


class AuthenticationError(ConnectorError):
    """Authentication failed (missing or invalid API key)."""

    pass


class AuthorizationError(ConnectorError):
    """Authorized but not permitted (insufficient scopes)."""

    pass


class RateLimitError(ConnectorError):
    """Rate limit exceeded."""

    def __init__(
        self,
        message: str = "Rate limit exceeded",
        connector_name: str = "",
        retry_after: Optional[float] = None,
    ):
        super().__init__(message, connector_name, {"retry_after": retry_after})
        self.retry_after = retry_after


class ValidationError(ConnectorError):
    """Request validation failed (bad filter, unknown attribute, etc.)."""

    pass


class ResourceNotFoundError(ConnectorError):
    """Requested resource not found."""

    pass


class ServiceUnavailableError(ConnectorError):
    """Service is temporarily unavailable."""

    pass


# =============================================================================
# Base Connector
# =============================================================================


class BaseConnector(ABC):
    """Abstract base class for connectors."""

    _name: str = "base"

    def __init__(
        self,
        auth: Optional[AuthStrategy] = None,
        policy: Optional[RequestPolicy] = None,
    ):
        """Initialize the connector.

        Args:
            auth: Authentication strategy
            policy: Request policy (timeouts, headers)
        """
        self.auth = auth or NoAuth()
        self.policy = policy or DEFAULT_POLICY

    @property
    def name(self) -> str:
        """Connector name."""
        return self._name

    @abstractmethod
    async def health_check(self) -> bool:
        """Check if the connector is healthy."""
        pass

    # -- Records -------------------------------------------------------------

    @abstractmethod
    async def search_records(self, query: str, object_type: str, limit: int) -> List[Any]:
        """Full-text search across records of one object type."""

    @abstractmethod
    async def query_records(
        self,
        object_type: str,
        limit: int,
        filter: Optional[Dict[str, Any]] = None,
    ) -> List[Any]:
        """List records of an object type, optionally filtered."""

    @abstractmethod
    async def get_record(self, object_type: str, record_id: str) -> Any:
        """Get a single record."""

    @abstractmethod
    async def list_record_entries(self, object_type: str, record_id: str) -> List[Any]:
        """List entries (pipeline memberships) for a record."""

    # -- Lists ---------------------------------------------------------------

    @abstractmethod
    async def list_lists(self) -> List[Any]:
        """List all lists (pipelines)."""

    @abstractmethod
    async def query_entries(self, list_id: str, limit: Optional[int] = None) -> List[Any]:
        """List entries of a list."""

    # -- Activity ------------------------------------------------------------

    @abstractmethod
    async def list_tasks(self, limit: Optional[int] = None) -> List[Any]:
        """List tasks."""

    @abstractmethod
    async def list_notes(
        self,
        parent_object: Optional[str] = None,
        parent_record_id: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> List[Any]:
        """List notes, optionally scoped to one record."""

    @abstractmethod
    async def list_meetings(
        self,
        linked_object: Optional[str] = None,
        linked_record_id: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> List[Any]:
        """List meetings, optionally scoped to one linked record."""

    @abstractmethod
    async def list_threads(
        self,
        object_type: Optional[str] = None,
        record_id: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> List[Any]:
        """List email threads, optionally scoped to one record."""

    @abstractmethod
    async def list_workspace_members(self) -> List[Any]:
        """List workspace members."""
