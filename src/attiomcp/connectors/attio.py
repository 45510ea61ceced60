"""Attio REST API connector.

Thin async wrapper over the Attio v2 endpoints used by the MCP tools.
Every operation returns the payload inside Attio's `{"data": ...}`
envelope; shaping is left to `attiomcp.crm`.
"""

import logging
from typing import Any, Dict, List, Optional

from attiomcp.config import config
from attiomcp.crm.ids import unwrap_list

from .base import (
    ApiKeyAuth,
    AuthenticationError,
    BaseConnector,
    ConnectorError,
    RequestPolicy,
)
from .http_client import AsyncHTTPClient, HTTPResponse

logger = logging.getLogger(__name__)


def _data(payload: Any) -> Any:
    if isinstance(payload, dict) and "data" in payload:
        return payload["data"]
    return payload


class AttioConnector(BaseConnector):
    """Connector for the Attio v2 REST API."""

    _name = "attio"

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        policy: Optional[RequestPolicy] = None,
        client: Optional[AsyncHTTPClient] = None,
    ):
        """Initialize the Attio connector.

        Args:
            api_key: Attio API key (defaults to ATTIO_API_KEY)
            base_url: API base URL (defaults to ATTIO_BASE_URL)
            policy: Request policy (defaults to configured timeout)
            client: Preconfigured HTTP client (tests inject a mock transport)

        Raises:
            AuthenticationError: If no API key is configured
        """
        auth = ApiKeyAuth(api_key=api_key or config.api_key or "")
        if not auth.is_configured():
            raise AuthenticationError(
                "Attio API key not configured. Set the ATTIO_API_KEY environment variable.",
                connector_name=self._name,
            )
        policy = policy or RequestPolicy(read_timeout=config.timeout_s)
        super().__init__(auth, policy)

        self.client = client or AsyncHTTPClient(
            auth=auth,
            policy=policy,
            base_url=base_url or config.base_url,
            connector_name=self._name,
        )

    def _payload(self, response: HTTPResponse, path: str) -> Any:
        """Parse a response body; a non-JSON body is a connector failure."""
        try:
            return _data(response.json())
        except ValueError as e:
            raise ConnectorError(
                f"Invalid JSON response from {path}: {e}",
                connector_name=self._name,
            ) from e

    async def _get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        response = await self.client.get(path, params=params)
        return self._payload(response, path)

    async def _post(self, path: str, body: Dict[str, Any]) -> Any:
        response = await self.client.post(path, json=body)
        return self._payload(response, path)

    async def health_check(self) -> bool:
        """Check that the API key can list workspace lists."""
        try:
            await self.list_lists()
        except ConnectorError as e:
            logger.warning(f"Attio health check failed: {e}")
            return False
        return True

    # -- Records -------------------------------------------------------------

    async def search_records(self, query: str, object_type: str, limit: int) -> List[Any]:
        """Full-text search across records of one object type."""
        data = await self._post(
            "/objects/records/search",
            {
                "query": query,
                "objects": [object_type],
                "request_as": {"type": "workspace"},
                "limit": limit,
            },
        )
        return unwrap_list(data)

    async def query_records(
        self,
        object_type: str,
        limit: int,
        filter: Optional[Dict[str, Any]] = None,
    ) -> List[Any]:
        """List records of an object type."""
        body: Dict[str, Any] = {"limit": limit}
        if filter:
            body["filter"] = filter
        return unwrap_list(await self._post(f"/objects/{object_type}/records/query", body))

    async def get_record(self, object_type: str, record_id: str) -> Any:
        """Get a single record with all attribute values."""
        return await self._get(f"/objects/{object_type}/records/{record_id}")

    async def list_record_entries(self, object_type: str, record_id: str) -> List[Any]:
        """List entries (pipeline memberships) for a record."""
        return unwrap_list(await self._get(f"/objects/{object_type}/records/{record_id}/entries"))

    # -- Lists ---------------------------------------------------------------

    async def list_lists(self) -> List[Any]:
        """List all lists (pipelines) in the workspace."""
        return unwrap_list(await self._get("/lists"))

    async def query_entries(self, list_id: str, limit: Optional[int] = None) -> List[Any]:
        """List entries of a list."""
        body: Dict[str, Any] = {}
        if limit is not None:
            body["limit"] = limit
        return unwrap_list(await self._post(f"/lists/{list_id}/entries/query", body))

    # -- Activity ------------------------------------------------------------

    async def list_tasks(self, limit: Optional[int] = None) -> List[Any]:
        """List tasks."""
        return unwrap_list(await self._get("/tasks", params={"limit": limit}))

    async def list_notes(
        self,
        parent_object: Optional[str] = None,
        parent_record_id: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> List[Any]:
        """List notes, optionally scoped to one record."""
        params = {
            "parent_object": parent_object,
            "parent_record_id": parent_record_id,
            "limit": limit,
        }
        return unwrap_list(await self._get("/notes", params=params))

    async def list_meetings(
        self,
        linked_object: Optional[str] = None,
        linked_record_id: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> List[Any]:
        """List meetings, optionally scoped to one linked record."""
        params = {
            "linked_object": linked_object,
            "linked_record_id": linked_record_id,
            "limit": limit,
        }
        return unwrap_list(await self._get("/meetings", params=params))

    async def list_threads(
        self,
        object_type: Optional[str] = None,
        record_id: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> List[Any]:
        """List email threads, optionally scoped to one record."""
        params = {"object": object_type, "record_id": record_id, "limit": limit}
        return unwrap_list(await self._get("/threads", params=params))

    async def list_workspace_members(self) -> List[Any]:
        """List workspace members (task assignees)."""
        return unwrap_list(await self._get("/workspace_members"))
