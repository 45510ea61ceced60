"""Dummy connectors for testing.

These connectors expose the same async operations as AttioConnector
without making any network calls. Used for:
- Unit tests of the MCP tools
- Development without an Attio workspace

DummyConnector returns canned data per operation, or raises a configured
error for that operation, and records every call for assertions.
"""

import copy
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from .base import BaseConnector, ConnectorError


@dataclass
class DummyResponse:
    """Canned response for DummyConnector."""

    data: Any = None
    error: Optional[ConnectorError] = None


class DummyConnector(BaseConnector):
    """Dummy connector for testing.

    Operations without a canned response return an empty list
    (or an empty dict for `get_record`).
    """

    _name = "dummy"

    def __init__(self, responses: Optional[Dict[str, Any]] = None, healthy: bool = True):
        """Initialize dummy connector.

        Args:
            responses: Operation name -> data or DummyResponse
            healthy: Whether health_check() returns True
        """
        super().__init__()
        self._healthy = healthy
        self._responses: Dict[str, DummyResponse] = {}
        self._call_log: List[Dict[str, Any]] = []
        for operation, response in (responses or {}).items():
            self.set_response(operation, response)

    def set_response(self, operation: str, response: Any) -> None:
        """Set canned response (data or DummyResponse) for an operation."""
        if not isinstance(response, DummyResponse):
            response = DummyResponse(data=response)
        self._responses[operation] = response

    def get_call_log(self) -> List[Dict[str, Any]]:
        """Get log of all method calls."""
        return self._call_log.copy()

    def was_called(self, operation: str) -> bool:
        """Check if an operation was called."""
        return any(call["operation"] == operation for call in self._call_log)

    def calls(self, operation: str) -> List[Dict[str, Any]]:
        """Arguments of every call to an operation."""
        return [call["args"] for call in self._call_log if call["operation"] == operation]

    def _respond(self, operation: str, default: Any = None, **args: Any) -> Any:
        self._call_log.append({"operation": operation, "args": args})
        response = self._responses.get(operation)
        if response is None:
            return [] if default is None else default
        if response.error is not None:
            raise response.error
        return copy.deepcopy(response.data)

    async def health_check(self) -> bool:
        """Return configured health status."""
        self._call_log.append({"operation": "health_check", "args": {}})
        return self._healthy

    async def search_records(self, query: str, object_type: str, limit: int) -> List[Any]:
        return self._respond("search_records", query=query, object_type=object_type, limit=limit)

    async def query_records(self, object_type: str, limit: int, filter: Optional[Dict[str, Any]] = None) -> List[Any]:
        return self._respond("query_records", object_type=object_type, limit=limit, filter=filter)

    async def get_record(self, object_type: str, record_id: str) -> Any:
        return self._respond("get_record", default={}, object_type=object_type, record_id=record_id)

    async def list_record_entries(self, object_type: str, record_id: str) -> List[Any]:
        return self._respond("list_record_entries", object_type=object_type, record_id=record_id)

    async def list_lists(self) -> List[Any]:
        return self._respond("list_lists")

    async def query_entries(self, list_id: str, limit: Optional[int] = None) -> List[Any]:
        return self._respond("query_entries", list_id=list_id, limit=limit)

    async def list_tasks(self, limit: Optional[int] = None) -> List[Any]:
        return self._respond("list_tasks", limit=limit)

    async def list_notes(self, parent_object=None, parent_record_id=None, limit=None) -> List[Any]:
        return self._respond(
            "list_notes", parent_object=parent_object, parent_record_id=parent_record_id, limit=limit
        )

    async def list_meetings(self, linked_object=None, linked_record_id=None, limit=None) -> List[Any]:
        return self._respond(
            "list_meetings", linked_object=linked_object, linked_record_id=linked_record_id, limit=limit
        )

    async def list_threads(self, object_type=None, record_id=None, limit=None) -> List[Any]:
        return self._respond("list_threads", object_type=object_type, record_id=record_id, limit=limit)

    async def list_workspace_members(self) -> List[Any]:
        return self._respond("list_workspace_members")


class FailingConnector(DummyConnector):
    """Connector where every operation raises the same error."""

    _name = "failing"

    def __init__(self, error: Optional[ConnectorError] = None):
        super().__init__(healthy=False)
        self.error = error or ConnectorError("Simulated failure", connector_name=self._name)

    def _respond(self, operation: str, default: Any = None, **args: Any) -> Any:
        self._call_log.append({"operation": operation, "args": args})
        raise self.error
