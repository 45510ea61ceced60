"""Tests for the connector layer.

Tests cover:
- Auth strategies and request policy
- HTTP error mapping
- AsyncHTTPClient against an httpx MockTransport
- AttioConnector endpoints, request bodies and envelope unwrapping
- DummyConnector call logging and canned errors
"""

import asyncio
import json

import httpx
import pytest

from attiomcp import tools
from attiomcp.config import config
from attiomcp.connectors import (
    ApiKeyAuth,
    AsyncHTTPClient,
    AttioConnector,
    AuthenticationError,
    AuthorizationError,
    BaseConnector,
    ConnectionError,
    ConnectorError,
    DummyConnector,
    DummyResponse,
    FailingConnector,
    NoAuth,
    RateLimitError,
    ResourceNotFoundError,
    ServiceUnavailableError,
    TimeoutError,
    ValidationError,
    map_error,
)

BASE_URL = "https://api.attio.test/v2"


def _client(handler):
    return AsyncHTTPClient(
        auth=ApiKeyAuth(api_key="sk_test"),
        base_url=BASE_URL,
        connector_name="attio",
        transport=httpx.MockTransport(handler),
    )


def _connector(handler):
    return AttioConnector(api_key="sk_test", client=_client(handler))


# =============================================================================
# Auth
# =============================================================================


class TestAuth:
    """Tests for auth strategies."""

    def test_api_key_bearer_header(self):
        auth = ApiKeyAuth(api_key="sk_test")
        assert auth.is_configured()
        assert auth.get_headers() == {"Authorization": "Bearer sk_test"}

    def test_api_key_missing(self):
        auth = ApiKeyAuth()
        assert not auth.is_configured()
        assert auth.get_headers() == {}

    def test_no_auth(self):
        assert NoAuth().get_headers() == {}


# =============================================================================
# Error mapping
# =============================================================================


class TestMapError:
    """Tests for map_error()."""

    @pytest.mark.parametrize(
        "status, error_type",
        [
            (401, AuthenticationError),
            (403, AuthorizationError),
            (404, ResourceNotFoundError),
            (400, ValidationError),
            (422, ValidationError),
            (429, RateLimitError),
            (500, ServiceUnavailableError),
            (503, ServiceUnavailableError),
        ],
    )
    def test_status_mapping(self, status, error_type):
        assert isinstance(map_error(status, b"", {}), error_type)

    def test_unmapped_status(self):
        error = map_error(409, b"conflict", {})
        assert type(error) is ConnectorError
        assert "409" in str(error)

    def test_attio_message_is_used(self):
        body = json.dumps({"status_code": 404, "message": "Record not found"}).encode()
        error = map_error(404, body, {}, "attio")
        assert "Record not found" in str(error)
        assert error.connector_name == "attio"

    def test_retry_after(self):
        error = map_error(429, b"", {"retry-after": "12"})
        assert error.retry_after == 12.0

    def test_invalid_retry_after(self):
        error = map_error(429, b"", {"retry-after": "soon"})
        assert error.retry_after is None


# =============================================================================
# HTTP client
# =============================================================================


class TestAsyncHTTPClient:
    """Tests for AsyncHTTPClient with a mock transport."""

    def test_headers_and_url(self):
        seen = {}

        def handler(request):
            seen["url"] = str(request.url)
            seen["auth"] = request.headers.get("Authorization")
            seen["accept"] = request.headers.get("Accept")
            return httpx.Response(200, json={"ok": True})

        response = asyncio.run(_client(handler).get("/lists"))
        assert response.ok
        assert response.json() == {"ok": True}
        assert seen["url"] == f"{BASE_URL}/lists"
        assert seen["auth"] == "Bearer sk_test"
        assert seen["accept"] == "application/json"

    def test_none_params_dropped(self):
        seen = {}

        def handler(request):
            seen["params"] = dict(request.url.params)
            return httpx.Response(200, json={})

        asyncio.run(_client(handler).get("/notes", params={"limit": 5, "parent_object": None}))
        assert seen["params"] == {"limit": "5"}

    def test_error_status_raises(self):
        def handler(request):
            return httpx.Response(401, json={"message": "Invalid API key"})

        with pytest.raises(AuthenticationError, match="Invalid API key"):
            asyncio.run(_client(handler).get("/lists"))

    def test_error_status_without_raise(self):
        def handler(request):
            return httpx.Response(404, json={})

        response = asyncio.run(_client(handler).get("/lists", raise_for_status=False))
        assert response.status_code == 404
        assert not response.ok

    def test_timeout(self):
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        with pytest.raises(TimeoutError):
            asyncio.run(_client(handler).get("/lists"))

    def test_connect_error(self):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        with pytest.raises(ConnectionError):
            asyncio.run(_client(handler).get("/lists"))


# =============================================================================
# Attio connector
# =============================================================================


class TestAttioConnector:
    """Tests for AttioConnector endpoints."""

    def test_missing_api_key(self, monkeypatch):
        monkeypatch.setattr(config, "api_key", None)
        with pytest.raises(AuthenticationError, match="ATTIO_API_KEY"):
            AttioConnector()

    def test_search_records_body(self):
        seen = {}

        def handler(request):
            seen["method"] = request.method
            seen["path"] = request.url.path
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={"data": [{"id": {"record_id": "rec_1"}}]})

        records = asyncio.run(_connector(handler).search_records("acme", "companies", 5))

        assert records == [{"id": {"record_id": "rec_1"}}]
        assert seen["method"] == "POST"
        assert seen["path"] == "/v2/objects/records/search"
        assert seen["body"] == {
            "query": "acme",
            "objects": ["companies"],
            "request_as": {"type": "workspace"},
            "limit": 5,
        }

    def test_query_records_filter(self):
        seen = {}

        def handler(request):
            seen["path"] = request.url.path
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={"data": []})

        asyncio.run(
            _connector(handler).query_records("deals", 2, filter={"record_id": {"$in": ["a", "b"]}})
        )
        assert seen["path"] == "/v2/objects/deals/records/query"
        assert seen["body"] == {"limit": 2, "filter": {"record_id": {"$in": ["a", "b"]}}}

    def test_get_record_unwraps_data(self):
        def handler(request):
            assert request.url.path == "/v2/objects/people/records/rec_1"
            return httpx.Response(200, json={"data": {"id": {"record_id": "rec_1"}}})

        record = asyncio.run(_connector(handler).get_record("people", "rec_1"))
        assert record == {"id": {"record_id": "rec_1"}}

    def test_list_endpoints(self):
        paths = []

        def handler(request):
            paths.append(request.url.path)
            return httpx.Response(200, json={"data": [{"id": "x"}]})

        connector = _connector(handler)

        async def run_all():
            await connector.list_lists()
            await connector.query_entries("lst_1")
            await connector.list_record_entries("deals", "rec_1")
            await connector.list_tasks(limit=10)
            await connector.list_workspace_members()

        asyncio.run(run_all())
        assert paths == [
            "/v2/lists",
            "/v2/lists/lst_1/entries/query",
            "/v2/objects/deals/records/rec_1/entries",
            "/v2/tasks",
            "/v2/workspace_members",
        ]

    def test_activity_params(self):
        seen = []

        def handler(request):
            seen.append((request.url.path, dict(request.url.params)))
            return httpx.Response(200, json={"data": []})

        connector = _connector(handler)

        async def run_all():
            await connector.list_notes("people", "rec_1", limit=10)
            await connector.list_meetings("people", "rec_1", limit=10)
            await connector.list_threads("people", "rec_1", limit=10)

        asyncio.run(run_all())
        assert seen == [
            ("/v2/notes", {"parent_object": "people", "parent_record_id": "rec_1", "limit": "10"}),
            ("/v2/meetings", {"linked_object": "people", "linked_record_id": "rec_1", "limit": "10"}),
            ("/v2/threads", {"object": "people", "record_id": "rec_1", "limit": "10"}),
        ]

    def test_non_json_body_is_connector_error(self):
        def handler(request):
            return httpx.Response(200, content=b"<html>gateway</html>")

        with pytest.raises(ConnectorError, match="Invalid JSON response from /notes"):
            asyncio.run(_connector(handler).list_notes("people", "rec_1"))

    def test_non_json_enrichment_degrades_in_tool(self):
        """A gateway page on one activity source leaves the others intact."""

        def handler(request):
            if request.url.path.endswith("/notes"):
                return httpx.Response(200, content=b"<html>gateway</html>")
            if request.url.path.endswith("/threads"):
                return httpx.Response(
                    200,
                    json={"data": [{"id": {"thread_id": "th1"}, "created_at": "2026-02-04"}]},
                )
            return httpx.Response(200, json={"data": []})

        result = asyncio.run(tools.get_recent_activity(_connector(handler), "people", "rec_1"))
        assert [e["id"] for e in result["events"]] == ["th1"]

    def test_non_list_data_becomes_empty(self):
        def handler(request):
            return httpx.Response(200, json={"data": {"unexpected": True}})

        assert asyncio.run(_connector(handler).list_lists()) == []

    def test_health_check(self):
        def ok(request):
            return httpx.Response(200, json={"data": []})

        def denied(request):
            return httpx.Response(403, json={"message": "Missing scope"})

        assert asyncio.run(_connector(ok).health_check()) is True
        assert asyncio.run(_connector(denied).health_check()) is False


# =============================================================================
# Base connector
# =============================================================================


class TestBaseConnector:
    """Tests for the BaseConnector contract."""

    def test_declares_read_operations(self):
        assert BaseConnector.__abstractmethods__ == {
            "health_check",
            "search_records",
            "query_records",
            "get_record",
            "list_record_entries",
            "list_lists",
            "query_entries",
            "list_tasks",
            "list_notes",
            "list_meetings",
            "list_threads",
            "list_workspace_members",
        }

    def test_partial_connector_cannot_be_built(self):
        class HealthOnly(BaseConnector):
            async def health_check(self) -> bool:
                return True

        with pytest.raises(TypeError):
            HealthOnly()

    def test_implementations_are_complete(self):
        assert not AttioConnector.__abstractmethods__
        assert not DummyConnector.__abstractmethods__
        assert isinstance(FailingConnector(), BaseConnector)


# =============================================================================
# Dummy connectors
# =============================================================================


class TestDummyConnector:
    """Tests for DummyConnector and FailingConnector."""

    def test_canned_data_and_call_log(self):
        connector = DummyConnector(responses={"list_tasks": [{"id": "t1"}]})
        tasks = asyncio.run(connector.list_tasks(limit=3))

        assert tasks == [{"id": "t1"}]
        assert connector.was_called("list_tasks")
        assert connector.calls("list_tasks") == [{"limit": 3}]

    def test_defaults(self, dummy_connector):
        assert asyncio.run(dummy_connector.list_lists()) == []
        assert asyncio.run(dummy_connector.get_record("people", "rec_1")) == {}

    def test_canned_error(self):
        connector = DummyConnector()
        connector.set_response(
            "list_notes", DummyResponse(error=RateLimitError("slow down", "dummy"))
        )
        with pytest.raises(RateLimitError):
            asyncio.run(connector.list_notes("people", "rec_1"))

    def test_returns_copies(self):
        connector = DummyConnector(responses={"list_lists": [{"name": "Sales"}]})
        first = asyncio.run(connector.list_lists())
        first[0]["name"] = "changed"
        assert asyncio.run(connector.list_lists()) == [{"name": "Sales"}]

    def test_failing_connector(self):
        connector = FailingConnector()
        with pytest.raises(ConnectorError, match="Simulated failure"):
            asyncio.run(connector.list_tasks())
        assert connector.was_called("list_tasks")
        assert asyncio.run(connector.health_check()) is False
