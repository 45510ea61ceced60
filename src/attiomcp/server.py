"""MCP server exposing the Attio tools.

Registers five read-only tools on a FastMCP server. Each tool returns its
payload as indented JSON text; any failure is reported as a ToolError
naming the tool, and never takes the server down.
"""

import json
import logging
from typing import Annotated, Any, Awaitable, Callable, Optional

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from pydantic import Field

from attiomcp import tools
from attiomcp.connectors.attio import AttioConnector
from attiomcp.connectors.base import BaseConnector

logger = logging.getLogger(__name__)

ConnectorFactory = Callable[[], BaseConnector]

INSTRUCTIONS = (
    "Read-only access to an Attio CRM workspace: search records, view "
    "pipelines, inspect a record, list tasks and review recent activity."
)


async def run_tool(name: str, call: Callable[[], Awaitable[Any]]) -> str:
    """Run a tool body and serialize its result.

    Raises:
        ToolError: "Error in <name>: <message>" for any failure
    """
    try:
        result = await call()
    except Exception as e:
        logger.error(f"Tool {name} failed: {type(e).__name__}: {e}")
        raise ToolError(f"Error in {name}: {e}") from e
    return json.dumps(result, indent=2, default=str)


def create_server(connector_factory: Optional[ConnectorFactory] = None) -> FastMCP:
    """Create the MCP server with all Attio tools registered.

    Args:
        connector_factory: Builds the connector used by each tool call
            (defaults to AttioConnector configured from the environment)
    """
    make_connector = connector_factory or AttioConnector
    mcp = FastMCP(name="attio-mcp", instructions=INSTRUCTIONS)

    @mcp.tool()
    async def search_records(
        object_type: Annotated[str, Field(description="Object type to search (e.g. 'people', 'companies', 'deals')")],
        query: Annotated[Optional[str], Field(description="Search query text")] = None,
        limit: Annotated[Optional[int], Field(description="Max results to return (default: 25)")] = None,
    ) -> str:
        """Search for people, companies, deals, or other CRM records.

        Without a query, lists records of the object type.
        """
        return await run_tool(
            "search_records",
            lambda: tools.search_records(make_connector(), object_type, query, limit),
        )

    @mcp.tool()
    async def get_pipeline(
        list_name: Annotated[Optional[str], Field(description="Name or ID of a specific list/pipeline to view")] = None,
    ) -> str:
        """Get sales pipeline data: stages with counts and total value, and entries.

        Without a list name, returns the available lists (pipelines).
        """
        return await run_tool(
            "get_pipeline",
            lambda: tools.get_pipeline(make_connector(), list_name),
        )

    @mcp.tool()
    async def get_record_details(
        object_type: Annotated[str, Field(description="Object type (e.g. 'people', 'companies', 'deals')")],
        record_id: Annotated[str, Field(description="The record ID")],
    ) -> str:
        """Get full details for a CRM record including attributes, notes, and list entries."""
        return await run_tool(
            "get_record_details",
            lambda: tools.get_record_details(make_connector(), object_type, record_id),
        )

    @mcp.tool()
    async def list_tasks(
        limit: Annotated[Optional[int], Field(description="Max tasks to return (default: 25)")] = None,
    ) -> str:
        """List CRM tasks with assignees, due dates, and linked records, split into open and completed."""
        return await run_tool(
            "list_tasks",
            lambda: tools.list_tasks(make_connector(), limit),
        )

    @mcp.tool()
    async def get_recent_activity(
        object_type: Annotated[str, Field(description="Object type (e.g. 'people', 'companies')")],
        record_id: Annotated[str, Field(description="The record ID")],
    ) -> str:
        """Get recent activity for a record: notes, meetings, and email threads, most recent first."""
        return await run_tool(
            "get_recent_activity",
            lambda: tools.get_recent_activity(make_connector(), object_type, record_id),
        )

    return mcp
