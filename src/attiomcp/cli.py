"""CLI entry point for Attio MCP."""

from __future__ import annotations

import asyncio
from typing import Optional

import typer
from typer import Typer

from attiomcp import __version__
from attiomcp.config import config, setup_logging

TRANSPORTS = ("stdio", "http")

# Initialize Typer app
app = Typer(
    name="attio-mcp",
    help="MCP server exposing Attio CRM records, pipelines, tasks and activity to AI agents.",
)


@app.callback()
def init_app(
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        help="Logging level (default: ATTIO_LOG_LEVEL or INFO)",
    ),
):
    """Configure logging before any command runs.

    Logs go to stderr; stdout is reserved for the stdio transport.
    """
    setup_logging(log_level)


@app.command()
def serve(
    transport: str = typer.Option(
        config.server.transport,
        "--transport",
        "-t",
        help="Transport: stdio (local pipe) or http (network session)",
    ),
    host: str = typer.Option(config.server.host, "--host", help="Bind host for http transport"),
    port: int = typer.Option(config.server.port, "--port", "-p", help="Bind port for http transport"),
):
    """Run the MCP server.

    Examples:
        attio-mcp serve
        attio-mcp serve --transport http --port 8000
    """
    from attiomcp.server import create_server

    if transport not in TRANSPORTS:
        typer.echo(f"❌ Unknown transport: {transport} (expected one of: {', '.join(TRANSPORTS)})", err=True)
        raise typer.Exit(1)

    if not config.has_api_key():
        typer.echo("⚠️  ATTIO_API_KEY is not set; every tool call will fail.", err=True)

    mcp = create_server()
    if transport == "stdio":
        typer.echo("Attio MCP server running on stdio", err=True)
        mcp.run(transport="stdio")
    else:
        typer.echo(f"Attio MCP server running on http://{host}:{port}", err=True)
        mcp.run(transport="http", host=host, port=port)


@app.command()
def check():
    """Check connectivity to Attio with the configured API key."""
    from attiomcp.connectors import AttioConnector, ConnectorError

    try:
        connector = AttioConnector()
        lists = asyncio.run(connector.list_lists())
    except ConnectorError as e:
        typer.echo(f"❌ Attio check failed: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(f"✅ Connected to Attio ({len(lists)} lists available)")


@app.command()
def version():
    """Show the installed version."""
    typer.echo(f"attio-mcp {__version__}")


def main() -> None:
    """Console script entry point."""
    app()


if __name__ == "__main__":
    main()
