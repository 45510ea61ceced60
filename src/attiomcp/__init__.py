"""Attio MCP: CRM records, pipelines, tasks and activity for AI agents."""

__version__ = "0.1.0"
