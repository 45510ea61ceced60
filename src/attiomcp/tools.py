"""MCP tool implementations.

Each tool fetches raw Attio data through a connector and shapes it with
`attiomcp.crm`. Tools return plain JSON-serializable dicts; the server
serializes them and turns failures into per-tool error payloads.

Required fetches propagate ConnectorError. Enrichment fetches (members,
notes, linked records, ...) go through `optional_fetch`, which turns a
failure into None so the tool still answers with what it has.
"""

import asyncio
import logging
from typing import Any, Awaitable, Dict, List, Optional

from attiomcp.config import config
from attiomcp.connectors.base import BaseConnector, ConnectorError
from attiomcp.crm import ids
from attiomcp.crm.names import record_name_map
from attiomcp.crm.pipeline import (
    compute_pipeline_summary,
    find_list,
    flatten_entries,
    list_parent_object,
    summarize_lists,
)
from attiomcp.crm.search import shape_record, shape_search_results
from attiomcp.crm.tasks import enrich_tasks, linked_record_refs, member_name_map
from attiomcp.crm.timeline import build_activity_timeline

logger = logging.getLogger(__name__)


async def optional_fetch(label: str, awaitable: Awaitable[Any]) -> Optional[Any]:
    """Await an enrichment fetch; a connector failure yields None."""
    try:
        return await awaitable
    except ConnectorError as e:
        logger.warning(f"Optional fetch '{label}' failed: {e}")
        return None


def _limit(limit: Optional[int]) -> int:
    if limit is None or limit <= 0:
        return config.default_limit
    return limit


def _tag_object(records: Any, object_type: str) -> List[Any]:
    """Attach the object slug to records that don't carry one."""
    tagged = []
    for record in ids.unwrap_list(records):
        if isinstance(record, dict) and not record.get("object"):
            record = {**record, "object": record.get("object_slug") or object_type}
        tagged.append(record)
    return tagged


async def search_records(
    connector: BaseConnector,
    object_type: str,
    query: Optional[str] = None,
    limit: Optional[int] = None,
) -> Dict[str, Any]:
    """Search or list records of one object type."""
    limit = _limit(limit)
    if query:
        raw = await connector.search_records(query, object_type, limit)
    else:
        raw = await connector.query_records(object_type, limit)

    records = shape_search_results(_tag_object(raw, object_type), object_type)[:limit]
    return {
        "object_type": object_type,
        "query": query,
        "count": len(records),
        "records": [r.model_dump(mode="json") for r in records],
    }


async def _pipeline_record_names(
    connector: BaseConnector, matched: dict, entries: List[Any]
) -> Dict[str, str]:
    parent = list_parent_object(matched)
    record_ids: List[str] = []
    for entry in entries:
        if not isinstance(entry, dict):
            continue
        rid = ids.record_id(entry.get("record_id") or entry.get("parent_record_id"))
        if rid and rid not in record_ids:
            record_ids.append(rid)
    if not parent or not record_ids:
        return {}
    records = await optional_fetch(
        "pipeline records",
        connector.query_records(
            parent, limit=len(record_ids), filter={"record_id": {"$in": record_ids}}
        ),
    )
    return record_name_map(records or [])


async def get_pipeline(connector: BaseConnector, list_name: Optional[str] = None) -> Dict[str, Any]:
    """Summarize one pipeline, or list the available pipelines."""
    lists = await connector.list_lists()
    catalog = [item.model_dump(mode="json") for item in summarize_lists(lists)]

    if not list_name:
        return {
            "message": "Available lists/pipelines. Provide a list_name to see entries.",
            "lists": catalog,
        }

    matched = find_list(lists, list_name)
    if matched is None:
        available = ", ".join(item["name"] for item in catalog if item["name"])
        return {
            "message": f'No list found matching "{list_name}". Available: {available}',
            "lists": catalog,
        }

    list_id = ids.list_id(matched.get("id")) or list_name
    entries = ids.unwrap_list(await connector.query_entries(list_id))
    record_names = await _pipeline_record_names(connector, matched, entries)

    summary = compute_pipeline_summary(list_id, matched.get("name") or list_id, entries, record_names)
    return summary.model_dump(mode="json")


async def get_record_details(
    connector: BaseConnector, object_type: str, record_id: str
) -> Dict[str, Any]:
    """Full record with flattened values, recent notes and list entries."""
    record = await connector.get_record(object_type, record_id)
    notes, entries = await asyncio.gather(
        optional_fetch(
            "notes",
            connector.list_notes(object_type, record_id, limit=config.activity_limit),
        ),
        optional_fetch("entries", connector.list_record_entries(object_type, record_id)),
    )

    record = record if isinstance(record, dict) else {}
    shaped = shape_record({**record, "object": record.get("object") or object_type}, object_type)
    return {
        "record": shaped.model_dump(mode="json"),
        "notes": [
            event.model_dump(mode="json")
            for event in build_activity_timeline(notes or [], [], [])[: config.activity_limit]
        ],
        "entries": flatten_entries(entries or []),
    }


async def _linked_record_names(connector: BaseConnector, tasks: List[Any]) -> Dict[str, str]:
    refs = [ref for ref in linked_record_refs(tasks) if ref["object"]][: config.default_limit]
    if not refs:
        return {}
    records = await asyncio.gather(
        *(
            optional_fetch("linked record", connector.get_record(ref["object"], ref["record_id"]))
            for ref in refs
        )
    )
    return record_name_map([r for r in records if r])


async def list_tasks(connector: BaseConnector, limit: Optional[int] = None) -> Dict[str, Any]:
    """Tasks with resolved assignees and linked records, open and completed."""
    limit = _limit(limit)
    tasks, members = await asyncio.gather(
        connector.list_tasks(limit=limit),
        optional_fetch("workspace members", connector.list_workspace_members()),
    )
    tasks = ids.unwrap_list(tasks)[:limit]
    record_names = await _linked_record_names(connector, tasks)

    buckets = enrich_tasks(tasks, member_name_map(members or []), record_names)
    return {
        "open_count": len(buckets.open),
        "completed_count": len(buckets.completed),
        **buckets.model_dump(mode="json"),
    }


async def get_recent_activity(
    connector: BaseConnector, object_type: str, record_id: str
) -> Dict[str, Any]:
    """Notes, meetings and email threads for a record, most recent first."""
    limit = config.activity_limit
    notes, meetings, threads = await asyncio.gather(
        optional_fetch("notes", connector.list_notes(object_type, record_id, limit=limit)),
        optional_fetch("meetings", connector.list_meetings(object_type, record_id, limit=limit)),
        optional_fetch("threads", connector.list_threads(object_type, record_id, limit=limit)),
    )

    timeline = build_activity_timeline(notes or [], meetings or [], threads or [])
    return {
        "object_type": object_type,
        "record_id": record_id,
        "count": len(timeline),
        "events": [event.model_dump(mode="json") for event in timeline],
    }
