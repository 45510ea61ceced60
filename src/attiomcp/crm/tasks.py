"""Task enrichment: resolve assignees and linked records, order by deadline."""

from typing import Any, List, Mapping, Optional

from attiomcp.crm import ids
from attiomcp.crm.models import EnrichedTask, TaskBuckets
from attiomcp.crm.names import UNKNOWN
from attiomcp.crm.values import as_text, compose_name, first_text


def _as_list(value: Any) -> List[Any]:
    return value if isinstance(value, list) else []


def _assignee_name(reference: Any, member_names: Mapping[str, str]) -> str:
    member = ids.actor_id(reference)
    if member is None:
        return UNKNOWN
    return member_names.get(member) or f"User {member}"


def _linked_record_name(reference: Any, record_names: Mapping[str, str]) -> str:
    rid = ids.linked_record_id(reference)
    if rid is None:
        return UNKNOWN
    return record_names.get(rid) or f"Record {rid}"


def enrich_task(
    task: dict,
    member_names: Mapping[str, str],
    record_names: Mapping[str, str],
) -> EnrichedTask:
    """Resolve one raw task's references to display names."""
    return EnrichedTask(
        id=ids.task_id(task.get("id")),
        content=first_text(task, "content_plaintext", "content", "title"),
        is_completed=bool(task.get("is_completed")),
        deadline=first_text(task, "deadline", "due_date"),
        assignees=[_assignee_name(a, member_names) for a in _as_list(task.get("assignees"))],
        linked_records=[
            _linked_record_name(r, record_names) for r in _as_list(task.get("linked_records"))
        ],
    )


def sort_by_deadline(tasks: List[EnrichedTask]) -> List[EnrichedTask]:
    """Tasks with a deadline first (ascending), then the rest in input order.

    Deadlines are ISO-8601 strings, so lexical order is chronological.
    """
    dated = sorted((t for t in tasks if t.deadline), key=lambda t: t.deadline)
    undated = [t for t in tasks if not t.deadline]
    return dated + undated


def enrich_tasks(
    tasks: Any,
    member_names: Optional[Mapping[str, str]] = None,
    record_names: Optional[Mapping[str, str]] = None,
) -> TaskBuckets:
    """Enrich raw tasks and split them into open and completed.

    The full set is sorted once by deadline and then partitioned, so each
    bucket keeps the deadline order.

    Args:
        tasks: Raw tasks (bare list or `{"data": [...]}` envelope)
        member_names: Workspace member id -> display name
        record_names: Record id -> display name

    Returns:
        TaskBuckets with `open` and `completed` lists
    """
    member_names = member_names or {}
    record_names = record_names or {}

    enriched = [
        enrich_task(task, member_names, record_names)
        for task in ids.unwrap_list(tasks)
        if isinstance(task, dict)
    ]
    ordered = sort_by_deadline(enriched)

    return TaskBuckets(
        open=[t for t in ordered if not t.is_completed],
        completed=[t for t in ordered if t.is_completed],
    )


def member_name_map(members: Any) -> dict:
    """Build a member id -> display name lookup from workspace members."""
    names = {}
    for member in ids.unwrap_list(members):
        if not isinstance(member, dict):
            continue
        member_id = ids.actor_id(member.get("id"))
        if member_id is None:
            continue
        names[member_id] = (
            compose_name(member.get("first_name"), member.get("last_name"))
            or as_text(member.get("email_address"))
            or member_id
        )
    return names


def linked_record_refs(tasks: Any) -> List[dict]:
    """Unique (object, record id) pairs referenced by tasks, in first-seen order."""
    seen = set()
    refs = []
    for task in ids.unwrap_list(tasks):
        if not isinstance(task, dict):
            continue
        for reference in _as_list(task.get("linked_records")):
            rid = ids.linked_record_id(reference)
            if rid is None or rid in seen:
                continue
            seen.add(rid)
            obj = reference.get("target_object") if isinstance(reference, dict) else None
            refs.append({"object": as_text(obj), "record_id": rid})
    return refs
