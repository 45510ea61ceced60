"""Identifier normalization for Attio entities.

Attio returns ids either as plain strings or as compound objects, e.g.:
- Records: {"workspace_id": ..., "object_id": ..., "record_id": ...}
- Tasks: {"workspace_id": ..., "task_id": ...}
- Notes, meetings, threads, lists and list entries follow the same pattern

Each entity type gets one normalizer returning a plain string (or None),
applied once when raw data is ingested.
"""

from typing import Any, List, Optional


def _unwrap(raw_id: Any, key: str) -> Optional[str]:
    """Unwrap a compound id object to its inner identifier.

    Args:
        raw_id: Plain id, compound id dict, or None
        key: Inner field name (e.g., "record_id")

    Returns:
        Identifier as a string, or None if no usable id is present
    """
    if isinstance(raw_id, dict):
        raw_id = raw_id.get(key)
    if raw_id is None or isinstance(raw_id, (dict, list, bool)):
        return None
    value = str(raw_id)
    return value or None


def record_id(raw_id: Any) -> Optional[str]:
    """Normalize a record id."""
    return _unwrap(raw_id, "record_id")


def task_id(raw_id: Any) -> Optional[str]:
    """Normalize a task id."""
    return _unwrap(raw_id, "task_id")


def note_id(raw_id: Any) -> Optional[str]:
    """Normalize a note id."""
    return _unwrap(raw_id, "note_id")


def meeting_id(raw_id: Any) -> Optional[str]:
    """Normalize a meeting id."""
    return _unwrap(raw_id, "meeting_id")


def thread_id(raw_id: Any) -> Optional[str]:
    """Normalize an email thread id."""
    return _unwrap(raw_id, "thread_id")


def list_id(raw_id: Any) -> Optional[str]:
    """Normalize a list (pipeline) id."""
    return _unwrap(raw_id, "list_id")


def entry_id(raw_id: Any) -> Optional[str]:
    """Normalize a list entry id."""
    return _unwrap(raw_id, "entry_id")


def actor_id(reference: Any) -> Optional[str]:
    """Normalize an actor reference (task assignee, member).

    Accepts {"referenced_actor_id": ...}, {"id": ...}, a compound
    {"workspace_member_id": ...} or a bare id string.
    """
    if isinstance(reference, dict):
        for key in ("referenced_actor_id", "id"):
            found = _unwrap(reference.get(key), "workspace_member_id")
            if found:
                return found
        return _unwrap(reference.get("workspace_member_id"), "workspace_member_id")
    return _unwrap(reference, "workspace_member_id")


def linked_record_id(reference: Any) -> Optional[str]:
    """Normalize a linked-record reference ({record_id} or {target_record_id})."""
    if isinstance(reference, dict):
        return record_id(reference.get("record_id")) or record_id(
            reference.get("target_record_id")
        )
    return record_id(reference)


def unwrap_list(payload: Any) -> List[Any]:
    """Return the list inside a `{"data": [...]}` envelope.

    A bare list is returned as-is; anything else yields an empty list.
    """
    if isinstance(payload, dict):
        payload = payload.get("data")
    if isinstance(payload, list):
        return payload
    return []
