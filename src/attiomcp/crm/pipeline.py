"""Pipeline (list) summaries.

An Attio list entry carries its own `entry_values` (stage, value, ...) and a
reference to the parent record it tracks. The summary groups entries by
stage, in the order stages are first seen, with a count and a value total.
"""

import math
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional

from attiomcp.crm import ids
from attiomcp.crm.models import (
    ListSummary,
    Number,
    PipelineEntrySummary,
    PipelineStageSummary,
    PipelineSummary,
)
from attiomcp.crm.names import UNKNOWN
from attiomcp.crm.values import as_text, first_value, flatten_values

NO_STAGE = "No Stage"

VALUE_KEYS = ("value", "amount", "deal_value")



@dataclass
class _StageTotals:
    count: int = 0
    total: Number = 0
    has_value: bool = False


def to_number(value: Any) -> Optional[Number]:
    """Coerce a raw amount to a finite number, or None."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = value
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    if isinstance(number, float) and not math.isfinite(number):
        return None
    return number


def resolve_stage(values: Any) -> Optional[str]:
    """Stage label: status title, then option title, then raw value."""
    raw = first_value(values, "stage")
    if isinstance(raw, dict):
        for key in ("status", "option"):
            inner = raw.get(key)
            if isinstance(inner, dict) and inner.get("title"):
                return as_text(inner["title"])
        return as_text(raw.get("value"))
    return as_text(raw)


def resolve_amount(values: Any) -> Optional[Number]:
    """Numeric value from the first of value/amount/deal_value."""
    for key in VALUE_KEYS:
        raw = first_value(values, key)
        if raw is None:
            continue
        if isinstance(raw, dict):
            amount = raw.get("currency_value")
            if amount is None:
                amount = raw.get("value")
            return to_number(amount)
        return to_number(raw)
    return None


def _entry_values(entry: dict) -> Dict[str, Any]:
    values = entry.get("entry_values") or entry.get("values")
    return values if isinstance(values, dict) else {}


def _record_name(entry: dict, record_names: Mapping[str, str]) -> str:
    rid = ids.record_id(entry.get("record_id")) or ids.record_id(entry.get("parent_record_id"))
    if rid is None:
        return UNKNOWN
    return record_names.get(rid) or f"Record {rid}"


def compute_pipeline_summary(
    list_id: str,
    list_name: str,
    entries: Any,
    record_names: Optional[Mapping[str, str]] = None,
) -> PipelineSummary:
    """Aggregate list entries into per-stage counts and totals.

    Args:
        list_id: Id of the list being summarized
        list_name: Display name of the list
        entries: Raw list entries (bare list or `{"data": [...]}` envelope)
        record_names: Parent record id -> display name lookup

    Returns:
        PipelineSummary with stages in first-seen order
    """
    record_names = record_names or {}
    stage_totals: Dict[str, _StageTotals] = {}
    shaped: List[PipelineEntrySummary] = []

    for entry in ids.unwrap_list(entries):
        if not isinstance(entry, dict):
            continue
        values = _entry_values(entry)
        stage = resolve_stage(values)
        amount = resolve_amount(values)

        totals = stage_totals.setdefault(stage or NO_STAGE, _StageTotals())
        totals.count += 1
        if amount is not None:
            totals.total += amount
            totals.has_value = True

        shaped.append(
            PipelineEntrySummary(
                id=ids.entry_id(entry.get("entry_id")) or ids.entry_id(entry.get("id")),
                record_name=_record_name(entry, record_names),
                stage=stage,
                value=amount,
            )
        )

    stages = [
        PipelineStageSummary(
            stage=stage,
            count=totals.count,
            total_value=totals.total if totals.has_value else None,
        )
        for stage, totals in stage_totals.items()
    ]

    return PipelineSummary(
        list_id=list_id,
        list_name=list_name,
        total_entries=len(shaped),
        stages=stages,
        entries=shaped,
    )


def list_parent_object(item: dict) -> Optional[str]:
    """Parent object slug of a list (Attio returns a one-element array)."""
    parent = item.get("parent_object")
    if isinstance(parent, list):
        parent = parent[0] if parent else None
    return as_text(parent)


def summarize_lists(lists: Any) -> List[ListSummary]:
    """Catalog of available lists for a bare pipeline request."""
    return [
        ListSummary(
            id=ids.list_id(item.get("id")),
            name=as_text(item.get("name")),
            object_type=list_parent_object(item),
        )
        for item in ids.unwrap_list(lists)
        if isinstance(item, dict)
    ]


def find_list(lists: Any, list_name: str) -> Optional[dict]:
    """Find a list by case-insensitive name substring or exact id."""
    needle = list_name.lower()
    for item in ids.unwrap_list(lists):
        if not isinstance(item, dict):
            continue
        name = as_text(item.get("name")) or ""
        if needle in name.lower() or ids.list_id(item.get("id")) == list_name:
            return item
    return None


def flatten_entries(entries: Any) -> List[Dict[str, Any]]:
    """Readable projection of a record's list entries (pipeline memberships)."""
    shaped = []
    for entry in ids.unwrap_list(entries):
        if not isinstance(entry, dict):
            continue
        values = _entry_values(entry)
        shaped.append(
            {
                "id": ids.entry_id(entry.get("entry_id")) or ids.entry_id(entry.get("id")),
                "list_id": ids.list_id(entry.get("list_id")),
                "stage": resolve_stage(values),
                "values": flatten_values(values),
            }
        )
    return shaped
