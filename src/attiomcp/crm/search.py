"""Search result shaping."""

from typing import Any, List, Optional

from attiomcp.crm import ids
from attiomcp.crm.models import ShapedRecord
from attiomcp.crm.names import extract_record_name
from attiomcp.crm.values import (
    as_text,
    first_text,
    first_value,
    flatten_values,
    record_values,
)


def _matches_type(record: dict, object_type: Optional[str]) -> bool:
    if not object_type:
        return True
    return record.get("object") == object_type or record.get("parent_object") == object_type


def _first_of(values: dict, keys: tuple, fields: tuple) -> Optional[str]:
    """Primary element of the first present attribute, read via `fields`."""
    for key in keys:
        first = first_value(values, key)
        if first is None:
            continue
        if isinstance(first, str):
            return first or None
        return first_text(first, *fields)
    return None


def shape_record(record: dict, object_type: Optional[str] = None) -> ShapedRecord:
    """Project one raw record into its compact display shape."""
    values = record_values(record)
    return ShapedRecord(
        id=ids.record_id(record.get("id")),
        object_type=as_text(record.get("object") or record.get("parent_object") or object_type),
        name=extract_record_name(record),
        email=_first_of(values, ("email_addresses", "email"), ("email_address", "value")),
        company=_first_of(values, ("company", "companies"), ("full_name", "value")),
        values=flatten_values(values),
    )


def shape_search_results(records: Any, object_type: Optional[str] = None) -> List[ShapedRecord]:
    """Filter raw records by object type and shape each survivor.

    Args:
        records: Raw records (bare list or `{"data": [...]}` envelope)
        object_type: Optional object slug; matched against `object` or
            `parent_object`. None keeps every record.

    Returns:
        Shaped records in input order
    """
    return [
        shape_record(record, object_type)
        for record in ids.unwrap_list(records)
        if isinstance(record, dict) and _matches_type(record, object_type)
    ]
