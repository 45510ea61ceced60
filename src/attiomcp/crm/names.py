"""Display name resolution for Attio records.

Records carry their name in different attributes depending on the object:
people use a personal-name `name`, companies a text `name`, deals a
`title` or `deal_name`, custom objects whatever their primary attribute is.
"""

from typing import Any, Dict, Optional

from attiomcp.crm import ids
from attiomcp.crm.ids import unwrap_list
from attiomcp.crm.values import (
    AttributeValue,
    ValueKind,
    classify_value,
    compose_name,
    first_value,
    record_values,
)

UNKNOWN = "Unknown"

FALLBACK_NAME_KEYS = ("name", "title", "company", "deal_name", "primary_name")


def _scalar_text(value: AttributeValue) -> Optional[str]:
    if value.kind is ValueKind.TEXT:
        return value.raw or None
    if value.scalar:
        return str(value.scalar)
    return None


def _personal_name(value: AttributeValue, allow_parts: bool = True) -> Optional[str]:
    if value.kind is not ValueKind.PERSONAL_NAME:
        return None
    if value.raw.get("full_name"):
        return str(value.raw["full_name"])
    if allow_parts:
        return compose_name(value.raw.get("first_name"), value.raw.get("last_name")) or None
    return None


def _first_present(values: Any, *keys: str) -> Optional[Any]:
    for key in keys:
        found = first_value(values, key)
        if found:
            return found
    return None


def extract_record_name(record: Any) -> str:
    """Extract a readable name from an Attio record.

    Checks the personal-name / primary name attribute, then text title
    attributes, then a fixed list of name-like keys, and finally falls back
    to the record id. Always returns a non-empty string.

    Args:
        record: Raw record dict, a bare record id, or None

    Returns:
        Display name, the record id, or "Unknown"
    """
    if record is None:
        return UNKNOWN
    if not isinstance(record, dict):
        return ids.record_id(record) or UNKNOWN

    values = record_values(record)

    # Personal name or primary text name
    raw_name = _first_present(values, "name", "primary_name")
    if raw_name:
        value = classify_value(raw_name)
        name = _personal_name(value) or _scalar_text(value)
        if name:
            return name

    # Company / deal title (text type)
    raw_title = _first_present(values, "title", "company_name", "deal_name")
    if raw_title:
        title = _scalar_text(classify_value(raw_title))
        if title:
            return title

    # Any attribute that looks like a name
    for key in FALLBACK_NAME_KEYS:
        raw = first_value(values, key)
        if not raw:
            continue
        value = classify_value(raw)
        name = _personal_name(value, allow_parts=False) or _scalar_text(value)
        if name:
            return name

    return ids.record_id(record.get("id")) or UNKNOWN


def record_name_map(records: Any) -> Dict[str, str]:
    """Build a record id -> display name lookup from raw records."""
    names: Dict[str, str] = {}
    for record in unwrap_list(records):
        if not isinstance(record, dict):
            continue
        rid = ids.record_id(record.get("id"))
        if rid is not None:
            names[rid] = extract_record_name(record)
    return names
