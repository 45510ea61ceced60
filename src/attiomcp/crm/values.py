"""Attribute value classification and flattening.

Attio stores every attribute as an array of typed values. Each value is a
loosely-shaped object whose kind is only implied by which fields it carries:
personal-name has first_name/last_name/full_name, email has email_address,
currency has currency_value/currency_code, status has status.title, etc.

`classify_value` inspects a raw value once and tags it with a `ValueKind`;
everything downstream works from that tag instead of probing fields again.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

DATE_PREFIX = re.compile(r"^\d{4}-\d{2}")


class ValueKind(str, Enum):
    """Kind of a single Attio attribute value, in extraction precedence order."""

    PERSONAL_NAME = "personal_name"
    TEXT = "text"
    EMAIL = "email"
    PHONE = "phone"
    CURRENCY = "currency"
    STATUS = "status"
    RECORD_REFERENCE = "record_reference"
    OPTION = "option"
    DATE = "date"
    SCALAR = "scalar"
    PRIMITIVE = "primitive"
    RAW = "raw"


# Specific shapes must be tested before the generic "value" wrapper:
# currency and status objects can also carry a "value" field.
_KEYED_KINDS = (
    ("email_address", ValueKind.EMAIL),
    ("phone_number", ValueKind.PHONE),
    ("currency_value", ValueKind.CURRENCY),
    ("status", ValueKind.STATUS),
    ("target_record_id", ValueKind.RECORD_REFERENCE),
    ("option", ValueKind.OPTION),
)


def compose_name(first: Any, last: Any) -> str:
    """Join first and last name with one space, trimming missing parts."""
    return f"{first or ''} {last or ''}".strip()


def as_text(value: Any) -> Optional[str]:
    """Coerce a loosely-typed field to a string; falsy values become None."""
    if value is None or value == "" or value is False:
        return None
    return value if isinstance(value, str) else str(value)


def first_text(obj: Any, *keys: str) -> Optional[str]:
    """First truthy field among `keys` of a dict, as text."""
    if not isinstance(obj, dict):
        return None
    for key in keys:
        if obj.get(key):
            return as_text(obj[key])
    return None


def _title_or_raw(obj: Any) -> Any:
    if isinstance(obj, dict) and obj.get("title"):
        return obj["title"]
    return obj


@dataclass(frozen=True)
class AttributeValue:
    """A raw attribute value tagged with its kind."""

    kind: ValueKind
    raw: Any

    @property
    def scalar(self) -> Any:
        """The generic `value` field, if the raw value is an object."""
        if isinstance(self.raw, dict):
            return self.raw.get("value")
        return None

    @property
    def readable(self) -> Any:
        """Primary readable representation of this value."""
        raw = self.raw
        kind = self.kind

        if kind is ValueKind.PERSONAL_NAME:
            return raw.get("full_name") or compose_name(
                raw.get("first_name"), raw.get("last_name")
            )
        if kind is ValueKind.EMAIL:
            return raw["email_address"]
        if kind is ValueKind.PHONE:
            return raw["phone_number"]
        if kind is ValueKind.CURRENCY:
            return {
                "amount": raw["currency_value"],
                "currency": raw.get("currency_code") or None,
            }
        if kind is ValueKind.STATUS:
            return _title_or_raw(raw["status"])
        if kind is ValueKind.RECORD_REFERENCE:
            return {
                "record_id": raw["target_record_id"],
                "object_type": raw.get("target_object") or None,
            }
        if kind is ValueKind.OPTION:
            return _title_or_raw(raw["option"])
        if kind in (ValueKind.DATE, ValueKind.SCALAR):
            return raw["value"]
        # TEXT, PRIMITIVE and RAW pass through unchanged
        return raw


def classify_value(raw: Any) -> AttributeValue:
    """Tag a raw Attio attribute value with its kind.

    Never raises: shapes that match nothing are tagged RAW.
    """
    if isinstance(raw, dict) and (
        "full_name" in raw or "first_name" in raw or "last_name" in raw
    ):
        return AttributeValue(ValueKind.PERSONAL_NAME, raw)

    if isinstance(raw, str):
        return AttributeValue(ValueKind.TEXT, raw)

    if isinstance(raw, dict):
        for key, kind in _KEYED_KINDS:
            if key in raw:
                return AttributeValue(kind, raw)
        if "value" in raw:
            value = raw["value"]
            if isinstance(value, str) and DATE_PREFIX.match(value):
                return AttributeValue(ValueKind.DATE, raw)
            return AttributeValue(ValueKind.SCALAR, raw)
        return AttributeValue(ValueKind.RAW, raw)

    if isinstance(raw, (int, float, bool)):
        return AttributeValue(ValueKind.PRIMITIVE, raw)

    return AttributeValue(ValueKind.RAW, raw)


def extract_value(raw: Any) -> Any:
    """Readable representation of one raw attribute value."""
    return classify_value(raw).readable


def first_value(values: Any, key: str) -> Optional[Any]:
    """First element of an attribute's value array, or None."""
    if not isinstance(values, dict):
        return None
    arr = values.get(key)
    if isinstance(arr, list) and arr:
        return arr[0]
    return None


def record_values(record: Any) -> Dict[str, Any]:
    """Attribute values mapping of a record (under `values` or `attributes`)."""
    if not isinstance(record, dict):
        return {}
    values = record.get("values") or record.get("attributes")
    return values if isinstance(values, dict) else {}


def flatten_values(values: Any) -> Dict[str, Any]:
    """Flatten an Attio values dict into a readable key-value mapping.

    Only the first (primary) element of each attribute array is kept.
    Empty or missing arrays map to an explicit None. A value that is not an
    array is treated as a single, already-extracted value, so flattening an
    already-flat mapping leaves it unchanged.
    """
    if not isinstance(values, dict):
        return {}

    flat: Dict[str, Any] = {}
    for key, arr in values.items():
        if isinstance(arr, list):
            flat[key] = extract_value(arr[0]) if arr else None
        else:
            flat[key] = extract_value(arr)
    return flat
