"""Firestore REST ``Value`` encoding for the field types the console stores.

Supported: null, bool, int, float, str, datetime (stored as UTC), list, dict.
"""

from datetime import datetime
from typing import Any

from admin_console.shared.utils.datetime import ensure_utc


def parse_timestamp(value: str) -> datetime:
    """Parse a Firestore RFC 3339 timestamp ('Z' suffix, up to nanoseconds)."""
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def _encode_value(value: Any) -> dict:
    # bool before int: bool is an int subclass.
    if value is None:
        return {"nullValue": None}
    if isinstance(value, bool):
        return {"booleanValue": value}
    if isinstance(value, int):
        return {"integerValue": str(value)}
    if isinstance(value, float):
        return {"doubleValue": value}
    if isinstance(value, str):
        return {"stringValue": value}
    if isinstance(value, datetime):
        return {"timestampValue": ensure_utc(value).isoformat().replace("+00:00", "Z")}
    if isinstance(value, (list, tuple)):
        return {"arrayValue": {"values": [_encode_value(v) for v in value]}}
    if isinstance(value, dict):
        return {"mapValue": {"fields": encode_fields(value)}}
    raise TypeError(f"Unsupported Firestore value type: {type(value).__name__}")


_DECODERS = {
    "nullValue": lambda v: None,
    "booleanValue": bool,
    "integerValue": int,
    "doubleValue": float,
    "stringValue": str,
    "timestampValue": parse_timestamp,
    "arrayValue": lambda v: [_decode_value(x) for x in v.get("values") or []],
    "mapValue": lambda v: decode_fields(v.get("fields")),
}


def _decode_value(obj: dict) -> Any:
    for kind, decode in _DECODERS.items():
        if kind in obj:
            return decode(obj[kind])
    return None


def encode_fields(data: dict[str, Any]) -> dict:
    """Python dict -> Document.fields map."""
    return {key: _encode_value(value) for key, value in data.items()}


def decode_fields(fields: dict | None) -> dict:
    """Document.fields map -> Python dict (empty for a document with no fields)."""
    return {key: _decode_value(value) for key, value in (fields or {}).items()}
