"""Encode/decode Python values to/from Firestore REST API 'fields' format."""

import base64
import re
from datetime import UTC, date, datetime, time
from decimal import Decimal
from typing import Any

from app.shared.utils.datetime import ensure_utc


class _ServerTimestamp:
    """Sentinel: the server sets this field to the commit time (REQUEST_TIME)."""

    _instance: "_ServerTimestamp | None" = None

    def __new__(cls) -> "_ServerTimestamp":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "SERVER_TIMESTAMP"


SERVER_TIMESTAMP = _ServerTimestamp()


class Increment:
    """Transform: the server adds ``value`` to the stored number at commit time."""

    def __init__(self, value: int | float) -> None:
        self.value = value

    def __repr__(self) -> str:
        return f"Increment({self.value!r})"

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Increment) and other.value == self.value

_SIMPLE_FIELD = re.compile(r"^[A-Za-z_][A-Za-z_0-9]*$")
_FRACTION = re.compile(r"\.(\d+)")


def field_path(name: str) -> str:
    """Quote a top-level field name for updateMask/fieldTransforms (e.g. `Request No.`)."""
    if _SIMPLE_FIELD.match(name):
        return name
    escaped = name.replace("\\", "\\\\").replace("`", "\\`")
    return f"`{escaped}`"


def query_field_path(name: str) -> str:
    """Field path for a query filter or order.

    A dotted name whose segments are all simple (``cms.player_id``) is a nested
    path; any other name is a single top-level field and is quoted whole.
    """
    if name == "__name__" or all(_SIMPLE_FIELD.match(part) for part in name.split(".")):
        return name
    return field_path(name)


def _encode_timestamp(dt: datetime) -> str:
    utc = ensure_utc(dt)
    return utc.strftime("%Y-%m-%dT%H:%M:%S.%fZ")


def _encode_value(v: Any) -> dict:
    if v is SERVER_TIMESTAMP or isinstance(v, Increment):
        raise TypeError(f"{v!r} is only allowed as a top-level field value")
    if v is None:
        return {"nullValue": None}
    if isinstance(v, bool):
        return {"booleanValue": v}
    if isinstance(v, int):
        return {"integerValue": str(v)}
    if isinstance(v, float):
        return {"doubleValue": v}
    if isinstance(v, Decimal):
        return {"doubleValue": float(v)}
    if isinstance(v, datetime):
        return {"timestampValue": _encode_timestamp(v)}
    if isinstance(v, date):
        return {"timestampValue": _encode_timestamp(datetime.combine(v, time.min, tzinfo=UTC))}
    if isinstance(v, str):
        return {"stringValue": v}
    if isinstance(v, bytes):
        return {"bytesValue": base64.standard_b64encode(v).decode("ascii")}
    if isinstance(v, (list, tuple)):
        return {"arrayValue": {"values": [_encode_value(x) for x in v]}}
    if isinstance(v, dict):
        return {"mapValue": {"fields": {k: _encode_value(x) for k, x in v.items()}}}
    raise TypeError(f"Unsupported Firestore value type: {type(v)}")


def split_transforms(data: dict[str, Any]) -> tuple[dict[str, Any], list[dict[str, Any]]]:
    """Separate SERVER_TIMESTAMP and Increment fields from plain values.

    Returns:
        (values, fieldTransforms for the commit Write)
    """
    values: dict[str, Any] = {}
    transforms: list[dict[str, Any]] = []
    for key, value in data.items():
        if value is SERVER_TIMESTAMP:
            transforms.append({"fieldPath": field_path(key), "setToServerValue": "REQUEST_TIME"})
        elif isinstance(value, Increment):
            transforms.append({"fieldPath": field_path(key), "increment": _encode_value(value.value)})
        else:
            values[key] = value
    return values, transforms


def encode_document(data: dict[str, Any]) -> dict:
    """Convert a Python dict to Firestore REST Document.fields format."""
    return {"fields": {k: _encode_value(v) for k, v in data.items()}}


def _parse_timestamp(raw: str) -> datetime:
    # Firestore returns up to nanosecond precision; datetime keeps microseconds.
    text = raw.replace("Z", "+00:00")
    text = _FRACTION.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), text, count=1)
    return datetime.fromisoformat(text)


def _decode_value(obj: dict) -> Any:
    if "nullValue" in obj:
        return None
    if "booleanValue" in obj:
        return obj["booleanValue"]
    if "integerValue" in obj:
        return int(obj["integerValue"])
    if "doubleValue" in obj:
        return float(obj["doubleValue"])
    if "timestampValue" in obj:
        return _parse_timestamp(obj["timestampValue"])
    if "stringValue" in obj:
        return obj["stringValue"]
    if "bytesValue" in obj:
        return base64.standard_b64decode(obj["bytesValue"])
    if "referenceValue" in obj:
        return obj["referenceValue"]
    if "geoPointValue" in obj:
        return dict(obj["geoPointValue"])
    if "arrayValue" in obj:
        vals = obj.get("arrayValue", {}).get("values") or []
        return [_decode_value(x) for x in vals]
    if "mapValue" in obj:
        fields = obj["mapValue"].get("fields") or {}
        return {k: _decode_value(x) for k, x in fields.items()}
    return None


def decode_fields(fields: dict | None) -> dict:
    """Convert a Firestore REST Document.fields mapping to a Python dict."""
    if not fields:
        return {}
    return {k: _decode_value(v) for k, v in fields.items()}
