"""Encode/decode Python values to/from Firestore REST API 'fields' format.

Also defines the write sentinels (server timestamp, increment, array
union/remove) and splits them out of a payload as field transforms.
"""

import base64
import re
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

_SIMPLE_FIELD = re.compile(r"^[A-Za-z_][A-Za-z_0-9]*$")
_FRACTION = re.compile(r"\.(\d+)")


class _ServerTimestamp:
    """Sentinel replaced by the commit time on the server."""

    def __repr__(self) -> str:
        return "SERVER_TIMESTAMP"


SERVER_TIMESTAMP = _ServerTimestamp()


@dataclass(frozen=True)
class Increment:
    """Atomically add value to a numeric field (missing field counts as 0)."""

    value: int | float


@dataclass(frozen=True)
class ArrayUnion:
    """Append each value not already present in the array field."""

    values: tuple

    def __init__(self, values) -> None:
        object.__setattr__(self, "values", tuple(values))


@dataclass(frozen=True)
class ArrayRemove:
    """Remove every occurrence of each value from the array field."""

    values: tuple

    def __init__(self, values) -> None:
        object.__setattr__(self, "values", tuple(values))


_SENTINELS = (_ServerTimestamp, Increment, ArrayUnion, ArrayRemove)


def quote_field_path(segment: str) -> str:
    """Backtick-quote a field name that is not a simple identifier."""
    if _SIMPLE_FIELD.match(segment):
        return segment
    escaped = segment.replace("\\", "\\\\").replace("`", "\\`")
    return f"`{escaped}`"


def _encode_value(v: Any) -> dict:
    if isinstance(v, _SENTINELS):
        raise TypeError(f"{v!r} is only allowed as a top-level write value")
    if v is None:
        return {"nullValue": None}
    if isinstance(v, bool):
        return {"booleanValue": v}
    if isinstance(v, int):
        return {"integerValue": str(v)}
    if isinstance(v, float):
        return {"doubleValue": v}
    if isinstance(v, datetime):
        if v.tzinfo is not None:
            v = v.astimezone(timezone.utc)
        return {"timestampValue": v.strftime("%Y-%m-%dT%H:%M:%S.%fZ")}
    if isinstance(v, str):
        return {"stringValue": v}
    if isinstance(v, bytes):
        return {"bytesValue": base64.standard_b64encode(v).decode("ascii")}
    if isinstance(v, (list, tuple)):
        return {"arrayValue": {"values": [_encode_value(x) for x in v]}}
    if isinstance(v, dict):
        return {"mapValue": {"fields": {k: _encode_value(x) for k, x in v.items()}}}
    raise TypeError(f"Unsupported Firestore value type: {type(v)}")


def encode_fields(data: dict[str, Any]) -> dict:
    """Convert a Python dict to Firestore REST Document.fields."""
    return {k: _encode_value(v) for k, v in data.items()}


def _encode_transform(path: str, sentinel: Any) -> dict:
    if isinstance(sentinel, _ServerTimestamp):
        return {"fieldPath": path, "setToServerValue": "REQUEST_TIME"}
    if isinstance(sentinel, Increment):
        return {"fieldPath": path, "increment": _encode_value(sentinel.value)}
    if isinstance(sentinel, ArrayUnion):
        return {
            "fieldPath": path,
            "appendMissingElements": {"values": [_encode_value(x) for x in sentinel.values]},
        }
    return {
        "fieldPath": path,
        "removeAllFromArray": {"values": [_encode_value(x) for x in sentinel.values]},
    }


def split_transforms(
    data: dict[str, Any], prefix: str = ""
) -> tuple[dict[str, Any], list[dict]]:
    """Separate sentinel values from plain data.

    Returns the data without sentinels and the list of REST field
    transforms. Nested maps left empty by the removal are dropped.
    """
    plain: dict[str, Any] = {}
    transforms: list[dict] = []
    for key, value in data.items():
        path = f"{prefix}{quote_field_path(key)}"
        if isinstance(value, _SENTINELS):
            transforms.append(_encode_transform(path, value))
        elif isinstance(value, dict) and value:
            nested, nested_transforms = split_transforms(value, f"{path}.")
            transforms.extend(nested_transforms)
            if nested or not nested_transforms:
                plain[key] = nested
        else:
            plain[key] = value
    return plain, transforms


def leaf_field_paths(data: dict[str, Any], prefix: str = "") -> list[str]:
    """Field paths of every leaf in data; used as the mask of a merge write."""
    paths: list[str] = []
    for key, value in data.items():
        path = f"{prefix}{quote_field_path(key)}"
        if isinstance(value, dict) and value:
            paths.extend(leaf_field_paths(value, f"{path}."))
        else:
            paths.append(path)
    return paths


def _parse_timestamp(raw: str) -> datetime:
    # Firestore may return nanosecond precision; datetime keeps microseconds.
    raw = _FRACTION.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), raw, count=1)
    return datetime.fromisoformat(raw.replace("Z", "+00:00"))


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


def decode_document(doc: dict | None) -> dict:
    """Convert a Firestore REST Document resource to a Python dict of its fields."""
    if not doc:
        return {}
    return {k: _decode_value(v) for k, v in (doc.get("fields") or {}).items()}
