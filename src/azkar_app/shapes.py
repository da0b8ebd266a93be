#!filepath: src/azkar_app/shapes.py
from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Mapping

RawRecord = Dict[str, Any]


class PayloadShape(str, Enum):
    COLUMNAR = "columnar"
    FLAT_ARRAY = "flat_array"
    GROUPED_BY_KEY = "grouped_by_key"
    UNRECOGNIZED = "unrecognized"


def _is_columnar(payload: Any) -> bool:
    return (
        isinstance(payload, Mapping)
        and isinstance(payload.get("columns"), list)
        and isinstance(payload.get("rows"), list)
    )


def _is_record_list(value: Any) -> bool:
    return isinstance(value, list) and bool(value) and isinstance(value[0], Mapping)


def detect_shape(payload: Any) -> PayloadShape:
    """Classify a decoded JSON payload by structure.

    Checked in order: columnar table, flat array, object grouped by key.

    Args:
        payload: Decoded JSON of unknown shape.

    Returns:
        PayloadShape: Detected shape.
    """
    if _is_columnar(payload):
        return PayloadShape.COLUMNAR
    if isinstance(payload, list):
        return PayloadShape.FLAT_ARRAY
    if isinstance(payload, Mapping) and any(
        _is_record_list(v) for v in payload.values()
    ):
        return PayloadShape.GROUPED_BY_KEY
    return PayloadShape.UNRECOGNIZED


def _flatten_columnar(payload: Mapping[str, Any]) -> List[RawRecord]:
    columns = [str(c) for c in payload["columns"]]
    out: List[RawRecord] = []
    for row in payload["rows"]:
        if not isinstance(row, list):
            continue
        out.append(dict(zip(columns, row)))
    return out


def _flatten_grouped(payload: Mapping[str, Any]) -> List[RawRecord]:
    out: List[RawRecord] = []
    for key, value in payload.items():
        if not _is_record_list(value):
            continue
        for item in value:
            if isinstance(item, Mapping):
                out.append({**item, "category": str(key)})
    return out


def flatten(payload: Any) -> List[RawRecord]:
    """Flatten a payload of unknown shape into raw entry records.

    Never raises, unrecognized payloads give an empty list. The payload is
    not modified.

    Args:
        payload: Decoded JSON value.

    Returns:
        List of raw records, one per entry.
    """
    shape = detect_shape(payload)
    if shape is PayloadShape.COLUMNAR:
        return _flatten_columnar(payload)
    if shape is PayloadShape.FLAT_ARRAY:
        return list(payload)
    if shape is PayloadShape.GROUPED_BY_KEY:
        return _flatten_grouped(payload)
    return []
