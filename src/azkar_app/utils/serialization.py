#!filepath: src/azkar_app/utils/serialization.py
from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

from azkar_app.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class LoadResult:
    """Structured result for file loads.

    Args:
        data: Parsed payload when successful.
        path: File path attempted.
        ok: Whether parsing succeeded.
    """

    data: dict[str, Any]
    path: Path
    ok: bool


def load_json_dict(path: Path) -> LoadResult:
    """Load a JSON file and return a dictionary payload.

    Args:
        path: Path to a JSON file.

    Returns:
        LoadResult: Parsed data and status.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        logger.error(f"Failed to read JSON at {path}: {exc}")
        return LoadResult(data={}, path=path, ok=False)

    try:
        raw = json.loads(text)
    except json.JSONDecodeError as exc:
        logger.error(f"Failed to parse JSON at {path}: {exc}")
        return LoadResult(data={}, path=path, ok=False)

    if raw is None:
        return LoadResult(data={}, path=path, ok=True)

    if not isinstance(raw, Mapping):
        logger.error(
            f"Invalid JSON at {path}, expected an object, got {type(raw).__name__}"
        )
        return LoadResult(data={}, path=path, ok=False)

    return LoadResult(data=dict(raw), path=path, ok=True)


def dump_json(payload: Any) -> str:
    """Serialize a payload as compact UTF-8 friendly JSON.

    Args:
        payload: JSON compatible value.

    Returns:
        str: JSON text.
    """
    return json.dumps(payload, ensure_ascii=False, separators=(",", ":"))
