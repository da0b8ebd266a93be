#!filepath: src/azkar_app/grouping.py
from __future__ import annotations

from typing import Any, Iterable, Mapping, Optional

from azkar_app.categories import UNCATEGORIZED, normalize_category
from azkar_app.models import CanonicalDataset, CanonicalEntry

TEXT_KEYS = ("zekr", "content", "text", "description")


def _first_text(record: Mapping[str, Any], keys: Iterable[str]) -> str:
    for key in keys:
        value = record.get(key)
        if not value:
            continue
        s = str(value).strip()
        if s:
            return s
    return ""


def _text_or(value: Any, default: str) -> str:
    return str(value) if value else default


def to_entry(record: Any) -> Optional[CanonicalEntry]:
    """Build a canonical entry from one raw record.

    Args:
        record: Raw record from the shape adapter.

    Returns:
        CanonicalEntry, or None when the record has no usable text.
    """
    if not isinstance(record, Mapping):
        return None

    text = _first_text(record, TEXT_KEYS)
    if not text:
        return None

    category = normalize_category(record.get("category")) or UNCATEGORIZED
    description = _text_or(record.get("description"), "")
    return CanonicalEntry(
        category=category,
        text=text,
        repetition_count=_text_or(record.get("count"), "1"),
        description="" if description.strip() == text else description,
        reference=_text_or(record.get("reference"), ""),
    )


def group_records(records: Iterable[Any]) -> CanonicalDataset:
    """Group raw records by canonical category, dropping duplicates.

    Records without text are skipped. A text already present in the same
    category is skipped too; the same text under two categories is kept.

    Args:
        records: Raw records in source order.

    Returns:
        CanonicalDataset: Categories in first-seen order.
    """
    grouped: CanonicalDataset = {}
    seen: dict[str, set[str]] = {}

    for record in records:
        entry = to_entry(record)
        if entry is None:
            continue
        texts = seen.setdefault(entry.category, set())
        if entry.text in texts:
            continue
        texts.add(entry.text)
        grouped.setdefault(entry.category, []).append(entry)

    return grouped
