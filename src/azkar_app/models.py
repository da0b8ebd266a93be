#!filepath: src/azkar_app/models.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Mapping

# Repetition count meaning "as many times as you like".
UNBOUNDED_COUNT = "∞"


@dataclass(frozen=True, slots=True)
class CanonicalEntry:
    """Normalized unit of devotional content.

    Attributes:
        category: Canonical category label.
        text: The phrase itself, unique within its category.
        repetition_count: Positive integer as text, or UNBOUNDED_COUNT.
        description: Supplementary note, empty when it would repeat text.
        reference: Citation, may be empty.
    """

    category: str
    text: str
    repetition_count: str = "1"
    description: str = ""
    reference: str = ""

    def as_dict(self) -> Dict[str, str]:
        """Convert to the persisted JSON form.

        Returns:
            Dict with camelCase keys.
        """
        return {
            "category": self.category,
            "text": self.text,
            "repetitionCount": self.repetition_count,
            "description": self.description,
            "reference": self.reference,
        }

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> CanonicalEntry:
        """Rebuild an entry from its persisted JSON form.

        Args:
            raw: Mapping produced by as_dict.

        Returns:
            CanonicalEntry: Entry.

        Raises:
            ValueError: If the mapping has no text.
        """
        text = str(raw.get("text") or "")
        if not text:
            raise ValueError("entry without text")
        return cls(
            category=str(raw.get("category") or ""),
            text=text,
            repetition_count=str(raw.get("repetitionCount") or "1"),
            description=str(raw.get("description") or ""),
            reference=str(raw.get("reference") or ""),
        )


CanonicalDataset = Dict[str, List[CanonicalEntry]]


def dataset_to_dict(dataset: CanonicalDataset) -> Dict[str, List[Dict[str, str]]]:
    return {k: [e.as_dict() for e in v] for k, v in dataset.items()}


def dataset_from_dict(raw: Any) -> CanonicalDataset:
    """Rebuild a dataset from JSON.

    Args:
        raw: Decoded JSON value.

    Returns:
        CanonicalDataset: Dataset.

    Raises:
        ValueError: If the value is not a mapping of category to entry lists.
    """
    if not isinstance(raw, Mapping):
        raise ValueError(f"dataset must be an object, got {type(raw).__name__}")
    out: CanonicalDataset = {}
    for key, items in raw.items():
        if not isinstance(items, list):
            raise ValueError(f"category {key!r} is not a list")
        entries: List[CanonicalEntry] = []
        for item in items:
            if not isinstance(item, Mapping):
                raise ValueError(f"category {key!r} holds a non-object entry")
            entries.append(CanonicalEntry.from_dict(item))
        out[str(key)] = entries
    return out


@dataclass(frozen=True, slots=True)
class CachedSnapshot:
    """Timestamped copy of the last normalized network dataset.

    Attributes:
        fetched_at_ms: Epoch milliseconds of the fetch.
        data: Dataset as produced by the grouper, before any overlay.
    """

    fetched_at_ms: int
    data: CanonicalDataset

    def age_seconds(self, now_seconds: float) -> float:
        return float(now_seconds) - (self.fetched_at_ms / 1000.0)

    def as_dict(self) -> Dict[str, Any]:
        return {"fetchedAt": int(self.fetched_at_ms), "data": dataset_to_dict(self.data)}

    @classmethod
    def from_dict(cls, raw: Any) -> CachedSnapshot:
        """Rebuild a snapshot from decoded JSON.

        Args:
            raw: Decoded JSON value.

        Returns:
            CachedSnapshot: Snapshot.

        Raises:
            ValueError: On any structural problem.
        """
        if not isinstance(raw, Mapping):
            raise ValueError("snapshot must be an object")
        fetched_at = raw.get("fetchedAt")
        if isinstance(fetched_at, bool) or not isinstance(fetched_at, (int, float)):
            raise ValueError("snapshot fetchedAt must be a number")
        return cls(fetched_at_ms=int(fetched_at), data=dataset_from_dict(raw.get("data")))
