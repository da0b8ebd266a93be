#!filepath: src/azkar_app/lookup.py
from __future__ import annotations

import re
from typing import List

from azkar_app.categories import AFTER_PRAYER
from azkar_app.models import UNBOUNDED_COUNT, CanonicalDataset, CanonicalEntry

_diacritics_re = re.compile(r"[\u064B-\u065F\u0670]")
_alif_re = re.compile(r"[\u0622\u0623\u0625]")
_leading_int_re = re.compile(r"^\s*\+?(\d+)")


def find_category_entries(dataset: CanonicalDataset, label: str) -> List[CanonicalEntry]:
    """Resolve a UI label to the entries of a stored category.

    Tries the exact key, then the first key that contains the label or is
    contained in it, then for the post-prayer label any key mentioning
    "بعد الصلاة".

    Args:
        dataset: Acquired dataset.
        label: Label requested by the UI.

    Returns:
        List of entries, empty when the content is unavailable.
    """
    items = dataset.get(label)
    if items:
        return list(items)

    wanted = (label or "").strip()
    if wanted:
        for key, entries in dataset.items():
            if key and (wanted in key or key in wanted) and entries:
                return list(entries)

    if wanted == AFTER_PRAYER:
        for key, entries in dataset.items():
            if "بعد الصلاة" in key and entries:
                return list(entries)

    return []


def fold_arabic(text: str) -> str:
    """Fold Arabic text for matching.

    Drops diacritics and unifies alif, taa marbuta and alif maqsura forms.

    Args:
        text: Raw text.

    Returns:
        str: Folded text.
    """
    s = _diacritics_re.sub("", text or "")
    s = _alif_re.sub("ا", s)
    s = s.replace("ة", "ه")
    s = s.replace("ى", "ي")
    return s


def search_entries(dataset: CanonicalDataset, query: str) -> List[CanonicalEntry]:
    """Find entries whose text or description contains the query.

    Args:
        dataset: Acquired dataset.
        query: Free text, diacritics optional.

    Returns:
        Matching entries in dataset order.
    """
    q = fold_arabic(query.strip())
    if not q:
        return []
    results: List[CanonicalEntry] = []
    for entries in dataset.values():
        for entry in entries:
            if q in fold_arabic(entry.text) or (
                entry.description and q in fold_arabic(entry.description)
            ):
                results.append(entry)
    return results


def is_unbounded(entry: CanonicalEntry) -> bool:
    return entry.repetition_count.strip() == UNBOUNDED_COUNT


def target_count(entry: CanonicalEntry, default: int = 1) -> int:
    """Parse the repetition count into a concrete target.

    Args:
        entry: Entry.
        default: Used when the count has no leading positive integer.

    Returns:
        int: Number of repetitions.
    """
    m = _leading_int_re.match(entry.repetition_count or "")
    if not m:
        return default
    n = int(m.group(1))
    return n if n > 0 else default
