#!filepath: src/azkar_app/baseline.py
from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Optional

from azkar_app.grouping import group_records
from azkar_app.models import CanonicalDataset
from azkar_app.shapes import flatten
from azkar_app.utils.logger import get_logger
from azkar_app.utils.serialization import load_json_dict

logger = get_logger(__name__)

BASELINE_PATH = Path(__file__).resolve().parent / "data" / "baseline_azkar.json"


def load_baseline(path: Optional[Path] = None) -> CanonicalDataset:
    """Load a bundled dataset through the same adapter and grouper as remote data.

    Args:
        path: Optional override of the bundled file.

    Returns:
        CanonicalDataset: Baseline dataset, empty if the file is unusable.
    """
    p = path or BASELINE_PATH
    result = load_json_dict(p)
    if not result.ok:
        logger.error(f"Baseline dataset unusable at {p}")
        return {}
    return group_records(flatten(result.data))


@lru_cache(maxsize=1)
def _bundled() -> CanonicalDataset:
    return load_baseline()


def bundled_baseline() -> CanonicalDataset:
    """Return the dataset shipped with the package.

    Returns:
        CanonicalDataset: Fresh top-level copy, safe to overlay.
    """
    return {k: list(v) for k, v in _bundled().items()}
