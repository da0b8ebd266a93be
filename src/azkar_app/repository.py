#!filepath: src/azkar_app/repository.py
from __future__ import annotations

import json
import time
from dataclasses import dataclass, field
from typing import Callable, Optional, Sequence

from azkar_app.baseline import bundled_baseline
from azkar_app.cache import JsonFileSnapshotStore, SnapshotStore
from azkar_app.errors import SnapshotStoreError, SourceFetchError
from azkar_app.grouping import group_records
from azkar_app.models import CachedSnapshot, CanonicalDataset
from azkar_app.settings import Settings, get_settings
from azkar_app.shapes import detect_shape, flatten
from azkar_app.sources import (
    DEFAULT_SOURCES,
    ContentSource,
    HttpSourceFetcher,
    SourceFetcher,
)
from azkar_app.utils.logger import get_logger
from azkar_app.utils.serialization import dump_json

logger = get_logger(__name__)

FRESHNESS_WINDOW_SECONDS = 24 * 60 * 60


def overlay(target: CanonicalDataset, update: CanonicalDataset) -> CanonicalDataset:
    """Replace whole categories of target with the non-empty ones of update.

    Args:
        target: Dataset modified in place.
        update: Categories to take over.

    Returns:
        CanonicalDataset: The target, for chaining.
    """
    for key, entries in update.items():
        if entries:
            target[key] = list(entries)
    return target


@dataclass(slots=True)
class AzkarRepository:
    """Serve remembrance content from baseline, snapshot and remote sources.

    The result is never poorer than the baseline: the snapshot and the
    network can only replace categories with non-empty ones.

    Args:
        baseline: Bundled dataset.
        store: Persisted snapshot slot.
        sources: Remote sources in priority order.
        fetcher: Fetches one source.
        ttl_seconds: Freshness window of the snapshot.
        clock: Returns the current epoch time in seconds.
    """

    baseline: CanonicalDataset
    store: SnapshotStore
    sources: Sequence[ContentSource]
    fetcher: SourceFetcher
    ttl_seconds: float = FRESHNESS_WINDOW_SECONDS
    clock: Callable[[], float] = field(default=time.time)

    def acquire(self) -> CanonicalDataset:
        """Return the best dataset currently obtainable.

        Returns:
            CanonicalDataset: Baseline overlaid by snapshot and network data.
        """
        result: CanonicalDataset = {k: list(v) for k, v in self.baseline.items()}

        snapshot = self._read_snapshot()
        if snapshot is not None:
            overlay(result, snapshot.data)
            age = snapshot.age_seconds(self.clock())
            if age < float(self.ttl_seconds):
                logger.info(
                    f"Snapshot fresh, age={age:.0f}s, categories={len(snapshot.data)}"
                )
                return result
            logger.info(f"Snapshot stale, age={age:.0f}s, fetching sources")

        for source in self.sources:
            candidate = self._fetch_candidate(source)
            if not candidate:
                continue
            overlay(result, candidate)
            self._write_snapshot(candidate)
            logger.info(
                f"Source accepted, source={source.name}, categories={len(candidate)}"
            )
            return result

        logger.warning(
            f"No source usable, serving fallback, stale_snapshot={snapshot is not None}"
        )
        return result

    def invalidate(self) -> None:
        """Drop the persisted snapshot."""
        try:
            self.store.clear()
        except SnapshotStoreError as e:
            logger.error(f"Snapshot invalidate failed: {e}")

    def refresh(self) -> CanonicalDataset:
        """Invalidate the snapshot and acquire again.

        Returns:
            CanonicalDataset: Freshly acquired dataset.
        """
        self.invalidate()
        return self.acquire()

    def _read_snapshot(self) -> Optional[CachedSnapshot]:
        try:
            raw = self.store.load()
        except SnapshotStoreError as e:
            logger.warning(f"Snapshot unreadable, ignoring: {e}")
            return None
        if raw is None:
            return None
        try:
            return CachedSnapshot.from_dict(json.loads(raw))
        except (ValueError, OverflowError, RecursionError) as e:
            logger.warning(f"Snapshot corrupt, purging: {e}")
            self.invalidate()
            return None

    def _fetch_candidate(self, source: ContentSource) -> CanonicalDataset:
        try:
            payload = self.fetcher.fetch(source)
        except SourceFetchError as e:
            logger.warning(
                f"Fetch failed, source={source.name}, kind={e.reason}, error={e}"
            )
            return {}
        candidate = group_records(flatten(payload))
        if not candidate:
            logger.info(
                f"Source gave no entries, source={source.name}, shape={detect_shape(payload).value}"
            )
        return candidate

    def _write_snapshot(self, data: CanonicalDataset) -> None:
        snapshot = CachedSnapshot(fetched_at_ms=int(self.clock() * 1000), data=data)
        try:
            self.store.save(dump_json(snapshot.as_dict()))
        except SnapshotStoreError as e:
            logger.error(f"Snapshot write failed: {e}")


def build_repository(settings: Optional[Settings] = None) -> AzkarRepository:
    """Build a repository wired from settings.

    Args:
        settings: Optional settings, defaults to the cached ones.

    Returns:
        AzkarRepository: Ready repository.
    """
    s = settings or get_settings()
    cfg = s.app
    return AzkarRepository(
        baseline=bundled_baseline(),
        store=JsonFileSnapshotStore(directory=s.cache_dir, key=cfg.cache.key),
        sources=[ContentSource(name=x.name, url=x.url) for x in cfg.sources]
        or list(DEFAULT_SOURCES),
        fetcher=HttpSourceFetcher(
            timeout_seconds=cfg.http.timeout_seconds,
            connect_timeout_seconds=cfg.http.connect_timeout_seconds,
            user_agent=cfg.http.user_agent,
        ),
        ttl_seconds=float(cfg.cache.ttl_hours) * 3600.0,
    )
