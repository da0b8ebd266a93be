#!filepath: src/azkar_app/cache.py
from __future__ import annotations

import os
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Protocol

from azkar_app.errors import ErrorKind, FetchErrorDetails, SnapshotStoreError
from azkar_app.utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_CACHE_KEY = "azkar_cache_v6"


class SnapshotStore(Protocol):
    """Single persisted slot holding the serialized snapshot."""

    def load(self) -> Optional[str]: ...

    def save(self, text: str) -> None: ...

    def clear(self) -> None: ...


@dataclass(slots=True)
class InMemorySnapshotStore:
    """Snapshot slot kept in process memory.

    Attributes:
        text: Current serialized snapshot, None when empty.
        loads: Number of load calls.
        saves: Number of save calls.
    """

    text: Optional[str] = None
    loads: int = field(default=0)
    saves: int = field(default=0)

    def load(self) -> Optional[str]:
        self.loads += 1
        return self.text

    def save(self, text: str) -> None:
        self.saves += 1
        self.text = str(text)

    def clear(self) -> None:
        self.text = None


@dataclass(frozen=True, slots=True)
class JsonFileSnapshotStore:
    """Snapshot slot persisted as one JSON file named after the cache key.

    Writes go to a temporary file in the same directory that then replaces
    the target, so readers see either the old or the new snapshot.

    Args:
        directory: Directory holding the file.
        key: Cache key, used as the file stem.
    """

    directory: Path
    key: str = DEFAULT_CACHE_KEY

    @property
    def path(self) -> Path:
        return (self.directory / f"{self.key}.json").resolve()

    def load(self) -> Optional[str]:
        """Read the raw snapshot text.

        Returns:
            Snapshot text, or None if no snapshot exists.

        Raises:
            SnapshotStoreError: If the file exists but cannot be read.
        """
        p = self.path
        if not p.exists():
            return None
        try:
            return p.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise SnapshotStoreError(
                FetchErrorDetails(
                    kind=ErrorKind.STORAGE, url=str(p), message=f"read failed: {e}"
                )
            ) from e

    def save(self, text: str) -> None:
        """Atomically replace the snapshot.

        Args:
            text: Serialized snapshot.

        Raises:
            SnapshotStoreError: If the write fails.
        """
        p = self.path
        try:
            p.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp = tempfile.mkstemp(prefix=f".{self.key}.", dir=str(p.parent))
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    fh.write(text)
                os.replace(tmp, p)
            except BaseException:
                Path(tmp).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise SnapshotStoreError(
                FetchErrorDetails(
                    kind=ErrorKind.STORAGE, url=str(p), message=f"write failed: {e}"
                )
            ) from e
        logger.debug(f"Snapshot written, path={p}, bytes={len(text.encode('utf-8'))}")

    def clear(self) -> None:
        p = self.path
        try:
            p.unlink(missing_ok=True)
        except OSError as e:
            raise SnapshotStoreError(
                FetchErrorDetails(
                    kind=ErrorKind.STORAGE, url=str(p), message=f"delete failed: {e}"
                )
            ) from e
