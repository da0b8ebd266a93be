#!filepath: src/azkar_app/errors.py
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    UNKNOWN = "unknown"
    NETWORK = "network"
    TIMEOUT = "timeout"
    HTTP_STATUS = "http_status"
    NOT_FOUND = "not_found"
    PARSE = "parse"
    STORAGE = "storage"


@dataclass(frozen=True, slots=True)
class FetchErrorDetails:
    kind: ErrorKind
    source: Optional[str] = None
    url: Optional[str] = None
    status_code: Optional[int] = None
    message: str = ""
    raw: Optional[str] = None

    @property
    def reason(self) -> str:
        return str(self.kind.value)


class AzkarError(Exception):
    def __init__(self, payload: str | FetchErrorDetails) -> None:
        if isinstance(payload, FetchErrorDetails):
            msg = str(payload.message or payload.reason or "azkar_error")
            super().__init__(msg)
            self._details = payload
        else:
            super().__init__(str(payload or "azkar_error"))
            self._details = FetchErrorDetails(
                kind=ErrorKind.UNKNOWN, message=str(payload or "")
            )

    @property
    def details(self) -> FetchErrorDetails:
        return self._details

    @property
    def kind(self) -> ErrorKind:
        return self._details.kind

    @property
    def source(self) -> Optional[str]:
        return self._details.source

    @property
    def http_status(self) -> Optional[int]:
        return self._details.status_code

    @property
    def reason(self) -> str:
        return self._details.reason


class SourceFetchError(AzkarError):
    """A remote content source could not deliver a JSON payload."""


class SnapshotStoreError(AzkarError):
    """The persisted snapshot slot could not be read or written."""


class QuranApiError(AzkarError):
    """The Quran API returned an error or an unusable body."""


def kind_from_status(status: int) -> ErrorKind:
    """Map an HTTP status code to an error kind.

    Args:
        status: HTTP status code.

    Returns:
        ErrorKind: Matching kind.
    """
    if status == 404:
        return ErrorKind.NOT_FOUND
    if status >= 400:
        return ErrorKind.HTTP_STATUS
    return ErrorKind.UNKNOWN
