#!filepath: src/azkar_app/sources.py
from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Optional, Protocol, Tuple

import requests

from azkar_app.errors import (
    ErrorKind,
    FetchErrorDetails,
    SourceFetchError,
    kind_from_status,
)


@dataclass(frozen=True, slots=True)
class ContentSource:
    """Remote JSON document holding remembrance entries.

    Args:
        name: Short identifier used in logs.
        url: HTTP GET endpoint.
    """

    name: str
    url: str


DEFAULT_SOURCES: Tuple[ContentSource, ...] = (
    ContentSource(
        name="seen_arabic",
        url="https://cdn.jsdelivr.net/gh/Seen-Arabic/Morning-And-Evening-Adhkar-DB@main/ar.json",
    ),
    ContentSource(
        name="osamayy",
        url="https://cdn.jsdelivr.net/gh/osamayy/azkar-db@master/azkar.json",
    ),
)


class SourceFetcher(Protocol):
    def fetch(self, source: ContentSource) -> Any:
        """Return the decoded JSON body of a source, or raise SourceFetchError."""
        ...


@dataclass(slots=True)
class HttpSourceFetcher:
    """Fetch source documents over HTTP, one attempt per call.

    Args:
        timeout_seconds: Read timeout in seconds.
        connect_timeout_seconds: Connect timeout in seconds.
        user_agent: User-Agent header value.
        session: Optional shared requests session.
    """

    timeout_seconds: int = 20
    connect_timeout_seconds: int = 10
    user_agent: str = "AzkarCompanion/0.4"
    session: Optional[requests.Session] = field(default=None)

    def _session(self) -> requests.Session:
        if self.session is None:
            self.session = requests.Session()
        return self.session

    def fetch(self, source: ContentSource) -> Any:
        """GET a source and decode its JSON body.

        Args:
            source: Source to fetch.

        Returns:
            Decoded JSON value of any shape.

        Raises:
            SourceFetchError: On transport failure, non-2xx status, or bad JSON.
        """
        connect_timeout = int(max(1, min(self.connect_timeout_seconds, self.timeout_seconds)))
        read_timeout = int(max(1, self.timeout_seconds))

        try:
            r = self._session().get(
                source.url,
                headers={"User-Agent": self.user_agent, "Accept": "application/json"},
                timeout=(connect_timeout, read_timeout),
            )
        except requests.Timeout as ex:
            raise SourceFetchError(
                FetchErrorDetails(
                    kind=ErrorKind.TIMEOUT,
                    source=source.name,
                    url=source.url,
                    message=str(ex),
                )
            ) from ex
        except requests.RequestException as ex:
            raise SourceFetchError(
                FetchErrorDetails(
                    kind=ErrorKind.NETWORK,
                    source=source.name,
                    url=source.url,
                    message=str(ex),
                )
            ) from ex

        status = int(r.status_code)
        if not 200 <= status < 300:
            raise SourceFetchError(
                FetchErrorDetails(
                    kind=kind_from_status(status),
                    source=source.name,
                    url=source.url,
                    status_code=status,
                    message=f"HTTP {status} for {source.url}",
                    raw=str(r.text or "")[:500],
                )
            )

        try:
            return json.loads(r.content.decode("utf-8-sig"))
        except (UnicodeDecodeError, ValueError, RecursionError) as ex:
            raise SourceFetchError(
                FetchErrorDetails(
                    kind=ErrorKind.PARSE,
                    source=source.name,
                    url=source.url,
                    status_code=status,
                    message=str(ex),
                    raw=str(r.text or "")[:500],
                )
            ) from ex
