#!filepath: tests/conftest.py
from __future__ import annotations

import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import pytest

ROOT = Path(__file__).resolve().parents[1]


def pytest_configure() -> None:
    """Ensure src layout is importable during tests."""
    src = (ROOT / "src").resolve()
    if str(src) not in sys.path:
        sys.path.insert(0, str(src))


@dataclass
class CountingFetcher:
    """Fetcher double returning canned payloads per URL.

    Args:
        responses: URL to payload, or to an exception instance to raise.
    """

    responses: Dict[str, Any] = field(default_factory=dict)
    calls: List[str] = field(default_factory=list)

    def fetch(self, source: Any) -> Any:
        self.calls.append(source.url)
        value = self.responses.get(source.url)
        if isinstance(value, Exception):
            raise value
        if source.url not in self.responses:
            from azkar_app.errors import ErrorKind, FetchErrorDetails, SourceFetchError

            raise SourceFetchError(
                FetchErrorDetails(
                    kind=ErrorKind.NETWORK,
                    source=source.name,
                    url=source.url,
                    message="offline",
                )
            )
        return value


@dataclass
class FakeResponse:
    status_code: int = 200
    payload: Any = None
    text: Optional[str] = None
    url: str = ""

    @property
    def content(self) -> bytes:
        if self.text is not None:
            return self.text.encode("utf-8")
        import json

        return json.dumps(self.payload, ensure_ascii=False).encode("utf-8")

    def json(self) -> Any:
        import json

        return json.loads(self.content.decode("utf-8"))


@dataclass
class FakeSession:
    """Minimal stand-in for requests.Session.get."""

    routes: Dict[str, Any] = field(default_factory=dict)
    calls: List[str] = field(default_factory=list)

    def get(self, url: str, **kwargs: Any) -> Any:
        self.calls.append(url)
        value = self.routes.get(url)
        if isinstance(value, Exception):
            raise value
        if value is None:
            return FakeResponse(status_code=404, text="not found", url=url)
        return value


@pytest.fixture
def counting_fetcher() -> CountingFetcher:
    return CountingFetcher()


@pytest.fixture
def fake_session() -> FakeSession:
    return FakeSession()


@pytest.fixture
def fake_response() -> type[FakeResponse]:
    return FakeResponse
