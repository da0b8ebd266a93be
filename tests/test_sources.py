#!filepath: tests/test_sources.py
from __future__ import annotations

import pytest
import requests

from azkar_app.errors import ErrorKind, SourceFetchError
from azkar_app.sources import DEFAULT_SOURCES, ContentSource, HttpSourceFetcher

SOURCE = ContentSource(name="demo", url="https://example.invalid/azkar.json")


def test_default_sources_are_ordered() -> None:
    assert [s.name for s in DEFAULT_SOURCES] == ["seen_arabic", "osamayy"]
    assert all(s.url.startswith("https://cdn.jsdelivr.net/") for s in DEFAULT_SOURCES)


def test_fetch_decodes_json(fake_session, fake_response) -> None:
    fake_session.routes[SOURCE.url] = fake_response(payload={"Morning": [{"zekr": "a"}]})
    fetcher = HttpSourceFetcher(session=fake_session)
    assert fetcher.fetch(SOURCE) == {"Morning": [{"zekr": "a"}]}
    assert fake_session.calls == [SOURCE.url]


def test_fetch_accepts_utf8_bom(fake_session, fake_response) -> None:
    fake_session.routes[SOURCE.url] = fake_response(text="\ufeff[{\"zekr\": \"a\"}]")
    assert HttpSourceFetcher(session=fake_session).fetch(SOURCE) == [{"zekr": "a"}]


@pytest.mark.parametrize("status, kind", [(404, ErrorKind.NOT_FOUND), (503, ErrorKind.HTTP_STATUS)])
def test_non_success_status_raises(fake_session, fake_response, status: int, kind: ErrorKind) -> None:
    fake_session.routes[SOURCE.url] = fake_response(status_code=status, text="nope")
    with pytest.raises(SourceFetchError) as ei:
        HttpSourceFetcher(session=fake_session).fetch(SOURCE)
    assert ei.value.kind is kind
    assert ei.value.http_status == status
    assert ei.value.source == "demo"


def test_invalid_json_is_a_parse_error(fake_session, fake_response) -> None:
    fake_session.routes[SOURCE.url] = fake_response(text="<html>oops</html>")
    with pytest.raises(SourceFetchError) as ei:
        HttpSourceFetcher(session=fake_session).fetch(SOURCE)
    assert ei.value.kind is ErrorKind.PARSE


@pytest.mark.parametrize(
    "exc, kind",
    [
        (requests.ConnectTimeout("slow"), ErrorKind.TIMEOUT),
        (requests.ConnectionError("dns"), ErrorKind.NETWORK),
    ],
)
def test_transport_errors_are_wrapped(fake_session, exc: Exception, kind: ErrorKind) -> None:
    fake_session.routes[SOURCE.url] = exc
    with pytest.raises(SourceFetchError) as ei:
        HttpSourceFetcher(session=fake_session).fetch(SOURCE)
    assert ei.value.kind is kind


def test_deeply_nested_body_is_a_parse_error(fake_session, fake_response) -> None:
    fake_session.routes[SOURCE.url] = fake_response(text="[" * 200_000)
    with pytest.raises(SourceFetchError) as ei:
        HttpSourceFetcher(session=fake_session).fetch(SOURCE)
    assert ei.value.kind is ErrorKind.PARSE
