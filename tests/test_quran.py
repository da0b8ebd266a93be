#!filepath: tests/test_quran.py
from __future__ import annotations

import pytest

from azkar_app.errors import ErrorKind, QuranApiError
from azkar_app.quran import (
    QuranClient,
    absolutize_audio_url,
    display_arabic_name,
    surah_audio_url,
)

BASE = "https://api.example.invalid/v4"


def test_surah_audio_url_pads_number() -> None:
    assert surah_audio_url(1) == "https://server8.mp3quran.net/afs/001.mp3"
    assert surah_audio_url(114, base_url="https://a.b/c/") == "https://a.b/c/114.mp3"
    with pytest.raises(ValueError):
        surah_audio_url(115)


def test_display_arabic_name() -> None:
    assert (
        display_arabic_name(
            {"name": "Al-Fatihah", "translated_name": {"name": "الفاتحة", "language_name": "arabic"}}
        )
        == "الفاتحة"
    )
    assert display_arabic_name({"reciter_name": "Saad Al-Ghamdi"}) == "Saad Al-Ghamdi"
    assert display_arabic_name({}) == "بدون اسم"


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("https://cdn/x.mp3", "https://cdn/x.mp3"),
        ("//mirrors/x.mp3", "https://mirrors/x.mp3"),
        ("Alafasy/mp3/001001.mp3", "https://verses.quran.com/Alafasy/mp3/001001.mp3"),
        ("", ""),
    ],
)
def test_absolutize_audio_url(raw: str, expected: str) -> None:
    assert absolutize_audio_url(raw) == expected


def test_chapters_are_memoized(fake_session, fake_response) -> None:
    url = f"{BASE}/chapters?language=ar"
    fake_session.routes[url] = fake_response(payload={"chapters": [{"id": 1}]})
    client = QuranClient(base_url=BASE, session=fake_session)
    assert client.chapters() == [{"id": 1}]
    assert client.chapters() == [{"id": 1}]
    assert fake_session.calls == [url]


def test_verse_audio_and_tafsir(fake_session, fake_response) -> None:
    fake_session.routes[f"{BASE}/audio_files?recitation_id=7&verse_key=1%3A1"] = fake_response(
        payload={"audio_files": [{"url": "Alafasy/mp3/001001.mp3"}]}
    )
    fake_session.routes[f"{BASE}/tafsirs/169/by_ayah/2%3A255"] = fake_response(
        payload={"tafsir": {"text": "تفسير"}}
    )
    client = QuranClient(base_url=BASE, session=fake_session)
    assert client.reciter_preview_url(7) == "https://verses.quran.com/Alafasy/mp3/001001.mp3"
    assert client.tafsir_for_ayah("2:255") == "تفسير"


def test_http_error_raises(fake_session) -> None:
    client = QuranClient(base_url=BASE, session=fake_session)
    with pytest.raises(QuranApiError) as ei:
        client.verses_by_chapter(1)
    assert ei.value.kind is ErrorKind.NOT_FOUND


def test_page_verses_tafsir_list_and_chapter_audio(fake_session, fake_response) -> None:
    fake_session.routes[
        f"{BASE}/verses/by_page/1?fields=text_uthmani,text_uthmani_simple&words=false"
    ] = fake_response(payload={"verses": [{"verse_key": "1:1"}, {"verse_key": "1:2"}]})
    fake_session.routes[f"{BASE}/resources/tafsirs?language=ar"] = fake_response(
        payload={"tafsirs": [{"id": 169, "name": "Ibn Kathir"}]}
    )
    fake_session.routes[f"{BASE}/chapter_recitations/7/1"] = fake_response(
        payload={"audio_file": {"audio_url": "https://cdn/001.mp3"}}
    )
    client = QuranClient(base_url=BASE, session=fake_session)
    assert [v["verse_key"] for v in client.verses_by_page(1)] == ["1:1", "1:2"]
    assert client.tafsir_resources() == [{"id": 169, "name": "Ibn Kathir"}]
    assert client.chapter_audio(7, 1) == {"audio_url": "https://cdn/001.mp3"}


def test_chapter_audio_missing_file_is_empty(fake_session, fake_response) -> None:
    fake_session.routes[f"{BASE}/chapter_recitations/7/2"] = fake_response(payload={})
    assert QuranClient(base_url=BASE, session=fake_session).chapter_audio(7, 2) == {}
