#!filepath: src/azkar_app/quran.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional
from urllib.parse import quote

import requests

from azkar_app.errors import ErrorKind, FetchErrorDetails, QuranApiError, kind_from_status
from azkar_app.utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_BASE_URL = "https://api.quran.com/api/v4"
VERSE_AUDIO_HOST = "https://verses.quran.com"
SURAH_AUDIO_BASE_URL = "https://server8.mp3quran.net/afs"
DEFAULT_TAFSIR_ID = 169


def display_arabic_name(item: Mapping[str, Any]) -> str:
    """Pick the Arabic display name of a chapter or reciter.

    Args:
        item: Chapter or recitation object from the API.

    Returns:
        str: Arabic translated name when present, else the raw name.
    """
    tn = item.get("translated_name")
    if isinstance(tn, Mapping) and "arab" in str(tn.get("language_name") or "").lower():
        return str(tn.get("name") or "")
    return str(item.get("name") or item.get("reciter_name") or "بدون اسم")


def surah_audio_url(number: int, base_url: str = SURAH_AUDIO_BASE_URL) -> str:
    """Return the whole-surah recitation URL.

    Args:
        number: Surah number, 1 to 114.
        base_url: Audio server base.

    Returns:
        str: MP3 URL.

    Raises:
        ValueError: If the number is out of range.
    """
    n = int(number)
    if not 1 <= n <= 114:
        raise ValueError(f"surah number out of range: {number}")
    return f"{base_url.rstrip('/')}/{n:03d}.mp3"


def absolutize_audio_url(raw: str) -> str:
    if not raw:
        return ""
    if raw.startswith("http"):
        return raw
    if raw.startswith("//"):
        return f"https:{raw}"
    return f"{VERSE_AUDIO_HOST}/{raw.lstrip('/')}"


@dataclass(slots=True)
class QuranClient:
    """Thin client for the quran.com v4 API with a per-instance response memo.

    Args:
        base_url: API base URL.
        timeout_seconds: Request timeout.
        session: Optional requests session.
    """

    base_url: str = DEFAULT_BASE_URL
    timeout_seconds: int = 20
    session: Optional[requests.Session] = None
    _memo: Dict[str, Any] = field(default_factory=dict)

    def _get_json(self, path: str) -> Any:
        url = f"{self.base_url.rstrip('/')}/{path.lstrip('/')}"
        if url in self._memo:
            return self._memo[url]

        if self.session is None:
            self.session = requests.Session()

        try:
            r = self.session.get(url, timeout=int(self.timeout_seconds))
        except requests.RequestException as ex:
            logger.error(f"Quran API request failed, url={url}, error={ex}")
            raise QuranApiError(
                FetchErrorDetails(kind=ErrorKind.NETWORK, url=url, message=str(ex))
            ) from ex

        status = int(r.status_code)
        if not 200 <= status < 300:
            logger.error(f"Quran API error, status={status}, url={url}")
            raise QuranApiError(
                FetchErrorDetails(
                    kind=kind_from_status(status),
                    url=url,
                    status_code=status,
                    message=f"HTTP {status} for {url}",
                )
            )

        try:
            data = r.json()
        except (ValueError, RecursionError) as ex:
            raise QuranApiError(
                FetchErrorDetails(
                    kind=ErrorKind.PARSE, url=url, status_code=status, message=str(ex)
                )
            ) from ex

        self._memo[url] = data
        return data

    def chapters(self) -> List[Dict[str, Any]]:
        return list(self._get_json("chapters?language=ar").get("chapters") or [])

    def recitations(self) -> List[Dict[str, Any]]:
        return list(
            self._get_json("resources/recitations?language=ar").get("recitations") or []
        )

    def tafsir_resources(self) -> List[Dict[str, Any]]:
        return list(self._get_json("resources/tafsirs?language=ar").get("tafsirs") or [])

    def verses_by_page(self, page: int) -> List[Dict[str, Any]]:
        data = self._get_json(
            f"verses/by_page/{int(page)}?fields=text_uthmani,text_uthmani_simple&words=false"
        )
        return list(data.get("verses") or [])

    def verses_by_chapter(self, chapter_id: int) -> List[Dict[str, Any]]:
        """Return every verse of a chapter.

        One page of 300 covers the longest chapter (286 verses).

        Args:
            chapter_id: Chapter number.

        Returns:
            List of verse objects.
        """
        data = self._get_json(
            f"verses/by_chapter/{int(chapter_id)}"
            "?fields=text_uthmani,text_uthmani_simple&words=false&per_page=300"
        )
        return list(data.get("verses") or [])

    def tafsir_for_ayah(
        self, verse_key: str, resource_id: int = DEFAULT_TAFSIR_ID
    ) -> str:
        data = self._get_json(
            f"tafsirs/{int(resource_id)}/by_ayah/{quote(verse_key, safe='')}"
        )
        tafsir = data.get("tafsir") if isinstance(data, Mapping) else None
        return str((tafsir or {}).get("text") or "")

    def audio_url_for_verse(self, recitation_id: int, verse_key: str) -> str:
        """Resolve the audio URL of one verse for a recitation.

        Args:
            recitation_id: Recitation id.
            verse_key: Verse key such as "1:1".

        Returns:
            str: Absolute URL, or empty when the API has no file.
        """
        data = self._get_json(
            f"audio_files?recitation_id={int(recitation_id)}&verse_key={quote(verse_key, safe='')}"
        )
        files = data.get("audio_files") or []
        first = files[0] if files and isinstance(files[0], Mapping) else {}
        return absolutize_audio_url(str(first.get("audio_url") or first.get("url") or ""))

    def reciter_preview_url(self, recitation_id: int) -> str:
        return self.audio_url_for_verse(recitation_id, "1:1")

    def chapter_audio(self, recitation_id: int, chapter_id: int) -> Dict[str, Any]:
        data = self._get_json(f"chapter_recitations/{int(recitation_id)}/{int(chapter_id)}")
        return dict(data.get("audio_file") or {})
