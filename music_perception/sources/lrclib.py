from __future__ import annotations

import logging

import requests

from .errors import LyricsLookupError
from .types import LyricsRecord

logger = logging.getLogger(__name__)


class LrcLibClient:
    name = "lrclib"

    def __init__(
        self,
        *,
        base_url: str,
        timeout_s: float,
        user_agent: str,
        session: requests.Session | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout_s = timeout_s
        self._session = session or requests.Session()
        self._session.headers.update({"User-Agent": user_agent})

    def _get(self, endpoint: str, params: dict[str, str | None]):
        # empty values are not sent at all
        query = {k: v for k, v in params.items() if v}
        try:
            r = self._session.get(f"{self.base_url}{endpoint}", params=query, timeout=self.timeout_s)
        except requests.RequestException as e:
            logger.warning("lrclib %s failed: %s", endpoint, e)
            raise LyricsLookupError(f"LRCLIB request failed: {e}") from e

        if r.status_code == 404:
            return None
        if not r.ok:
            logger.warning("lrclib %s returned HTTP %s", endpoint, r.status_code)
            raise LyricsLookupError(f"LRCLIB error: {r.status_code}")
        try:
            return r.json()
        except ValueError as e:
            raise LyricsLookupError("LRCLIB returned invalid JSON") from e

    def get(self, track_name: str, artist_name: str, album_name: str | None = None) -> LyricsRecord | None:
        """
        Exact lookup via /get. None means LRCLIB has no such track (HTTP 404).
        """
        data = self._get(
            "/get",
            {"track_name": track_name, "artist_name": artist_name, "album_name": album_name},
        )
        if data is None:
            return None
        if not isinstance(data, dict):
            raise LyricsLookupError("LRCLIB /get returned an unexpected payload")
        return LyricsRecord.from_json(data)

    def search(self, q: str) -> list[LyricsRecord]:
        if not q.strip():
            raise ValueError("Search query must not be empty")
        data = self._get("/search", {"q": q})
        if data is None:
            return []
        if not isinstance(data, list) or not all(isinstance(item, dict) for item in data):
            raise LyricsLookupError("LRCLIB /search returned an unexpected payload")
        return [LyricsRecord.from_json(item) for item in data]
