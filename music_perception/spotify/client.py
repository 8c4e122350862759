from __future__ import annotations

import logging
from typing import Any

import requests

from .errors import NotAuthenticated, SpotifyApiError
from .types import Device, PlaybackSnapshot

logger = logging.getLogger(__name__)

SEARCH_TYPES = ("track", "album", "artist", "playlist")
REPEAT_STATES = ("track", "context", "off")


class SpotifyClient:
    """
    Thin wrapper over the Spotify Web API player/search endpoints.

    The access token is taken as-is from config; obtaining and refreshing it
    happens outside this process.
    """

    def __init__(
        self,
        *,
        access_token: str | None,
        api_url: str,
        timeout_s: float,
        session: requests.Session | None = None,
    ):
        self.access_token = access_token
        self.api_url = api_url.rstrip("/")
        self.timeout_s = timeout_s
        self._session = session or requests.Session()

    def _request(
        self,
        method: str,
        endpoint: str,
        *,
        params: dict[str, Any] | None = None,
        json_body: Any = None,
    ) -> Any:
        if not self.access_token:
            raise NotAuthenticated(
                "Spotify not authenticated. Set MUSIC_PERCEPTION_SPOTIFY_TOKEN or run `music-perception set-token`."
            )
        r = self._session.request(
            method,
            f"{self.api_url}{endpoint}",
            params=params,
            json=json_body,
            headers={"Authorization": f"Bearer {self.access_token}"},
            timeout=self.timeout_s,
        )
        if r.status_code == 204:
            return None
        if not r.ok:
            logger.warning("spotify %s %s -> HTTP %s", method, endpoint, r.status_code)
            raise SpotifyApiError(r.status_code, r.text)
        if not r.content:
            return None
        try:
            return r.json()
        except ValueError as e:
            raise SpotifyApiError(r.status_code, "response is not valid JSON") from e

    @staticmethod
    def _unexpected(endpoint: str) -> SpotifyApiError:
        return SpotifyApiError(200, f"unexpected payload from {endpoint}")

    def currently_playing(self) -> PlaybackSnapshot | None:
        data = self._request("GET", "/me/player/currently-playing")
        if not data:
            return None
        if not isinstance(data, dict):
            raise self._unexpected("/me/player/currently-playing")
        if not data.get("item"):
            return None
        return PlaybackSnapshot.from_json(data)

    def play(self, uri: str | None = None) -> None:
        body = {"uris": [uri]} if uri else None
        self._request("PUT", "/me/player/play", json_body=body)

    def pause(self) -> None:
        self._request("PUT", "/me/player/pause")

    def next(self) -> None:
        self._request("POST", "/me/player/next")

    def previous(self) -> None:
        self._request("POST", "/me/player/previous")

    def set_volume(self, volume: int) -> None:
        if not 0 <= volume <= 100:
            raise ValueError("volume must be between 0 and 100")
        self._request("PUT", "/me/player/volume", params={"volume_percent": volume})

    def set_shuffle(self, state: bool) -> None:
        self._request("PUT", "/me/player/shuffle", params={"state": "true" if state else "false"})

    def set_repeat(self, state: str) -> None:
        if state not in REPEAT_STATES:
            raise ValueError(f"repeat state must be one of: {', '.join(REPEAT_STATES)}")
        self._request("PUT", "/me/player/repeat", params={"state": state})

    def search(self, query: str, type: str = "track", limit: int = 10) -> list[dict[str, Any]]:
        if type not in SEARCH_TYPES:
            raise ValueError(f"search type must be one of: {', '.join(SEARCH_TYPES)}")
        data = self._request(
            "GET",
            "/search",
            params={"q": query, "type": type, "limit": max(1, min(limit, 50))},
        ) or {}
        if not isinstance(data, dict):
            raise self._unexpected("/search")
        page = data.get(type + "s")
        items = page.get("items") if isinstance(page, dict) else None
        if items is None:
            items = []
        if not isinstance(items, list):
            raise self._unexpected("/search")

        out: list[dict[str, Any]] = []
        for item in items:
            if not item:
                # Spotify occasionally returns null entries for playlists
                continue
            if not isinstance(item, dict):
                raise self._unexpected("/search")
            entry: dict[str, Any] = {"name": item.get("name"), "uri": item.get("uri")}
            if type in ("track", "album"):
                artists = item.get("artists") or []
                if not isinstance(artists, list) or not all(isinstance(a, dict) for a in artists):
                    raise self._unexpected("/search")
                entry["artist"] = ", ".join(str(a.get("name") or "") for a in artists)
            out.append(entry)
        return out

    def add_to_queue(self, uri: str) -> None:
        self._request("POST", "/me/player/queue", params={"uri": uri})

    def devices(self) -> list[Device]:
        data = self._request("GET", "/me/player/devices") or {}
        if not isinstance(data, dict):
            raise self._unexpected("/me/player/devices")
        devices = data.get("devices")
        if devices is None:
            devices = []
        if not isinstance(devices, list) or not all(isinstance(d, dict) for d in devices):
            raise self._unexpected("/me/player/devices")
        return [
            Device(
                id=d.get("id"),
                name=d.get("name", ""),
                type=d.get("type", ""),
                is_active=bool(d.get("is_active", False)),
                volume=d.get("volume_percent"),
            )
            for d in devices
        ]

    def transfer(self, device_id: str) -> None:
        self._request("PUT", "/me/player", json_body={"device_ids": [device_id]})
