from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .errors import SpotifyApiError


@dataclass(frozen=True, slots=True)
class PlaybackSnapshot:
    title: str
    artists: tuple[str, ...]
    album: str
    progress_ms: int
    duration_ms: int
    is_playing: bool
    uri: str = ""

    @property
    def artist(self) -> str:
        """Primary artist, used as the lyrics lookup key."""
        return self.artists[0] if self.artists else ""

    @property
    def artist_display(self) -> str:
        return ", ".join(self.artists)

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "PlaybackSnapshot":
        item = data.get("item") if isinstance(data, dict) else None
        artists = item.get("artists") if isinstance(item, dict) else None
        album = item.get("album") if isinstance(item, dict) else None
        if (
            not isinstance(item, dict)
            or not isinstance(artists, list)
            or not all(isinstance(a, dict) for a in artists)
            or not isinstance(album, (dict, type(None)))
        ):
            raise SpotifyApiError(200, "unexpected currently-playing payload")
        try:
            progress_ms = int(data.get("progress_ms") or 0)
            duration_ms = int(item.get("duration_ms") or 0)
        except (TypeError, ValueError) as e:
            raise SpotifyApiError(200, "unexpected currently-playing payload") from e
        return cls(
            title=item.get("name") or "",
            artists=tuple(str(a.get("name") or "") for a in artists),
            album=(album or {}).get("name") or "",
            progress_ms=progress_ms,
            duration_ms=duration_ms,
            is_playing=bool(data.get("is_playing", False)),
            uri=item.get("uri") or "",
        )


@dataclass(frozen=True, slots=True)
class Device:
    id: str | None
    name: str
    type: str
    is_active: bool
    volume: int | None
