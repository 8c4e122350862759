from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


@dataclass(frozen=True, slots=True)
class TrackKey:
    artist: str
    title: str
    album: str = ""

    @property
    def display(self) -> str:
        if self.artist and self.title:
            return f"{self.artist} - {self.title}"
        return self.title or self.artist or "Unknown track"


@dataclass(frozen=True, slots=True)
class LyricsRecord:
    """One LRCLIB record."""
    id: int | None
    track_name: str
    artist_name: str
    album_name: str
    duration: float | None
    instrumental: bool
    plain_lyrics: str | None = None
    synced_lyrics: str | None = None

    @property
    def has_synced_lyrics(self) -> bool:
        return bool(self.synced_lyrics)

    @property
    def has_plain_lyrics(self) -> bool:
        return bool(self.plain_lyrics)

    @classmethod
    def from_json(cls, item: dict[str, Any]) -> "LyricsRecord":
        duration = item.get("duration")
        return cls(
            id=item.get("id") if isinstance(item.get("id"), int) else None,
            track_name=_text(item.get("trackName")) or "",
            artist_name=_text(item.get("artistName")) or "",
            album_name=_text(item.get("albumName")) or "",
            duration=float(duration) if isinstance(duration, (int, float)) else None,
            instrumental=bool(item.get("instrumental", False)),
            plain_lyrics=_text(item.get("plainLyrics")),
            synced_lyrics=_text(item.get("syncedLyrics")),
        )


def _text(value: Any) -> str | None:
    # LRCLIB sends null for missing lyrics; anything non-string counts as missing
    return value if isinstance(value, str) and value else None


class LookupStatus(Enum):
    NOT_FOUND = "not_found"
    FAILED = "failed"
    INSTRUMENTAL = "instrumental"
    PLAIN_ONLY = "plain_only"
    SYNCED = "synced"


@dataclass(frozen=True, slots=True)
class LyricsLookup:
    status: LookupStatus
    record: LyricsRecord | None = None
    error: str | None = None

    @classmethod
    def not_found(cls) -> "LyricsLookup":
        return cls(LookupStatus.NOT_FOUND)

    @classmethod
    def failed(cls, error: str) -> "LyricsLookup":
        return cls(LookupStatus.FAILED, error=error)

    @classmethod
    def from_record(cls, record: LyricsRecord) -> "LyricsLookup":
        # instrumental wins over whatever lyrics payload the record carries
        if record.instrumental:
            return cls(LookupStatus.INSTRUMENTAL, record=record)
        if record.has_synced_lyrics:
            return cls(LookupStatus.SYNCED, record=record)
        if record.has_plain_lyrics:
            return cls(LookupStatus.PLAIN_ONLY, record=record)
        return cls(LookupStatus.NOT_FOUND, record=record)
