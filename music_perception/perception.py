from __future__ import annotations

import logging
from typing import Any, Callable

from music_perception.lrc.export import line_to_dict, track_to_dicts
from music_perception.lrc.parse import build_track
from music_perception.sources.types import LookupStatus, LyricsLookup, TrackKey
from music_perception.spotify.types import PlaybackSnapshot
from music_perception.sync.locator import find_current_line

logger = logging.getLogger(__name__)

SnapshotProvider = Callable[[], "PlaybackSnapshot | None"]
LyricsLookupFn = Callable[[TrackKey], LyricsLookup]


def _safe_lookup(lookup: LyricsLookupFn, track: TrackKey) -> LyricsLookup:
    try:
        return lookup(track)
    except Exception as e:  # noqa: BLE001
        logger.warning("Lyrics lookup raised for %s: %s", track.display, e)
        return LyricsLookup.failed(str(e))


def perceive(now_playing: SnapshotProvider, lookup: LyricsLookupFn) -> dict[str, Any]:
    """
    What is playing now plus which lyric line applies right now.

    Playback snapshot gates the lyrics lookup: with nothing playing the result
    is exactly {"playing": False}. Lyric fields are attached only for
    LookupStatus.SYNCED; every other outcome yields playback fields only.
    """
    snapshot = now_playing()
    if snapshot is None:
        return {"playing": False}

    result: dict[str, Any] = {
        "playing": True,
        "is_playing": snapshot.is_playing,
        "track": snapshot.title,
        "artist": snapshot.artist_display,
        "album": snapshot.album,
        "progress_ms": snapshot.progress_ms,
        "duration_ms": snapshot.duration_ms,
    }

    key = TrackKey(artist=snapshot.artist, title=snapshot.title)
    found = _safe_lookup(lookup, key)

    if found.status is LookupStatus.SYNCED:
        synced = found.record.synced_lyrics if found.record is not None else None
        if synced:
            pos = find_current_line(build_track(synced), snapshot.progress_ms / 1000)
            result["current_line"] = line_to_dict(pos.current)
            result["upcoming_lines"] = track_to_dicts(list(pos.upcoming))
    elif found.status is LookupStatus.FAILED:
        logger.debug("Perceiving %s without lyrics: %s", key.display, found.error)
    elif found.status in (LookupStatus.NOT_FOUND, LookupStatus.INSTRUMENTAL, LookupStatus.PLAIN_ONLY):
        logger.debug("No synced lyrics for %s (%s)", key.display, found.status.value)
    else:
        raise AssertionError(f"Unhandled lookup status: {found.status}")

    return result
