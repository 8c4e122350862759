from __future__ import annotations

import logging

from .errors import LyricsLookupError
from .lrclib import LrcLibClient
from .types import LyricsLookup, TrackKey

logger = logging.getLogger(__name__)


def lookup_lyrics(client: LrcLibClient, track: TrackKey) -> LyricsLookup:
    """
    Classify an LRCLIB lookup for `track`.

    Upstream failures come back as LookupStatus.FAILED; nothing is retried.
    """
    try:
        record = client.get(track.title, track.artist)
    except LyricsLookupError as e:
        logger.warning("Lyrics lookup failed for %s: %s", track.display, e)
        return LyricsLookup.failed(str(e))

    if record is None:
        logger.debug("No lyrics on lrclib for %s", track.display)
        return LyricsLookup.not_found()
    return LyricsLookup.from_record(record)


class LyricsService:
    def __init__(self, client: LrcLibClient):
        self.client = client

    def lookup(self, track: TrackKey) -> LyricsLookup:
        return lookup_lyrics(self.client, track)

    def search(self, q: str, limit: int = 10):
        return self.client.search(q)[:limit]
