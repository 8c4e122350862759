from __future__ import annotations

from dataclasses import dataclass
import functools
import logging
from typing import Any, Callable, Literal

import requests
from mcp.server.fastmcp import FastMCP

from music_perception.analysis import AnalysisError, AudioAnalysisClient
from music_perception.config import AppConfig
from music_perception.lrc.export import track_to_dicts
from music_perception.lrc.parse import build_track
from music_perception.perception import perceive
from music_perception.sources.errors import LyricsError
from music_perception.sources.lrclib import LrcLibClient
from music_perception.sources.service import LyricsService
from music_perception.spotify.client import SpotifyClient
from music_perception.spotify.errors import SpotifyError

logger = logging.getLogger(__name__)

SERVICE_NAME = "music-perception"
VERSION = "2.0.0"

_TOOL_ERRORS = (SpotifyError, LyricsError, AnalysisError, requests.RequestException, ValueError)


@dataclass(frozen=True, slots=True)
class ToolContext:
    spotify: SpotifyClient
    lyrics: LyricsService
    analysis: AudioAnalysisClient


def build_context(cfg: AppConfig) -> ToolContext:
    lrclib = LrcLibClient(
        base_url=cfg.lrclib_base_url,
        timeout_s=cfg.http_timeout_s,
        user_agent=cfg.user_agent,
    )
    return ToolContext(
        spotify=SpotifyClient(
            access_token=cfg.spotify_access_token,
            api_url=cfg.spotify_api_url,
            timeout_s=cfg.http_timeout_s,
        ),
        lyrics=LyricsService(lrclib),
        analysis=AudioAnalysisClient(space_url=cfg.hf_space_url, timeout_s=cfg.http_timeout_s),
    )


def _error(message: str) -> dict[str, Any]:
    return {"error": True, "message": message}


def tool_errors(fn: Callable[..., Any]) -> Callable[..., Any]:
    """Turn upstream failures into an error payload instead of a protocol error."""

    @functools.wraps(fn)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return fn(*args, **kwargs)
        except _TOOL_ERRORS as e:
            logger.warning("%s failed: %s", fn.__name__, e)
            return _error(str(e) or e.__class__.__name__)

    return wrapper


def create_server(cfg: AppConfig, ctx: ToolContext | None = None) -> FastMCP:
    ctx = ctx or build_context(cfg)
    mcp = FastMCP(
        SERVICE_NAME,
        instructions=(
            "Spotify playback control, LRCLIB lyrics and real-time perception of "
            "what is playing now, including the current synced lyric line."
        ),
    )

    # ---- Spotify playback ----

    @mcp.tool()
    @tool_errors
    def spotify_now_playing() -> dict[str, Any]:
        """Get the currently playing Spotify track."""
        snap = ctx.spotify.currently_playing()
        if snap is None:
            return {"playing": False, "message": "Nothing playing"}
        return {
            "track": snap.title,
            "artist": snap.artist_display,
            "album": snap.album,
            "progress_ms": snap.progress_ms,
            "duration_ms": snap.duration_ms,
            "is_playing": snap.is_playing,
            "uri": snap.uri,
        }

    @mcp.tool()
    @tool_errors
    def spotify_play(uri: str | None = None) -> dict[str, Any]:
        """Start or resume playback, optionally of a specific Spotify URI."""
        ctx.spotify.play(uri)
        return {"message": "Playback started"}

    @mcp.tool()
    @tool_errors
    def spotify_pause() -> dict[str, Any]:
        """Pause playback."""
        ctx.spotify.pause()
        return {"message": "Paused"}

    @mcp.tool()
    @tool_errors
    def spotify_next() -> dict[str, Any]:
        """Skip to the next track."""
        ctx.spotify.next()
        return {"message": "Skipped to next"}

    @mcp.tool()
    @tool_errors
    def spotify_previous() -> dict[str, Any]:
        """Go back to the previous track."""
        ctx.spotify.previous()
        return {"message": "Previous track"}

    @mcp.tool()
    @tool_errors
    def spotify_volume(volume: int) -> dict[str, Any]:
        """Set volume level 0-100."""
        ctx.spotify.set_volume(volume)
        return {"message": f"Volume set to {volume}%"}

    @mcp.tool()
    @tool_errors
    def spotify_shuffle(state: bool) -> dict[str, Any]:
        """Turn shuffle on or off."""
        ctx.spotify.set_shuffle(state)
        return {"message": f"Shuffle {'on' if state else 'off'}"}

    @mcp.tool()
    @tool_errors
    def spotify_repeat(state: Literal["track", "context", "off"]) -> dict[str, Any]:
        """Set repeat mode."""
        ctx.spotify.set_repeat(state)
        return {"message": f"Repeat: {state}"}

    @mcp.tool()
    @tool_errors
    def spotify_search(
        query: str,
        type: Literal["track", "album", "artist", "playlist"] = "track",
        limit: int = 10,
    ) -> dict[str, Any]:
        """Search the Spotify catalog. Limit is capped at 50."""
        return {"type": type, "results": ctx.spotify.search(query, type=type, limit=limit)}

    @mcp.tool()
    @tool_errors
    def spotify_queue(uri: str) -> dict[str, Any]:
        """Add a Spotify URI to the playback queue."""
        ctx.spotify.add_to_queue(uri)
        return {"message": "Added to queue"}

    @mcp.tool()
    @tool_errors
    def spotify_devices() -> dict[str, Any]:
        """List available playback devices."""
        return {
            "devices": [
                {"id": d.id, "name": d.name, "type": d.type, "is_active": d.is_active, "volume": d.volume}
                for d in ctx.spotify.devices()
            ]
        }

    @mcp.tool()
    @tool_errors
    def spotify_transfer(device_id: str) -> dict[str, Any]:
        """Transfer playback to another device."""
        ctx.spotify.transfer(device_id)
        return {"message": "Playback transferred"}

    # ---- Lyrics ----

    @mcp.tool()
    @tool_errors
    def get_lyrics(track_name: str, artist_name: str) -> dict[str, Any]:
        """Get lyrics from LRCLIB; synced lyrics come back as timed lines."""
        record = ctx.lyrics.client.get(track_name, artist_name)
        if record is None:
            return {"found": False}
        if record.synced_lyrics:
            lyrics: Any = track_to_dicts(build_track(record.synced_lyrics))
        else:
            lyrics = record.plain_lyrics
        return {
            "found": True,
            "track": record.track_name,
            "artist": record.artist_name,
            "album": record.album_name,
            "instrumental": record.instrumental,
            "synced": record.has_synced_lyrics,
            "lyrics": lyrics,
        }

    @mcp.tool()
    @tool_errors
    def search_lyrics(query: str) -> dict[str, Any]:
        """Search LRCLIB. Returns at most 10 matches."""
        results = ctx.lyrics.client.search(query)
        if not results:
            return {"found": False}
        return {
            "found": True,
            "count": len(results),
            "results": [
                {
                    "track": r.track_name,
                    "artist": r.artist_name,
                    "album": r.album_name,
                    "synced": r.has_synced_lyrics,
                }
                for r in results[:10]
            ],
        }

    # ---- Perception ----

    @mcp.tool()
    @tool_errors
    def perceive_now_playing() -> dict[str, Any]:
        """What is playing right now, with the current and upcoming lyric lines."""
        return perceive(ctx.spotify.currently_playing, ctx.lyrics.lookup)

    @mcp.tool()
    @tool_errors
    def analyze_audio(youtube_url: str) -> Any:
        """Run audio-feature analysis for a YouTube URL."""
        return ctx.analysis.analyze(youtube_url)

    # ---- Utility ----

    @mcp.tool()
    def ping() -> dict[str, Any]:
        """Health check."""
        return {
            "status": "alive",
            "service": f"{SERVICE_NAME}-mcp",
            "version": VERSION,
            "capabilities": ["spotify", "lyrics", "audio_analysis"],
        }

    return mcp
