from __future__ import annotations

import json
from pathlib import Path

import requests
import typer

from music_perception.config import load_config, save_config_token
from music_perception.logging_setup import setup_logging
from music_perception.lrc.parse import build_track, build_track_with_stats
from music_perception.perception import perceive
from music_perception.server import build_context, create_server
from music_perception.sources.errors import LyricsError
from music_perception.spotify.errors import SpotifyError


app = typer.Typer(no_args_is_help=True, add_completion=False)

TRANSPORTS = ("stdio", "sse", "streamable-http")


@app.command()
def serve(
    transport: str = typer.Option("stdio", "--transport", help="stdio|sse|streamable-http"),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
):
    """
    Run the MCP tool server.
    """
    if transport not in TRANSPORTS:
        raise typer.BadParameter(f"transport must be one of: {', '.join(TRANSPORTS)}")
    setup_logging(debug)
    cfg = load_config()
    create_server(cfg).run(transport=transport)


def _fmt_ms(ms: int) -> str:
    m, s = divmod(ms // 1000, 60)
    return f"{m}:{s:02d}"


def _fmt_offset(offset_s: float) -> str:
    m, s = divmod(offset_s, 60)
    return f"{int(m):02d}:{s:05.2f}"


@app.command()
def now(
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
):
    """Print what is playing now with the current lyric line."""
    setup_logging(debug)
    ctx = build_context(load_config())
    try:
        result = perceive(ctx.spotify.currently_playing, ctx.lyrics.lookup)
    except (SpotifyError, requests.RequestException) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    if json_output:
        typer.echo(json.dumps(result, indent=2, ensure_ascii=False))
        return

    if not result["playing"]:
        typer.echo("Nothing playing")
        return

    state = "▶" if result["is_playing"] else "⏸"
    typer.echo(f"{state} {result['artist']} - {result['track']}")
    if result["album"]:
        typer.echo(f"   Album: {result['album']}")
    typer.echo(f"   {_fmt_ms(result['progress_ms'])} / {_fmt_ms(result['duration_ms'])}")

    if "current_line" not in result:
        typer.echo("   (no synced lyrics)")
        return
    current = result["current_line"]
    typer.echo()
    typer.echo(f"> {current['text']}" if current else ">")
    for line in result["upcoming_lines"]:
        typer.echo(f"  {_fmt_offset(line['time'])}  {line['text']}")


@app.command()
def lyrics(track: str, artist: str):
    """Print lyrics for TRACK by ARTIST (synced lines when available)."""
    ctx = build_context(load_config())
    try:
        record = ctx.lyrics.client.get(track, artist)
    except LyricsError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    if record is None:
        typer.echo("No lyrics found")
        raise typer.Exit(code=1)
    if record.instrumental:
        typer.echo("[instrumental]")
        return
    if record.synced_lyrics:
        for line in build_track(record.synced_lyrics):
            typer.echo(f"{_fmt_offset(line.offset_s)}  {line.text}")
    elif record.plain_lyrics:
        typer.echo(record.plain_lyrics.rstrip())


@app.command()
def search(
    q: str = typer.Argument(..., help="Search keyword in any field"),
    limit: int = typer.Option(10, "--limit", "-n", help="Maximum results to show"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    Search for lyrics in lrclib database.
    """
    if not q.strip():
        typer.echo("Error: search query must not be empty", err=True)
        raise typer.Exit(code=1)

    ctx = build_context(load_config())
    try:
        results = ctx.lyrics.search(q, limit=limit)
    except (LyricsError, ValueError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    if not results:
        typer.echo("No results found")
        return

    if json_output:
        typer.echo(
            json.dumps(
                [
                    {
                        "id": r.id,
                        "track_name": r.track_name,
                        "artist_name": r.artist_name,
                        "album_name": r.album_name,
                        "duration": r.duration,
                        "instrumental": r.instrumental,
                        "has_synced_lyrics": r.has_synced_lyrics,
                        "has_plain_lyrics": r.has_plain_lyrics,
                    }
                    for r in results
                ],
                indent=2,
                ensure_ascii=False,
            )
        )
    else:
        for i, r in enumerate(results, 1):
            synced = "✓" if r.has_synced_lyrics else "✗"
            plain = "✓" if r.has_plain_lyrics else "✗"
            duration_str = f"{int(r.duration) // 60}:{int(r.duration) % 60:02d}" if r.duration else "?"
            inst_str = " [instrumental]" if r.instrumental else ""
            typer.echo(f"{i}. {r.artist_name} - {r.track_name} ({duration_str}){inst_str}")
            if r.album_name:
                typer.echo(f"   Album: {r.album_name}")
            typer.echo(f"   Synced: {synced}  Plain: {plain}")
            if r.id:
                typer.echo(f"   ID: {r.id}")
            typer.echo()


@app.command("set-token")
def set_token(token: str):
    """Store a Spotify access token in config.json."""
    path = save_config_token(token)
    typer.echo(f"Token saved: {path}")


@app.command()
def parse(lrc_path: Path):
    """Parse synced lyrics and print stats."""
    text = lrc_path.read_text(encoding="utf-8")
    _track, stats = build_track_with_stats(text)
    typer.echo(f"lines_total={stats.lines_total}")
    typer.echo(f"lines_ignored={stats.lines_ignored}")
    typer.echo(f"lines_parsed={stats.lines_parsed}")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
