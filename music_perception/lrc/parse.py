from __future__ import annotations

from dataclasses import dataclass
import re

from .model import LyricTrack, TimedLine

_LINE_RE = re.compile(r"^\[([0-9]{2}):([0-9]{2})\.([0-9]{2})\]\s*(.*)$")  # [mm:ss.cc] text


@dataclass(frozen=True, slots=True)
class TrackParseStats:
    lines_total: int
    lines_ignored: int
    lines_parsed: int


def parse_timed_line(line: str) -> TimedLine | None:
    """
    Parse one `[mm:ss.cc] text` line.

    Minutes/seconds are not range-checked: `[75:99.00]` is 75*60 + 99 seconds.
    Returns None for blank or malformed lines.
    """
    if not line.strip():
        return None
    m = _LINE_RE.match(line)
    if not m:
        return None
    minutes = int(m.group(1))
    seconds = int(m.group(2))
    centis = int(m.group(3))
    return TimedLine(offset_s=minutes * 60 + seconds + centis / 100, text=m.group(4))


def build_track(synced: str) -> LyricTrack:
    """
    Parse every non-blank line of a synced-lyrics blob.

    Result keeps input order; malformed lines are skipped.
    """
    out: list[TimedLine] = []
    for raw in synced.splitlines():
        line = parse_timed_line(raw)
        if line is not None:
            out.append(line)
    return tuple(out)


def build_track_with_stats(synced: str) -> tuple[LyricTrack, TrackParseStats]:
    # thin wrapper for CLI diagnostics
    total = 0
    ignored = 0
    out: list[TimedLine] = []
    for raw in synced.splitlines():
        total += 1
        line = parse_timed_line(raw)
        if line is None:
            ignored += 1
            continue
        out.append(line)

    stats = TrackParseStats(lines_total=total, lines_ignored=ignored, lines_parsed=len(out))
    return tuple(out), stats
