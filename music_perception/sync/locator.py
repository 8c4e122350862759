from __future__ import annotations

from dataclasses import dataclass

from music_perception.lrc.model import LyricTrack, TimedLine

LOOKAHEAD_S = 30.0
MAX_UPCOMING = 5


@dataclass(frozen=True, slots=True)
class LinePosition:
    current: TimedLine | None
    upcoming: tuple[TimedLine, ...]


def find_current_line(track: LyricTrack, position_s: float) -> LinePosition:
    """
    Single forward pass: O(n), no index kept between calls.

    `current` is reassigned every time a line starts at or before the position
    and its successor (if any) starts after it, so the last such line wins.
    On a sorted track this is the closest preceding line. Unsorted input is
    scanned as-is.

    `upcoming` holds the first MAX_UPCOMING lines in track order that start
    within (position_s, position_s + LOOKAHEAD_S].
    """
    current: TimedLine | None = None
    upcoming: list[TimedLine] = []
    horizon = position_s + LOOKAHEAD_S

    for i, line in enumerate(track):
        nxt = track[i + 1] if i + 1 < len(track) else None
        if line.offset_s <= position_s and (nxt is None or nxt.offset_s > position_s):
            current = line
        if position_s < line.offset_s <= horizon:
            upcoming.append(line)

    return LinePosition(current=current, upcoming=tuple(upcoming[:MAX_UPCOMING]))
