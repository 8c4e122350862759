from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class TimedLine:
    offset_s: float
    text: str


# Source order, assumed non-decreasing by offset_s (never re-sorted).
LyricTrack = tuple[TimedLine, ...]
