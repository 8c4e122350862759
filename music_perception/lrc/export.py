from __future__ import annotations

import json
from typing import Any

from .model import LyricTrack, TimedLine


def line_to_dict(line: TimedLine | None) -> dict[str, Any] | None:
    if line is None:
        return None
    return {"time": line.offset_s, "text": line.text}


def track_to_dicts(lines: LyricTrack | list[TimedLine]) -> list[dict[str, Any]]:
    return [{"time": ln.offset_s, "text": ln.text} for ln in lines]


def export_json(track: LyricTrack) -> str:
    return json.dumps(track_to_dicts(track), ensure_ascii=False, indent=2)
