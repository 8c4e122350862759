import json

from music_perception.lrc.export import export_json, line_to_dict, track_to_dicts
from music_perception.lrc.model import TimedLine


def test_line_to_dict():
    assert line_to_dict(TimedLine(1.5, "a")) == {"time": 1.5, "text": "a"}
    assert line_to_dict(None) is None


def test_export_json_basic():
    track = (TimedLine(0.0, "a"), TimedLine(1.25, "б"))
    assert track_to_dicts(track) == [{"time": 0.0, "text": "a"}, {"time": 1.25, "text": "б"}]
    out = export_json(track)
    assert "б" in out
    assert json.loads(out)[1]["time"] == 1.25
