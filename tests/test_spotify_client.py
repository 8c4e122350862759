from __future__ import annotations

from unittest.mock import Mock

import pytest
import requests

from music_perception.spotify.client import SpotifyClient
from music_perception.spotify.errors import NotAuthenticated, SpotifyApiError
from tests.mocks.http_mock import MockResponse

NOW_PLAYING = {
    "is_playing": True,
    "progress_ms": 61_000,
    "item": {
        "name": "Song",
        "uri": "spotify:track:abc",
        "duration_ms": 200_000,
        "album": {"name": "Album"},
        "artists": [{"name": "First"}, {"name": "Second"}],
    },
}


def _client(response=None, token: str | None = "tok") -> tuple[SpotifyClient, Mock]:
    session = Mock(spec=requests.Session)
    session.request.return_value = response if response is not None else MockResponse(204)
    client = SpotifyClient(access_token=token, api_url="https://spotify.test/v1", timeout_s=5.0, session=session)
    return client, session


class TestCurrentlyPlaying:
    def test_snapshot(self):
        client, session = _client(MockResponse(200, NOW_PLAYING))
        snap = client.currently_playing()

        assert snap is not None
        assert snap.title == "Song"
        assert snap.artists == ("First", "Second")
        assert snap.artist == "First"
        assert snap.artist_display == "First, Second"
        assert snap.album == "Album"
        assert snap.progress_ms == 61_000
        assert snap.duration_ms == 200_000
        assert snap.is_playing is True

        args, kwargs = session.request.call_args
        assert args == ("GET", "https://spotify.test/v1/me/player/currently-playing")
        assert kwargs["headers"]["Authorization"] == "Bearer tok"

    def test_204_is_nothing_playing(self):
        client, _ = _client(MockResponse(204))
        assert client.currently_playing() is None

    def test_missing_item_is_nothing_playing(self):
        client, _ = _client(MockResponse(200, {"is_playing": False, "item": None}))
        assert client.currently_playing() is None

    def test_api_error(self):
        client, _ = _client(MockResponse(401, text="expired"))
        with pytest.raises(SpotifyApiError) as ei:
            client.currently_playing()
        assert ei.value.status_code == 401
        assert "expired" in str(ei.value)

    def test_no_token(self):
        client, session = _client(token=None)
        with pytest.raises(NotAuthenticated):
            client.currently_playing()
        session.request.assert_not_called()


class TestCommands:
    def test_play_uri(self):
        client, session = _client()
        client.play("spotify:track:x")
        args, kwargs = session.request.call_args
        assert args == ("PUT", "https://spotify.test/v1/me/player/play")
        assert kwargs["json"] == {"uris": ["spotify:track:x"]}

    def test_resume_without_body(self):
        client, session = _client()
        client.play()
        assert session.request.call_args.kwargs["json"] is None

    @pytest.mark.parametrize(
        "call, method, path",
        [
            (lambda c: c.pause(), "PUT", "/me/player/pause"),
            (lambda c: c.next(), "POST", "/me/player/next"),
            (lambda c: c.previous(), "POST", "/me/player/previous"),
        ],
    )
    def test_simple_commands(self, call, method, path):
        client, session = _client()
        call(client)
        assert session.request.call_args.args == (method, f"https://spotify.test/v1{path}")

    def test_volume(self):
        client, session = _client()
        client.set_volume(55)
        assert session.request.call_args.kwargs["params"] == {"volume_percent": 55}
        with pytest.raises(ValueError):
            client.set_volume(101)

    def test_shuffle_and_repeat(self):
        client, session = _client()
        client.set_shuffle(True)
        assert session.request.call_args.kwargs["params"] == {"state": "true"}
        client.set_repeat("context")
        assert session.request.call_args.kwargs["params"] == {"state": "context"}
        with pytest.raises(ValueError):
            client.set_repeat("forever")

    def test_queue_and_transfer(self):
        client, session = _client()
        client.add_to_queue("spotify:track:q")
        assert session.request.call_args.kwargs["params"] == {"uri": "spotify:track:q"}
        client.transfer("dev1")
        assert session.request.call_args.kwargs["json"] == {"device_ids": ["dev1"]}


class TestSearchAndDevices:
    def test_search_tracks(self):
        payload = {
            "tracks": {
                "items": [
                    {"name": "A", "uri": "spotify:track:a", "artists": [{"name": "X"}, {"name": "Y"}]},
                    None,
                ]
            }
        }
        client, session = _client(MockResponse(200, payload))
        results = client.search("query", limit=500)
        assert results == [{"name": "A", "uri": "spotify:track:a", "artist": "X, Y"}]
        assert session.request.call_args.kwargs["params"]["limit"] == 50

    def test_search_artists_have_no_artist_field(self):
        payload = {"artists": {"items": [{"name": "X", "uri": "spotify:artist:x"}]}}
        client, _ = _client(MockResponse(200, payload))
        assert client.search("x", type="artist") == [{"name": "X", "uri": "spotify:artist:x"}]

    def test_search_rejects_unknown_type(self):
        client, _ = _client()
        with pytest.raises(ValueError):
            client.search("x", type="podcast")

    def test_devices(self):
        payload = {"devices": [{"id": "d1", "name": "Desk", "type": "Computer", "is_active": True, "volume_percent": 40}]}
        client, _ = _client(MockResponse(200, payload))
        (dev,) = client.devices()
        assert dev.id == "d1"
        assert dev.is_active
        assert dev.volume == 40


class TestMalformedPayloads:
    @pytest.mark.parametrize(
        "payload",
        [
            {"is_playing": True, "item": "spotify:track:abc"},
            {**NOW_PLAYING, "item": {**NOW_PLAYING["item"], "artists": "First"}},
            {**NOW_PLAYING, "item": {**NOW_PLAYING["item"], "artists": ["First"]}},
            {**NOW_PLAYING, "item": {**NOW_PLAYING["item"], "album": "Album"}},
            {**NOW_PLAYING, "progress_ms": "soon"},
            ["not", "an", "object"],
        ],
    )
    def test_currently_playing(self, payload):
        client, _ = _client(MockResponse(200, payload))
        with pytest.raises(SpotifyApiError) as exc:
            client.currently_playing()
        assert exc.value.status_code == 200

    def test_invalid_json(self):
        client, _ = _client(MockResponse(200, text="<html>"))
        with pytest.raises(SpotifyApiError, match="not valid JSON"):
            client.currently_playing()

    @pytest.mark.parametrize(
        "payload",
        [
            ["tracks"],
            {"tracks": {"items": "none"}},
            {"tracks": {"items": ["spotify:track:a"]}},
            {"tracks": {"items": [{"name": "A", "uri": "u", "artists": "X"}]}},
        ],
    )
    def test_search(self, payload):
        client, _ = _client(MockResponse(200, payload))
        with pytest.raises(SpotifyApiError, match="/search"):
            client.search("query")

    @pytest.mark.parametrize("payload", [["d1"], {"devices": "d1"}, {"devices": ["d1"]}])
    def test_devices(self, payload):
        client, _ = _client(MockResponse(200, payload))
        with pytest.raises(SpotifyApiError, match="devices"):
            client.devices()
