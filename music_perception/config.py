from __future__ import annotations

import json
import logging
from dataclasses import dataclass
import os
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

DEFAULT_SPOTIFY_API_URL = "https://api.spotify.com/v1"
DEFAULT_LRCLIB_URL = "https://lrclib.net/api"
DEFAULT_USER_AGENT = "MusicPerceptionMCP/2.0.0"


def _config_dir() -> Path:
    xdg = os.getenv("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "music-perception"
    return Path.home() / ".config" / "music-perception"


def _config_file() -> Path:
    return _config_dir() / "config.json"


@dataclass(frozen=True)
class AppConfig:
    config_dir: Path

    # Spotify
    spotify_access_token: str | None
    spotify_api_url: str

    # LRCLIB
    lrclib_base_url: str

    # Audio analysis
    hf_space_url: str | None

    # HTTP
    http_timeout_s: float
    user_agent: str


def _read_file_config(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        logger.warning("Ignoring unreadable config %s: %s", path, e)
        return {}
    return data if isinstance(data, dict) else {}


def load_config() -> AppConfig:
    # Priority: env → config.json → default
    config_dir = _config_dir()
    file_cfg = _read_file_config(config_dir / "config.json")

    def pick(env: str, key: str, default: Any = None) -> Any:
        value = os.getenv(env)
        if value:
            return value
        return file_cfg.get(key) or default

    return AppConfig(
        config_dir=config_dir,
        spotify_access_token=pick("MUSIC_PERCEPTION_SPOTIFY_TOKEN", "spotify_access_token"),
        spotify_api_url=pick("MUSIC_PERCEPTION_SPOTIFY_API_URL", "spotify_api_url", DEFAULT_SPOTIFY_API_URL),
        lrclib_base_url=pick("MUSIC_PERCEPTION_LRCLIB_URL", "lrclib_base_url", DEFAULT_LRCLIB_URL),
        hf_space_url=pick("MUSIC_PERCEPTION_HF_SPACE_URL", "hf_space_url"),
        http_timeout_s=float(pick("MUSIC_PERCEPTION_HTTP_TIMEOUT", "http_timeout_s", 10.0)),
        user_agent=pick("MUSIC_PERCEPTION_USER_AGENT", "user_agent", DEFAULT_USER_AGENT),
    )


def save_config_token(token: str) -> Path:
    cfg_path = _config_file()
    cfg_path.parent.mkdir(parents=True, exist_ok=True)
    data = _read_file_config(cfg_path)
    data["spotify_access_token"] = token
    cfg_path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")
    return cfg_path
