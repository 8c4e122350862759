from __future__ import annotations

import logging
import os


def setup_logging(debug: bool) -> None:
    level = logging.DEBUG if debug else logging.INFO
    # Allow env override for e.g. MCP host launches
    level_name = os.getenv("MUSIC_PERCEPTION_LOG_LEVEL")
    if level_name:
        level = getattr(logging, level_name.upper(), level)

    # stderr only: stdout carries the stdio MCP transport
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
