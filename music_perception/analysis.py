from __future__ import annotations

import logging
from typing import Any

import requests

logger = logging.getLogger(__name__)


class AnalysisError(RuntimeError):
    pass


class AnalysisNotConfigured(AnalysisError):
    pass


class AudioAnalysisClient:
    """Opaque call into the audio-feature analysis Space."""

    def __init__(self, *, space_url: str | None, timeout_s: float, session: requests.Session | None = None):
        self.space_url = space_url.rstrip("/") if space_url else None
        self.timeout_s = timeout_s
        self._session = session or requests.Session()

    def analyze(self, youtube_url: str) -> Any:
        if not self.space_url:
            raise AnalysisNotConfigured("HF_SPACE_URL not configured")

        r = self._session.post(
            f"{self.space_url}/api/predict",
            json={"data": [None, youtube_url]},
            timeout=self.timeout_s,
        )
        if not r.ok:
            logger.warning("analysis space returned HTTP %s", r.status_code)
            raise AnalysisError(f"HF Space error: {r.status_code}")

        result = r.json()
        data = result.get("data") if isinstance(result, dict) else None
        if data:
            return data[0]
        return result
