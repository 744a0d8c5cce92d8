"""Tool collaborator endpoints (env-resolved constants only)."""

from __future__ import annotations

import os


def _get_float(name: str, default: float) -> float:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return float(default)
    try:
        return float(raw)
    except Exception:
        return float(default)


NOMINATIM_URL = (os.getenv("NOMINATIM_URL") or "https://nominatim.openstreetmap.org/search").strip()
OVERPASS_URL = (os.getenv("OVERPASS_URL") or "https://overpass-api.de/api/interpreter").strip()
OPEN_METEO_URL = (os.getenv("OPEN_METEO_URL") or "https://api.open-meteo.com/v1/forecast").strip()
WIKIVOYAGE_URL = (os.getenv("WIKIVOYAGE_URL") or "https://en.wikivoyage.org/w/api.php").strip()
WIKIPEDIA_URL = (os.getenv("WIKIPEDIA_URL") or "https://en.wikipedia.org/w/api.php").strip()

# Nominatim rejects requests without an identifying agent.
HTTP_USER_AGENT = (os.getenv("HTTP_USER_AGENT") or "travel-live-bridge/0.1").strip()
HTTP_TIMEOUT_S: float = max(1.0, _get_float("HTTP_TIMEOUT_S", 15.0))

POI_DEFAULT_LIMIT = 5
CONTENT_MAX_CHARS = 2000

__all__ = [
    "CONTENT_MAX_CHARS",
    "HTTP_TIMEOUT_S",
    "HTTP_USER_AGENT",
    "NOMINATIM_URL",
    "OPEN_METEO_URL",
    "OVERPASS_URL",
    "POI_DEFAULT_LIMIT",
    "WIKIPEDIA_URL",
    "WIKIVOYAGE_URL",
]
