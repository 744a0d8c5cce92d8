"""Logging configuration (env-resolved constants only)."""

from __future__ import annotations

import os

LOG_LEVEL = (os.getenv("LOG_LEVEL") or "INFO").strip().upper()
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

# httpx and websockets log every request/frame at INFO/DEBUG.
SHOW_CLIENT_LOGS = (os.getenv("SHOW_CLIENT_LOGS") or "").strip().lower() in {"1", "true", "yes"}

__all__ = ["LOG_FORMAT", "LOG_LEVEL", "SHOW_CLIENT_LOGS"]
