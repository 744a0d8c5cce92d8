"""HTTP server bind configuration (env-resolved constants only)."""

from __future__ import annotations

import os

HOST = (os.getenv("HOST") or "0.0.0.0").strip()

_PORT_RAW = (os.getenv("PORT") or "").strip()
try:
    PORT: int = int(_PORT_RAW) if _PORT_RAW else 3001
except Exception:
    PORT = 3001

__all__ = ["HOST", "PORT"]
