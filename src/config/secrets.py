"""Secrets configuration."""

from __future__ import annotations

import os


def get_google_api_key() -> str:
    return (os.getenv("GOOGLE_API_KEY") or "").strip()


__all__ = ["get_google_api_key"]
