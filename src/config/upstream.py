"""Upstream model endpoint settings (env-resolved constants only)."""

from __future__ import annotations

import os


def _get_str(name: str, default: str) -> str:
    return (os.getenv(name) or "").strip() or default


def _get_float(name: str, default: float) -> float:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return float(default)
    try:
        return float(raw)
    except Exception:
        return float(default)


def _get_int(name: str, default: int) -> int:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return int(default)
    try:
        return int(raw)
    except Exception:
        return int(default)


UPSTREAM_LIVE_URL: str = _get_str(
    "UPSTREAM_LIVE_URL",
    "wss://generativelanguage.googleapis.com/ws/"
    "google.ai.generativelanguage.v1beta.GenerativeService.BidiGenerateContent",
)
UPSTREAM_LIVE_MODEL: str = _get_str("UPSTREAM_LIVE_MODEL", "models/gemini-2.5-flash-latest")

UPSTREAM_REST_URL: str = _get_str("UPSTREAM_REST_URL", "https://generativelanguage.googleapis.com/v1beta/models")
UPSTREAM_FALLBACK_MODEL: str = _get_str("UPSTREAM_FALLBACK_MODEL", "gemini-2.0-flash")

# Upper bound on the live handshake (open + setupComplete).
UPSTREAM_CONNECT_TIMEOUT_S: float = max(0.1, _get_float("UPSTREAM_CONNECT_TIMEOUT_S", 30.0))

# Outbound frame spelling: "snake" (setup/client_content/...) or "camel".
UPSTREAM_WIRE_CASE: str = _get_str("UPSTREAM_WIRE_CASE", "snake").lower()
if UPSTREAM_WIRE_CASE not in {"snake", "camel"}:
    UPSTREAM_WIRE_CASE = "snake"

UPSTREAM_AUDIO_MIME_TYPE: str = _get_str("UPSTREAM_AUDIO_MIME_TYPE", "audio/pcm;rate=16000")

FALLBACK_TEMPERATURE: float = _get_float("FALLBACK_TEMPERATURE", 0.7)
FALLBACK_MAX_OUTPUT_TOKENS: int = max(1, _get_int("FALLBACK_MAX_OUTPUT_TOKENS", 2048))
FALLBACK_REQUEST_TIMEOUT_S: float = max(1.0, _get_float("FALLBACK_REQUEST_TIMEOUT_S", 60.0))

# Model turn recorded when a tool follow-up produced no text.
FALLBACK_PLACEHOLDER_REPLY = "Done."

__all__ = [
    "FALLBACK_MAX_OUTPUT_TOKENS",
    "FALLBACK_PLACEHOLDER_REPLY",
    "FALLBACK_REQUEST_TIMEOUT_S",
    "FALLBACK_TEMPERATURE",
    "UPSTREAM_AUDIO_MIME_TYPE",
    "UPSTREAM_CONNECT_TIMEOUT_S",
    "UPSTREAM_FALLBACK_MODEL",
    "UPSTREAM_LIVE_MODEL",
    "UPSTREAM_LIVE_URL",
    "UPSTREAM_REST_URL",
    "UPSTREAM_WIRE_CASE",
]
