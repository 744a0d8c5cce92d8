"""Session lifecycle enums."""

from __future__ import annotations

from enum import Enum


class SessionPhase(str, Enum):
    IDLE = "idle"
    CONNECTING = "connecting"
    READY = "ready"
    DISCONNECTED = "disconnected"
    ERROR = "error"


class SessionMode(str, Enum):
    LIVE = "live"
    FALLBACK = "fallback"


__all__ = ["SessionMode", "SessionPhase"]
