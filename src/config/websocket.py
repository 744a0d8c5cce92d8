"""WebSocket protocol configuration and constants."""

from __future__ import annotations

import os

WS_ENDPOINT_PATH = (os.getenv("WS_ENDPOINT_PATH") or "/").strip() or "/"

# Message keys
WS_KEY_TYPE = "type"
WS_KEY_DATA = "data"
WS_KEY_ACTION = "action"

# Client -> bridge message types
WS_TYPE_CONTROL = "control"
WS_TYPE_AUDIO = "audio"
WS_TYPE_TEXT = "text"

WS_CONTROL_ACTIONS = frozenset({"start", "stop", "reset", "interrupt"})

# Close codes
WS_CLOSE_BUSY_CODE = 4002

# Errors (data.code values)
WS_ERROR_SERVER_AT_CAPACITY = "server_at_capacity"
WS_ERROR_INVALID_MESSAGE = "invalid_message"
WS_ERROR_SESSION_NOT_READY = "session_not_ready"
WS_ERROR_UPSTREAM_UNAVAILABLE = "upstream_unavailable"
WS_ERROR_UPSTREAM = "upstream_error"

__all__ = [
    "WS_ENDPOINT_PATH",
    "WS_KEY_TYPE",
    "WS_KEY_DATA",
    "WS_KEY_ACTION",
    "WS_TYPE_CONTROL",
    "WS_TYPE_AUDIO",
    "WS_TYPE_TEXT",
    "WS_CONTROL_ACTIONS",
    "WS_CLOSE_BUSY_CODE",
    "WS_ERROR_SERVER_AT_CAPACITY",
    "WS_ERROR_INVALID_MESSAGE",
    "WS_ERROR_SESSION_NOT_READY",
    "WS_ERROR_UPSTREAM_UNAVAILABLE",
    "WS_ERROR_UPSTREAM",
]
