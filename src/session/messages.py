"""Bridge -> client message shapes."""

from __future__ import annotations

from typing import Any
from datetime import datetime, timezone

from src.config.websocket import WS_KEY_DATA, WS_KEY_TYPE

STATUS_CONNECTING = ("connecting", "Connecting to AI...")
STATUS_READY = ("ready", "AI assistant ready")
STATUS_READY_TEXT = ("ready", "AI assistant ready (text mode)")
STATUS_CLOSED = ("disconnected", "AI connection closed")
STATUS_STOPPED = ("disconnected", "AI session stopped")

ROLE_USER = "user"
ROLE_ASSISTANT = "assistant"


def build_message(msg_type: str, data: Any = None, **extra: Any) -> dict[str, Any]:
    message: dict[str, Any] = {WS_KEY_TYPE: msg_type}
    message.update(extra)
    if data is not None:
        message[WS_KEY_DATA] = data
    return message


def build_status(status: tuple[str, str]) -> dict[str, Any]:
    name, text = status
    return build_message("status", {"status": name, "message": text})


def build_transcript(text: str, *, is_partial: bool, role: str) -> dict[str, Any]:
    return build_message("transcript", {"role": role}, text=text, isPartial=is_partial)


def build_audio(data: str) -> dict[str, Any]:
    return build_message("audio", data)


def build_tool_call(name: str, args: dict[str, Any]) -> dict[str, Any]:
    return build_message("tool_call", {"name": name, "args": args})


def build_itinerary(itinerary: dict[str, Any]) -> dict[str, Any]:
    return build_message("itinerary", {"full_itinerary": itinerary})


def build_sources(tool: str, *, now: datetime | None = None) -> dict[str, Any]:
    stamp = (now or datetime.now(timezone.utc)).isoformat().replace("+00:00", "Z")
    return build_message("sources", {"tool": tool, "timestamp": stamp})


def build_error(message: str, *, code: str | None = None, details: str | None = None) -> dict[str, Any]:
    data: dict[str, Any] = {"message": message}
    if code:
        data["code"] = code
    if details:
        data["details"] = details
    return build_message("error", data)


__all__ = [
    "ROLE_ASSISTANT",
    "ROLE_USER",
    "STATUS_CLOSED",
    "STATUS_CONNECTING",
    "STATUS_READY",
    "STATUS_READY_TEXT",
    "STATUS_STOPPED",
    "build_audio",
    "build_error",
    "build_itinerary",
    "build_message",
    "build_sources",
    "build_status",
    "build_tool_call",
    "build_transcript",
]
