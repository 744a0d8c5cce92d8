"""Client message parsing/validation."""

from __future__ import annotations

import json
from dataclasses import dataclass

from src.errors import ClientProtocolError
from src.config.websocket import (
    WS_KEY_DATA,
    WS_KEY_TYPE,
    WS_TYPE_TEXT,
    WS_KEY_ACTION,
    WS_TYPE_AUDIO,
    WS_TYPE_CONTROL,
    WS_CONTROL_ACTIONS,
)


@dataclass(frozen=True, slots=True)
class ClientMessage:
    type: str
    action: str | None = None
    data: str | None = None


def parse_client_message(raw: str) -> ClientMessage:
    try:
        msg = json.loads(raw)
    except Exception as exc:
        raise ClientProtocolError(f"invalid JSON: {exc}") from exc

    if not isinstance(msg, dict):
        raise ClientProtocolError("message must be a JSON object")

    msg_type = msg.get(WS_KEY_TYPE)
    if not isinstance(msg_type, str) or not msg_type.strip():
        raise ClientProtocolError("message missing non-empty 'type'")
    msg_type = msg_type.strip()

    if msg_type == WS_TYPE_CONTROL:
        action = msg.get(WS_KEY_ACTION)
        if not isinstance(action, str) or action.strip() not in WS_CONTROL_ACTIONS:
            allowed = ", ".join(sorted(WS_CONTROL_ACTIONS))
            raise ClientProtocolError(f"control message 'action' must be one of: {allowed}")
        return ClientMessage(type=msg_type, action=action.strip())

    if msg_type in (WS_TYPE_AUDIO, WS_TYPE_TEXT):
        data = msg.get(WS_KEY_DATA)
        if not isinstance(data, str) or not data.strip():
            raise ClientProtocolError(f"{msg_type} message missing non-empty 'data'")
        # Audio is opaque base64; text is user input and keeps its spacing.
        return ClientMessage(type=msg_type, data=data.strip() if msg_type == WS_TYPE_AUDIO else data)

    raise ClientProtocolError(f"message type '{msg_type}' is not supported")


__all__ = ["ClientMessage", "parse_client_message"]
