from __future__ import annotations

import json

import pytest

from src.errors import ClientProtocolError
from src.handlers.websocket.parser import parse_client_message


def test_parse_control_message() -> None:
    msg = parse_client_message(json.dumps({"type": "control", "action": " reset "}))
    assert msg.type == "control"
    assert msg.action == "reset"
    assert msg.data is None


def test_parse_audio_strips_data() -> None:
    msg = parse_client_message(json.dumps({"type": "audio", "data": " AAAA\n"}))
    assert msg.type == "audio"
    assert msg.data == "AAAA"


def test_parse_text_keeps_spacing() -> None:
    msg = parse_client_message(json.dumps({"type": "text", "data": "  plan a trip  "}))
    assert msg.data == "  plan a trip  "


@pytest.mark.parametrize(
    "raw",
    [
        "not json",
        json.dumps([]),
        json.dumps({"data": "x"}),
        json.dumps({"type": "  "}),
        json.dumps({"type": "control"}),
        json.dumps({"type": "control", "action": "pause"}),
        json.dumps({"type": "audio"}),
        json.dumps({"type": "text", "data": "   "}),
        json.dumps({"type": "text", "data": 5}),
        json.dumps({"type": "video", "data": "x"}),
    ],
)
def test_parse_client_message_invalid(raw: str) -> None:
    with pytest.raises(ClientProtocolError):
        parse_client_message(raw)


def test_client_protocol_error_is_value_error() -> None:
    with pytest.raises(ValueError):
        parse_client_message("{")
