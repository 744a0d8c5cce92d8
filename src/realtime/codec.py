"""Wire codecs for upstream frames.

Outbound frames are rendered by a ``WireCodec`` in one spelling (snake_case or
camelCase). Only the protocol's own structural keys are respelled; tool
argument and response payloads are opaque and pass through untouched, so a
parameter named ``day_number`` stays ``day_number`` in both spellings.

Inbound decoding accepts either spelling for every structural key.
"""

from __future__ import annotations

from typing import Any
from dataclasses import dataclass

import orjson

from src.errors import TransportError, ProtocolDecodeError

from .frames import (
    Part,
    Turn,
    InlineData,
    SetupFrame,
    ServerFrame,
    FunctionCall,
    OutboundFrame,
    FunctionResponse,
    ToolResponseFrame,
    ClientContentFrame,
    RealtimeInputFrame,
)


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(word.capitalize() for word in rest)


@dataclass(frozen=True, slots=True)
class WireCodec:
    case: str

    def key(self, name: str) -> str:
        """Spell a structural key (given in snake_case) for this codec."""
        return _camel(name) if self.case == "camel" else name

    def encode_part(self, part: Part) -> dict[str, Any]:
        if part.text is not None:
            return {"text": part.text}
        if part.inline_data is not None:
            return {
                self.key("inline_data"): {
                    self.key("mime_type"): part.inline_data.mime_type,
                    "data": part.inline_data.data,
                }
            }
        if part.function_call is not None:
            call: dict[str, Any] = {"name": part.function_call.name, "args": part.function_call.args}
            if part.function_call.id:
                call["id"] = part.function_call.id
            return {self.key("function_call"): call}
        if part.function_response is not None:
            return {self.key("function_response"): self.encode_function_response(part.function_response)}
        return {}

    def encode_turn(self, turn: Turn) -> dict[str, Any]:
        return {"role": turn.role, "parts": [self.encode_part(p) for p in turn.parts]}

    def encode_function_response(self, response: FunctionResponse) -> dict[str, Any]:
        body: dict[str, Any] = {"name": response.name, "response": response.response}
        if response.id:
            body["id"] = response.id
        return body

    def encode(self, frame: OutboundFrame) -> dict[str, Any]:
        if isinstance(frame, SetupFrame):
            return {
                "setup": {
                    "model": frame.model,
                    self.key("system_instruction"): {"parts": [{"text": frame.system_instruction}]},
                    "tools": [{self.key("function_declarations"): list(frame.function_declarations)}],
                }
            }
        if isinstance(frame, ClientContentFrame):
            content: dict[str, Any] = {self.key("turn_complete"): frame.turn_complete}
            if frame.turns:
                content["turns"] = [self.encode_turn(t) for t in frame.turns]
            return {self.key("client_content"): content}
        if isinstance(frame, RealtimeInputFrame):
            chunk = {self.key("mime_type"): frame.mime_type, "data": frame.data}
            return {self.key("realtime_input"): {self.key("media_chunks"): [chunk]}}
        if isinstance(frame, ToolResponseFrame):
            responses = [self.encode_function_response(r) for r in frame.responses]
            return {self.key("tool_response"): {self.key("function_responses"): responses}}
        raise TypeError(f"unsupported frame: {type(frame).__name__}")

    def dumps(self, frame: OutboundFrame) -> str:
        return orjson.dumps(self.encode(frame)).decode("utf-8")


SNAKE_CODEC = WireCodec(case="snake")
CAMEL_CODEC = WireCodec(case="camel")


def codec_for(case: str) -> WireCodec:
    return CAMEL_CODEC if case == "camel" else SNAKE_CODEC


def _pick(obj: dict[str, Any], snake_name: str) -> Any:
    if snake_name in obj:
        return obj[snake_name]
    return obj.get(_camel(snake_name))


def _as_object(value: Any, what: str) -> dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ProtocolDecodeError(f"{what} must be an object")
    return value


def decode_part(raw: Any) -> Part:
    part = _as_object(raw, "part")
    text = part.get("text")
    if text is not None and not isinstance(text, str):
        raise ProtocolDecodeError("part.text must be a string")

    inline = _pick(part, "inline_data")
    inline_data = None
    if inline is not None:
        inline = _as_object(inline, "inlineData")
        mime_type = _pick(inline, "mime_type")
        data = inline.get("data")
        if not isinstance(mime_type, str) or not isinstance(data, str):
            raise ProtocolDecodeError("inlineData requires string mimeType and data")
        inline_data = InlineData(mime_type=mime_type, data=data)

    call = _pick(part, "function_call")
    function_call = decode_function_call(call) if call is not None else None
    return Part(text=text, inline_data=inline_data, function_call=function_call)


def decode_function_call(raw: Any) -> FunctionCall:
    call = _as_object(raw, "functionCall")
    name = call.get("name")
    if not isinstance(name, str) or not name:
        raise ProtocolDecodeError("functionCall.name must be a non-empty string")
    args = call.get("args")
    if args is None:
        args = {}
    if not isinstance(args, dict):
        raise ProtocolDecodeError("functionCall.args must be an object")
    call_id = call.get("id")
    return FunctionCall(name=name, args=args, id=str(call_id) if call_id is not None else None)


def _loads(raw: str | bytes, what: str) -> dict[str, Any]:
    try:
        data = orjson.loads(raw)
    except orjson.JSONDecodeError as exc:
        raise ProtocolDecodeError(f"invalid JSON in {what}: {exc}") from exc
    if not isinstance(data, dict):
        raise ProtocolDecodeError(f"{what} must be a JSON object")
    return data


def decode_server_frame(raw: str | bytes) -> ServerFrame:
    """Decode one live upstream frame; unknown keys are ignored."""
    data = _loads(raw, "upstream frame")

    content = _as_object(_pick(data, "server_content"), "serverContent")
    model_turn = _as_object(_pick(content, "model_turn"), "modelTurn")
    raw_parts = model_turn.get("parts") or []
    if not isinstance(raw_parts, list):
        raise ProtocolDecodeError("modelTurn.parts must be a list")

    # Some upstream revisions report completion beside serverContent rather than inside it.
    turn_complete = bool(_pick(content, "turn_complete") or _pick(data, "turn_complete"))

    tool_call = _as_object(_pick(data, "tool_call"), "toolCall")
    raw_calls = _pick(tool_call, "function_calls") or []
    if not isinstance(raw_calls, list):
        raise ProtocolDecodeError("toolCall.functionCalls must be a list")

    return ServerFrame(
        setup_complete=_pick(data, "setup_complete") is not None,
        model_parts=tuple(decode_part(p) for p in raw_parts),
        turn_complete=turn_complete,
        function_calls=tuple(decode_function_call(c) for c in raw_calls),
    )


def decode_generate_response(status_code: int, body: bytes | str) -> tuple[Part, ...]:
    """Parts of the first candidate of a generateContent response."""
    try:
        data = _loads(body, "generateContent response")
    except ProtocolDecodeError:
        if status_code >= 400:
            raise TransportError(f"upstream returned HTTP {status_code}") from None
        raise

    error = data.get("error")
    if error is not None:
        message = error.get("message") if isinstance(error, dict) else str(error)
        raise TransportError(message or f"upstream returned HTTP {status_code}")
    if status_code >= 400:
        raise TransportError(f"upstream returned HTTP {status_code}")

    candidates = data.get("candidates") or []
    if not isinstance(candidates, list):
        raise ProtocolDecodeError("candidates must be a list")
    if not candidates:
        return ()
    content = _as_object(_as_object(candidates[0], "candidate").get("content"), "content")
    raw_parts = content.get("parts") or []
    if not isinstance(raw_parts, list):
        raise ProtocolDecodeError("content.parts must be a list")
    return tuple(decode_part(p) for p in raw_parts)


__all__ = [
    "CAMEL_CODEC",
    "SNAKE_CODEC",
    "WireCodec",
    "codec_for",
    "decode_function_call",
    "decode_generate_response",
    "decode_part",
    "decode_server_frame",
]
