from __future__ import annotations

import json
import dataclasses
from typing import Any

import httpx
import pytest

from src.realtime.frames import ToolCall
from src.errors import TransportError
from src.tools.context import ToolContext
from src.realtime.scope import SessionScope
from src.tools.catalog import TOOL_CATALOG
from src.realtime.fallback import FallbackSession


class _RecordingEvents:
    def __init__(self) -> None:
        self.transcripts: list[tuple[str, bool]] = []
        self.tool_calls: list[ToolCall] = []
        self.errors: list[tuple[str, str | None]] = []

    async def on_setup_complete(self) -> None:
        return None

    async def on_transcript(self, text: str, is_partial: bool) -> None:
        self.transcripts.append((text, is_partial))

    async def on_audio(self, data: str) -> None:
        raise AssertionError("fallback never emits audio")

    async def on_tool_call(self, call: ToolCall) -> None:
        self.tool_calls.append(call)

    async def on_error(self, message: str, details: str | None = None) -> None:
        self.errors.append((message, details))

    async def on_close(self) -> None:
        return None


class _FakeDispatcher:
    catalog = TOOL_CATALOG

    async def execute(self, name: str, args: Any, context: ToolContext) -> dict[str, Any]:
        return {"success": True, "results": [{"name": "Amber Fort"}], "count": 1}


class _ScriptedUpstream:
    """Replies to generateContent requests from a fixed script."""

    def __init__(self, *replies: httpx.Response | Exception) -> None:
        self._replies = list(replies)
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        reply = self._replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply

    def bodies(self) -> list[dict[str, Any]]:
        return [json.loads(r.content) for r in self.requests]


def _text_reply(text: str) -> httpx.Response:
    return httpx.Response(200, json={"candidates": [{"content": {"role": "model", "parts": [{"text": text}]}}]})


def _call_reply(name: str, args: dict[str, Any]) -> httpx.Response:
    return httpx.Response(
        200,
        json={"candidates": [{"content": {"role": "model", "parts": [{"functionCall": {"name": name, "args": args}}]}}]},
    )


def _make_session(
    settings: Any,
    upstream: _ScriptedUpstream,
) -> tuple[FallbackSession, _RecordingEvents, SessionScope, httpx.AsyncClient]:
    client = httpx.AsyncClient(transport=httpx.MockTransport(upstream))
    events = _RecordingEvents()
    scope = SessionScope(label="fallback-test")
    session = FallbackSession(
        settings=settings,
        system_instruction="You are a travel assistant.",
        dispatcher=_FakeDispatcher(),
        context=ToolContext(),
        events=events,
        scope=scope,
        client=client,
    )
    return session, events, scope, client


@pytest.mark.asyncio
async def test_connect_requires_api_key(upstream_settings: Any) -> None:
    settings = dataclasses.replace(upstream_settings, api_key="")
    session, _, _, client = _make_session(settings, _ScriptedUpstream())
    with pytest.raises(TransportError):
        await session.connect()
    assert not session.connected
    await client.aclose()


@pytest.mark.asyncio
async def test_text_turn(upstream_settings: Any) -> None:
    upstream = _ScriptedUpstream(_text_reply("Jaipur is lovely in winter."))
    session, events, _, client = _make_session(upstream_settings, upstream)
    await session.connect()

    await session.send_text("When should I visit Jaipur?")

    assert events.transcripts == [("Jaipur is lovely in winter.", False)]
    request = upstream.requests[0]
    assert request.url.path == "/v1beta/models/rest-test:generateContent"
    assert request.url.params["key"] == "test-key"
    body = upstream.bodies()[0]
    assert body["contents"] == [{"role": "user", "parts": [{"text": "When should I visit Jaipur?"}]}]
    assert body["systemInstruction"] == {"parts": [{"text": "You are a travel assistant."}]}
    declarations = body["tools"][0]["functionDeclarations"]
    assert declarations[0]["parameters"]["type"] == "object"
    assert body["generationConfig"] == {"temperature": 0.7, "maxOutputTokens": 2048}
    assert [t.role for t in session.history.turns] == ["user", "model"]
    await client.aclose()


@pytest.mark.asyncio
async def test_function_call_turn(upstream_settings: Any) -> None:
    args = {"destination": "Jaipur", "category": "attraction"}
    upstream = _ScriptedUpstream(_call_reply("poi_search", args), _text_reply("Try Amber Fort."))
    session, events, _, client = _make_session(upstream_settings, upstream)
    await session.connect()

    await session.send_text("What should I see?")

    assert [(c.name, c.args) for c in events.tool_calls] == [("poi_search", args)]
    assert events.tool_calls[0].result == {"success": True, "results": [{"name": "Amber Fort"}], "count": 1}
    assert events.transcripts == [("Try Amber Fort.", False)]
    assert [t.role for t in session.history.turns] == ["user", "model", "function", "model"]

    follow_up = upstream.bodies()[1]["contents"]
    assert follow_up[1] == {"role": "model", "parts": [{"functionCall": {"name": "poi_search", "args": args}}]}
    assert follow_up[2] == {
        "role": "function",
        "parts": [
            {
                "functionResponse": {
                    "name": "poi_search",
                    "response": {"success": True, "results": [{"name": "Amber Fort"}], "count": 1},
                }
            }
        ],
    }
    await client.aclose()


@pytest.mark.asyncio
async def test_follow_up_without_text_gets_placeholder(upstream_settings: Any) -> None:
    upstream = _ScriptedUpstream(
        _call_reply("get_weather", {"destination": "Rome", "date": "2026-10-20"}),
        httpx.Response(200, json={"candidates": []}),
        _text_reply("Anything else?"),
    )
    session, events, _, client = _make_session(upstream_settings, upstream)
    await session.connect()

    await session.send_text("Weather tomorrow?")
    assert events.transcripts == []
    assert session.history.turns[-1].parts[0].text == "Done."

    # History stays valid for the next user turn.
    await session.send_text("Thanks")
    assert events.transcripts == [("Anything else?", False)]
    assert [t.role for t in session.history.turns] == ["user", "model", "function", "model", "user", "model"]
    await client.aclose()


@pytest.mark.asyncio
async def test_follow_up_failure_reports_once(upstream_settings: Any) -> None:
    upstream = _ScriptedUpstream(
        _call_reply("get_weather", {"destination": "Rome", "date": "2026-10-20"}),
        httpx.Response(503, json={"error": {"message": "overloaded"}}),
    )
    session, events, _, client = _make_session(upstream_settings, upstream)
    await session.connect()

    await session.send_text("Weather tomorrow?")

    assert len(events.tool_calls) == 1
    assert events.errors == [("Failed to get AI response", "overloaded")]
    assert [t.role for t in session.history.turns] == ["user", "model", "function", "model"]
    await client.aclose()


@pytest.mark.asyncio
async def test_http_and_network_errors(upstream_settings: Any) -> None:
    upstream = _ScriptedUpstream(
        httpx.Response(500, text="oops"),
        httpx.ConnectError("unreachable"),
    )
    session, events, _, client = _make_session(upstream_settings, upstream)
    await session.connect()

    await session.send_text("hello")
    await session.send_text("hello again")

    assert [message for message, _ in events.errors] == ["Failed to get AI response", "Failed to get AI response"]
    assert events.transcripts == []
    await client.aclose()


@pytest.mark.asyncio
async def test_audio_and_interrupt_are_ignored(upstream_settings: Any) -> None:
    upstream = _ScriptedUpstream()
    session, _, _, client = _make_session(upstream_settings, upstream)
    await session.connect()

    await session.send_audio("AAAA")
    await session.send_interrupt()

    assert upstream.requests == []
    await client.aclose()


@pytest.mark.asyncio
async def test_disconnect_clears_history(upstream_settings: Any) -> None:
    upstream = _ScriptedUpstream(_text_reply("Hi!"))
    session, events, scope, client = _make_session(upstream_settings, upstream)
    await session.connect()
    await session.send_text("hello")
    assert len(session.history) == 2

    await session.disconnect()
    assert scope.cancelled
    assert len(session.history) == 0

    await session.send_text("still there?")
    assert len(upstream.requests) == 1
    assert events.transcripts == [("Hi!", False)]
    await client.aclose()
