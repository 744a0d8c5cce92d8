"""Request/response fallback used when the live endpoint is unreachable.

Text-only: every user turn replays the whole conversation to the REST
``generateContent`` endpoint. Audio and interrupts are not supported and are
ignored.
"""

from __future__ import annotations

import logging
from typing import Any
from collections.abc import Callable, Awaitable

import httpx
import orjson

from src.tools.context import ToolContext
from src.session.state import SessionMode
from src.state.settings import UpstreamSettings
from src.tools.dispatcher import ToolDispatcher
from src.config.upstream import FALLBACK_PLACEHOLDER_REPLY
from src.tools.catalog import fallback_declarations
from src.errors import DispatchError, TransportError, ProtocolDecodeError

from .scope import SessionScope
from .events import SessionEvents
from .history import ConversationHistory
from .codec import CAMEL_CODEC, decode_generate_response
from .frames import Part, Turn, ToolCall, FunctionCall, FunctionResponse

logger = logging.getLogger(__name__)


class FallbackSession:
    mode = SessionMode.FALLBACK

    def __init__(
        self,
        *,
        settings: UpstreamSettings,
        system_instruction: str,
        dispatcher: ToolDispatcher,
        context: ToolContext,
        events: SessionEvents,
        scope: SessionScope,
        client: httpx.AsyncClient,
    ) -> None:
        self._settings = settings
        self._system_instruction = system_instruction
        self._dispatcher = dispatcher
        self._context = context
        self._events = events
        self._scope = scope
        self._client = client
        self._history = ConversationHistory()
        self._connected = False

    @property
    def connected(self) -> bool:
        return self._connected and not self._scope.cancelled

    @property
    def history(self) -> ConversationHistory:
        return self._history

    @property
    def scope(self) -> SessionScope:
        return self._scope

    async def connect(self) -> None:
        """No transport to open; only checks that requests can be authorised."""
        if self._scope.cancelled:
            raise TransportError("fallback session was torn down before connecting")
        if not self._settings.api_key:
            raise TransportError("fallback requires GOOGLE_API_KEY")
        self._connected = True
        logger.info("fallback session ready model=%s", self._settings.fallback_model)

    def _request_body(self) -> dict[str, Any]:
        return {
            "contents": [CAMEL_CODEC.encode_turn(turn) for turn in self._history.turns],
            "systemInstruction": {"parts": [{"text": self._system_instruction}]},
            "tools": [{"functionDeclarations": fallback_declarations(self._dispatcher.catalog)}],
            "generationConfig": {
                "temperature": self._settings.temperature,
                "maxOutputTokens": self._settings.max_output_tokens,
            },
        }

    async def _generate(self) -> tuple[Part, ...]:
        url = f"{self._settings.rest_url.rstrip('/')}/{self._settings.fallback_model}:generateContent"
        try:
            response = await self._client.post(
                url,
                params={"key": self._settings.api_key},
                content=orjson.dumps(self._request_body()),
                headers={"Content-Type": "application/json"},
                timeout=self._settings.request_timeout_s,
            )
        except httpx.HTTPError as exc:
            raise TransportError(f"fallback request failed: {exc}") from exc
        return decode_generate_response(response.status_code, response.content)

    async def send_text(self, text: str) -> None:
        if not self.connected:
            return
        self._history.append(Turn.user_text(text))
        try:
            parts = await self._generate()
            for part in parts:
                if self._scope.cancelled:
                    return
                if part.function_call is not None:
                    await self._run_tool_call(part.function_call)
                elif part.text:
                    await self._emit_model_text(part.text)
        except (TransportError, ProtocolDecodeError) as exc:
            logger.warning("fallback turn failed: %s", exc)
            await self._deliver(self._events.on_error, "Failed to get AI response", str(exc))

    async def _emit_model_text(self, text: str) -> None:
        self._history.append(Turn.model_text(text))
        await self._deliver(self._events.on_transcript, text, False)

    async def _run_tool_call(self, function_call: FunctionCall) -> None:
        self._history.append(Turn(role="model", parts=(Part(function_call=function_call),)))

        call = ToolCall(id=function_call.id or "", name=function_call.name, args=function_call.args)
        try:
            call.result = await self._dispatcher.execute(call.name, call.args, self._context)
            response = call.result
        except DispatchError as exc:
            logger.warning("tool call %s failed: %s", call.name, exc)
            response = {"error": str(exc)}
        await self._deliver(self._events.on_tool_call, call)

        self._history.append(
            Turn(
                role="function",
                parts=(Part(function_response=FunctionResponse(name=call.name, response=response)),),
            )
        )

        # One follow-up only: function calls in the reply are not chased.
        try:
            follow_up = await self._generate()
        except (TransportError, ProtocolDecodeError):
            self._history.append(Turn.model_text(FALLBACK_PLACEHOLDER_REPLY))
            raise

        texts = [part.text for part in follow_up if part.text]
        if not texts:
            self._history.append(Turn.model_text(FALLBACK_PLACEHOLDER_REPLY))
            return
        for text in texts:
            await self._emit_model_text(text)

    async def _deliver(self, handler: Callable[..., Awaitable[None]], *args: Any) -> None:
        if self._scope.cancelled:
            return
        await handler(*args)

    async def send_audio(self, data: str) -> None:
        return None

    async def send_interrupt(self) -> None:
        return None

    async def disconnect(self) -> None:
        """Drops the history; there is no transport to close."""
        self._scope.cancel()
        self._connected = False
        self._history.clear()


__all__ = ["FallbackSession"]
