"""Bidirectional streaming session with the upstream live endpoint."""

from __future__ import annotations

import asyncio
import logging
import contextlib
from typing import Any
from collections.abc import Callable, Awaitable

import websockets

from src.tools.context import ToolContext
from src.session.state import SessionMode
from src.state.settings import UpstreamSettings
from src.tools.dispatcher import ToolDispatcher
from src.tools.catalog import live_declarations
from src.errors import DispatchError, TransportError, ProtocolDecodeError

from .scope import SessionScope
from .events import SessionEvents
from .codec import WireCodec, decode_server_frame
from .frames import (
    Turn,
    ToolCall,
    SetupFrame,
    ServerFrame,
    FunctionCall,
    OutboundFrame,
    FunctionResponse,
    ToolResponseFrame,
    ClientContentFrame,
    RealtimeInputFrame,
)

logger = logging.getLogger(__name__)

Connector = Callable[[str], Awaitable[Any]]

_MAX_FRAME_BYTES = 10 * 1024 * 1024


async def _default_connector(url: str) -> Any:
    return await websockets.connect(url, max_size=_MAX_FRAME_BYTES)


class LiveSession:
    """One upstream WebSocket per instance; recreate on reset.

    ``connect`` resolves only after the upstream acknowledges setup. Tool calls
    are handled inline by the reader, in request order: the response goes
    upstream first, then the tool-call event is delivered.
    """

    mode = SessionMode.LIVE

    def __init__(
        self,
        *,
        settings: UpstreamSettings,
        system_instruction: str,
        dispatcher: ToolDispatcher,
        context: ToolContext,
        events: SessionEvents,
        scope: SessionScope,
        codec: WireCodec,
        connector: Connector | None = None,
    ) -> None:
        self._settings = settings
        self._system_instruction = system_instruction
        self._dispatcher = dispatcher
        self._context = context
        self._events = events
        self._scope = scope
        self._codec = codec
        self._connector = connector or _default_connector
        self._ws: Any = None
        self._reader: asyncio.Task[None] | None = None
        self._ready: asyncio.Future[None] | None = None
        self._connected = False
        self._pending_calls: dict[str, ToolCall] = {}

    @property
    def connected(self) -> bool:
        return self._connected and not self._scope.cancelled

    @property
    def pending_calls(self) -> dict[str, ToolCall]:
        return dict(self._pending_calls)

    @property
    def scope(self) -> SessionScope:
        return self._scope

    def _url(self) -> str:
        if not self._settings.api_key:
            return self._settings.live_url
        separator = "&" if "?" in self._settings.live_url else "?"
        return f"{self._settings.live_url}{separator}key={self._settings.api_key}"

    async def connect(self) -> None:
        if self._scope.cancelled:
            raise TransportError("live session was torn down before connecting")
        self._ready = asyncio.get_running_loop().create_future()
        timeout = self._settings.connect_timeout_s
        try:
            await asyncio.wait_for(self._open(), timeout=timeout)
        except asyncio.TimeoutError as exc:
            await self.disconnect()
            raise TransportError(f"live setup timed out after {timeout:.0f}s") from exc
        except TransportError:
            await self.disconnect()
            raise
        except Exception as exc:
            await self.disconnect()
            raise TransportError(f"live connect failed: {exc}") from exc
        logger.info("live session ready model=%s", self._settings.live_model)

    async def _open(self) -> None:
        self._ws = await self._connector(self._url())
        self._reader = asyncio.create_task(self._read_loop(), name=f"live-reader-{self._scope.id}")
        setup = SetupFrame(
            model=self._settings.live_model,
            system_instruction=self._system_instruction,
            function_declarations=tuple(live_declarations(self._dispatcher.catalog)),
        )
        await self._send_frame(setup)
        await self._ready

    async def _read_loop(self) -> None:
        failure: BaseException | None = None
        try:
            async for raw in self._ws:
                if self._scope.cancelled:
                    return
                try:
                    frame = decode_server_frame(raw)
                except ProtocolDecodeError as exc:
                    logger.warning("dropping malformed upstream frame: %s", exc)
                    continue
                await self._handle_frame(frame)
        except websockets.ConnectionClosed as exc:
            failure = exc
        except TransportError as exc:
            failure = exc
        except Exception as exc:
            logger.exception("live reader failed")
            failure = exc
        await self._on_transport_closed(failure)

    async def _on_transport_closed(self, failure: BaseException | None) -> None:
        was_connected = self._connected
        self._connected = False
        if self._ready is not None and not self._ready.done():
            reason = f": {failure}" if failure else ""
            self._ready.set_exception(TransportError(f"upstream closed before setup completed{reason}"))
            return
        if self._scope.cancelled or not was_connected:
            return
        if failure is not None:
            logger.warning("live upstream closed abnormally: %s", failure)
            await self._events.on_error("AI connection lost", str(failure))
        else:
            logger.info("live upstream closed")
        await self._events.on_close()

    async def _handle_frame(self, frame: ServerFrame) -> None:
        if frame.setup_complete and not self._connected:
            self._connected = True
            if self._ready is not None and not self._ready.done():
                self._ready.set_result(None)
            await self._deliver(self._events.on_setup_complete)

        for part in frame.model_parts:
            if part.text:
                await self._deliver(self._events.on_transcript, part.text, not frame.turn_complete)
            if part.inline_data is not None and part.inline_data.mime_type.startswith("audio/"):
                await self._deliver(self._events.on_audio, part.inline_data.data)

        for function_call in frame.function_calls:
            if self._scope.cancelled:
                return
            await self._run_tool_call(function_call)

    async def _run_tool_call(self, function_call: FunctionCall) -> None:
        call = ToolCall(id=function_call.id or "", name=function_call.name, args=function_call.args)
        self._pending_calls[call.id] = call
        try:
            try:
                result = await self._dispatcher.execute(call.name, call.args, self._context)
                response = result
            except DispatchError as exc:
                logger.warning("tool call %s failed: %s", call.name, exc)
                result = None
                response = {"error": str(exc)}
            if self._scope.cancelled:
                return

            try:
                await self._send_frame(
                    ToolResponseFrame(responses=(FunctionResponse(name=call.name, response=response, id=call.id),))
                )
            except TransportError:
                logger.warning("could not return tool result for %s", call.name, exc_info=True)
            call.result = result
            await self._deliver(self._events.on_tool_call, call)
        finally:
            self._pending_calls.pop(call.id, None)

    async def _deliver(self, handler: Callable[..., Awaitable[None]], *args: Any) -> None:
        if self._scope.cancelled:
            return
        await handler(*args)

    async def _send_frame(self, frame: OutboundFrame) -> None:
        ws = self._ws
        if ws is None:
            raise TransportError("live transport is not open")
        try:
            await ws.send(self._codec.dumps(frame))
        except websockets.ConnectionClosed as exc:
            raise TransportError(f"live transport closed: {exc}") from exc

    async def send_audio(self, data: str) -> None:
        if not self.connected:
            return
        await self._send_frame(RealtimeInputFrame(mime_type=self._settings.audio_mime_type, data=data))

    async def send_text(self, text: str) -> None:
        if not self.connected:
            return
        await self._send_frame(ClientContentFrame(turns=(Turn.user_text(text),), turn_complete=True))

    async def send_interrupt(self) -> None:
        if not self.connected:
            return
        await self._send_frame(ClientContentFrame(turns=(), turn_complete=True))

    async def disconnect(self) -> None:
        self._scope.cancel()
        self._connected = False

        reader, self._reader = self._reader, None
        if reader is not None and reader is not asyncio.current_task() and not reader.done():
            reader.cancel()
            with contextlib.suppress(asyncio.CancelledError, Exception):
                await reader

        ws, self._ws = self._ws, None
        if ws is not None:
            with contextlib.suppress(Exception):
                await ws.close()

        if self._ready is not None and not self._ready.done():
            self._ready.cancel()
        self._pending_calls.clear()


__all__ = ["Connector", "LiveSession"]
