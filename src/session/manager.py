"""Per-client session state machine.

One manager per accepted client socket. It owns at most one upstream session
at a time and drives ``idle -> connecting -> ready -> (disconnected | error)``
with an orthogonal ``live | fallback`` mode. Connect tries the live endpoint
first; any transport failure there gets exactly one fallback attempt.

All transitions run on the connection's message-loop task. Upstream events
arrive from the live reader task and are filtered through ``SessionListener``.
"""

from __future__ import annotations

import logging
from typing import Any, Protocol
from collections.abc import Callable

from src.errors import TransportError
from src.realtime.frames import ToolCall
from src.realtime.scope import SessionScope
from src.tools.context import ToolContext
from src.state.connection import ClientConnection
from src.realtime.events import SessionEvents
from src.realtime.session import UpstreamSession
from src.config.websocket import (
    WS_ERROR_UPSTREAM,
    WS_ERROR_SESSION_NOT_READY,
    WS_ERROR_UPSTREAM_UNAVAILABLE,
)

from .channel import ClientChannel
from .listener import SessionListener
from .state import SessionMode, SessionPhase
from .messages import (
    ROLE_USER,
    STATUS_READY,
    STATUS_CLOSED,
    ROLE_ASSISTANT,
    STATUS_STOPPED,
    STATUS_CONNECTING,
    STATUS_READY_TEXT,
    build_audio,
    build_error,
    build_status,
    build_sources,
    build_itinerary,
    build_tool_call,
    build_transcript,
)

logger = logging.getLogger(__name__)

# Tools whose completion tells the client new reference material was consulted.
SOURCE_TOOLS = frozenset({"poi_search", "get_city_info", "search_destination_info"})

# Called with ("attached" | "detached", mode) around each session's lifetime.
SessionHook = Callable[[str, SessionMode], None]


class SessionBuilder(Protocol):
    def new_live(self, context: ToolContext, events: SessionEvents, scope: SessionScope) -> UpstreamSession: ...

    def new_fallback(self, context: ToolContext, events: SessionEvents, scope: SessionScope) -> UpstreamSession: ...


class ClientSessionManager:
    def __init__(
        self,
        connection: ClientConnection,
        channel: ClientChannel,
        factory: SessionBuilder,
        *,
        on_session_change: SessionHook | None = None,
    ) -> None:
        self._connection = connection
        self._channel = channel
        self._factory = factory
        self._on_session_change = on_session_change

    @property
    def connection(self) -> ClientConnection:
        return self._connection

    def is_current(self, scope: SessionScope) -> bool:
        conn = self._connection
        return conn.alive and conn.scope is scope and not scope.cancelled

    async def _send(self, message: dict[str, Any]) -> None:
        if not self._connection.alive:
            return
        await self._channel.send(message)

    def _notify(self, transition: str, mode: SessionMode) -> None:
        if self._on_session_change is not None:
            self._on_session_change(transition, mode)

    # Lifecycle

    async def open(self) -> None:
        """Called once the client socket is accepted."""
        await self._connect()

    async def close(self) -> None:
        """Client socket is gone: release the upstream and stop emitting."""
        self._connection.alive = False
        await self._teardown()
        self._connection.phase = SessionPhase.DISCONNECTED

    async def _connect(self) -> None:
        conn = self._connection
        if conn.initializing:
            return
        conn.initializing = True
        conn.phase = SessionPhase.CONNECTING
        try:
            await self._send(build_status(STATUS_CONNECTING))
            try:
                await self._attach(SessionMode.LIVE)
            except TransportError as exc:
                logger.warning("live connect failed client_id=%s: %s; trying fallback", conn.client_id, exc)
                await self._teardown()
                try:
                    await self._attach(SessionMode.FALLBACK)
                except TransportError as fallback_exc:
                    logger.error("fallback connect failed client_id=%s: %s", conn.client_id, fallback_exc)
                    await self._teardown()
                    conn.phase = SessionPhase.ERROR
                    await self._send(
                        build_error(
                            "Failed to connect to AI service",
                            code=WS_ERROR_UPSTREAM_UNAVAILABLE,
                            details=str(fallback_exc),
                        )
                    )
                    return

            if not conn.alive:
                await self._teardown()
                return
            if conn.session is None:
                # Upstream closed before ready was reported; handle_upstream_closed already did.
                return
            conn.phase = SessionPhase.READY
            status = STATUS_READY if conn.mode is SessionMode.LIVE else STATUS_READY_TEXT
            await self._send(build_status(status))
            logger.info("session ready client_id=%s mode=%s", conn.client_id, conn.mode.value if conn.mode else None)
        finally:
            conn.initializing = False

    async def _attach(self, mode: SessionMode) -> None:
        conn = self._connection
        if conn.session is not None:
            await self._teardown()
        scope = SessionScope(label=f"{conn.client_id}:{mode.value}")
        listener = SessionListener(self, scope)
        if mode is SessionMode.LIVE:
            session = self._factory.new_live(conn.tool_context, listener, scope)
        else:
            session = self._factory.new_fallback(conn.tool_context, listener, scope)
        conn.session = session
        conn.scope = scope
        conn.mode = mode
        self._notify("attached", mode)
        await session.connect()

    def _detach(self) -> tuple[UpstreamSession | None, SessionMode | None]:
        """Unhook the current session without awaiting, so no other task can interleave."""
        conn = self._connection
        session, scope, mode = conn.session, conn.scope, conn.mode
        conn.session = None
        conn.scope = None
        conn.mode = None
        if scope is not None:
            scope.cancel()
        return session, mode

    async def _release(self, session: UpstreamSession | None, mode: SessionMode | None) -> None:
        if session is None:
            return
        try:
            await session.disconnect()
        except Exception:
            logger.warning("upstream teardown failed client_id=%s", self._connection.client_id, exc_info=True)
        if mode is not None:
            self._notify("detached", mode)

    async def _teardown(self) -> None:
        await self._release(*self._detach())

    # Client -> bridge

    async def handle_control(self, action: str) -> None:
        conn = self._connection
        if action == "start":
            if conn.initializing or conn.phase in (SessionPhase.CONNECTING, SessionPhase.READY):
                logger.debug("start ignored client_id=%s phase=%s", conn.client_id, conn.phase.value)
                return
            await self._connect()
        elif action == "stop":
            await self._teardown()
            conn.phase = SessionPhase.IDLE
            await self._send(build_status(STATUS_STOPPED))
        elif action == "reset":
            await self._teardown()
            conn.phase = SessionPhase.IDLE
            await self._connect()
        elif action == "interrupt":
            if conn.ready and conn.mode is SessionMode.LIVE and conn.session is not None:
                logger.info("client interrupted response client_id=%s", conn.client_id)
                await self._forward(conn.session.send_interrupt())
        else:
            raise ValueError(f"unknown control action: {action}")

    async def handle_text(self, text: str) -> None:
        conn = self._connection
        if not conn.ready or conn.session is None:
            await self._send(
                build_error(
                    "AI session is not ready",
                    code=WS_ERROR_SESSION_NOT_READY,
                    details=f"session is {conn.phase.value}",
                )
            )
            return
        await self._send(build_transcript(text, is_partial=False, role=ROLE_USER))
        await self._forward(conn.session.send_text(text))

    async def handle_audio(self, data: str) -> None:
        conn = self._connection
        if not conn.ready or conn.mode is not SessionMode.LIVE or conn.session is None:
            logger.debug("audio dropped client_id=%s phase=%s mode=%s", conn.client_id, conn.phase.value, conn.mode)
            return
        await self._forward(conn.session.send_audio(data))

    async def _forward(self, send: Any) -> None:
        try:
            await send
        except TransportError as exc:
            logger.warning("upstream send failed client_id=%s: %s", self._connection.client_id, exc)
            await self._send(build_error("Lost connection to AI service", code=WS_ERROR_UPSTREAM, details=str(exc)))

    # Upstream -> client (via SessionListener)

    async def relay_transcript(self, text: str, is_partial: bool) -> None:
        await self._send(build_transcript(text, is_partial=is_partial, role=ROLE_ASSISTANT))

    async def relay_audio(self, data: str) -> None:
        await self._send(build_audio(data))

    async def relay_tool_call(self, call: ToolCall) -> None:
        await self._send(build_tool_call(call.name, call.args))
        result = call.result
        if result is None:
            return
        if call.name == "update_itinerary" and result.get("itinerary"):
            await self._send(build_itinerary(result["itinerary"]))
        if call.name in SOURCE_TOOLS:
            await self._send(build_sources(call.name))

    async def relay_error(self, message: str, details: str | None) -> None:
        await self._send(build_error(message, code=WS_ERROR_UPSTREAM, details=details))

    async def handle_upstream_closed(self, scope: SessionScope) -> None:
        if not self.is_current(scope):
            return
        # Runs on the live reader task: every state change happens before the first await,
        # so a reset handled meanwhile on the connection task is never overwritten.
        released = self._detach()
        self._connection.phase = SessionPhase.DISCONNECTED
        await self._send(build_status(STATUS_CLOSED))
        await self._release(*released)


__all__ = ["ClientSessionManager", "SOURCE_TOOLS", "SessionBuilder", "SessionHook"]
