"""Primary WebSocket connection handler orchestration."""

from __future__ import annotations

import logging
import contextlib

from fastapi import WebSocket

from src.state import RuntimeDeps
from src.session.channel import ClientChannel
from src.state.connection import ClientConnection
from src.session.manager import SessionHook, ClientSessionManager
from src.config.websocket import WS_CLOSE_BUSY_CODE, WS_ERROR_SERVER_AT_CAPACITY

from .errors import reject_connection
from .message_loop import run_message_loop

logger = logging.getLogger(__name__)


async def _prepare_connection(ws: WebSocket, runtime_deps: RuntimeDeps) -> str | None:
    client_id = await runtime_deps.connections.connect()
    if client_id is None:
        await reject_connection(
            ws,
            error_code=WS_ERROR_SERVER_AT_CAPACITY,
            message="Server cannot accept new connections. Please try again later.",
            close_code=WS_CLOSE_BUSY_CODE,
        )
        return None

    try:
        await ws.accept()
    except Exception:
        with contextlib.suppress(Exception):
            await runtime_deps.connections.disconnect(client_id)
        raise
    return client_id


async def handle_websocket_connection(
    ws: WebSocket,
    runtime_deps: RuntimeDeps,
    *,
    on_session_change: SessionHook | None = None,
) -> None:
    client_id = await _prepare_connection(ws, runtime_deps)
    if client_id is None:
        return

    connection = ClientConnection(client_id=client_id)

    def _client_gone() -> None:
        connection.alive = False

    channel = ClientChannel(ws, on_disconnect=_client_gone)
    manager = ClientSessionManager(
        connection,
        channel,
        runtime_deps.session_factory,
        on_session_change=on_session_change,
    )
    try:
        logger.info(
            "WebSocket connection accepted client_id=%s. Active: %s",
            client_id,
            runtime_deps.connections.get_connection_count(),
        )
        await manager.open()
        await run_message_loop(ws, manager)
    finally:
        try:
            await manager.close()
        except Exception:
            logger.exception("session cleanup failed client_id=%s", client_id)
        with contextlib.suppress(Exception):
            await runtime_deps.connections.disconnect(client_id)
        logger.info(
            "WebSocket connection closed client_id=%s. Active: %s",
            client_id,
            runtime_deps.connections.get_connection_count(),
        )


__all__ = ["handle_websocket_connection"]
