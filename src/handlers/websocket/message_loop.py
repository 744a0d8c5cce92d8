"""WebSocket message loop for one client connection."""

from __future__ import annotations

import logging

from fastapi import WebSocket, WebSocketDisconnect

from src.errors import ClientProtocolError
from src.session.manager import ClientSessionManager
from src.config.websocket import WS_ERROR_INVALID_MESSAGE

from .dispatch import HANDLERS
from .errors import send_error
from .parser import ClientMessage, parse_client_message

logger = logging.getLogger(__name__)


async def _parse_or_send_error(ws: WebSocket, raw: str) -> ClientMessage | None:
    try:
        return parse_client_message(raw)
    except ClientProtocolError as exc:
        await send_error(ws, error_code=WS_ERROR_INVALID_MESSAGE, message="Invalid message format", details=str(exc))
        return None


async def run_message_loop(ws: WebSocket, manager: ClientSessionManager) -> None:
    """Handle client messages in arrival order until the socket closes.

    Messages that arrive while a connect is in progress wait in the socket and
    are handled once it settles.
    """
    client_id = manager.connection.client_id
    try:
        while True:
            raw = await ws.receive_text()
            msg = await _parse_or_send_error(ws, raw)
            if msg is None:
                continue

            handler = HANDLERS.get(msg.type)
            if handler is None:
                # parse_client_message only yields known types.
                logger.warning("no handler for message type=%s client_id=%s", msg.type, client_id)
                continue
            await handler(manager, msg)
    except WebSocketDisconnect:
        logger.debug("client disconnected client_id=%s", client_id)


__all__ = ["run_message_loop"]
