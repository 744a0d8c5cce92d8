"""Error and send helpers for the client WebSocket."""

from __future__ import annotations

import logging
from typing import Any

import orjson
from fastapi import WebSocket, WebSocketDisconnect

from src.session.messages import build_error

logger = logging.getLogger(__name__)


async def safe_send_text(ws: WebSocket, text: str) -> bool:
    try:
        await ws.send_text(text)
    except WebSocketDisconnect:
        return False
    except Exception:
        logger.debug("WebSocket send failed", exc_info=True)
        return False
    return True


async def safe_send_json(ws: WebSocket, message: dict[str, Any]) -> bool:
    return await safe_send_text(ws, orjson.dumps(message).decode("utf-8"))


async def send_error(
    ws: WebSocket,
    *,
    error_code: str,
    message: str,
    details: str | None = None,
) -> bool:
    return await safe_send_json(ws, build_error(message, code=error_code, details=details))


async def reject_connection(
    ws: WebSocket,
    *,
    error_code: str,
    message: str,
    close_code: int,
) -> None:
    # Accept so we can send a structured error, then close.
    try:
        await ws.accept()
    except Exception:
        return
    await send_error(ws, error_code=error_code, message=message)
    try:
        await ws.close(code=close_code, reason=message)
    except Exception:
        return


__all__ = [
    "reject_connection",
    "safe_send_json",
    "safe_send_text",
    "send_error",
]
