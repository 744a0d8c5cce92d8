"""Serialised, failure-tolerant sends to one client socket."""

from __future__ import annotations

import asyncio
import logging
from typing import Any
from collections.abc import Callable

import orjson
from fastapi import WebSocket

from src.handlers.websocket.errors import safe_send_text

logger = logging.getLogger(__name__)


class ClientChannel:
    """Wraps the client WebSocket so concurrent producers never interleave frames.

    The live reader and the message loop both emit events; sends are taken one
    at a time under a lock. After the first failed send the channel reports
    itself closed and further messages are dropped.
    """

    def __init__(self, ws: WebSocket, *, on_disconnect: Callable[[], None] | None = None) -> None:
        self._ws = ws
        self._on_disconnect = on_disconnect
        self._lock = asyncio.Lock()
        self._open = True

    @property
    def open(self) -> bool:
        return self._open

    async def send(self, message: dict[str, Any]) -> bool:
        if not self._open:
            logger.debug("dropping %s for closed client", message.get("type"))
            return False
        text = orjson.dumps(message).decode("utf-8")
        async with self._lock:
            ok = await safe_send_text(self._ws, text)
        if not ok:
            self.mark_closed()
        return ok

    def mark_closed(self) -> None:
        if not self._open:
            return
        self._open = False
        if self._on_disconnect is not None:
            self._on_disconnect()


__all__ = ["ClientChannel"]
