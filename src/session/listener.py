"""Routes one upstream session's events to its client, while that session is current."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from src.realtime.frames import ToolCall
from src.realtime.scope import SessionScope

if TYPE_CHECKING:
    from .manager import ClientSessionManager

logger = logging.getLogger(__name__)


class SessionListener:
    """``SessionEvents`` implementation bound to a single session scope.

    Every event is dropped once the scope is cancelled or another session has
    replaced it, so a torn-down session can never reach the client.
    """

    def __init__(self, manager: ClientSessionManager, scope: SessionScope) -> None:
        self._manager = manager
        self._scope = scope

    def _current(self) -> bool:
        return self._manager.is_current(self._scope)

    async def on_setup_complete(self) -> None:
        logger.debug("upstream setup complete scope=%r", self._scope)

    async def on_transcript(self, text: str, is_partial: bool) -> None:
        if self._current():
            await self._manager.relay_transcript(text, is_partial)

    async def on_audio(self, data: str) -> None:
        if self._current():
            await self._manager.relay_audio(data)

    async def on_tool_call(self, call: ToolCall) -> None:
        if self._current():
            await self._manager.relay_tool_call(call)

    async def on_error(self, message: str, details: str | None = None) -> None:
        if self._current():
            await self._manager.relay_error(message, details)

    async def on_close(self) -> None:
        if self._current():
            await self._manager.handle_upstream_closed(self._scope)


__all__ = ["SessionListener"]
