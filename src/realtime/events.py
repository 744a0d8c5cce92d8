"""Event interface an upstream session reports through."""

from __future__ import annotations

from typing import Protocol

from .frames import ToolCall


class SessionEvents(Protocol):
    async def on_setup_complete(self) -> None: ...

    async def on_transcript(self, text: str, is_partial: bool) -> None: ...

    async def on_audio(self, data: str) -> None: ...

    async def on_tool_call(self, call: ToolCall) -> None:
        """Fired once per upstream tool-call request; ``call.result`` is None on failure."""
        ...

    async def on_error(self, message: str, details: str | None = None) -> None: ...

    async def on_close(self) -> None: ...


__all__ = ["SessionEvents"]
