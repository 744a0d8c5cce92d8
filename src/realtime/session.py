"""Common surface of the live and fallback upstream sessions."""

from __future__ import annotations

from typing import Protocol

from src.session.state import SessionMode


class UpstreamSession(Protocol):
    mode: SessionMode

    @property
    def connected(self) -> bool: ...

    async def connect(self) -> None:
        """Resolve once the session can take turns; raise ``TransportError`` otherwise."""
        ...

    async def send_text(self, text: str) -> None: ...

    async def send_audio(self, data: str) -> None: ...

    async def send_interrupt(self) -> None: ...

    async def disconnect(self) -> None:
        """Cancel the session scope and release the transport. Idempotent."""
        ...


__all__ = ["UpstreamSession"]
