"""Per-client connection state owned by the session manager."""

from __future__ import annotations

from typing import TYPE_CHECKING
from dataclasses import field, dataclass

from src.tools.context import ToolContext
from src.session.state import SessionMode, SessionPhase

if TYPE_CHECKING:
    from src.realtime.scope import SessionScope
    from src.realtime.session import UpstreamSession


@dataclass(slots=True)
class ClientConnection:
    client_id: str
    alive: bool = True
    phase: SessionPhase = SessionPhase.IDLE
    mode: SessionMode | None = None
    initializing: bool = False
    session: UpstreamSession | None = None
    scope: SessionScope | None = None
    # Itinerary and POI coordinates survive reset; they belong to the connection.
    tool_context: ToolContext = field(default_factory=ToolContext)

    @property
    def ready(self) -> bool:
        return self.phase is SessionPhase.READY and self.session is not None


__all__ = ["ClientConnection"]
