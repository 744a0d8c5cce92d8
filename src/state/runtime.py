"""Typed runtime state objects for dependency wiring."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from src.state.settings import AppSettings
    from src.realtime.factory import SessionFactory
    from src.handlers.connections import ConnectionManager


@dataclass(slots=True)
class RuntimeDeps:
    connections: ConnectionManager
    session_factory: SessionFactory
    settings: AppSettings
    _http_stack: Any

    async def shutdown(self) -> None:
        try:
            await self._http_stack.aclose()
        except Exception:
            logger.exception("runtime shutdown failed")


__all__ = ["RuntimeDeps"]
