"""WebSocket connection admission control and client ids."""

from __future__ import annotations

import time
import asyncio
import secrets


def new_client_id() -> str:
    return f"client_{int(time.time() * 1000)}_{secrets.token_hex(4)}"


class ConnectionManager:
    def __init__(self, *, max_connections: int) -> None:
        self._max = max(1, int(max_connections))
        self._lock = asyncio.Lock()
        self._active: set[str] = set()

    async def connect(self) -> str | None:
        """Admit a connection (without accepting it); returns its client id or None when full."""
        async with self._lock:
            if len(self._active) >= self._max:
                return None
            client_id = new_client_id()
            while client_id in self._active:
                client_id = new_client_id()
            self._active.add(client_id)
            return client_id

    async def disconnect(self, client_id: str) -> None:
        async with self._lock:
            self._active.discard(client_id)

    def get_connection_count(self) -> int:
        return len(self._active)


__all__ = ["ConnectionManager", "new_client_id"]
