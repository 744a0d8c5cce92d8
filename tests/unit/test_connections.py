from __future__ import annotations

import re

import pytest

from src.handlers.connections import ConnectionManager, new_client_id


def test_client_id_format() -> None:
    assert re.fullmatch(r"client_\d+_[0-9a-f]{8}", new_client_id())
    assert new_client_id() != new_client_id()


@pytest.mark.asyncio
async def test_connection_limit() -> None:
    manager = ConnectionManager(max_connections=2)
    first = await manager.connect()
    second = await manager.connect()
    assert first and second and first != second
    assert await manager.connect() is None
    assert manager.get_connection_count() == 2

    await manager.disconnect(first)
    assert manager.get_connection_count() == 1
    assert await manager.connect() is not None


@pytest.mark.asyncio
async def test_disconnect_unknown_is_noop() -> None:
    manager = ConnectionManager(max_connections=1)
    await manager.disconnect("client_0_deadbeef")
    assert manager.get_connection_count() == 0
