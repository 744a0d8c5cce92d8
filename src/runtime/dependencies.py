"""Runtime dependency construction (HTTP client, tools, session factory, admission control)."""

from __future__ import annotations

import logging
from contextlib import AsyncExitStack

import httpx

from src.state import RuntimeDeps
from src.state.settings import AppSettings
from src.realtime.factory import SessionFactory
from src.tools.dispatcher import ToolDispatcher
from src.tools.providers import build_providers
from src.handlers.connections import ConnectionManager

from .settings import load_settings

logger = logging.getLogger(__name__)


async def build_runtime_deps(settings: AppSettings | None = None) -> RuntimeDeps:
    settings = settings or load_settings()

    http_stack = AsyncExitStack()
    http_client = await http_stack.enter_async_context(
        httpx.AsyncClient(timeout=settings.providers.timeout_s, follow_redirects=True)
    )

    dispatcher = ToolDispatcher(build_providers(http_client, settings.providers))
    session_factory = SessionFactory(
        settings=settings.upstream,
        system_instruction=settings.system_instruction,
        dispatcher=dispatcher,
        http_client=http_client,
    )
    connections = ConnectionManager(max_connections=settings.limits.max_concurrent_connections)

    if not settings.upstream.api_key:
        logger.warning("GOOGLE_API_KEY is not set; upstream sessions will fail to connect")

    return RuntimeDeps(
        connections=connections,
        session_factory=session_factory,
        settings=settings,
        _http_stack=http_stack,
    )


__all__ = ["RuntimeDeps", "build_runtime_deps"]
