"""Builds upstream sessions for a client connection."""

from __future__ import annotations

import httpx

from src.tools.context import ToolContext
from src.state.settings import UpstreamSettings
from src.tools.dispatcher import ToolDispatcher

from .scope import SessionScope
from .codec import codec_for
from .events import SessionEvents
from .fallback import FallbackSession
from .live import Connector, LiveSession


class SessionFactory:
    def __init__(
        self,
        *,
        settings: UpstreamSettings,
        system_instruction: str,
        dispatcher: ToolDispatcher,
        http_client: httpx.AsyncClient,
        connector: Connector | None = None,
    ) -> None:
        self._settings = settings
        self._system_instruction = system_instruction
        self._dispatcher = dispatcher
        self._http_client = http_client
        self._connector = connector
        self._codec = codec_for(settings.wire_case)

    def new_live(self, context: ToolContext, events: SessionEvents, scope: SessionScope) -> LiveSession:
        return LiveSession(
            settings=self._settings,
            system_instruction=self._system_instruction,
            dispatcher=self._dispatcher,
            context=context,
            events=events,
            scope=scope,
            codec=self._codec,
            connector=self._connector,
        )

    def new_fallback(self, context: ToolContext, events: SessionEvents, scope: SessionScope) -> FallbackSession:
        return FallbackSession(
            settings=self._settings,
            system_instruction=self._system_instruction,
            dispatcher=self._dispatcher,
            context=context,
            events=events,
            scope=scope,
            client=self._http_client,
        )


__all__ = ["SessionFactory"]
