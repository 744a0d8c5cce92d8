"""Dispatch handlers for parsed client messages."""

from __future__ import annotations

from collections.abc import Callable, Awaitable

from src.session.manager import ClientSessionManager
from src.config.websocket import WS_TYPE_TEXT, WS_TYPE_AUDIO, WS_TYPE_CONTROL

from .parser import ClientMessage

HandlerFn = Callable[[ClientSessionManager, ClientMessage], Awaitable[None]]


async def _handle_control(manager: ClientSessionManager, msg: ClientMessage) -> None:
    await manager.handle_control(msg.action or "")


async def _handle_audio(manager: ClientSessionManager, msg: ClientMessage) -> None:
    await manager.handle_audio(msg.data or "")


async def _handle_text(manager: ClientSessionManager, msg: ClientMessage) -> None:
    await manager.handle_text(msg.data or "")


HANDLERS: dict[str, HandlerFn] = {
    WS_TYPE_CONTROL: _handle_control,
    WS_TYPE_AUDIO: _handle_audio,
    WS_TYPE_TEXT: _handle_text,
}


__all__ = ["HANDLERS", "HandlerFn"]
