"""Logging initialization."""

from __future__ import annotations

import logging

from src.config.logging import LOG_LEVEL, LOG_FORMAT, SHOW_CLIENT_LOGS

_NOISY_LOGGERS = ("httpx", "httpcore", "websockets")


def configure_logging() -> None:
    # HTTP and WebSocket clients log every request/frame. Keep them tame unless explicitly enabled.
    if not SHOW_CLIENT_LOGS:
        for name in _NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)
    logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)


__all__ = ["configure_logging"]
