"""Shared error types for the travel assistant bridge."""

from __future__ import annotations

from dataclasses import dataclass


class TransportError(Exception):
    """Raised when an upstream transport cannot be opened or fails mid-flight."""


class ProtocolDecodeError(Exception):
    """Raised when an upstream frame or response body cannot be decoded."""


class HistoryOrderError(Exception):
    """Raised when a fallback conversation turn would break call/response ordering."""


class ClientProtocolError(ValueError):
    """Raised for malformed client messages; the connection stays open."""


@dataclass(frozen=True, slots=True)
class DispatchError(Exception):
    """Raised when a tool invocation cannot produce a result."""

    tool: str
    message: str

    def __str__(self) -> str:
        return self.message


__all__ = [
    "ClientProtocolError",
    "DispatchError",
    "HistoryOrderError",
    "ProtocolDecodeError",
    "TransportError",
]
