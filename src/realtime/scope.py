"""Cancellation scope bounding one upstream session's lifetime."""

from __future__ import annotations

import itertools

_scope_ids = itertools.count(1)


class SessionScope:
    """Once cancelled, nothing raised inside the scope may reach the client.

    Sessions check the scope before delivering any event; teardown cancels it
    before the transport is closed so late frames are discarded.
    """

    def __init__(self, label: str = "") -> None:
        self.id = next(_scope_ids)
        self.label = label
        self._cancelled = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        self._cancelled = True

    def __repr__(self) -> str:
        state = "cancelled" if self._cancelled else "active"
        return f"SessionScope(id={self.id}, label={self.label!r}, {state})"


__all__ = ["SessionScope"]
