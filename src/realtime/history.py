"""Ordered conversation history replayed on every fallback request."""

from __future__ import annotations

from src.errors import HistoryOrderError

from .frames import Turn

ROLES = frozenset({"user", "model", "function"})


class ConversationHistory:
    """Append-only turn list guarding call/response ordering.

    A ``function`` turn must directly follow the ``model`` turn that issued the
    call(s) it answers, and whatever follows a ``function`` turn must be a
    ``model`` turn. The upstream rejects histories that break either rule.
    """

    def __init__(self) -> None:
        self._turns: list[Turn] = []

    def append(self, turn: Turn) -> None:
        if turn.role not in ROLES:
            raise HistoryOrderError(f"unknown role: {turn.role}")

        last = self._turns[-1] if self._turns else None
        if last is not None and last.role == "function" and turn.role != "model":
            raise HistoryOrderError(f"'{turn.role}' turn cannot follow a function turn")

        if turn.role == "function":
            if last is None or last.role != "model":
                raise HistoryOrderError("function turn must follow the model turn that called it")
            called = {call.name for call in last.function_calls()}
            answered = {response.name for response in turn.function_responses()}
            if not answered or not answered <= called:
                raise HistoryOrderError(f"function turn answers {sorted(answered)}, model called {sorted(called)}")

        self._turns.append(turn)

    @property
    def turns(self) -> tuple[Turn, ...]:
        return tuple(self._turns)

    def clear(self) -> None:
        self._turns.clear()

    def __len__(self) -> int:
        return len(self._turns)


__all__ = ["ConversationHistory"]
