"""Internal frame model shared by the live and fallback transports.

Frames are spelling-agnostic; ``codec`` decides whether they go out as
snake_case or camelCase.
"""

from __future__ import annotations

from typing import Any
from dataclasses import field, dataclass


@dataclass(frozen=True, slots=True)
class FunctionCall:
    name: str
    args: dict[str, Any]
    id: str | None = None


@dataclass(frozen=True, slots=True)
class FunctionResponse:
    name: str
    response: dict[str, Any]
    id: str | None = None


@dataclass(frozen=True, slots=True)
class InlineData:
    mime_type: str
    data: str


@dataclass(frozen=True, slots=True)
class Part:
    text: str | None = None
    inline_data: InlineData | None = None
    function_call: FunctionCall | None = None
    function_response: FunctionResponse | None = None


@dataclass(frozen=True, slots=True)
class Turn:
    role: str
    parts: tuple[Part, ...]

    @classmethod
    def user_text(cls, text: str) -> Turn:
        return cls(role="user", parts=(Part(text=text),))

    @classmethod
    def model_text(cls, text: str) -> Turn:
        return cls(role="model", parts=(Part(text=text),))

    def function_calls(self) -> list[FunctionCall]:
        return [p.function_call for p in self.parts if p.function_call is not None]

    def function_responses(self) -> list[FunctionResponse]:
        return [p.function_response for p in self.parts if p.function_response is not None]


@dataclass(slots=True)
class ToolCall:
    id: str
    name: str
    args: dict[str, Any] = field(default_factory=dict)
    result: dict[str, Any] | None = None


# Outbound (bridge -> live upstream)


@dataclass(frozen=True, slots=True)
class SetupFrame:
    model: str
    system_instruction: str
    function_declarations: tuple[dict[str, Any], ...]


@dataclass(frozen=True, slots=True)
class ClientContentFrame:
    """User turns; with no turns and ``turn_complete`` set it acts as an interrupt."""

    turns: tuple[Turn, ...] = ()
    turn_complete: bool = True


@dataclass(frozen=True, slots=True)
class RealtimeInputFrame:
    mime_type: str
    data: str


@dataclass(frozen=True, slots=True)
class ToolResponseFrame:
    responses: tuple[FunctionResponse, ...]


# Inbound (live upstream -> bridge)


@dataclass(frozen=True, slots=True)
class ServerFrame:
    setup_complete: bool = False
    model_parts: tuple[Part, ...] = ()
    turn_complete: bool = False
    function_calls: tuple[FunctionCall, ...] = ()


OutboundFrame = SetupFrame | ClientContentFrame | RealtimeInputFrame | ToolResponseFrame


__all__ = [
    "ClientContentFrame",
    "FunctionCall",
    "FunctionResponse",
    "InlineData",
    "OutboundFrame",
    "Part",
    "RealtimeInputFrame",
    "ServerFrame",
    "SetupFrame",
    "ToolCall",
    "ToolResponseFrame",
    "Turn",
]
