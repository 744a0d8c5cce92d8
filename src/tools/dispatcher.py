"""Tool dispatch: name + arguments -> collaborator call -> structured result."""

from __future__ import annotations

import logging
from typing import Any

from src.errors import DispatchError

from .context import ToolContext
from .providers import ToolProviders
from .handlers import TOOL_HANDLERS, ToolHandler
from .catalog import TOOL_CATALOG, ToolDefinition

logger = logging.getLogger(__name__)


class ToolDispatcher:
    """Holds the tool registry only; per-connection state arrives via ``ToolContext``."""

    def __init__(
        self,
        providers: ToolProviders,
        *,
        catalog: tuple[ToolDefinition, ...] = TOOL_CATALOG,
        handlers: dict[str, ToolHandler] | None = None,
    ) -> None:
        self._providers = providers
        self._catalog = catalog
        handlers = TOOL_HANDLERS if handlers is None else handlers
        self._registry: dict[str, tuple[ToolDefinition, ToolHandler]] = {
            tool.name: (tool, handlers[tool.name]) for tool in catalog if tool.name in handlers
        }

    @property
    def catalog(self) -> tuple[ToolDefinition, ...]:
        return self._catalog

    async def execute(self, name: str, args: Any, context: ToolContext) -> dict[str, Any]:
        entry = self._registry.get(name)
        if entry is None:
            raise DispatchError(name, f"Unknown tool: {name}")
        tool, handler = entry

        if args is None:
            args = {}
        if not isinstance(args, dict):
            raise DispatchError(name, f"{name}: arguments must be an object")
        missing = [key for key in tool.required if args.get(key) is None or args.get(key) == ""]
        if missing:
            raise DispatchError(name, f"{name}: missing required argument(s): {', '.join(missing)}")

        try:
            result = await handler(args, context, self._providers)
        except DispatchError:
            raise
        except Exception as exc:
            logger.warning("tool %s failed: %s", name, exc, exc_info=True)
            raise DispatchError(name, f"{name} failed: {exc}") from exc

        logger.info("tool %s completed", name)
        return result


__all__ = ["ToolDispatcher"]
