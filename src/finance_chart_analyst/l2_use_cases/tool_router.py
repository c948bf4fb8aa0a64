"""Routes tool invocations the pipeline does not execute to external handlers."""

from __future__ import annotations

import logging

from finance_chart_analyst.l1_entities.tool import ToolInvocation
from finance_chart_analyst.l2_use_cases.ports.tool_handler import ToolHandler

log = logging.getLogger('fca.pipeline')


class ToolRouter:
    """Maps tool names to handlers. Handlers are notified; nothing is executed here."""

    def __init__(self, handlers: dict[str, ToolHandler] | None = None) -> None:
        self._handlers: dict[str, ToolHandler] = dict(handlers or {})

    def register(self, name: str, handler: ToolHandler) -> None:
        self._handlers[name] = handler

    def has_handler(self, name: str) -> bool:
        return name in self._handlers

    async def route(self, invocation: ToolInvocation) -> bool:
        """Hand *invocation* to its handler. Returns False when no handler is registered."""
        handler = self._handlers.get(invocation.name)
        if handler is None:
            log.info('No handler for tool %r; returning invocation %s unexecuted', invocation.name, invocation.id)
            return False
        await handler(invocation)
        return True
