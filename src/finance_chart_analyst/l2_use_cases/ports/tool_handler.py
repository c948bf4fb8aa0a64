"""Port: external handler for tool invocations the pipeline does not execute."""

from __future__ import annotations

from typing import Protocol

from finance_chart_analyst.l1_entities.tool import ToolInvocation


class ToolHandler(Protocol):
    """Receives an unexecuted tool invocation, keyed by tool name in the router."""

    async def __call__(self, invocation: ToolInvocation) -> None: ...
