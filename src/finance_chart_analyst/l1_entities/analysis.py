"""Request and response entities for one analysis round-trip."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel

from finance_chart_analyst.l1_entities.chart import ChartSpec
from finance_chart_analyst.l1_entities.chat_message import ConversationMessage
from finance_chart_analyst.l1_entities.file_attachment import FileAttachment


class AnalysisRequest(BaseModel):
    messages: list[ConversationMessage]
    model: str
    file_data: FileAttachment | None = None


class NormalizedResponse(BaseModel):
    """The only artifact returned to the caller."""

    content: str = ''
    has_tool_use: bool = False
    tool_use: dict[str, Any] | None = None
    chart_data: ChartSpec | None = None

    def to_wire(self) -> dict[str, Any]:
        return {
            'content': self.content,
            'hasToolUse': self.has_tool_use,
            'toolUse': self.tool_use,
            'chartData': self.chart_data.to_wire() if self.chart_data is not None else None,
        }
