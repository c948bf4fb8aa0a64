"""Extract the text and tool-use blocks from a generation service reply."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from finance_chart_analyst.l1_entities.errors import UpstreamError


@dataclass(frozen=True)
class ParsedResponse:
    """First text block and first tool-use block of a reply; either may be absent."""

    text_block: dict[str, Any] | None = None
    tool_use_block: dict[str, Any] | None = None
    has_tool_use: bool = False
    stop_reason: str | None = None

    @property
    def text(self) -> str:
        if self.text_block is None:
            return ''
        return self.text_block.get('text') or ''


def parse_response(reply: dict[str, Any]) -> ParsedResponse:
    """Pure extraction; the tool-use payload is not validated here."""
    content = reply.get('content') if isinstance(reply, dict) else None
    if not isinstance(content, list):
        raise UpstreamError('Malformed response from generation service: missing content list')

    blocks = [b for b in content if isinstance(b, dict)]
    text_block = next((b for b in blocks if b.get('type') == 'text'), None)
    tool_use_block = next((b for b in blocks if b.get('type') == 'tool_use'), None)
    return ParsedResponse(
        text_block=text_block,
        tool_use_block=tool_use_block,
        has_tool_use=tool_use_block is not None,
        stop_reason=reply.get('stop_reason'),
    )


def content_types(reply: dict[str, Any]) -> list[str]:
    """Block types of a reply, for logging."""
    content = reply.get('content') or []
    return [b.get('type', '?') for b in content if isinstance(b, dict)]
