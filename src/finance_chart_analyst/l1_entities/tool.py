"""Tool entities: what the model may call, and what it claims to call."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


@dataclass(frozen=True)
class ToolDeclaration:
    """A callable tool as declared to the generation service."""

    name: str
    description: str
    input_schema: dict[str, Any]

    def to_wire(self) -> dict[str, Any]:
        return {'name': self.name, 'description': self.description, 'input_schema': self.input_schema}


class ToolInvocation(BaseModel):
    """A ``tool_use`` block returned by the model. ``input`` is untrusted."""

    model_config = ConfigDict(extra='allow')

    type: str = 'tool_use'
    id: str = ''
    name: str
    input: dict[str, Any] = Field(default_factory=dict)
