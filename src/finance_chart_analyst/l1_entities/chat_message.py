"""Conversation entities: messages made of typed content blocks."""

from __future__ import annotations

import base64
import binascii
from typing import Annotated, Any, Literal

from pydantic import BaseModel, Field, field_validator


class TextBlock(BaseModel):
    type: Literal['text'] = 'text'
    text: str

    def to_wire(self) -> dict[str, Any]:
        return {'type': 'text', 'text': self.text}


class ImageBlock(BaseModel):
    """Inline base64 image. Serialized in the Messages API ``source`` form."""

    type: Literal['image'] = 'image'
    media_type: str
    data: str

    @field_validator('media_type')
    @classmethod
    def _check_media_type(cls, value: str) -> str:
        if not value.startswith('image/'):
            raise ValueError(f'not an image media type: {value!r}')
        return value

    @field_validator('data')
    @classmethod
    def _check_base64(cls, value: str) -> str:
        try:
            base64.b64decode(value, validate=True)
        except (binascii.Error, ValueError) as e:
            raise ValueError(f'invalid base64 image data: {e}') from e
        return value

    def to_wire(self) -> dict[str, Any]:
        return {
            'type': 'image',
            'source': {'type': 'base64', 'media_type': self.media_type, 'data': self.data},
        }


ContentBlock = Annotated[TextBlock | ImageBlock, Field(discriminator='type')]


class ConversationMessage(BaseModel):
    """A single turn of the conversation sent to the generation service."""

    role: Literal['user', 'assistant']
    content: str | list[ContentBlock]

    @field_validator('content', mode='before')
    @classmethod
    def _lift_wire_images(cls, value: Any) -> Any:
        # Accept image blocks already in wire form ({"source": {...}}) from prior turns.
        if not isinstance(value, list):
            return value
        lifted = []
        for block in value:
            if isinstance(block, dict) and block.get('type') == 'image' and isinstance(block.get('source'), dict):
                source = block['source']
                block = {'type': 'image', 'media_type': source.get('media_type'), 'data': source.get('data')}
            lifted.append(block)
        return lifted

    def text(self) -> str:
        """Plain text of this turn; block lists contribute their text blocks only."""
        if isinstance(self.content, str):
            return self.content
        return '\n'.join(b.text for b in self.content if isinstance(b, TextBlock))

    def to_wire(self) -> dict[str, Any]:
        if isinstance(self.content, str):
            return {'role': self.role, 'content': self.content}
        return {'role': self.role, 'content': [b.to_wire() for b in self.content]}
