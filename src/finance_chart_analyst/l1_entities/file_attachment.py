"""Attached file entity: base64 payload plus how to interpret it."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class FileAttachment(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    base64: str | None = None
    media_type: str = Field(default='', alias='mediaType')
    file_name: str = Field(default='', alias='fileName')
    is_text: bool = Field(default=False, alias='isText')

    @property
    def is_image(self) -> bool:
        return self.media_type.startswith('image/')
