"""Configuration Pydantic models: pure schema, no infrastructure defaults."""

from __future__ import annotations

from pydantic import BaseModel


class GenerationConfig(BaseModel):
    anthropic_version: str
    max_tokens: int
    temperature: float


class ChartSettings(BaseModel):
    color_template: str  # formatted with slot=1, 2, ...


class FileSettings(BaseModel):
    reject_unsupported: bool


class AppConfig(BaseModel):
    generation: GenerationConfig
    chart: ChartSettings
    files: FileSettings
