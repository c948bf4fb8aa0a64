"""Infrastructure provider configs: lives in L4, not domain."""

from __future__ import annotations

import copy

from pydantic import BaseModel, Field

from finance_chart_analyst.l1_entities.config import AppConfig
from finance_chart_analyst.l3_interface_adapters.gateways.yaml_config_loader import deep_merge

APP_CONFIG_DEFAULTS: dict = {
    'generation': {
        'anthropic_version': 'bedrock-2023-05-31',
        'max_tokens': 4096,
        'temperature': 0.7,
    },
    'chart': {
        'color_template': 'hsl(var(--chart-{slot}))',
    },
    'files': {
        'reject_unsupported': False,
    },
}


def build_app_config(raw: dict) -> AppConfig:
    """Merge *raw* user overrides on top of defaults, then validate."""
    merged = copy.deepcopy(APP_CONFIG_DEFAULTS)
    deep_merge(merged, raw)
    return AppConfig.model_validate(merged)


class BedrockProviderConfig(BaseModel):
    region: str = 'us-west-2'
    endpoint_url: str | None = None  # None → boto3's regional endpoint
    profile: str | None = None  # None → default AWS credential chain
    timeout: float | None = None  # read timeout in seconds; None → botocore default


class ServerConfig(BaseModel):
    host: str = '127.0.0.1'
    port: int = 8000


class LoggingConfig(BaseModel):
    level: str = 'INFO'
    file: str | None = None


class InfraConfig(BaseModel):
    """Groups all provider-specific settings outside the domain layer."""

    bedrock: BedrockProviderConfig = Field(default_factory=BedrockProviderConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
