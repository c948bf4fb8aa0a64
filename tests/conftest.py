"""Shared test fixtures and protocol-conforming fakes."""

from __future__ import annotations

import base64
import copy
from pathlib import Path
from typing import Any

import pytest

from finance_chart_analyst.l1_entities.config import AppConfig
from finance_chart_analyst.l1_entities.errors import UpstreamError
from finance_chart_analyst.l1_entities.tool import ToolInvocation
from finance_chart_analyst.l4_frameworks_and_drivers.infra_config import build_app_config

# --- Sample model output ---

BAR_CHART_INPUT: dict[str, Any] = {
    'chartType': 'bar',
    'config': {
        'title': 'Quarterly Revenue',
        'description': 'Q1 vs Q2 revenue',
        'trend': {'percentage': 16.0, 'direction': 'up'},
        'xAxisKey': 'period',
    },
    'data': [
        {'period': 'Q1 2024', 'revenue': 1250000},
        {'period': 'Q2 2024', 'revenue': 1450000},
    ],
    'chartConfig': {'revenue': {'label': 'Revenue ($)'}},
}

PIE_CHART_INPUT: dict[str, Any] = {
    'chartType': 'pie',
    'config': {
        'title': 'Portfolio Allocation',
        'description': 'Current investment distribution',
        'totalLabel': 'Total Assets',
        'xAxisKey': 'assetClass',
    },
    'data': [
        {'assetClass': 'Equities', 'amount': 5500000},
        {'assetClass': 'Bonds', 'amount': 3200000},
    ],
    'chartConfig': {'amount': {'label': 'Amount'}, 'share': {'label': 'Share'}},
}


def b64(text: str) -> str:
    return base64.b64encode(text.encode('utf-8')).decode('ascii')


def tool_use_block(name: str, tool_input: dict[str, Any], block_id: str = 'toolu_01') -> dict[str, Any]:
    return {'type': 'tool_use', 'id': block_id, 'name': name, 'input': copy.deepcopy(tool_input)}


def make_reply(*blocks: dict[str, Any], stop_reason: str = 'end_turn') -> dict[str, Any]:
    return {
        'id': 'msg_01',
        'type': 'message',
        'role': 'assistant',
        'content': list(blocks),
        'stop_reason': stop_reason,
    }


# --- Protocol-conforming Fakes ---


class FakeGenerationClient:
    """Fake generation service for L2/L3 tests."""

    def __init__(self, reply: dict[str, Any] | None = None):
        self._reply = reply if reply is not None else make_reply({'type': 'text', 'text': 'Fake answer'})
        self._error: Exception | None = None
        self.invoke_calls: list[tuple[str, dict[str, Any]]] = []
        self.closed = False

    async def invoke(self, model: str, payload: dict[str, Any]) -> dict[str, Any]:
        self.invoke_calls.append((model, copy.deepcopy(payload)))
        if self._error is not None:
            raise self._error
        return copy.deepcopy(self._reply)

    async def aclose(self) -> None:
        self.closed = True

    def set_reply(self, reply: dict[str, Any]) -> None:
        self._reply = reply

    def set_error(self, error: Exception) -> None:
        self._error = error

    def fail_upstream(self, message: str = 'Throttled', status_code: int = 429) -> None:
        self._error = UpstreamError(message, status_code=status_code)


class FakeToolHandler:
    """Records the invocations routed to it."""

    def __init__(self) -> None:
        self.calls: list[ToolInvocation] = []

    async def __call__(self, invocation: ToolInvocation) -> None:
        self.calls.append(invocation)


# --- Standard Fixtures ---


@pytest.fixture
def default_config() -> AppConfig:
    return build_app_config({})


@pytest.fixture
def fake_client() -> FakeGenerationClient:
    return FakeGenerationClient()


@pytest.fixture
def sample_config_yaml(tmp_path: Path) -> Path:
    content = """\
generation:
  max_tokens: 2048
  temperature: 0.2
chart:
  color_template: "var(--series-{slot})"
files:
  reject_unsupported: true
bedrock:
  region: "eu-central-1"
server:
  port: 9000
"""
    p = tmp_path / 'config.yaml'
    p.write_text(content, encoding='utf-8')
    return p
