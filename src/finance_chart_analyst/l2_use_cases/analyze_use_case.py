"""Use case: run one financial-analysis round-trip through the generation service."""

from __future__ import annotations

import logging

from pydantic import ValidationError

from finance_chart_analyst.l1_entities.analysis import AnalysisRequest, NormalizedResponse
from finance_chart_analyst.l1_entities.chart import ChartSpec
from finance_chart_analyst.l1_entities.config import AppConfig
from finance_chart_analyst.l1_entities.errors import InvalidChartDataError
from finance_chart_analyst.l1_entities.tool import ToolInvocation
from finance_chart_analyst.l2_use_cases.ports.generation_client import GenerationClient
from finance_chart_analyst.l2_use_cases.tool_router import ToolRouter
from finance_chart_analyst.l2_use_cases.utils.chart_normalizer import normalize_chart
from finance_chart_analyst.l2_use_cases.utils.input_normalizer import normalize_messages
from finance_chart_analyst.l2_use_cases.utils.prompt_builder import build_request_payload
from finance_chart_analyst.l2_use_cases.utils.response_parser import content_types, parse_response
from finance_chart_analyst.l2_use_cases.utils.tool_registry import GRAPH_TOOL_NAME, tool_names

log = logging.getLogger('fca.pipeline')


class RunAnalysisUseCase:
    """Normalize input, build the request, call the service, normalize the tool output."""

    def __init__(
        self,
        generation_client: GenerationClient,
        config: AppConfig,
        tool_router: ToolRouter | None = None,
    ) -> None:
        self._client = generation_client
        self._config = config
        self._router = tool_router or ToolRouter()

    async def execute(self, request: AnalysisRequest) -> NormalizedResponse:
        """Execute the pipeline. Raises AnalystError subclasses on any failure."""
        log.info(
            'Analysis request: %d messages, file=%s, model=%s',
            len(request.messages),
            request.file_data.media_type if request.file_data else None,
            request.model,
        )

        messages = normalize_messages(
            request.messages,
            request.file_data,
            reject_unsupported=self._config.files.reject_unsupported,
        )
        payload = build_request_payload(messages, request.model, self._config.generation)
        log.info('Generation request: model=%s, messages=%d, tools=%s', request.model, len(messages), tool_names())

        reply = await self._client.invoke(request.model, payload)
        parsed = parse_response(reply)
        log.info(
            'Generation reply: stop_reason=%s, has_tool_use=%s, content_types=%s',
            parsed.stop_reason,
            parsed.has_tool_use,
            content_types(reply),
        )

        chart_data: ChartSpec | None = None
        if parsed.tool_use_block is not None:
            invocation = _to_invocation(parsed.tool_use_block)
            if invocation.name == GRAPH_TOOL_NAME:
                chart_data = normalize_chart(invocation, color_template=self._config.chart.color_template)
                log.info('Chart normalized: type=%s, rows=%d', chart_data.chart_type.value, len(chart_data.data))
            else:
                await self._router.route(invocation)

        return NormalizedResponse(
            content=parsed.text,
            has_tool_use=parsed.has_tool_use,
            tool_use=parsed.tool_use_block,
            chart_data=chart_data,
        )


def _to_invocation(block: dict) -> ToolInvocation:
    try:
        return ToolInvocation.model_validate(block)
    except ValidationError as e:
        raise InvalidChartDataError(f'Invalid tool_use block: {e}') from e
