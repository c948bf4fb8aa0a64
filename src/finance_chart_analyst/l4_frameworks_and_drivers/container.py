"""Dependency container: composition root for wiring all layers together."""

from __future__ import annotations

from finance_chart_analyst.l1_entities.config import AppConfig
from finance_chart_analyst.l2_use_cases.analyze_use_case import RunAnalysisUseCase
from finance_chart_analyst.l2_use_cases.ports.config_loader import ConfigLoader
from finance_chart_analyst.l2_use_cases.ports.generation_client import GenerationClient
from finance_chart_analyst.l2_use_cases.tool_router import ToolRouter
from finance_chart_analyst.l3_interface_adapters.controllers.analysis_controller import AnalysisController
from finance_chart_analyst.l3_interface_adapters.gateways.bedrock_generation_client import BedrockGenerationClient
from finance_chart_analyst.l3_interface_adapters.gateways.yaml_config_loader import YamlConfigLoader
from finance_chart_analyst.l4_frameworks_and_drivers.infra_config import InfraConfig


class DependencyContainer:
    """Creates and wires all concrete instances. Easy to override for testing.

    Owns the single generation client handle; call ``aclose`` at shutdown.
    """

    def __init__(
        self,
        config: AppConfig,
        infra: InfraConfig | None = None,
        generation_client: GenerationClient | None = None,
        tool_router: ToolRouter | None = None,
    ) -> None:
        self.config = config
        self.infra = infra or InfraConfig()

        bedrock = self.infra.bedrock
        self.generation_client: GenerationClient = generation_client or BedrockGenerationClient(
            region=bedrock.region,
            endpoint_url=bedrock.endpoint_url,
            profile=bedrock.profile,
            timeout=bedrock.timeout,
        )
        self.tool_router = tool_router or ToolRouter()
        self.use_case = RunAnalysisUseCase(self.generation_client, config, self.tool_router)
        self.controller = AnalysisController(self.use_case)

    async def aclose(self) -> None:
        await self.generation_client.aclose()

    @staticmethod
    def config_loader() -> ConfigLoader:
        return YamlConfigLoader()
