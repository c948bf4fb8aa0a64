"""Chart entities: the render-ready chart description."""

from __future__ import annotations

import enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ChartType(str, enum.Enum):
    BAR = 'bar'
    MULTI_BAR = 'multiBar'
    LINE = 'line'
    PIE = 'pie'
    AREA = 'area'
    STACKED_AREA = 'stackedArea'


class Trend(BaseModel):
    percentage: float
    direction: Literal['up', 'down']


class ChartConfig(BaseModel):
    """Chart-level text and axis settings. Unknown keys from the model are kept."""

    model_config = ConfigDict(populate_by_name=True, extra='allow')

    title: str = ''
    description: str = ''
    trend: Trend | None = None
    footer: str | None = None
    total_label: str | None = Field(default=None, alias='totalLabel')
    x_axis_key: str | None = Field(default=None, alias='xAxisKey')

    @field_validator('title', 'description', mode='before')
    @classmethod
    def _null_as_empty(cls, value: Any) -> Any:
        return '' if value is None else value


class SeriesConfig(BaseModel):
    """Per-series styling for one ``chartConfig`` entry."""

    model_config = ConfigDict(extra='allow')

    label: str = ''
    stacked: bool | None = None
    color: str | None = None

    @field_validator('label', mode='before')
    @classmethod
    def _null_as_empty(cls, value: Any) -> Any:
        return '' if value is None else value


class ChartSpec(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra='allow')

    chart_type: ChartType = Field(alias='chartType')
    config: ChartConfig = Field(default_factory=ChartConfig)
    data: list[dict[str, Any]]
    chart_config: dict[str, SeriesConfig] = Field(default_factory=dict, alias='chartConfig')

    def to_wire(self) -> dict[str, Any]:
        wire = self.model_dump(mode='json', by_alias=True, exclude_none=True, exclude={'data'})
        wire['data'] = [dict(row) for row in self.data]  # rows keep explicit nulls
        return wire
