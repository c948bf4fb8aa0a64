"""Validate and normalize a ``generate_graph_data`` invocation into a ChartSpec."""

from __future__ import annotations

import copy
import logging
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from finance_chart_analyst.l1_entities.chart import ChartSpec, ChartType
from finance_chart_analyst.l1_entities.errors import InvalidChartDataError
from finance_chart_analyst.l1_entities.tool import ToolInvocation

log = logging.getLogger('fca.pipeline')

DEFAULT_COLOR_TEMPLATE = 'hsl(var(--chart-{slot}))'
PIE_SEGMENT_FALLBACKS = ('segment', 'category', 'name')

_CHART_TYPES = {t.value for t in ChartType}


def normalize_chart(
    invocation: ToolInvocation,
    *,
    color_template: str = DEFAULT_COLOR_TEMPLATE,
) -> ChartSpec:
    """Return a new ChartSpec; the invocation input is left untouched.

    Raises InvalidChartDataError before any transform when the shape is wrong.
    """
    raw = copy.deepcopy(invocation.input)
    _validate_shape(raw)

    if raw['chartType'] == ChartType.PIE.value:
        raw = _reshape_pie(raw)

    raw['chartConfig'] = assign_colors(raw.get('chartConfig') or {}, color_template)

    try:
        return ChartSpec.model_validate(raw)
    except ValidationError as e:
        raise InvalidChartDataError(f'Invalid chart data structure: {e}') from e


def _validate_shape(raw: Mapping[str, Any]) -> None:
    chart_type = raw.get('chartType')
    if not chart_type:
        raise InvalidChartDataError('Invalid chart data structure: chartType is required')
    if not isinstance(chart_type, str) or chart_type not in _CHART_TYPES:
        raise InvalidChartDataError(f'Invalid chart data structure: unknown chartType {chart_type!r}')

    data = raw.get('data')
    if data is None:
        raise InvalidChartDataError('Invalid chart data structure: data is required')
    if not isinstance(data, list):
        raise InvalidChartDataError('Invalid chart data structure: data must be an array')
    if not data:
        raise InvalidChartDataError('Invalid chart data structure: data must not be empty')
    if not all(isinstance(row, Mapping) for row in data):
        raise InvalidChartDataError('Invalid chart data structure: data rows must be objects')

    for key in ('config', 'chartConfig'):
        if raw.get(key) is not None and not isinstance(raw[key], Mapping):
            raise InvalidChartDataError(f'Invalid chart data structure: {key} must be an object')
    if not all(isinstance(series, Mapping) for series in (raw.get('chartConfig') or {}).values()):
        raise InvalidChartDataError('Invalid chart data structure: chartConfig entries must be objects')
    x_axis_key = (raw.get('config') or {}).get('xAxisKey')
    if x_axis_key is not None and not isinstance(x_axis_key, str):
        raise InvalidChartDataError('Invalid chart data structure: config.xAxisKey must be a string')


def _reshape_pie(raw: dict[str, Any]) -> dict[str, Any]:
    config = dict(raw.get('config') or {})
    chart_config = raw.get('chartConfig') or {}
    value_key = next(iter(chart_config), None)
    segment_key = config.get('xAxisKey') or 'segment'

    rows = []
    for row in raw['data']:
        value_keys = (value_key, 'value') if value_key else ('value',)
        rows.append(
            {
                'segment': _first_present(row, (segment_key, *PIE_SEGMENT_FALLBACKS)),
                'value': _first_present(row, value_keys),
            }
        )
    log.debug('Reshaped %d pie rows (value key=%r, segment key=%r)', len(rows), value_key, segment_key)

    config['xAxisKey'] = 'segment'
    return {**raw, 'config': config, 'data': rows}


def _first_present(row: Mapping[str, Any], keys: tuple[str, ...]) -> Any:
    # 0 and False are real values; missing, null and '' are not.
    for key in keys:
        value = row.get(key)
        if value is not None and value != '':
            return value
    return None


def assign_colors(chart_config: Mapping[str, Any], color_template: str = DEFAULT_COLOR_TEMPLATE) -> dict[str, Any]:
    """Give each series a 1-based color slot in insertion order, replacing prior colors."""
    colored: dict[str, Any] = {}
    for slot, (key, series) in enumerate(chart_config.items(), start=1):
        entry = dict(series)
        entry['color'] = color_template.format(slot=slot)
        colored[key] = entry
    return colored
