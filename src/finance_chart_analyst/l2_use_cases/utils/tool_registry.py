"""Static declarations of the tools the generation service may invoke.

The schemas are part of the wire contract: field names, required lists and
enumerations must stay exactly as the model was prompted with them.
"""

from __future__ import annotations

from finance_chart_analyst.l1_entities.chart import ChartType
from finance_chart_analyst.l1_entities.tool import ToolDeclaration

GRAPH_TOOL_NAME = 'generate_graph_data'
STOCK_PRICE_TOOL_NAME = 'get_stock_price'

GENERATE_GRAPH_DATA = ToolDeclaration(
    name=GRAPH_TOOL_NAME,
    description='Generate structured JSON data for creating financial charts and graphs.',
    input_schema={
        'type': 'object',
        'properties': {
            'chartType': {
                'type': 'string',
                'enum': [t.value for t in ChartType],
                'description': 'The type of chart to generate',
            },
            'config': {
                'type': 'object',
                'properties': {
                    'title': {'type': 'string'},
                    'description': {'type': 'string'},
                    'trend': {
                        'type': 'object',
                        'properties': {
                            'percentage': {'type': 'number'},
                            'direction': {'type': 'string', 'enum': ['up', 'down']},
                        },
                        'required': ['percentage', 'direction'],
                    },
                    'footer': {'type': 'string'},
                    'totalLabel': {'type': 'string'},
                    'xAxisKey': {'type': 'string'},
                },
                'required': ['title', 'description'],
            },
            'data': {
                'type': 'array',
                'items': {'type': 'object', 'additionalProperties': True},
            },
            'chartConfig': {
                'type': 'object',
                'additionalProperties': {
                    'type': 'object',
                    'properties': {
                        'label': {'type': 'string'},
                        'stacked': {'type': 'boolean'},
                    },
                    'required': ['label'],
                },
            },
        },
        'required': ['chartType', 'config', 'data', 'chartConfig'],
    },
)

GET_STOCK_PRICE = ToolDeclaration(
    name=STOCK_PRICE_TOOL_NAME,
    description=(
        'Use this tool to retrieve the historical stock price data for a specific company. '
        'This tool will get the open high low close value of the ticker. '
        'The tool has been set to take the price until today and 1 month behind as default. '
        'If the user do not specify the date, always get the price for the latest date.'
    ),
    input_schema={
        'type': 'object',
        'properties': {
            'ticker': {'type': 'string', 'description': 'The stock ticker symbol'},
            'start': {
                'type': 'string',
                'format': 'date',
                'description': 'The start date for the price data (format: YYYY-MM-DD)',
            },
            'end': {
                'type': 'string',
                'format': 'date',
                'description': 'The end date for the price data (format: YYYY-MM-DD)',
            },
        },
        'required': ['ticker', 'start', 'end'],
    },
)

TOOL_DECLARATIONS: tuple[ToolDeclaration, ...] = (GENERATE_GRAPH_DATA, GET_STOCK_PRICE)


def tool_names() -> list[str]:
    return [t.name for t in TOOL_DECLARATIONS]


def get_tool(name: str) -> ToolDeclaration | None:
    """Look up a declared tool by name."""
    for tool in TOOL_DECLARATIONS:
        if tool.name == name:
            return tool
    return None
