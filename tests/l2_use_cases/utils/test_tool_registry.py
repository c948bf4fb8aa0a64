"""Tests for the declared tool schemas: these are wire contract."""

from finance_chart_analyst.l2_use_cases.utils.tool_registry import (
    GENERATE_GRAPH_DATA,
    GET_STOCK_PRICE,
    TOOL_DECLARATIONS,
    get_tool,
    tool_names,
)


class TestToolRegistry:
    def test_two_tools_in_order(self):
        assert tool_names() == ['generate_graph_data', 'get_stock_price']
        assert TOOL_DECLARATIONS == (GENERATE_GRAPH_DATA, GET_STOCK_PRICE)

    def test_graph_tool_required_fields(self):
        schema = GENERATE_GRAPH_DATA.input_schema
        assert schema['required'] == ['chartType', 'config', 'data', 'chartConfig']
        assert schema['properties']['chartType']['enum'] == ['bar', 'multiBar', 'line', 'pie', 'area', 'stackedArea']
        assert schema['properties']['config']['required'] == ['title', 'description']
        trend = schema['properties']['config']['properties']['trend']
        assert trend['required'] == ['percentage', 'direction']
        assert trend['properties']['direction']['enum'] == ['up', 'down']
        series = schema['properties']['chartConfig']['additionalProperties']
        assert series['required'] == ['label']

    def test_stock_price_tool_schema(self):
        schema = GET_STOCK_PRICE.input_schema
        assert schema['required'] == ['ticker', 'start', 'end']
        assert schema['properties']['start']['format'] == 'date'

    def test_wire_form(self):
        wire = GET_STOCK_PRICE.to_wire()
        assert set(wire) == {'name', 'description', 'input_schema'}

    def test_get_tool(self):
        assert get_tool('get_stock_price') is GET_STOCK_PRICE
        assert get_tool('nope') is None
