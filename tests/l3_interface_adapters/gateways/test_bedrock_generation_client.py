"""Tests for the Bedrock gateway: botocore Stubber at the L3 boundary, never the network."""

from __future__ import annotations

import io
import json

import boto3
import pytest
from botocore.exceptions import ClientError, EndpointConnectionError
from botocore.response import StreamingBody
from botocore.stub import Stubber

from finance_chart_analyst.l1_entities.errors import UpstreamError
from finance_chart_analyst.l3_interface_adapters.gateways.bedrock_generation_client import BedrockGenerationClient
from tests.conftest import make_reply

MODEL = 'anthropic.claude-3-5-sonnet-20241022-v2:0'


def _stubbed(region: str = 'us-east-1') -> tuple[BedrockGenerationClient, Stubber]:
    client = boto3.client('bedrock-runtime', region_name=region)
    return BedrockGenerationClient(client=client), Stubber(client)


def _body(raw: bytes) -> dict:
    return {'body': StreamingBody(io.BytesIO(raw), len(raw)), 'contentType': 'application/json'}


class _RaisingClient:
    """Stands in for a boto3 client whose invoke_model always raises *exc*."""

    def __init__(self, exc: Exception) -> None:
        self._exc = exc

    def invoke_model(self, **kwargs):
        raise self._exc


class TestInvoke:
    @pytest.mark.asyncio
    async def test_sends_payload_to_model(self):
        gateway, stubber = _stubbed()
        payload = {'anthropic_version': 'bedrock-2023-05-31', 'max_tokens': 10}
        reply = make_reply({'type': 'text', 'text': 'ok'})
        stubber.add_response(
            'invoke_model',
            _body(json.dumps(reply).encode('utf-8')),
            expected_params={
                'modelId': MODEL,
                'body': json.dumps(payload),
                'contentType': 'application/json',
                'accept': 'application/json',
            },
        )

        with stubber:
            result = await gateway.invoke(MODEL, payload)

        assert result['content'] == [{'type': 'text', 'text': 'ok'}]
        stubber.assert_no_pending_responses()

    @pytest.mark.asyncio
    async def test_aclose_closes_client(self):
        closed: list[bool] = []

        class _Client:
            def close(self) -> None:
                closed.append(True)

        await BedrockGenerationClient(client=_Client()).aclose()
        assert closed == [True]


class TestErrors:
    @pytest.mark.asyncio
    async def test_service_error_carries_status_and_message(self):
        gateway, stubber = _stubbed()
        stubber.add_client_error(
            'invoke_model',
            service_error_code='ThrottlingException',
            service_message='Too many requests, please wait before trying again.',
            http_status_code=429,
        )

        with stubber, pytest.raises(UpstreamError) as exc_info:
            await gateway.invoke(MODEL, {})

        assert exc_info.value.status_code == 429
        assert 'Too many requests' in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_access_denied(self):
        gateway, stubber = _stubbed()
        stubber.add_client_error(
            'invoke_model',
            service_error_code='AccessDeniedException',
            service_message='User is not authorized',
            http_status_code=403,
        )

        with stubber, pytest.raises(UpstreamError, match='not authorized') as exc_info:
            await gateway.invoke(MODEL, {})
        assert exc_info.value.status_code == 403

    @pytest.mark.asyncio
    async def test_client_error_without_status_is_500(self):
        error = ClientError({'Error': {'Code': 'Unknown', 'Message': 'boom'}}, 'InvokeModel')
        gateway = BedrockGenerationClient(client=_RaisingClient(error))

        with pytest.raises(UpstreamError, match='boom') as exc_info:
            await gateway.invoke(MODEL, {})
        assert exc_info.value.status_code == 500

    @pytest.mark.asyncio
    async def test_transport_failure_is_generic_500(self):
        error = EndpointConnectionError(endpoint_url='https://bedrock-runtime.us-east-1.amazonaws.com')
        gateway = BedrockGenerationClient(client=_RaisingClient(error))

        with pytest.raises(UpstreamError, match='Request to generation service failed') as exc_info:
            await gateway.invoke(MODEL, {})
        assert exc_info.value.status_code == 500

    @pytest.mark.asyncio
    async def test_non_json_reply(self):
        gateway, stubber = _stubbed()
        stubber.add_response('invoke_model', _body(b'<html>'))

        with stubber, pytest.raises(UpstreamError, match='non-JSON'):
            await gateway.invoke(MODEL, {})

    @pytest.mark.asyncio
    async def test_non_object_reply(self):
        gateway, stubber = _stubbed()
        stubber.add_response('invoke_model', _body(b'[1, 2]'))

        with stubber, pytest.raises(UpstreamError, match='unexpected body'):
            await gateway.invoke(MODEL, {})


class TestClientConstruction:
    def test_region_in_endpoint(self):
        gateway = BedrockGenerationClient(region='ap-south-1')
        assert gateway.endpoint == 'https://bedrock-runtime.ap-south-1.amazonaws.com'

    def test_custom_endpoint(self):
        gateway = BedrockGenerationClient(endpoint_url='http://localhost:4566')
        assert gateway.endpoint == 'http://localhost:4566'

    def test_timeout_and_no_retries(self):
        gateway = BedrockGenerationClient(timeout=12)
        config = gateway._client.meta.config
        assert config.read_timeout == 12
        assert config.retries['max_attempts'] == 0
