"""Gateway: Bedrock InvokeModel client: implements GenerationClient port.

Sends Anthropic Messages payloads through boto3's ``bedrock-runtime`` client,
so credentials come from the standard AWS chain (env vars, profile, SSO,
instance role). boto3 is blocking; calls run in a worker thread.
"""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from finance_chart_analyst.l1_entities.errors import UpstreamError

log = logging.getLogger('fca.gateway')

SERVICE_NAME = 'bedrock-runtime'


class BedrockGenerationClient:
    """Wraps one long-lived boto3 client. Construct once, close at shutdown."""

    def __init__(
        self,
        region: str = 'us-west-2',
        endpoint_url: str | None = None,
        profile: str | None = None,
        timeout: float | None = None,
        client: Any = None,
    ) -> None:
        if client is None:
            # max_attempts counts retries in legacy mode; the pipeline never retries.
            options: dict[str, Any] = {'retries': {'max_attempts': 0, 'mode': 'legacy'}}
            if timeout is not None:
                options['read_timeout'] = timeout
            session = boto3.Session(profile_name=profile, region_name=region)
            client = session.client(SERVICE_NAME, endpoint_url=endpoint_url, config=Config(**options))
        self._client = client

    @property
    def endpoint(self) -> str:
        return self._client.meta.endpoint_url

    async def invoke(self, model: str, payload: dict[str, Any]) -> dict[str, Any]:
        return await asyncio.to_thread(self._invoke_sync, model, payload)

    def _invoke_sync(self, model: str, payload: dict[str, Any]) -> dict[str, Any]:
        try:
            response = self._client.invoke_model(
                modelId=model,
                body=json.dumps(payload),
                contentType='application/json',
                accept='application/json',
            )
            raw = response['body'].read()
        except ClientError as e:
            status = e.response.get('ResponseMetadata', {}).get('HTTPStatusCode') or 500
            message = e.response.get('Error', {}).get('Message') or str(e)
            log.error('Generation service returned %d: %s', status, message)
            raise UpstreamError(message, status_code=status) from e
        except BotoCoreError as e:
            log.error('Request to generation service failed: %s', e, exc_info=True)
            raise UpstreamError(f'Request to generation service failed: {e}') from e

        try:
            body = json.loads(raw)
        except ValueError as e:
            raise UpstreamError('Generation service returned a non-JSON body') from e
        if not isinstance(body, dict):
            raise UpstreamError('Generation service returned an unexpected body')
        return body

    async def aclose(self) -> None:
        self._client.close()
