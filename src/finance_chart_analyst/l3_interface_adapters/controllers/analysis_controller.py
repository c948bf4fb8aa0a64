"""AnalysisController: turns a raw request body into a (status, JSON body) pair."""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from finance_chart_analyst.l1_entities.analysis import AnalysisRequest
from finance_chart_analyst.l1_entities.chat_message import ConversationMessage
from finance_chart_analyst.l1_entities.errors import (
    InvalidFileError,
    InvalidMessageError,
    MissingMessagesError,
    MissingModelError,
)
from finance_chart_analyst.l1_entities.file_attachment import FileAttachment
from finance_chart_analyst.l2_use_cases.analyze_use_case import RunAnalysisUseCase
from finance_chart_analyst.l3_interface_adapters.controllers.error_classifier import classify_error

log = logging.getLogger('fca.controller')


class AnalysisController:
    """Validates the inbound body, runs the use case, classifies any failure.

    Framework-free: the HTTP driver only forwards the decoded JSON body and
    writes back whatever status and body this returns.
    """

    def __init__(self, use_case: RunAnalysisUseCase) -> None:
        self._use_case = use_case

    async def handle(self, body: Any) -> tuple[int, dict[str, Any]]:
        try:
            request = parse_request(body)
            response = await self._use_case.execute(request)
        except Exception as e:
            classified = classify_error(e)
            if classified.status_code >= 500:
                log.error('Finance API error: %s: %s', type(e).__name__, e, exc_info=True)
            else:
                log.warning('Rejected request: %s', e)
            return classified.status_code, classified.body
        return 200, response.to_wire()


def parse_request(body: Any) -> AnalysisRequest:
    """Check ``messages`` then ``model`` then ``fileData``, in that order."""
    if not isinstance(body, dict):
        raise MissingMessagesError()

    raw_messages = body.get('messages')
    if not raw_messages or not isinstance(raw_messages, list):
        raise MissingMessagesError()
    model = body.get('model')
    if not model or not isinstance(model, str):
        raise MissingModelError()

    try:
        messages = [ConversationMessage.model_validate(m) for m in raw_messages]
    except ValidationError as e:
        raise InvalidMessageError(details=str(e)) from e

    file_data = None
    raw_file = body.get('fileData')
    if raw_file is not None:
        if not isinstance(raw_file, dict):
            raise InvalidFileError('No file data')
        try:
            file_data = FileAttachment.model_validate(raw_file)
        except ValidationError as e:
            raise InvalidFileError('Failed to process file content') from e

    return AnalysisRequest(messages=messages, model=model, file_data=file_data)
