"""Maps pipeline failures to a stable JSON error body and HTTP status."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from finance_chart_analyst.l1_entities.errors import (
    ChartDataShapeError,
    FileProcessingError,
    InvalidMessageError,
    RequestValidationError,
    UpstreamError,
)

UPSTREAM_ERROR = 'Bedrock API Error'
CHART_DATA_ERROR = 'Invalid chart data'
UNKNOWN_ERROR = 'An unknown error occurred'


@dataclass(frozen=True)
class ErrorResponse:
    status_code: int
    body: dict[str, Any] = field(default_factory=dict)


def classify_error(exc: BaseException) -> ErrorResponse:
    """Client faults become 400 ``{error}``; everything else a 5xx-style ``{error, details, code}``.

    Chart-shape errors stay 500 (the caller did not cause them) but carry their
    own label so they are distinguishable from transport failures.
    """
    if isinstance(exc, InvalidMessageError) and exc.details:
        return ErrorResponse(400, {'error': str(exc), 'details': exc.details})
    if isinstance(exc, (RequestValidationError, FileProcessingError)):
        return ErrorResponse(400, {'error': str(exc)})
    if isinstance(exc, ChartDataShapeError):
        return _server_fault(CHART_DATA_ERROR, str(exc), 500)
    if isinstance(exc, UpstreamError):
        return _server_fault(UPSTREAM_ERROR, str(exc), exc.status_code or 500)
    return _server_fault(UNKNOWN_ERROR, str(exc) or type(exc).__name__, 500)


def _server_fault(error: str, details: str, code: int) -> ErrorResponse:
    return ErrorResponse(code, {'error': error, 'details': details, 'code': code})
