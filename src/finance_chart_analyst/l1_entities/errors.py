"""Domain error types."""

from __future__ import annotations


class AnalystError(Exception):
    """Base class for every failure the analysis pipeline reports."""


class RequestValidationError(AnalystError):
    """Raised when the caller's request is missing or malformed."""


class MissingMessagesError(RequestValidationError):
    """Raised when the conversation is absent, not a list, or empty."""

    def __init__(self, message: str = 'Messages array is required') -> None:
        super().__init__(message)


class MissingModelError(RequestValidationError):
    """Raised when no model identifier was selected."""

    def __init__(self, message: str = 'Model selection is required') -> None:
        super().__init__(message)


class InvalidMessageError(RequestValidationError):
    """Raised when a conversation turn does not match the message schema."""

    def __init__(self, message: str = 'Invalid message format', details: str = '') -> None:
        super().__init__(message)
        self.details = details


class FileProcessingError(AnalystError):
    """Raised when an attached file cannot be turned into content blocks."""


class InvalidFileError(FileProcessingError):
    """Raised when attached file data is missing or cannot be decoded."""


class UnsupportedFileTypeError(FileProcessingError):
    """Raised for attachments that are neither text nor image (when rejection is enabled)."""

    def __init__(self, media_type: str) -> None:
        super().__init__('Unsupported file type')
        self.media_type = media_type


class ChartDataShapeError(AnalystError):
    """Raised when a tool invocation's chart payload violates the chart contract."""


class InvalidChartDataError(ChartDataShapeError):
    """Raised by the chart normalizer for missing or ill-typed chart fields."""


class UpstreamError(AnalystError):
    """Raised when the generation service call fails or returns a non-success status."""

    def __init__(self, message: str, status_code: int = 500) -> None:
        super().__init__(message)
        self.status_code = status_code
