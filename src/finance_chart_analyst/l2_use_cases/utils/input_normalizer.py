"""Fold an optional attached file into the last turn of the conversation."""

from __future__ import annotations

import base64
import binascii
import logging

from pydantic import ValidationError

from finance_chart_analyst.l1_entities.chat_message import ConversationMessage, ImageBlock, TextBlock
from finance_chart_analyst.l1_entities.errors import (
    InvalidFileError,
    MissingMessagesError,
    UnsupportedFileTypeError,
)
from finance_chart_analyst.l1_entities.file_attachment import FileAttachment

log = logging.getLogger('fca.pipeline')


def normalize_messages(
    messages: list[ConversationMessage],
    file_data: FileAttachment | None = None,
    *,
    reject_unsupported: bool = False,
) -> list[ConversationMessage]:
    """Return the outbound message list.

    Without an attachment the turns are copied verbatim. A text attachment
    becomes a ``File contents of ...`` text block placed before the user's
    text; an image attachment becomes an image block placed before it. Any
    other attachment is dropped unless *reject_unsupported* is set.
    """
    normalized = [m.model_copy(deep=True) for m in messages]
    if file_data is None:
        return normalized

    if not file_data.base64:
        log.error('Attachment %r carries no base64 data', file_data.file_name)
        raise InvalidFileError('No file data')
    if not normalized:
        raise MissingMessagesError()

    original_text = normalized[-1].text()

    if file_data.is_text:
        text_content = decode_text_attachment(file_data.base64)
        normalized[-1] = ConversationMessage(
            role='user',
            content=[
                TextBlock(text=f'File contents of {file_data.file_name}:\n\n{text_content}'),
                TextBlock(text=original_text),
            ],
        )
    elif file_data.is_image:
        try:
            image = ImageBlock(media_type=file_data.media_type, data=file_data.base64)
        except ValidationError as e:
            log.error('Invalid image attachment %r: %s', file_data.file_name, e)
            raise InvalidFileError('Failed to process file content') from e
        normalized[-1] = ConversationMessage(role='user', content=[image, TextBlock(text=original_text)])
    elif reject_unsupported:
        raise UnsupportedFileTypeError(file_data.media_type)
    else:
        log.warning(
            'Ignoring attachment %r with unsupported media type %r',
            file_data.file_name,
            file_data.media_type,
        )

    return normalized


def decode_text_attachment(payload: str) -> str:
    """Decode a base64 payload as strict UTF-8 text.

    Like browser ``atob``: whitespace is ignored and missing padding restored.
    """
    compact = ''.join(payload.split())
    compact += '=' * (-len(compact) % 4)
    try:
        return base64.b64decode(compact, validate=True).decode('utf-8')
    except (binascii.Error, ValueError) as e:
        log.error('Error processing file content: %s', e)
        raise InvalidFileError('Failed to process file content') from e
