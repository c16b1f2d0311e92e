"""Serialization hooks used by the transport.

Public API (the "studs"):
    dump_request: Serialize a request body to bytes
    load_response: Deserialize a response body into a typed envelope
    dump_response: Serialize a response envelope back to bytes
"""

import logging
from typing import Any

from pydantic import ValidationError
from pydantic_core import PydanticSerializationError

from .dto.request import GenerateContentRequest
from .dto.response import GenerateContentResponse
from .dto.text import PlainText, is_plain_text
from .dto.wire import WIRE_DUMP_OPTIONS
from .exceptions import DeserializationError, SerializationError

_logger = logging.getLogger(__name__)


def dump_request(request: GenerateContentRequest) -> bytes:
    """Serialize ``request`` to the JSON body sent to the API.

    Raises:
        SerializationError: If any value cannot be encoded
    """
    try:
        body = request.model_dump_json(**WIRE_DUMP_OPTIONS).encode()
    except PydanticSerializationError as e:
        raise SerializationError(f"Failed to serialize request: {e}") from e
    _logger.debug(
        "Serialized request with %d content block(s) (%d bytes)", len(request.contents), len(body)
    )
    return body


def load_response(
    data: bytes | str, response_type: Any = PlainText
) -> GenerateContentResponse[Any]:
    """Deserialize a response body, decoding every part's text as ``response_type``.

    Decoding is all or nothing: one part whose text does not match
    ``response_type`` fails the whole envelope.

    Args:
        data: Raw response body
        response_type: Expected type of each part's text

    Returns:
        GenerateContentResponse parameterised by ``response_type``

    Raises:
        DeserializationError: If the body or any embedded text does not decode
    """
    envelope_cls = (
        GenerateContentResponse
        if is_plain_text(response_type)
        else GenerateContentResponse[response_type]
    )
    try:
        response = envelope_cls.model_validate_json(data)
    except ValidationError as e:
        raise DeserializationError(
            f"Failed to decode response as {envelope_cls.__name__}: {e}"
        ) from e
    _logger.debug(
        "Decoded response with %d candidate(s) as %r", len(response.candidates), response_type
    )
    return response


def dump_response(response: GenerateContentResponse[Any]) -> bytes:
    """Serialize a response envelope, re-encoding structured text.

    Raises:
        SerializationError: If any value cannot be encoded
    """
    try:
        return response.model_dump_json(**WIRE_DUMP_OPTIONS).encode()
    except PydanticSerializationError as e:
        raise SerializationError(f"Failed to serialize response: {e}") from e


__all__ = ["dump_request", "load_response", "dump_response"]
