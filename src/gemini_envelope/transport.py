"""Transport seam - the contract the envelope layer expects from HTTP code.

This package ships no network client. A transport receives a fully
serialized body and returns the raw response body; everything typed happens
on either side of that call.

Public API (the "studs"):
    Transport: Protocol for a blocking transport
    AsyncTransport: Protocol for an asyncio transport
    generate_content: Serialize, send and decode one request
    generate_content_async: Async variant of generate_content
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from .codec import dump_request, load_response
from .exceptions import GeminiError, TransportError

if TYPE_CHECKING:
    from .config import GeminiConfig
    from .dto.request import GenerateContentRequest
    from .dto.response import GenerateContentResponse

_logger = logging.getLogger(__name__)


@runtime_checkable
class Transport(Protocol):
    """Protocol for a blocking transport.

    Implementations POST ``body`` to ``url`` with ``headers`` and return the
    response body. Non-success responses and connection failures should be
    raised as ``TransportError``; other exceptions are wrapped in one.
    """

    def post(self, url: str, body: bytes, headers: Mapping[str, str]) -> bytes:
        """Send ``body`` and return the raw response body."""
        ...


@runtime_checkable
class AsyncTransport(Protocol):
    """Protocol for an asyncio transport. Same contract as ``Transport``."""

    async def post(self, url: str, body: bytes, headers: Mapping[str, str]) -> bytes:
        """Send ``body`` and return the raw response body."""
        ...


def _headers(config: GeminiConfig) -> dict[str, str]:
    return {
        "x-goog-api-key": config.api_key.get_secret_value(),
        "Content-Type": "application/json",
    }


def generate_content(
    transport: Transport, config: GeminiConfig, request: GenerateContentRequest
) -> GenerateContentResponse[Any]:
    """Send ``request`` through ``transport`` and decode the typed response.

    The response is decoded as ``request.response_type``. Nothing is retried.

    Raises:
        SerializationError: If the request cannot be encoded
        TransportError: If the transport fails
        DeserializationError: If the response does not decode
    """
    url = config.generate_content_url()
    body = dump_request(request)
    _logger.debug("POST %s (%d bytes)", url, len(body))
    try:
        raw = transport.post(url, body, _headers(config))
    except GeminiError:
        raise
    except Exception as e:
        raise TransportError(f"Transport failed for {url}: {e}") from e
    return load_response(raw, request.response_type)


async def generate_content_async(
    transport: AsyncTransport, config: GeminiConfig, request: GenerateContentRequest
) -> GenerateContentResponse[Any]:
    """Async variant of ``generate_content``."""
    url = config.generate_content_url()
    body = dump_request(request)
    _logger.debug("POST %s (%d bytes)", url, len(body))
    try:
        raw = await transport.post(url, body, _headers(config))
    except GeminiError:
        raise
    except Exception as e:
        raise TransportError(f"Transport failed for {url}: {e}") from e
    return load_response(raw, request.response_type)


__all__ = ["Transport", "AsyncTransport", "generate_content", "generate_content_async"]
