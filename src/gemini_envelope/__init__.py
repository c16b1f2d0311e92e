"""gemini-envelope - Typed request/response envelopes for the Gemini API.

Pick the type you expect back, attach a schema for it, and get decoded
values out of the response instead of JSON text to re-parse.

Key components:
    - GenerationConfigBuilder: Fluent config builder that requires a schema for typed responses
    - Content / Part: Conversation content, generic over the text type
    - GenerateContentResponse: Response envelope with first_text() accessors
    - dump_request / load_response: Hooks for the HTTP transport

Quick start:
    >>> from pydantic import BaseModel
    >>> from gemini_envelope import GenerationConfig, GenerateContentRequest, load_response
    >>>
    >>> class Person(BaseModel):
    ...     name: str
    ...     age: int
    >>>
    >>> config = GenerationConfig.builder().response_json_schema(Person).build()
    >>> request = GenerateContentRequest.from_prompt("Invent a person", config=config)
    >>> # body = dump_request(request); raw = <POST body>
    >>> response = load_response(raw, Person)
    >>> response.first_text().name
"""

from .codec import dump_request, dump_response, load_response
from .config import GeminiConfig, load_generation_options
from .dto import (
    Blob,
    Candidate,
    CodeExecutionResult,
    Content,
    ExecutableCode,
    FileData,
    FunctionCall,
    FunctionResponse,
    GenerateContentRequest,
    GenerateContentResponse,
    GenerationConfig,
    GenerationConfigBuilder,
    MimeType,
    Part,
    PlainText,
    PromptFeedback,
    ResponseMimeType,
    Role,
    SafetyRating,
    SafetySetting,
    SchemaDescriptor,
    SchemaFormat,
    TypedText,
    UsageMetadata,
    VideoMetadata,
    decode_text,
    encode_text,
    is_plain_text,
)
from .exceptions import (
    BuildError,
    DeserializationError,
    GeminiError,
    InvalidGenerationConfigError,
    SchemaGenerationError,
    SchemaRequiredForTypedResponse,
    SerializationError,
    TransportError,
)
from .transport import AsyncTransport, Transport, generate_content, generate_content_async

__version__ = "0.1.0"

__all__ = [
    # Hooks
    "dump_request",
    "load_response",
    "dump_response",
    "generate_content",
    "generate_content_async",
    "Transport",
    "AsyncTransport",
    # Config
    "GeminiConfig",
    "load_generation_options",
    # Text codec
    "PlainText",
    "TypedText",
    "is_plain_text",
    "encode_text",
    "decode_text",
    # Content
    "Role",
    "MimeType",
    "Blob",
    "FunctionCall",
    "FunctionResponse",
    "FileData",
    "ExecutableCode",
    "CodeExecutionResult",
    "VideoMetadata",
    "Part",
    "Content",
    # Generation
    "SchemaFormat",
    "SchemaDescriptor",
    "ResponseMimeType",
    "GenerationConfig",
    "GenerationConfigBuilder",
    # Request / response
    "SafetySetting",
    "SafetyRating",
    "GenerateContentRequest",
    "Candidate",
    "PromptFeedback",
    "UsageMetadata",
    "GenerateContentResponse",
    # Exceptions
    "GeminiError",
    "SerializationError",
    "DeserializationError",
    "SchemaGenerationError",
    "BuildError",
    "SchemaRequiredForTypedResponse",
    "InvalidGenerationConfigError",
    "TransportError",
    "__version__",
]
