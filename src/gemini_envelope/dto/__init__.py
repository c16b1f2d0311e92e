"""Typed request/response DTOs for the Gemini generateContent API.

Wire field names are lowerCamelCase; attributes are snake_case. Models that
carry model output are generic over the text type ``T`` (default ``str``).
"""

from .content import (
    Blob,
    CodeExecutionResult,
    Content,
    ExecutableCode,
    FileData,
    FunctionCall,
    FunctionResponse,
    MimeType,
    Part,
    Role,
    VideoMetadata,
)
from .generation import GenerationConfig, GenerationConfigBuilder, ResponseMimeType
from .request import GenerateContentRequest, SafetyRating, SafetySetting
from .response import Candidate, GenerateContentResponse, PromptFeedback, UsageMetadata
from .schema import SchemaDescriptor, SchemaFormat, json_schema_for, openapi_schema_for
from .text import PlainText, TypedText, decode_text, encode_text, is_plain_text

__all__ = [
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
    # Schema
    "SchemaFormat",
    "SchemaDescriptor",
    "json_schema_for",
    "openapi_schema_for",
    # Generation config
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
]
