"""Codec for the ``text`` slot of a content part.

The wire always carries ``text`` as a JSON string. What that string means
depends on the expected response type chosen by the caller:

- ``str``: the string *is* the value. Nothing is quoted or escaped twice.
- anything else: the string holds the value's JSON document, so a structured
  reply shows up double-escaped in the outer body and is decoded on the way in.

The choice is made once, when pydantic builds the schema for a parameterised
model such as ``Part[Person]``. Wire input must be a JSON string and is always
parsed. Python-side input may be the decoded value itself or its JSON document.

Public API (the "studs"):
    TypedText: Annotated alias used for typed text fields
    PlainText: The plain-text response type (``str``)
    is_plain_text: Whether a response type is the plain-text type
    encode_text: Encode a value into its text representation
    decode_text: Decode a text representation into a value
"""

import logging
import typing
from functools import lru_cache
from typing import Annotated, Any

from pydantic import (
    GetCoreSchemaHandler,
    GetJsonSchemaHandler,
    TypeAdapter,
    ValidationError,
    ValidationInfo,
)
from pydantic.json_schema import JsonSchemaValue
from pydantic_core import PydanticSerializationError, core_schema, from_json, to_json
from typing_extensions import TypeVar

from ..exceptions import DeserializationError, SerializationError

_logger = logging.getLogger(__name__)

T = TypeVar("T", default=str)

PlainText = str


def resolve_response_type(response_type: Any) -> Any:
    """Resolve an unbound type variable to its default, bound, or ``Any``."""
    if isinstance(response_type, typing.TypeVar):
        has_default = getattr(response_type, "has_default", None)
        if has_default is not None and has_default():
            return response_type.__default__
        return response_type.__bound__ or Any
    return response_type


def is_plain_text(response_type: Any) -> bool:
    """Return True if ``response_type`` is the plain-text type."""
    return resolve_response_type(response_type) is PlainText


def _decode_embedded(
    value: Any, handler: core_schema.ValidatorFunctionWrapHandler, info: ValidationInfo
) -> Any:
    if info.mode == "json":
        # Wire text is always a JSON string literal holding the document.
        if not isinstance(value, str):
            raise ValueError(f"text must be a string holding JSON, got {type(value).__name__}")
        return handler(from_json(value))

    if not isinstance(value, (str, bytes, bytearray)):
        return handler(value)
    # A string may already be the value (str enums, literals) or its JSON document.
    try:
        return handler(value)
    except ValidationError:
        return handler(from_json(value))


def _encode_embedded(value: Any, handler: core_schema.SerializerFunctionWrapHandler) -> str:
    return to_json(handler(value)).decode()


class _TextCodec:
    """Pydantic annotation that picks the text encoding from the annotated type."""

    __slots__ = ()

    def __get_pydantic_core_schema__(
        self, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        response_type = resolve_response_type(source_type)
        if is_plain_text(response_type):
            return core_schema.str_schema()

        inner = handler.generate_schema(response_type)
        return core_schema.with_info_wrap_validator_function(
            _decode_embedded,
            inner,
            serialization=core_schema.wrap_serializer_function_ser_schema(
                _encode_embedded, schema=inner, info_arg=False
            ),
        )

    def __get_pydantic_json_schema__(
        self, schema: core_schema.CoreSchema, handler: GetJsonSchemaHandler
    ) -> JsonSchemaValue:
        if schema["type"] == "str":
            return handler(schema)
        return {"type": "string", "contentMediaType": "application/json"}

    def __repr__(self) -> str:
        return "TypedText"


TypedText = Annotated[T, _TextCodec()]


@lru_cache(maxsize=128)
def _text_adapter(response_type: Any) -> TypeAdapter[Any]:
    return TypeAdapter(TypedText[response_type])


def encode_text(value: Any, response_type: Any = PlainText) -> str:
    """Encode ``value`` into the string carried by a part's ``text`` field.

    Args:
        value: Value to encode
        response_type: Expected response type the value belongs to

    Returns:
        The string itself for plain text, otherwise the value's JSON document

    Raises:
        SerializationError: If the value cannot be serialized as ``response_type``
    """
    try:
        return _text_adapter(response_type).dump_python(value, mode="json", warnings="error")
    except PydanticSerializationError as e:
        raise SerializationError(f"Failed to encode text as {response_type!r}: {e}") from e


def decode_text(raw: str, response_type: Any = PlainText) -> Any:
    """Decode the string carried by a part's ``text`` field.

    Args:
        raw: Text content as read from the wire
        response_type: Expected response type

    Returns:
        ``raw`` unchanged for plain text, otherwise the decoded value

    Raises:
        DeserializationError: If ``raw`` is not valid JSON or does not match the type
    """
    try:
        return _text_adapter(response_type).validate_json(to_json(raw))
    except ValidationError as e:
        _logger.debug("Text decode failed for %r", response_type, exc_info=True)
        raise DeserializationError(f"Failed to decode text as {response_type!r}: {e}") from e


__all__ = [
    "T",
    "PlainText",
    "TypedText",
    "resolve_response_type",
    "is_plain_text",
    "encode_text",
    "decode_text",
]
