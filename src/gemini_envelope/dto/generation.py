"""Generation config and its builder.

``GenerationConfig[T]`` records the expected response type ``T`` next to the
tuning knobs sent to the API. ``T`` never reaches the wire; it decides whether
``build()`` demands a response schema:

- ``str`` responses need no schema (plain text output).
- Any other ``T`` needs ``responseSchema`` or ``responseJsonSchema``.

The two schema slots are mutually exclusive. Attaching one clears the other
and switches ``responseMimeType`` to ``application/json``.

Example:
    >>> config = (
    ...     GenerationConfig.builder()
    ...     .temperature(0.2)
    ...     .response_json_schema(Person)
    ...     .build()
    ... )
    >>> config.response_type is Person
    True

Public API (the "studs"):
    ResponseMimeType: Output formats the API can produce
    GenerationConfig: Immutable generation settings for a request
    GenerationConfigBuilder: Fluent builder validating schema presence
"""

import logging
from collections.abc import Mapping
from enum import Enum
from typing import Any, Generic

from pydantic import ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_snake
from typing_extensions import TypeVar

from ..exceptions import InvalidGenerationConfigError, SchemaRequiredForTypedResponse
from .schema import SchemaDescriptor, SchemaFormat
from .text import PlainText, T, is_plain_text, resolve_response_type
from .wire import WireModel

_logger = logging.getLogger(__name__)

R = TypeVar("R")


class ResponseMimeType(str, Enum):
    """Output formats the API can produce."""

    TEXT_PLAIN = "text/plain"
    APPLICATION_JSON = "application/json"
    TEXT_ENUM = "text/x.enum"


class GenerationConfig(WireModel, Generic[T]):
    """Generation settings sent as ``generationConfig``.

    Instances are immutable. Use ``GenerationConfig[T].builder()`` to create
    one with the schema invariant checked.
    """

    model_config = ConfigDict(frozen=True)

    stop_sequences: list[str] | None = Field(
        None, max_length=5, description="Up to 5 sequences that stop generation"
    )
    response_mime_type: ResponseMimeType | None = Field(
        None, description="MIME type of the generated candidate text"
    )
    response_schema: dict[str, Any] | None = Field(
        None, description="OpenAPI subset schema; exclusive with response_json_schema"
    )
    response_json_schema: dict[str, Any] | None = Field(
        None, description="JSON Schema; exclusive with response_schema"
    )
    response_modalities: list[str] | None = Field(None, description="Requested output modalities")
    candidate_count: int | None = Field(None, ge=1, description="Number of candidates")
    max_output_tokens: int | None = Field(None, ge=1, description="Token limit per candidate")
    temperature: float | None = Field(None, ge=0.0, le=2.0, description="Sampling temperature")
    top_p: float | None = Field(None, description="Nucleus sampling probability mass")
    top_k: int | None = Field(None, description="Number of tokens considered when sampling")
    seed: int | None = Field(None, description="Decoding seed")
    presence_penalty: float | None = Field(None, description="Presence penalty")
    frequency_penalty: float | None = Field(None, description="Frequency penalty")
    response_logprobs: bool | None = Field(None, description="Export logprobs in the response")
    logprobs: int | None = Field(None, ge=0, le=20, description="Top logprobs per step")
    enable_enhanced_civic_answers: bool | None = Field(
        None, description="Enable enhanced civic answers"
    )
    speech_config: dict[str, Any] | None = Field(None, description="Speech generation config")
    thinking_config: dict[str, Any] | None = Field(None, description="Thinking config")
    image_config: dict[str, Any] | None = Field(None, description="Image generation config")
    media_resolution: str | None = Field(None, description="Resolution for input media")

    @classmethod
    def builder(cls) -> "GenerationConfigBuilder[T]":
        """Create a builder for this config's response type."""
        args = cls.__pydantic_generic_metadata__["args"]
        return GenerationConfigBuilder(args[0] if args else PlainText)

    @property
    def response_type(self) -> Any:
        """The expected response type ``T``."""
        args = type(self).__pydantic_generic_metadata__["args"]
        return resolve_response_type(args[0]) if args else PlainText

    @property
    def schema_format(self) -> SchemaFormat | None:
        """Which schema slot is populated, if any."""
        if self.response_schema is not None:
            return SchemaFormat.OPENAPI
        if self.response_json_schema is not None:
            return SchemaFormat.JSON_SCHEMA
        return None

    @property
    def has_schema(self) -> bool:
        return self.schema_format is not None


_SCHEMA_FIELDS = frozenset({"response_schema", "response_json_schema"})
_OPTION_FIELDS = frozenset(GenerationConfig.model_fields) - _SCHEMA_FIELDS


class GenerationConfigBuilder(Generic[T]):
    """Fluent builder for ``GenerationConfig[T]``.

    Every setter returns a new builder; the receiver is left unchanged.
    Attaching a schema for type ``R`` returns a ``GenerationConfigBuilder[R]``
    that keeps every knob set so far.
    """

    def __init__(self, response_type: Any = PlainText, **params: Any) -> None:
        self._response_type = resolve_response_type(response_type)
        self._params = params

    def __repr__(self) -> str:
        return (
            f"GenerationConfigBuilder(response_type={self._response_type!r}, "
            f"params={self._params!r})"
        )

    @property
    def response_type(self) -> Any:
        return self._response_type

    def _with(self, **changes: Any) -> "GenerationConfigBuilder[T]":
        return GenerationConfigBuilder(self._response_type, **{**self._params, **changes})

    # -------------------------------------------------------------------------
    # Schema
    # -------------------------------------------------------------------------

    def attach_schema(self, descriptor: SchemaDescriptor) -> "GenerationConfigBuilder[Any]":
        """Attach a derived schema, switching the response type to the one it describes.

        The other schema slot is cleared and the response MIME type becomes
        ``application/json``.
        """
        if descriptor.format == SchemaFormat.OPENAPI:
            slots = {"response_schema": descriptor.document, "response_json_schema": None}
        else:
            slots = {"response_schema": None, "response_json_schema": descriptor.document}
        _logger.debug(
            "Attaching %s schema for %r", descriptor.format.value, descriptor.response_type
        )
        return GenerationConfigBuilder(
            descriptor.response_type,
            **{
                **self._params,
                **slots,
                "response_mime_type": ResponseMimeType.APPLICATION_JSON,
            },
        )

    def response_schema(self, response_type: type[R]) -> "GenerationConfigBuilder[R]":
        """Derive and attach an OpenAPI subset schema for ``response_type``.

        Raises:
            SchemaGenerationError: If the type cannot be expressed in the subset
        """
        return self.attach_schema(SchemaDescriptor.from_type(response_type, SchemaFormat.OPENAPI))

    def response_json_schema(self, response_type: type[R]) -> "GenerationConfigBuilder[R]":
        """Derive and attach a JSON Schema for ``response_type``.

        Raises:
            SchemaGenerationError: If pydantic cannot build a schema for the type
        """
        return self.attach_schema(
            SchemaDescriptor.from_type(response_type, SchemaFormat.JSON_SCHEMA)
        )

    # -------------------------------------------------------------------------
    # Output format
    # -------------------------------------------------------------------------

    def text_response(self) -> "GenerationConfigBuilder[T]":
        """Request plain text output."""
        return self._with(response_mime_type=ResponseMimeType.TEXT_PLAIN)

    def enum_response(self) -> "GenerationConfigBuilder[T]":
        """Request an enum value as a string."""
        return self._with(response_mime_type=ResponseMimeType.TEXT_ENUM)

    def response_modalities(self, modalities: list[str]) -> "GenerationConfigBuilder[T]":
        return self._with(response_modalities=list(modalities))

    def add_response_modality(self, modality: str) -> "GenerationConfigBuilder[T]":
        current = self._params.get("response_modalities") or []
        return self._with(response_modalities=[*current, modality])

    # -------------------------------------------------------------------------
    # Sampling
    # -------------------------------------------------------------------------

    def stop_sequences(self, sequences: list[str]) -> "GenerationConfigBuilder[T]":
        """Set the stop sequences (up to 5)."""
        return self._with(stop_sequences=list(sequences))

    def add_stop_sequence(self, sequence: str) -> "GenerationConfigBuilder[T]":
        current = self._params.get("stop_sequences") or []
        return self._with(stop_sequences=[*current, sequence])

    def candidate_count(self, count: int) -> "GenerationConfigBuilder[T]":
        return self._with(candidate_count=count)

    def max_output_tokens(self, tokens: int) -> "GenerationConfigBuilder[T]":
        return self._with(max_output_tokens=tokens)

    def temperature(self, temperature: float) -> "GenerationConfigBuilder[T]":
        """Set the sampling temperature (0.0 to 2.0)."""
        return self._with(temperature=temperature)

    def top_p(self, p: float) -> "GenerationConfigBuilder[T]":
        return self._with(top_p=p)

    def top_k(self, k: int) -> "GenerationConfigBuilder[T]":
        return self._with(top_k=k)

    def seed(self, seed: int) -> "GenerationConfigBuilder[T]":
        return self._with(seed=seed)

    def presence_penalty(self, penalty: float) -> "GenerationConfigBuilder[T]":
        return self._with(presence_penalty=penalty)

    def frequency_penalty(self, penalty: float) -> "GenerationConfigBuilder[T]":
        return self._with(frequency_penalty=penalty)

    def response_logprobs(self, enabled: bool) -> "GenerationConfigBuilder[T]":
        return self._with(response_logprobs=enabled)

    def logprobs(self, count: int) -> "GenerationConfigBuilder[T]":
        """Set the number of top logprobs returned per step (0-20)."""
        return self._with(logprobs=count)

    # -------------------------------------------------------------------------
    # Feature configs
    # -------------------------------------------------------------------------

    def enable_enhanced_civic_answers(self, enabled: bool) -> "GenerationConfigBuilder[T]":
        return self._with(enable_enhanced_civic_answers=enabled)

    def speech_config(self, config: dict[str, Any]) -> "GenerationConfigBuilder[T]":
        return self._with(speech_config=config)

    def thinking_config(self, config: dict[str, Any]) -> "GenerationConfigBuilder[T]":
        return self._with(thinking_config=config)

    def image_config(self, config: dict[str, Any]) -> "GenerationConfigBuilder[T]":
        return self._with(image_config=config)

    def media_resolution(self, resolution: str) -> "GenerationConfigBuilder[T]":
        return self._with(media_resolution=resolution)

    def options(self, options: Mapping[str, Any]) -> "GenerationConfigBuilder[T]":
        """Apply several knobs at once, e.g. from a YAML file.

        Keys may be snake_case or camelCase. Schemas cannot be set this way;
        use ``response_schema`` / ``response_json_schema``.

        Raises:
            InvalidGenerationConfigError: On schema keys or unknown keys
        """
        changes: dict[str, Any] = {}
        for key, value in options.items():
            name = to_snake(key)
            if name in _SCHEMA_FIELDS:
                raise InvalidGenerationConfigError(
                    f"{key!r} cannot be set from options; "
                    "attach a schema for a response type instead"
                )
            if name not in _OPTION_FIELDS:
                raise InvalidGenerationConfigError(f"Unknown generation option: {key!r}")
            changes[name] = value
        return self._with(**changes)

    # -------------------------------------------------------------------------
    # Finalization
    # -------------------------------------------------------------------------

    def build(self) -> GenerationConfig[T]:
        """Build the immutable config.

        Raises:
            SchemaRequiredForTypedResponse: If ``T`` is not ``str`` and no schema is attached
            InvalidGenerationConfigError: If a knob is outside the accepted range
        """
        plain = is_plain_text(self._response_type)
        has_schema = any(self._params.get(name) is not None for name in _SCHEMA_FIELDS)
        if not plain and not has_schema:
            raise SchemaRequiredForTypedResponse()

        config_cls = GenerationConfig if plain else GenerationConfig[self._response_type]
        try:
            return config_cls(**self._params)
        except ValidationError as e:
            raise InvalidGenerationConfigError(f"Invalid generation config: {e}") from e


__all__ = ["ResponseMimeType", "GenerationConfig", "GenerationConfigBuilder"]
