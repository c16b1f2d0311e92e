"""Exceptions for the Gemini envelope layer.

Public API (the "studs"):
    GeminiError: Base exception for all envelope errors
    SerializationError: A value could not be encoded for the wire
    DeserializationError: A wire document did not match the expected shape
    SchemaGenerationError: A schema could not be derived for a type
    BuildError: Generation config finalization failed
    SchemaRequiredForTypedResponse: Typed response configured without a schema
    InvalidGenerationConfigError: Generation config values out of range
    TransportError: The transport collaborator failed
"""


class GeminiError(Exception):
    """Base exception for all envelope errors."""

    pass


class SerializationError(GeminiError):
    """A value could not be turned into its wire representation."""

    pass


class DeserializationError(GeminiError):
    """Wire content was not valid JSON or did not match the expected type."""

    pass


class SchemaGenerationError(GeminiError):
    """Schema derivation for a type failed."""

    pass


class BuildError(GeminiError):
    """Generation config could not be built."""

    pass


class SchemaRequiredForTypedResponse(BuildError):
    """A non plain-text response type was configured without a response schema."""

    def __init__(self, message: str | None = None) -> None:
        super().__init__(
            message
            or "A response schema must be provided when using typed responses. "
            "Use .response_schema() or .response_json_schema() to specify the expected structure."
        )


class InvalidGenerationConfigError(BuildError):
    """A generation config value is outside the range the API accepts."""

    pass


class TransportError(GeminiError):
    """The transport collaborator failed to deliver the request."""

    pass


__all__ = [
    "GeminiError",
    "SerializationError",
    "DeserializationError",
    "SchemaGenerationError",
    "BuildError",
    "SchemaRequiredForTypedResponse",
    "InvalidGenerationConfigError",
    "TransportError",
]
