"""Response schema derivation.

The API accepts two interchangeable ways to describe structured output:

- ``responseJsonSchema``: full JSON Schema (``$ref``, ``$defs``, ``anyOf`` ...).
- ``responseSchema``: the API-native OpenAPI subset. Objects, arrays and
  primitives only, with ``nullable`` instead of null unions and no references.

Both are derived from a Python type through pydantic. Any type pydantic can
build a schema for (models, dataclasses, TypedDicts, enums, containers of
those) has the JSON Schema capability. The OpenAPI subset additionally rejects
recursive models, tuples and untyped values.

Public API (the "studs"):
    SchemaFormat: Which of the two schema formats a document uses
    SchemaDescriptor: A derived schema document plus the type it describes
    json_schema_for: Derive a JSON Schema document for a type
    openapi_schema_for: Derive an OpenAPI subset document for a type
"""

import logging
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, PydanticUserError, TypeAdapter

from ..exceptions import SchemaGenerationError

_logger = logging.getLogger(__name__)

_OPENAPI_TYPES = {
    "string": "STRING",
    "number": "NUMBER",
    "integer": "INTEGER",
    "boolean": "BOOLEAN",
    "array": "ARRAY",
    "object": "OBJECT",
}

# Keywords the OpenAPI subset understands and that carry over unchanged.
_OPENAPI_KEYWORDS = (
    "title",
    "description",
    "enum",
    "minItems",
    "maxItems",
    "minLength",
    "maxLength",
    "pattern",
    "minimum",
    "maximum",
    "minProperties",
    "maxProperties",
    "example",
)

_OPENAPI_FORMATS = {"date-time", "enum", "int32", "int64", "float", "double"}


class SchemaFormat(str, Enum):
    """Schema document formats accepted by the API."""

    OPENAPI = "openapi"
    JSON_SCHEMA = "json_schema"


def json_schema_for(response_type: Any) -> dict[str, Any]:
    """Derive the JSON Schema document for ``response_type``.

    Raises:
        SchemaGenerationError: If pydantic cannot build a schema for the type
    """
    try:
        document = TypeAdapter(response_type).json_schema()
    except PydanticUserError as e:
        raise SchemaGenerationError(f"Cannot derive JSON schema for {response_type!r}: {e}") from e
    _logger.debug("Derived JSON schema for %r", response_type)
    return document


def openapi_schema_for(response_type: Any) -> dict[str, Any]:
    """Derive the OpenAPI subset document for ``response_type``.

    Raises:
        SchemaGenerationError: If the type cannot be expressed in the subset
    """
    json_schema = json_schema_for(response_type)
    defs = json_schema.get("$defs", {})
    try:
        document = _to_openapi(json_schema, defs, ())
    except SchemaGenerationError as e:
        raise SchemaGenerationError(
            f"Cannot derive OpenAPI schema for {response_type!r}: {e}"
        ) from e
    _logger.debug("Derived OpenAPI schema for %r", response_type)
    return document


def _to_openapi(
    node: dict[str, Any], defs: dict[str, Any], seen: tuple[str, ...]
) -> dict[str, Any]:
    if "$ref" in node:
        name = node["$ref"].rsplit("/", 1)[-1]
        if name in seen:
            raise SchemaGenerationError(f"recursive reference to {name!r} is not supported")
        if name not in defs:
            raise SchemaGenerationError(f"unresolved reference {node['$ref']!r}")
        # Keywords beside the $ref (description, default) override the definition's.
        merged = {**defs[name], **{k: v for k, v in node.items() if k != "$ref"}}
        return _to_openapi(merged, defs, seen + (name,))

    if "prefixItems" in node:
        raise SchemaGenerationError("tuple types are not supported")

    variants = node.get("anyOf") or node.get("oneOf")
    if variants:
        return _union_to_openapi(node, variants, defs, seen)

    json_type = node.get("type")
    nullable = False
    if isinstance(json_type, list):
        nullable = "null" in json_type
        remaining = [t for t in json_type if t != "null"]
        if len(remaining) != 1:
            raise SchemaGenerationError(f"multi-type node {json_type!r} is not supported")
        json_type = remaining[0]
    if json_type is None:
        json_type = _infer_type(node)
    if json_type not in _OPENAPI_TYPES:
        raise SchemaGenerationError(f"type {json_type!r} is not supported")

    schema: dict[str, Any] = {"type": _OPENAPI_TYPES[json_type]}
    if nullable:
        schema["nullable"] = True
    for key in _OPENAPI_KEYWORDS:
        if node.get(key) is not None:
            schema[key] = node[key]
    if "const" in node:
        schema["enum"] = [node["const"]]
    if node.get("default") is not None:
        schema["default"] = node["default"]

    fmt = node.get("format")
    if fmt in _OPENAPI_FORMATS:
        schema["format"] = fmt
    elif json_type == "string" and "enum" in schema:
        schema["format"] = "enum"

    if json_type == "array" and "items" in node:
        schema["items"] = _to_openapi(node["items"], defs, seen)

    if json_type == "object":
        properties = node.get("properties") or {}
        if properties:
            schema["properties"] = {
                name: _to_openapi(prop, defs, seen) for name, prop in properties.items()
            }
            schema["propertyOrdering"] = list(properties)
        if node.get("required"):
            schema["required"] = list(node["required"])

    return schema


def _union_to_openapi(
    node: dict[str, Any],
    variants: list[dict[str, Any]],
    defs: dict[str, Any],
    seen: tuple[str, ...],
) -> dict[str, Any]:
    remaining = [v for v in variants if v.get("type") != "null"]
    nullable = len(remaining) != len(variants)
    outer = {k: v for k, v in node.items() if k not in ("anyOf", "oneOf")}

    if len(remaining) == 1:
        schema = _to_openapi({**remaining[0], **outer}, defs, seen)
    elif remaining:
        schema = {"anyOf": [_to_openapi(v, defs, seen) for v in remaining]}
        for key in ("title", "description"):
            if outer.get(key) is not None:
                schema[key] = outer[key]
    else:
        raise SchemaGenerationError("a union of only null is not supported")

    if nullable:
        schema["nullable"] = True
    return schema


def _infer_type(node: dict[str, Any]) -> str:
    if "const" in node:
        value = node["const"]
    elif node.get("enum"):
        value = node["enum"][0]
    else:
        raise SchemaGenerationError(f"untyped schema node {node!r} is not supported")

    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, int):
        return "integer"
    if isinstance(value, float):
        return "number"
    if isinstance(value, str):
        return "string"
    raise SchemaGenerationError(f"cannot infer a type for constant {value!r}")


class SchemaDescriptor(BaseModel):
    """A schema document derived from a response type.

    Attributes:
        format: Which schema format ``document`` uses
        document: The schema document sent to the API
        response_type: The Python type the document describes
    """

    model_config = ConfigDict(frozen=True)

    format: SchemaFormat = Field(..., description="Schema document format")
    document: dict[str, Any] = Field(..., description="Schema document")
    response_type: Any = Field(..., exclude=True, description="Type the schema describes")

    @classmethod
    def from_type(
        cls, response_type: Any, format: SchemaFormat = SchemaFormat.JSON_SCHEMA
    ) -> "SchemaDescriptor":
        """Derive a descriptor for ``response_type`` in the given format.

        Raises:
            SchemaGenerationError: If derivation fails
        """
        if format == SchemaFormat.OPENAPI:
            document = openapi_schema_for(response_type)
        else:
            document = json_schema_for(response_type)
        return cls(format=format, document=document, response_type=response_type)


__all__ = [
    "SchemaFormat",
    "SchemaDescriptor",
    "json_schema_for",
    "openapi_schema_for",
]
