"""Tests for response schema derivation."""

import json
from enum import Enum
from typing import Any, Literal

import pytest
from pydantic import BaseModel, Field, ValidationError

from gemini_envelope.dto.schema import (
    SchemaDescriptor,
    SchemaFormat,
    json_schema_for,
    openapi_schema_for,
)
from gemini_envelope.exceptions import SchemaGenerationError


class Color(str, Enum):
    RED = "red"
    GREEN = "green"


class Address(BaseModel):
    city: str
    zip_code: str | None = None


class Character(BaseModel):
    name: str = Field(description="Character name")
    level: int
    color: Color
    address: Address | None = None
    tags: list[str] = []


class Node(BaseModel):
    value: int
    children: list["Node"] = []


class Opaque:
    pass


class TestJsonSchema:
    def test_model_schema(self):
        document = json_schema_for(Character)
        assert document["type"] == "object"
        assert set(document["required"]) == {"name", "level", "color"}
        assert "$defs" in document

    def test_plain_string(self):
        assert json_schema_for(str) == {"type": "string"}

    def test_recursive_model_is_supported(self):
        document = json_schema_for(Node)
        assert "Node" in json.dumps(document)

    def test_unsupported_type_raises(self):
        with pytest.raises(SchemaGenerationError):
            json_schema_for(Opaque)


class TestOpenApiSchema:
    def test_object_types_are_upper_case(self):
        document = openapi_schema_for(Character)
        assert document["type"] == "OBJECT"
        assert document["properties"]["name"]["type"] == "STRING"
        assert document["properties"]["name"]["description"] == "Character name"
        assert document["properties"]["level"]["type"] == "INTEGER"

    def test_property_ordering_and_required(self):
        document = openapi_schema_for(Character)
        assert document["propertyOrdering"] == ["name", "level", "color", "address", "tags"]
        assert document["required"] == ["name", "level", "color"]

    def test_references_are_inlined(self):
        document = openapi_schema_for(Character)
        dumped = json.dumps(document)
        assert "$ref" not in dumped
        assert "$defs" not in dumped
        assert document["properties"]["address"]["properties"]["city"]["type"] == "STRING"

    def test_string_enum(self):
        color = openapi_schema_for(Character)["properties"]["color"]
        assert color["type"] == "STRING"
        assert color["enum"] == ["red", "green"]
        assert color["format"] == "enum"

    def test_optional_becomes_nullable(self):
        address = openapi_schema_for(Character)["properties"]["address"]
        assert address["type"] == "OBJECT"
        assert address["nullable"] is True
        assert address["properties"]["zip_code"] == {
            "type": "STRING",
            "nullable": True,
            "title": "Zip Code",
        }

    def test_array_items(self):
        tags = openapi_schema_for(Character)["properties"]["tags"]
        assert tags["type"] == "ARRAY"
        assert tags["items"] == {"type": "STRING"}

    def test_literal(self):
        document = openapi_schema_for(Literal["a", "b"])
        assert document == {"type": "STRING", "enum": ["a", "b"], "format": "enum"}

    def test_recursive_model_raises(self):
        with pytest.raises(SchemaGenerationError, match="recursive"):
            openapi_schema_for(Node)

    def test_tuple_raises(self):
        with pytest.raises(SchemaGenerationError, match="tuple"):
            openapi_schema_for(tuple[int, str])

    def test_untyped_value_raises(self):
        with pytest.raises(SchemaGenerationError):
            openapi_schema_for(Any)


class TestSchemaDescriptor:
    def test_defaults_to_json_schema(self):
        descriptor = SchemaDescriptor.from_type(Character)
        assert descriptor.format is SchemaFormat.JSON_SCHEMA
        assert descriptor.response_type is Character
        assert descriptor.document == json_schema_for(Character)

    def test_openapi_format(self):
        descriptor = SchemaDescriptor.from_type(Character, SchemaFormat.OPENAPI)
        assert descriptor.document["type"] == "OBJECT"

    def test_response_type_not_dumped(self):
        descriptor = SchemaDescriptor.from_type(Address)
        assert "response_type" not in descriptor.model_dump()

    def test_immutable(self):
        descriptor = SchemaDescriptor.from_type(Address)
        with pytest.raises(ValidationError):
            descriptor.format = SchemaFormat.OPENAPI
