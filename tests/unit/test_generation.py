"""Tests for GenerationConfig and its builder."""

import pytest
from pydantic import BaseModel, ValidationError

from gemini_envelope.dto import (
    GenerationConfig,
    GenerationConfigBuilder,
    ResponseMimeType,
    SchemaDescriptor,
    SchemaFormat,
)
from gemini_envelope.exceptions import (
    BuildError,
    InvalidGenerationConfigError,
    SchemaRequiredForTypedResponse,
)


class Person(BaseModel):
    name: str


class Profile(BaseModel):
    age: int


class TestBuilder:
    def test_basic_build(self):
        config = GenerationConfig.builder().temperature(0.7).max_output_tokens(1024).build()
        assert config.temperature == 0.7
        assert config.max_output_tokens == 1024
        assert config.response_mime_type is None
        assert config.response_type is str

    def test_stop_sequences(self):
        config = (
            GenerationConfig.builder()
            .add_stop_sequence("END")
            .add_stop_sequence("STOP")
            .build()
        )
        assert config.stop_sequences == ["END", "STOP"]

    def test_response_modalities(self):
        config = GenerationConfig.builder().add_response_modality("TEXT").build()
        assert config.response_modalities == ["TEXT"]

    def test_all_sampling_knobs(self):
        config = (
            GenerationConfig.builder()
            .candidate_count(2)
            .top_p(0.9)
            .top_k(40)
            .seed(7)
            .presence_penalty(0.1)
            .frequency_penalty(0.2)
            .response_logprobs(True)
            .logprobs(5)
            .build()
        )
        assert config.candidate_count == 2
        assert config.top_p == 0.9
        assert config.top_k == 40
        assert config.seed == 7
        assert config.presence_penalty == 0.1
        assert config.frequency_penalty == 0.2
        assert config.response_logprobs is True
        assert config.logprobs == 5

    def test_feature_configs(self):
        config = (
            GenerationConfig.builder()
            .thinking_config({"thinkingBudget": 1024})
            .media_resolution("MEDIA_RESOLUTION_LOW")
            .enable_enhanced_civic_answers(True)
            .build()
        )
        assert config.thinking_config == {"thinkingBudget": 1024}
        assert config.media_resolution == "MEDIA_RESOLUTION_LOW"
        assert config.enable_enhanced_civic_answers is True

    def test_default_config_is_empty(self):
        assert GenerationConfig().to_wire() == {}

    def test_setters_return_new_builder(self):
        base = GenerationConfig.builder()
        warmer = base.temperature(0.9)
        assert base.build().temperature is None
        assert warmer.build().temperature == 0.9

    def test_text_and_enum_responses(self):
        assert GenerationConfig.builder().text_response().build().to_wire() == {
            "responseMimeType": "text/plain"
        }
        assert GenerationConfig.builder().enum_response().build().to_wire() == {
            "responseMimeType": "text/x.enum"
        }


class TestSchemaRequirement:
    def test_typed_config_without_schema_fails(self):
        with pytest.raises(SchemaRequiredForTypedResponse, match="response schema must be"):
            GenerationConfig[Person].builder().temperature(0.7).build()

    def test_failure_is_a_build_error(self):
        with pytest.raises(BuildError):
            GenerationConfigBuilder(Person).build()

    def test_typed_config_with_json_schema(self):
        config = GenerationConfig.builder().response_json_schema(Person).build()
        assert config.response_type is Person
        assert config.response_json_schema is not None
        assert config.response_mime_type is ResponseMimeType.APPLICATION_JSON

    def test_typed_config_with_openapi_schema(self):
        config = GenerationConfig.builder().response_schema(Person).build()
        assert config.response_type is Person
        assert config.response_schema["type"] == "OBJECT"
        assert config.schema_format is SchemaFormat.OPENAPI

    def test_plain_text_never_needs_schema(self):
        config = GenerationConfig[str].builder().temperature(0.7).top_k(40).build()
        assert not config.has_schema
        assert config.response_type is str

    def test_schema_keeps_earlier_knobs(self):
        config = (
            GenerationConfig.builder()
            .temperature(0.5)
            .add_stop_sequence("END")
            .response_json_schema(Person)
            .build()
        )
        assert config.temperature == 0.5
        assert config.stop_sequences == ["END"]

    def test_attach_descriptor(self):
        descriptor = SchemaDescriptor.from_type(Profile, SchemaFormat.OPENAPI)
        config = GenerationConfig.builder().attach_schema(descriptor).build()
        assert config.response_type is Profile
        assert config.response_schema == descriptor.document


class TestSchemaExclusivity:
    def test_json_schema_after_openapi_clears_openapi(self):
        config = (
            GenerationConfig.builder()
            .response_schema(Person)
            .response_json_schema(Profile)
            .build()
        )
        assert config.response_schema is None
        assert config.response_json_schema is not None
        assert config.response_type is Profile
        assert config.schema_format is SchemaFormat.JSON_SCHEMA

    def test_openapi_after_json_schema_clears_json_schema(self):
        config = (
            GenerationConfig.builder()
            .response_json_schema(Person)
            .response_schema(Profile)
            .build()
        )
        assert config.response_json_schema is None
        assert config.response_schema is not None
        assert config.response_type is Profile

    def test_schema_sets_json_mime_type(self):
        config = GenerationConfig.builder().text_response().response_schema(Person).build()
        assert config.response_mime_type is ResponseMimeType.APPLICATION_JSON


class TestValidation:
    def test_temperature_out_of_range(self):
        with pytest.raises(InvalidGenerationConfigError):
            GenerationConfig.builder().temperature(3.0).build()

    def test_too_many_stop_sequences(self):
        with pytest.raises(InvalidGenerationConfigError):
            GenerationConfig.builder().stop_sequences(["a", "b", "c", "d", "e", "f"]).build()

    def test_logprobs_out_of_range(self):
        with pytest.raises(InvalidGenerationConfigError):
            GenerationConfig.builder().logprobs(21).build()

    def test_built_config_is_immutable(self):
        config = GenerationConfig.builder().temperature(0.5).build()
        with pytest.raises(ValidationError):
            config.temperature = 1.0


class TestOptions:
    def test_snake_and_camel_keys(self):
        config = (
            GenerationConfig.builder()
            .options({"temperature": 0.2, "maxOutputTokens": 256, "top_k": 5})
            .build()
        )
        assert config.temperature == 0.2
        assert config.max_output_tokens == 256
        assert config.top_k == 5

    def test_unknown_key_rejected(self):
        with pytest.raises(InvalidGenerationConfigError, match="Unknown generation option"):
            GenerationConfig.builder().options({"warmth": 1})

    def test_schema_key_rejected(self):
        with pytest.raises(InvalidGenerationConfigError, match="responseSchema"):
            GenerationConfig.builder().options({"responseSchema": {"type": "OBJECT"}})


class TestWireForm:
    def test_camel_case_without_nulls(self):
        config = (
            GenerationConfig.builder()
            .temperature(0.7)
            .max_output_tokens(1024)
            .response_json_schema(Person)
            .build()
        )
        wire = config.to_wire()
        assert wire["temperature"] == 0.7
        assert wire["maxOutputTokens"] == 1024
        assert wire["responseMimeType"] == "application/json"
        assert wire["responseJsonSchema"]["properties"]["name"]["type"] == "string"
        assert "responseSchema" not in wire
        assert None not in wire.values()
