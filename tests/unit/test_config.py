"""Tests for configuration loading."""

import os
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from gemini_envelope.config import DEFAULT_BASE_URL, GeminiConfig, load_generation_options


class TestGeminiConfig:
    def test_defaults(self):
        config = GeminiConfig(api_key="test-key")
        assert config.model == "gemini-2.5-flash"
        assert config.base_url == DEFAULT_BASE_URL
        assert config.timeout_seconds == 120

    def test_api_key_redacted(self):
        config = GeminiConfig(api_key="super-secret")
        assert "super-secret" not in repr(config)
        assert config.api_key.get_secret_value() == "super-secret"

    def test_base_url_requires_https(self):
        with pytest.raises(ValidationError, match="https"):
            GeminiConfig(api_key="k", base_url="http://example.com")

    def test_base_url_trailing_slash_stripped(self):
        config = GeminiConfig(api_key="k", base_url="https://example.com/v1/")
        assert config.base_url == "https://example.com/v1"

    def test_timeout_bounds(self):
        with pytest.raises(ValidationError):
            GeminiConfig(api_key="k", timeout_seconds=0)
        with pytest.raises(ValidationError):
            GeminiConfig(api_key="k", timeout_seconds=601)

    def test_generate_content_url(self):
        config = GeminiConfig(api_key="k", model="gemini-2.5-pro")
        assert config.generate_content_url() == (
            "https://generativelanguage.googleapis.com/v1beta/models/"
            "gemini-2.5-pro:generateContent"
        )

    def test_stream_url(self):
        config = GeminiConfig(api_key="k", base_url="https://example.com")
        assert config.stream_generate_content_url() == (
            "https://example.com/models/gemini-2.5-flash:streamGenerateContent?alt=sse"
        )


class TestFromEnv:
    def test_from_env(self):
        env = {
            "GEMINI_API_KEY": "env-key",
            "GEMINI_MODEL": "gemini-2.5-pro",
            "GEMINI_BASE_URL": "https://proxy.example.com",
        }
        with patch.dict(os.environ, env, clear=True):
            config = GeminiConfig.from_env()
        assert config.api_key.get_secret_value() == "env-key"
        assert config.model == "gemini-2.5-pro"
        assert config.base_url == "https://proxy.example.com"

    def test_from_env_defaults(self):
        with patch.dict(os.environ, {"GEMINI_API_KEY": "env-key"}, clear=True):
            config = GeminiConfig.from_env()
        assert config.model == "gemini-2.5-flash"

    def test_from_env_missing_key(self):
        with patch.dict(os.environ, {}, clear=True):
            with pytest.raises(ValueError, match="GEMINI_API_KEY"):
                GeminiConfig.from_env()

    def test_from_env_empty_key_is_missing(self):
        with patch.dict(os.environ, {"GEMINI_API_KEY": ""}, clear=True):
            with pytest.raises(ValueError, match="GEMINI_API_KEY"):
                GeminiConfig.from_env()


class TestLoadGenerationOptions:
    def test_loads_mapping(self, tmp_path):
        path = tmp_path / "generation.yaml"
        path.write_text("temperature: 0.2\nmaxOutputTokens: 512\n")
        assert load_generation_options(path) == {"temperature": 0.2, "maxOutputTokens": 512}

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_generation_options(path) == {}

    def test_not_a_mapping(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- temperature\n- top_k\n")
        with pytest.raises(ValueError, match="mapping"):
            load_generation_options(path)

    def test_malformed_yaml(self, tmp_path):
        path = tmp_path / "broken.yaml"
        path.write_text("temperature: [1, 2\n")
        with pytest.raises(ValueError, match="Invalid YAML") as exc_info:
            load_generation_options(path)
        assert exc_info.value.__cause__ is not None

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_generation_options(tmp_path / "missing.yaml")
