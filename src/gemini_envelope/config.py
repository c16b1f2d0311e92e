"""Configuration for talking to the Gemini API.

Public API (the "studs"):
    GeminiConfig: API key, model and endpoint settings
    load_generation_options: Read generation knobs from a YAML file
"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, SecretStr, field_validator

DEFAULT_MODEL = "gemini-2.5-flash"
DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"

# config_field -> env_var; only api_key is required.
_ENV_MAP: dict[str, str] = {
    "api_key": "GEMINI_API_KEY",
    "model": "GEMINI_MODEL",
    "base_url": "GEMINI_BASE_URL",
}


class GeminiConfig(BaseModel):
    """Settings for the Gemini API.

    Attributes:
        api_key: API key, sent as ``x-goog-api-key`` (redacted in repr)
        model: Model identifier
        base_url: API base URL
        timeout_seconds: Request timeout for transports that honour it
    """

    api_key: SecretStr = Field(..., description="Gemini API key")
    model: str = Field(DEFAULT_MODEL, min_length=1, description="Model identifier")
    base_url: str = Field(DEFAULT_BASE_URL, description="API base URL")
    timeout_seconds: int = Field(120, ge=1, le=600, description="Request timeout in seconds")

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        """Validate base_url starts with https:// and drop a trailing slash."""
        if not v.startswith("https://"):
            raise ValueError(f"base_url must start with 'https://': {v!r}")
        return v.rstrip("/")

    @classmethod
    def from_env(cls) -> "GeminiConfig":
        """Create GeminiConfig from environment variables.

        Environment variables:
            GEMINI_API_KEY: API key (required)
            GEMINI_MODEL: Model identifier (default: gemini-2.5-flash)
            GEMINI_BASE_URL: API base URL

        Returns:
            GeminiConfig instance

        Raises:
            ValueError: If GEMINI_API_KEY is not set
        """
        kwargs: dict[str, Any] = {}
        for field, env_var in _ENV_MAP.items():
            value = os.environ.get(env_var)
            if value:
                kwargs[field] = value

        if "api_key" not in kwargs:
            raise ValueError("GEMINI_API_KEY environment variable is required")

        return cls(**kwargs)

    def generate_content_url(self) -> str:
        """URL of the generateContent endpoint for the configured model."""
        return f"{self.base_url}/models/{self.model}:generateContent"

    def stream_generate_content_url(self) -> str:
        """URL of the server-sent-events streamGenerateContent endpoint."""
        return f"{self.base_url}/models/{self.model}:streamGenerateContent?alt=sse"


def load_generation_options(path: Path | str) -> dict[str, Any]:
    """Load generation knobs from a YAML file.

    The file holds a flat mapping such as ``temperature: 0.2`` or
    ``maxOutputTokens: 512``; apply it with ``GenerationConfigBuilder.options``.

    Args:
        path: Path to the YAML file

    Returns:
        Mapping of option names to values (empty for an empty file)

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file is not valid YAML or does not contain a mapping
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"No generation options file found at {path}")

    with open(path) as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(
            f"Generation options in {path} must be a mapping, got {type(data).__name__}"
        )
    return data


__all__ = ["GeminiConfig", "load_generation_options", "DEFAULT_MODEL", "DEFAULT_BASE_URL"]
