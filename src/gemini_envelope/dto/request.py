"""Request DTOs for the generateContent call.

Public API (the "studs"):
    SafetySetting: Content filtering threshold for a harm category
    SafetyRating: Harm probability reported for a category
    GenerateContentRequest: Request body for generateContent
"""

from typing import Any

from pydantic import Field, field_validator

from .content import Content
from .generation import GenerationConfig
from .text import PlainText, is_plain_text
from .wire import WireModel


class SafetySetting(WireModel):
    """Content filtering threshold for one harm category."""

    category: str = Field(..., description="Harm category")
    threshold: str = Field(..., description="Harm block threshold")


class SafetyRating(WireModel):
    """Harm probability reported for one category."""

    category: str = Field(..., description="Harm category")
    probability: str = Field(..., description="Probability of harm")
    blocked: bool = Field(False, description="Whether the content was blocked")


def _plain_block(block: Any) -> Any:
    if isinstance(block, Content):
        args = type(block).__pydantic_generic_metadata__["args"]
        if args and not is_plain_text(args[0]):
            return block.as_plain_text()
    return block


class GenerateContentRequest(WireModel):
    """Request body for generateContent.

    Prompt and history blocks travel as plain text. Typed blocks (for example
    an earlier ``Content[Person]`` model turn) are re-encoded on the way in.
    The expected response type comes from ``generation_config``.

    Attributes:
        contents: Conversation so far, oldest first
        generation_config: Generation settings, carrying the response type
        system_instruction: Optional system instruction
        safety_settings: Optional safety settings
    """

    contents: list[Content] = Field(..., description="Conversation contents")
    generation_config: GenerationConfig | None = Field(None, description="Generation settings")
    system_instruction: Content | None = Field(None, description="System instruction")
    safety_settings: list[SafetySetting] | None = Field(None, description="Safety settings")

    @field_validator("contents", mode="before")
    @classmethod
    def reencode_typed_contents(cls, v: Any) -> Any:
        if isinstance(v, (list, tuple)):
            return [_plain_block(block) for block in v]
        return v

    @field_validator("system_instruction", mode="before")
    @classmethod
    def reencode_typed_system_instruction(cls, v: Any) -> Any:
        return _plain_block(v)

    @classmethod
    def from_prompt(
        cls,
        prompt: str,
        config: GenerationConfig | None = None,
        system: str | None = None,
    ) -> "GenerateContentRequest":
        """Create a single-turn request for ``prompt``."""
        return cls(
            contents=[Content.user(prompt)],
            generation_config=config,
            system_instruction=Content(parts=[{"text": system}]) if system else None,
        )

    @property
    def response_type(self) -> Any:
        """The response type the attached config expects, ``str`` without one."""
        if self.generation_config is None:
            return PlainText
        return self.generation_config.response_type


__all__ = ["SafetySetting", "SafetyRating", "GenerateContentRequest"]
