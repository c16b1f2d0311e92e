"""Response DTOs for the generateContent call.

``GenerateContentResponse`` is generic over the text type ``T``. Validating
``GenerateContentResponse[Person]`` decodes each part's text into a
``Person``; a part that does not decode fails the whole response.

Public API (the "studs"):
    Candidate: One generated alternative
    PromptFeedback: Content filter feedback about the prompt
    UsageMetadata: Token counts
    GenerateContentResponse: Response body for generateContent
"""

from typing import Generic

from pydantic import ConfigDict, Field

from .content import Content
from .request import SafetyRating
from .text import T
from .wire import WireModel


class Candidate(WireModel, Generic[T]):
    """One generated alternative."""

    model_config = ConfigDict(frozen=True)

    content: Content[T] = Field(..., description="Generated content")
    finish_reason: str | None = Field(None, description="Why generation stopped")
    safety_ratings: list[SafetyRating] = Field(default_factory=list, description="Safety ratings")

    def first_text(self) -> T | None:
        return self.content.first_text()


class PromptFeedback(WireModel):
    """Content filter feedback about the prompt."""

    model_config = ConfigDict(frozen=True)

    block_reason: str | None = Field(None, description="Why the prompt was blocked")
    safety_ratings: list[SafetyRating] = Field(default_factory=list, description="Safety ratings")


class UsageMetadata(WireModel):
    """Token counts for the call."""

    model_config = ConfigDict(frozen=True)

    prompt_token_count: int | None = Field(None, description="Tokens in the prompt")
    candidates_token_count: int | None = Field(None, description="Tokens in the candidates")
    total_token_count: int | None = Field(None, description="Total tokens")


class GenerateContentResponse(WireModel, Generic[T]):
    """Response body for generateContent.

    Attributes:
        candidates: Generated alternatives
        prompt_feedback: Prompt filter feedback, absent unless the API sent it
        usage_metadata: Token counts, absent unless the API sent them
    """

    model_config = ConfigDict(frozen=True)

    candidates: list[Candidate[T]] = Field(default_factory=list, description="Candidates")
    prompt_feedback: PromptFeedback | None = Field(None, description="Prompt feedback")
    usage_metadata: UsageMetadata | None = Field(None, description="Token usage")

    def first_candidate(self) -> Candidate[T] | None:
        """Return the first candidate, if any."""
        return self.candidates[0] if self.candidates else None

    def first_content(self) -> Content[T] | None:
        """Return the first candidate's content, if any."""
        candidate = self.first_candidate()
        return candidate.content if candidate is not None else None

    def first_text(self) -> T | None:
        """Return the first candidate's first text, if any."""
        content = self.first_content()
        return content.first_text() if content is not None else None

    def texts(self) -> list[T]:
        """Return the first text of every candidate that has one."""
        return [text for c in self.candidates if (text := c.first_text()) is not None]


__all__ = ["Candidate", "PromptFeedback", "UsageMetadata", "GenerateContentResponse"]
