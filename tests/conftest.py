"""Shared test fixtures."""

import pytest

# Structured reply: the part's text is a JSON document embedded as a string.
TYPED_RESPONSE = (
    r'{"candidates":[{"content":{"role":"model","parts":'
    r'[{"text":"{\"name\":\"Alice\",\"age\":30}"}]},'
    r'"finishReason":"STOP","safetyRatings":[]}]}'
)

PLAIN_RESPONSE = (
    '{"candidates":[{"content":{"role":"model","parts":'
    '[{"text":"Plain text response"}]},'
    '"finishReason":"STOP","safetyRatings":[]}]}'
)


@pytest.fixture
def typed_response_body() -> str:
    """Response body whose single part holds a two-field person record."""
    return TYPED_RESPONSE


@pytest.fixture
def plain_response_body() -> str:
    """Response body whose single part holds plain text."""
    return PLAIN_RESPONSE
