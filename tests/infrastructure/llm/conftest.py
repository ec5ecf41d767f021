"""Common fixtures for LLM infrastructure tests."""

from collections.abc import Callable
from unittest.mock import MagicMock

import pytest

from naya.config import LLMConfig, PersonaConfig


@pytest.fixture
def llm_config() -> LLMConfig:
    """Create LLM config."""
    return LLMConfig(
        model="gemini/gemini-1.5-flash-8b",
        api_key="test-key",
        temperature=1.4,
        max_tokens=70,
    )


@pytest.fixture
def persona_config() -> PersonaConfig:
    """Create test persona config."""
    return PersonaConfig(name="Naya", max_words=25)


@pytest.fixture
def make_response() -> Callable[[str | None], MagicMock]:
    """Create a factory for mock LiteLLM completion responses."""

    def factory(content: str | None) -> MagicMock:
        response = MagicMock()
        response.choices = [MagicMock()]
        response.choices[0].message.content = content
        return response

    return factory
