"""LLM integration."""

from naya.infrastructure.llm.client import LLMClient
from naya.infrastructure.llm.exceptions import (
    LLMAuthenticationError,
    LLMContentBlockedError,
    LLMEmptyResponseError,
    LLMError,
    LLMRateLimitError,
)
from naya.infrastructure.llm.prompt_builder import JinjaPromptBuilder
from naya.infrastructure.llm.session import LiteLLMChatSession, to_message_content
from naya.infrastructure.llm.session_manager import ConversationSessionManager

__all__ = [
    "ConversationSessionManager",
    "JinjaPromptBuilder",
    "LLMAuthenticationError",
    "LLMClient",
    "LLMContentBlockedError",
    "LLMEmptyResponseError",
    "LLMError",
    "LLMRateLimitError",
    "LiteLLMChatSession",
    "to_message_content",
]
