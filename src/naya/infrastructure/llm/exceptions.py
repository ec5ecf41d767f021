"""LLM-related exceptions."""

from naya.domain.exceptions import GenerationError


class LLMError(GenerationError):
    """Base exception for LLM-related errors."""


class LLMRateLimitError(LLMError):
    """Rate limit exceeded error."""


class LLMAuthenticationError(LLMError):
    """Authentication error (invalid API key, etc.)."""


class LLMEmptyResponseError(LLMError):
    """The model returned no text."""


class LLMContentBlockedError(LLMError):
    """The provider's safety filter refused the prompt."""
