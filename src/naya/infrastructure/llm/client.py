"""Async chat completion over LiteLLM."""

import logging
from typing import Any

import litellm
from litellm.exceptions import (
    AuthenticationError,
    ContentPolicyViolationError,
    RateLimitError,
)

from naya.config import LLMConfig
from naya.infrastructure.llm.exceptions import (
    LLMAuthenticationError,
    LLMContentBlockedError,
    LLMEmptyResponseError,
    LLMError,
    LLMRateLimitError,
)

logger = logging.getLogger(__name__)


class LLMClient:
    """Sends one chat completion per call and returns its text.

    Provider failures are translated into the ``LLMError`` hierarchy, so
    callers only ever see generation failures.
    """

    def __init__(self, config: LLMConfig) -> None:
        self._config = config

    @property
    def model(self) -> str:
        """Model identifier requests are sent to."""
        return self._config.model

    def _request_params(
        self, messages: list[dict[str, Any]], overrides: dict[str, Any]
    ) -> dict[str, Any]:
        params: dict[str, Any] = {
            "model": self._config.model,
            "messages": messages,
            "temperature": self._config.temperature,
            "max_tokens": self._config.max_tokens,
            "timeout": self._config.timeout,
        }
        # Let LiteLLM resolve provider credentials from the environment otherwise
        if self._config.api_key:
            params["api_key"] = self._config.api_key
        return params | overrides

    async def complete(self, messages: list[dict[str, Any]], **overrides: Any) -> str:
        """Run a chat completion.

        Args:
            messages: OpenAI-format messages. User content may be a list
                of text and image_url parts.
            **overrides: Request parameters that replace configured ones.

        Returns:
            The reply text, never blank.

        Raises:
            LLMAuthenticationError: The credentials were rejected.
            LLMRateLimitError: The provider throttled the request.
            LLMContentBlockedError: The provider's safety filter refused.
            LLMEmptyResponseError: The completion carried no text.
            LLMError: Anything else went wrong.
        """
        params = self._request_params(messages, overrides)
        logger.debug(
            "Completion request: model=%s, messages=%d", params["model"], len(messages)
        )

        try:
            response = await litellm.acompletion(**params)
        except AuthenticationError as e:
            logger.error("LLM rejected credentials for %s: %s", params["model"], e)
            raise LLMAuthenticationError(str(e)) from e
        except RateLimitError as e:
            logger.warning("LLM rate limited: %s", e)
            raise LLMRateLimitError(str(e)) from e
        except ContentPolicyViolationError as e:
            logger.warning("LLM refused the prompt: %s", e)
            raise LLMContentBlockedError(str(e)) from e
        except Exception as e:
            logger.error("LLM request failed: %s", e)
            raise LLMError(str(e)) from e

        choice = response.choices[0]
        text = choice.message.content
        if not text or not text.strip():
            finish_reason = getattr(choice, "finish_reason", None)
            logger.error("LLM returned no text (finish_reason=%s)", finish_reason)
            raise LLMEmptyResponseError(
                f"LLM returned an empty response (finish_reason={finish_reason})"
            )
        return text
