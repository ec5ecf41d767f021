"""LiteLLM-backed conversation session."""

import logging
from typing import Any

from naya.domain.entities import AttachmentPart, PromptPart
from naya.infrastructure.llm.client import LLMClient

logger = logging.getLogger(__name__)


def to_message_content(parts: list[PromptPart]) -> str | list[dict[str, Any]]:
    """Convert prompt parts to OpenAI-format message content.

    A single text part becomes plain string content. Otherwise each part
    becomes a content block, with attachments sent as ``data:`` URLs.

    Args:
        parts: Ordered prompt parts.

    Returns:
        Message content accepted by LiteLLM.
    """
    if len(parts) == 1 and isinstance(parts[0], str):
        return parts[0]

    content: list[dict[str, Any]] = []
    for part in parts:
        if isinstance(part, AttachmentPart):
            content.append(
                {"type": "image_url", "image_url": {"url": part.to_data_url()}}
            )
        else:
            content.append({"type": "text", "text": part})
    return content


class LiteLLMChatSession:
    """Stateful chat session on top of a stateless completion API.

    Every successful turn (user message and assistant reply) is appended to
    the session history and resent with the next turn. A failed turn leaves
    the history unchanged.
    """

    def __init__(
        self,
        client: LLMClient,
        *,
        debug_llm_messages: bool = False,
    ) -> None:
        """Initialize the session.

        Args:
            client: LLMClient instance.
            debug_llm_messages: If True, log LLM messages at INFO level.
        """
        self._client = client
        self._debug_llm_messages = debug_llm_messages
        self._history: list[dict[str, Any]] = []

    @property
    def history(self) -> list[dict[str, Any]]:
        """Messages exchanged so far, oldest first."""
        return list(self._history)

    async def send(self, parts: list[PromptPart]) -> str:
        """Send one turn and return the reply.

        Args:
            parts: Ordered prompt parts (text first, optional attachment).

        Returns:
            Generated text.

        Raises:
            LLMError: If response generation fails or returns no text.
        """
        user_message = {"role": "user", "content": to_message_content(parts)}
        messages = [*self._history, user_message]

        if self._should_log():
            self._log_parts(parts)

        response = await self._client.complete(messages)

        if self._should_log():
            self._log_response(response)

        self._history.append(user_message)
        self._history.append({"role": "assistant", "content": response})
        return response

    def _should_log(self) -> bool:
        """Check if logging should occur."""
        return self._debug_llm_messages or logger.isEnabledFor(logging.DEBUG)

    def _log_parts(self, parts: list[PromptPart]) -> None:
        """Log LLM request parts."""
        log_func = logger.info if self._debug_llm_messages else logger.debug
        log_func("=== LLM Request (history=%d) ===", len(self._history))
        for i, part in enumerate(parts):
            if isinstance(part, AttachmentPart):
                log_func("[%d] attachment: %s", i, part.mime_type)
            else:
                log_func("[%d] text: %s", i, part)
        log_func("=== End of Request ===")

    def _log_response(self, response: str) -> None:
        """Log LLM response."""
        log_func = logger.info if self._debug_llm_messages else logger.debug
        log_func("=== LLM Response ===")
        log_func("response: %s", response)
        log_func("=== End of Response ===")
