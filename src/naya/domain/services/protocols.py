"""Domain service protocols."""

from typing import Protocol

from naya.domain.entities import (
    AttachmentPart,
    ConversationWindow,
    PromptPart,
    PromptRequest,
)


class MessagingService(Protocol):
    """Messaging abstraction (platform-independent).

    This protocol defines the interface for sending messages
    to any messaging platform (Slack, WhatsApp, etc.).
    """

    async def send_message(self, recipient: str, text: str) -> None:
        """Send a message to a sender.

        Args:
            recipient: Sender ID to reply to.
            text: Message content.

        Raises:
            DeliveryError: The transport rejected the message.
        """
        ...


class ConversationSession(Protocol):
    """Handle to a stateful dialogue with the generation backend."""

    async def send(self, parts: list[PromptPart]) -> str:
        """Send one turn and return the reply text.

        Raises:
            GenerationError: The backend failed or returned no text.
        """
        ...


class ResponseGenerator(Protocol):
    """Sends prompts to a conversation session owned by the implementation."""

    async def send(self, parts: list[PromptPart], sender: str | None = None) -> str:
        """Send prompt parts and return the generated text.

        Args:
            parts: Ordered prompt parts (text first, optional attachment).
            sender: Sender ID, used when sessions are kept per sender.

        Returns:
            Non-empty generated text.

        Raises:
            GenerationError: The backend failed or returned no text.
        """
        ...


class PromptBuilder(Protocol):
    """Composes a backend request from a conversation window."""

    def build_prompt(
        self,
        window: ConversationWindow,
        attachment: AttachmentPart | None = None,
    ) -> PromptRequest:
        """Build a prompt for the current turn of a window."""
        ...
