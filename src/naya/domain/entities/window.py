"""Conversation window entity."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ConversationWindow:
    """Snapshot of the recent history kept for one sender.

    Attributes:
        user_messages: Recent user messages, oldest first.
        bot_messages: Recent bot replies, oldest first.
    """

    user_messages: tuple[str, ...] = ()
    bot_messages: tuple[str, ...] = ()

    def is_empty(self) -> bool:
        """Check if no user message has been recorded yet."""
        return not self.user_messages

    @property
    def previous_messages(self) -> tuple[str, ...]:
        """User messages before the current turn."""
        return self.user_messages[:-1]

    @property
    def current_message(self) -> str:
        """The most recent user message.

        Raises:
            ValueError: The window has no user messages.
        """
        if not self.user_messages:
            raise ValueError("Conversation window has no user messages")
        return self.user_messages[-1]
