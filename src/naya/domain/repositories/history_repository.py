"""History repository protocol."""

from typing import Protocol

from naya.domain.entities import ConversationWindow


class HistoryRepository(Protocol):
    """Per-sender conversation window store.

    Each sender has a bounded list of recent user messages and a bounded
    list of recent bot replies. Appending past capacity drops the oldest
    entry.
    """

    def record_user_message(self, sender: str, text: str) -> ConversationWindow:
        """Append a user message and trim to capacity.

        Args:
            sender: Sender ID.
            text: Message text.

        Returns:
            The sender's window after the update.
        """
        ...

    def record_bot_message(self, sender: str, text: str) -> ConversationWindow:
        """Append a bot reply and trim to capacity.

        Args:
            sender: Sender ID.
            text: Reply text.

        Returns:
            The sender's window after the update.
        """
        ...

    def get(self, sender: str) -> ConversationWindow:
        """Get a sender's window, or an empty one if none exists."""
        ...
