"""In-memory per-sender history store."""

import logging
from collections import OrderedDict, deque
from dataclasses import dataclass, field

from naya.config import HistoryConfig
from naya.domain.entities import ConversationWindow

logger = logging.getLogger(__name__)


@dataclass
class _Window:
    """Mutable per-sender state behind a ConversationWindow snapshot."""

    user_messages: deque[str]
    bot_messages: deque[str] = field(default_factory=deque)

    def snapshot(self) -> ConversationWindow:
        return ConversationWindow(
            user_messages=tuple(self.user_messages),
            bot_messages=tuple(self.bot_messages),
        )


class InMemoryHistoryStore:
    """Process-wide mapping from sender ID to a bounded conversation window.

    Windows are created lazily on the first write for a sender. Appending
    past capacity drops the oldest entry. All mutations happen without
    awaiting, so each append-then-trim is atomic under asyncio.

    When ``max_senders`` is set the store behaves as an LRU cache over
    senders: the least recently written sender is evicted once the cap is
    exceeded. Otherwise the set of senders grows without bound.
    """

    def __init__(self, config: HistoryConfig | None = None) -> None:
        """Initialize the store.

        Args:
            config: Capacity settings. Defaults to 3 user messages,
                2 bot replies and no sender cap.
        """
        config = config or HistoryConfig()
        self._user_capacity = config.user_capacity
        self._bot_capacity = config.bot_capacity
        self._max_senders = config.max_senders
        self._windows: OrderedDict[str, _Window] = OrderedDict()

    def __len__(self) -> int:
        return len(self._windows)

    def record_user_message(self, sender: str, text: str) -> ConversationWindow:
        """Append a user message and keep only the most recent ones."""
        window = self._get_or_create(sender)
        window.user_messages.append(text)
        return window.snapshot()

    def record_bot_message(self, sender: str, text: str) -> ConversationWindow:
        """Append a bot reply and keep only the most recent ones."""
        window = self._get_or_create(sender)
        window.bot_messages.append(text)
        return window.snapshot()

    def get(self, sender: str) -> ConversationWindow:
        """Return a snapshot of the sender's window (empty if unknown)."""
        window = self._windows.get(sender)
        if window is None:
            return ConversationWindow()
        return window.snapshot()

    def _get_or_create(self, sender: str) -> _Window:
        window = self._windows.get(sender)
        if window is not None:
            self._windows.move_to_end(sender)
            return window

        window = _Window(
            user_messages=deque(maxlen=self._user_capacity),
            bot_messages=deque(maxlen=self._bot_capacity),
        )
        self._windows[sender] = window
        logger.debug("Created conversation window for %s", sender)

        if self._max_senders is not None and len(self._windows) > self._max_senders:
            evicted, _ = self._windows.popitem(last=False)
            logger.debug("Evicted conversation window for %s", evicted)
        return window
