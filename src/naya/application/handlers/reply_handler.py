"""Handler for REPLY events."""

import logging

from naya.application.services.reply_dispatcher import ReplyDispatcher
from naya.domain.entities import Event, EventType
from naya.infrastructure.events.dispatcher import event_handler

logger = logging.getLogger(__name__)


class ReplyEventHandler:
    """Delivers REPLY events through the reply dispatcher."""

    def __init__(self, reply_dispatcher: ReplyDispatcher) -> None:
        self._reply_dispatcher = reply_dispatcher

    @event_handler(EventType.REPLY)
    async def handle(self, event: Event) -> None:
        """Handle REPLY event."""
        recipient = event.payload["recipient"]
        delivered = await self._reply_dispatcher.deliver(
            recipient, event.payload["text"]
        )
        if not delivered:
            logger.warning(
                "Dropped %s for %s",
                "fallback message" if event.payload.get("fallback") else "reply",
                recipient,
            )
