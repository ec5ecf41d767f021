"""Slack event handlers."""

import logging

from slack_bolt.async_app import AsyncApp

from naya.domain.entities import Event
from naya.infrastructure.events.queue import EventQueue
from naya.infrastructure.slack import SlackEventAdapter

logger = logging.getLogger(__name__)

# Subtypes that carry a new message from a person
_RELAYED_SUBTYPES = frozenset({None, "file_share", "thread_broadcast"})


def should_relay(event: dict, bot_user_id: str) -> bool:
    """Check if a Slack message event should be answered.

    Edits, deletions, bot messages and the bot's own messages are skipped.

    Args:
        event: Slack message event payload.
        bot_user_id: The bot's user ID.

    Returns:
        True if the message should be relayed to the backend.
    """
    if event.get("subtype") not in _RELAYED_SUBTYPES:
        return False
    if event.get("bot_id") or event.get("user") in (None, bot_user_id):
        return False
    return bool(event.get("text") or event.get("files"))


def register_handlers(
    app: AsyncApp,
    queue: EventQueue,
    event_adapter: SlackEventAdapter,
    bot_user_id: str,
) -> None:
    """Register Slack event handlers.

    Args:
        app: AsyncApp instance.
        queue: Queue that MESSAGE events are enqueued to.
        event_adapter: Adapter for converting events to inbound messages.
        bot_user_id: The bot's user ID.
    """

    @app.event("message")
    async def handle_message(event: dict) -> None:
        """Enqueue message events for the relay pipeline.

        Args:
            event: Slack event payload.
        """
        logger.debug(
            "Received message event: ts=%s, subtype=%s, channel=%s",
            event.get("ts"),
            event.get("subtype"),
            event.get("channel"),
        )

        if not should_relay(event, bot_user_id):
            return

        try:
            message = event_adapter.to_inbound_message(event)
        except Exception:
            logger.exception("Error converting event to message")
            return

        await queue.enqueue(Event.message(message))
