"""Events passed between the relay stages."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from naya.domain.entities.message import InboundMessage


class EventType(Enum):
    """Relay stages.

    MESSAGE carries an inbound message to the generation pipeline; REPLY
    carries text to be delivered back to a sender.
    """

    MESSAGE = "message"
    REPLY = "reply"


@dataclass(frozen=True)
class Event:
    """A unit of work on one of the relay queues.

    Attributes:
        type: Which stage handles the event.
        payload: ``{"message": InboundMessage}`` for MESSAGE,
            ``{"recipient", "text", "fallback"}`` for REPLY.
        created_at: When the event was queued.
    """

    type: EventType
    payload: dict[str, Any]
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def message(cls, message: InboundMessage) -> "Event":
        """Create a MESSAGE event for an inbound message."""
        return cls(type=EventType.MESSAGE, payload={"message": message})

    @classmethod
    def reply(cls, recipient: str, text: str, fallback: bool = False) -> "Event":
        """Create a REPLY event.

        Args:
            recipient: Sender ID to deliver to.
            text: Generated reply or the fallback message.
            fallback: True if ``text`` is the fallback message.
        """
        return cls(
            type=EventType.REPLY,
            payload={"recipient": recipient, "text": text, "fallback": fallback},
        )
