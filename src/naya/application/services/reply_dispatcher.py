"""Best-effort delivery of replies to senders."""

import logging

from naya.domain.exceptions import DeliveryError
from naya.domain.services import MessagingService

logger = logging.getLogger(__name__)


class ReplyDispatcher:
    """Sends replies through the transport without ever raising.

    A failed send is logged and the message is dropped: there is no retry
    and no backlog. The text is sent as given, whether it is a generated
    reply or the fallback message chosen by the message handler.
    """

    def __init__(self, messaging_service: MessagingService) -> None:
        """Initialize the dispatcher.

        Args:
            messaging_service: Transport used to send messages.
        """
        self._messaging_service = messaging_service

    async def deliver(self, sender: str, text: str) -> bool:
        """Send text to a sender.

        Args:
            sender: Sender ID to reply to.
            text: Message content.

        Returns:
            True if the transport accepted the message.
        """
        try:
            await self._messaging_service.send_message(recipient=sender, text=text)
        except DeliveryError as e:
            logger.error("Failed to send message to %s: %s", sender, e)
            return False
        except Exception:
            logger.exception("Failed to send message to %s", sender)
            return False

        logger.debug("Sent message to %s", sender)
        return True
