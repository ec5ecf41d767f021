"""Posting replies to Slack conversations."""

import logging

from slack_sdk.errors import SlackApiError
from slack_sdk.web.async_client import AsyncWebClient

from naya.domain.exceptions import DeliveryError

logger = logging.getLogger(__name__)

# Slack treats these as control characters in message text
_MRKDWN_ESCAPES = str.maketrans({"&": "&amp;", "<": "&lt;", ">": "&gt;"})


def escape_mrkdwn(text: str) -> str:
    """Escape text so Slack shows it literally instead of as links or mentions."""
    return text.translate(_MRKDWN_ESCAPES)


def unescape_mrkdwn(text: str) -> str:
    """Turn Slack's escaped control characters back into plain text."""
    # &amp; last so "&amp;lt;" decodes to "&lt;", not "<"
    return text.replace("&lt;", "<").replace("&gt;", ">").replace("&amp;", "&")


def _error_code(error: SlackApiError) -> str:
    response = error.response
    code = response.get("error") if hasattr(response, "get") else None
    return code or str(error)


class SlackMessagingService:
    """MessagingService that posts into the conversation a message came from."""

    def __init__(self, client: AsyncWebClient) -> None:
        self._client = client
        self._bot_user_id: str | None = None

    async def send_message(self, recipient: str, text: str) -> None:
        """Post text to a Slack conversation.

        Args:
            recipient: Conversation ID (the sender ID of the inbound message).
            text: Reply text, posted verbatim.

        Raises:
            DeliveryError: Slack rejected the message.
        """
        try:
            response = await self._client.chat_postMessage(
                channel=recipient,
                text=escape_mrkdwn(text),
                unfurl_links=False,
                unfurl_media=False,
            )
        except SlackApiError as e:
            raise DeliveryError(
                recipient, f"Slack rejected message to {recipient}: {_error_code(e)}"
            ) from e
        logger.debug("Posted message to %s (ts=%s)", recipient, response.get("ts"))

    async def get_bot_user_id(self) -> str:
        """Return the bot's own user ID, looked up once via auth.test."""
        if self._bot_user_id is None:
            response = await self._client.auth_test()
            self._bot_user_id = response["user_id"]
            logger.info("Authenticated as bot user %s", self._bot_user_id)
        return self._bot_user_id
