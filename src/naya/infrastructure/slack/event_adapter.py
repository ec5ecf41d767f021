"""Slack event adapter."""

from functools import partial

from naya.domain.entities import InboundMessage
from naya.infrastructure.slack.media import SlackMediaDownloader
from naya.infrastructure.slack.messaging import unescape_mrkdwn


class SlackEventAdapter:
    """Convert Slack message events to inbound messages.

    The sender ID is the conversation the message was posted in, so replies
    go back to the same DM or channel.
    """

    def __init__(self, media_downloader: SlackMediaDownloader) -> None:
        """Initialize the adapter.

        Args:
            media_downloader: Downloader for attached files.
        """
        self._media_downloader = media_downloader

    def to_inbound_message(self, event: dict) -> InboundMessage:
        """Convert a Slack message event.

        Only the first attached file is forwarded. Slack's HTML entities in
        the text are decoded so the model sees what the user typed.

        Args:
            event: Slack message event payload.

        Returns:
            InboundMessage whose media loader downloads the first file.
        """
        files = event.get("files") or []
        media_loader = (
            partial(self._media_downloader.download, files[0]) if files else None
        )
        return InboundMessage(
            sender=event["channel"],
            body=unescape_mrkdwn(event.get("text") or ""),
            media_loader=media_loader,
        )
