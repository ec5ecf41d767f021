"""Inbound message entity."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field

from naya.domain.entities.attachment import DownloadedMedia
from naya.domain.exceptions import MediaDecodeError

MediaLoader = Callable[[], Awaitable[DownloadedMedia]]


@dataclass(frozen=True)
class InboundMessage:
    """Message received from the transport.

    Attributes:
        sender: Sender ID; the key for all per-sender state.
        body: Message text. May be empty when only media was sent.
        media_loader: Coroutine function that downloads the attached media,
            or None if the message has no attachment.
    """

    sender: str
    body: str
    media_loader: MediaLoader | None = field(default=None, compare=False)

    @property
    def has_media(self) -> bool:
        """Check if the message carries an attachment."""
        return self.media_loader is not None

    async def download_media(self) -> DownloadedMedia:
        """Download the attached media.

        Raises:
            MediaDecodeError: The message has no attachment.
        """
        if self.media_loader is None:
            raise MediaDecodeError(f"Message from {self.sender} has no media")
        return await self.media_loader()
