"""Download of files attached to Slack messages."""

import base64
import logging
from typing import Any

import httpx

from naya.domain.entities import DownloadedMedia
from naya.domain.exceptions import MediaDecodeError

logger = logging.getLogger(__name__)


class SlackMediaDownloader:
    """Downloads private Slack files with the bot token.

    The payload is returned base64-encoded, which is the form the
    generation backend accepts.
    """

    def __init__(
        self,
        bot_token: str,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the downloader.

        Args:
            bot_token: Bot token with the ``files:read`` scope.
            timeout: HTTP timeout in seconds.
            transport: Custom httpx transport (used by tests).
        """
        self._bot_token = bot_token
        self._timeout = timeout
        self._transport = transport

    async def download(self, file: dict[str, Any]) -> DownloadedMedia:
        """Download a file from a Slack event payload.

        Args:
            file: Entry of the event's ``files`` list.

        Returns:
            DownloadedMedia with base64 data and the file's MIME type.

        Raises:
            MediaDecodeError: The file has no URL or the download failed.
        """
        url = file.get("url_private_download") or file.get("url_private")
        if not url:
            raise MediaDecodeError(f"Slack file {file.get('id')} has no download URL")

        logger.debug("Downloading Slack file %s", file.get("id"))
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout,
                follow_redirects=True,
                transport=self._transport,
            ) as client:
                response = await client.get(
                    url, headers={"Authorization": f"Bearer {self._bot_token}"}
                )
                response.raise_for_status()
        except httpx.HTTPError as e:
            raise MediaDecodeError(f"Failed to download Slack file: {e}") from e

        mimetype = file.get("mimetype") or response.headers.get("content-type", "")
        return DownloadedMedia(
            data=base64.b64encode(response.content).decode("ascii"),
            mimetype=mimetype.split(";")[0].strip(),
        )
