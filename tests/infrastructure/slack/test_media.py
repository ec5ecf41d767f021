"""Tests for SlackMediaDownloader."""

import base64

import httpx
import pytest

from naya.domain.entities import DownloadedMedia
from naya.domain.exceptions import MediaDecodeError
from naya.infrastructure.slack import SlackMediaDownloader

FILE = {
    "id": "F123",
    "name": "cat.png",
    "mimetype": "image/png",
    "url_private_download": "https://files.slack.com/files-pri/T1-F123/download/cat.png",
}


class TestSlackMediaDownloader:
    """SlackMediaDownloader tests."""

    async def test_download_encodes_payload(self) -> None:
        """Test that the file is fetched with the bot token and base64-encoded."""
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(200, content=b"\x89PNG")

        downloader = SlackMediaDownloader(
            "xoxb-test", transport=httpx.MockTransport(handler)
        )

        media = await downloader.download(FILE)

        assert media.data == base64.b64encode(b"\x89PNG").decode("ascii")
        assert media.mimetype == "image/png"
        assert requests[0].headers["Authorization"] == "Bearer xoxb-test"
        assert str(requests[0].url) == FILE["url_private_download"]

    async def test_download_falls_back_to_content_type(self) -> None:
        """Test the MIME type when the event does not carry one."""
        transport = httpx.MockTransport(
            lambda request: httpx.Response(
                200,
                content=b"data",
                headers={"content-type": "image/jpeg; charset=binary"},
            )
        )
        downloader = SlackMediaDownloader("xoxb-test", transport=transport)
        file = {k: v for k, v in FILE.items() if k != "mimetype"}

        media = await downloader.download(file)

        assert media.mimetype == "image/jpeg"

    async def test_http_error_raises_media_decode_error(self) -> None:
        """Test that failed downloads become MediaDecodeError."""
        transport = httpx.MockTransport(lambda request: httpx.Response(403))
        downloader = SlackMediaDownloader("xoxb-test", transport=transport)

        with pytest.raises(MediaDecodeError):
            await downloader.download(FILE)

    async def test_missing_url_raises_media_decode_error(self) -> None:
        """Test that files without a URL are rejected."""
        downloader = SlackMediaDownloader("xoxb-test")

        with pytest.raises(MediaDecodeError):
            await downloader.download({"id": "F123", "mimetype": "image/png"})

    async def test_download_returns_payload_and_type(self) -> None:
        """Test that the download carries exactly the payload and MIME type."""
        transport = httpx.MockTransport(
            lambda request: httpx.Response(200, content=b"GIF89a")
        )
        downloader = SlackMediaDownloader("xoxb-test", transport=transport)

        media = await downloader.download({**FILE, "mimetype": "image/gif"})

        assert media == DownloadedMedia(
            data=base64.b64encode(b"GIF89a").decode("ascii"), mimetype="image/gif"
        )
