"""Tests for InboundMessage."""

from unittest.mock import AsyncMock

import pytest

from naya.domain.entities import DownloadedMedia, InboundMessage
from naya.domain.exceptions import MediaDecodeError


class TestInboundMessage:
    """InboundMessage tests."""

    def test_has_media_false_without_loader(self) -> None:
        """Test that a text message has no media."""
        message = InboundMessage(sender="A", body="hi")

        assert not message.has_media

    async def test_download_media_uses_loader(self) -> None:
        """Test that download_media awaits the loader."""
        media = DownloadedMedia(data="aGVsbG8=", mimetype="image/png")
        loader = AsyncMock(return_value=media)
        message = InboundMessage(sender="A", body="", media_loader=loader)

        assert message.has_media
        assert await message.download_media() == media
        loader.assert_awaited_once()

    async def test_download_media_without_loader_raises(self) -> None:
        """Test that downloading from a text message fails."""
        message = InboundMessage(sender="A", body="hi")

        with pytest.raises(MediaDecodeError):
            await message.download_media()

    def test_equality_ignores_loader(self) -> None:
        """Test that messages compare by sender and body."""
        first = InboundMessage(sender="A", body="hi", media_loader=AsyncMock())
        second = InboundMessage(sender="A", body="hi", media_loader=AsyncMock())

        assert first == second
