"""Tests for the media adapter."""

import pytest

from naya.domain.entities import AttachmentPart, DownloadedMedia
from naya.domain.exceptions import MediaDecodeError
from naya.domain.services import to_attachment_part


class TestToAttachmentPart:
    """to_attachment_part tests."""

    def test_maps_data_and_mimetype_unchanged(self) -> None:
        """Test that payload and MIME type pass through."""
        media = DownloadedMedia(data="aGVsbG8=", mimetype="image/png")

        part = to_attachment_part(media)

        assert part == AttachmentPart(data="aGVsbG8=", mime_type="image/png")

    def test_missing_data_raises(self) -> None:
        """Test that media without data is rejected."""
        with pytest.raises(MediaDecodeError):
            to_attachment_part(DownloadedMedia(data="", mimetype="image/png"))

    def test_missing_mimetype_raises(self) -> None:
        """Test that media without a MIME type is rejected."""
        with pytest.raises(MediaDecodeError):
            to_attachment_part(DownloadedMedia(data="aGVsbG8=", mimetype=""))

    def test_none_raises(self) -> None:
        """Test that a failed download (None) is rejected."""
        with pytest.raises(MediaDecodeError):
            to_attachment_part(None)  # type: ignore[arg-type]
