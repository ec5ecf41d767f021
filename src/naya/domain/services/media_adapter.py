"""Conversion of downloaded media into backend attachments."""

from naya.domain.entities import AttachmentPart, DownloadedMedia
from naya.domain.exceptions import MediaDecodeError


def to_attachment_part(media: DownloadedMedia) -> AttachmentPart:
    """Map downloaded media to an attachment part.

    The payload and MIME type are passed through unchanged.

    Args:
        media: Media downloaded from the transport.

    Returns:
        AttachmentPart carrying the same data and MIME type.

    Raises:
        MediaDecodeError: The media has no data or no MIME type.
    """
    if media is None or not getattr(media, "data", None):
        raise MediaDecodeError("Downloaded media has no data")
    if not getattr(media, "mimetype", None):
        raise MediaDecodeError("Downloaded media has no MIME type")
    return AttachmentPart(data=media.data, mime_type=media.mimetype)
