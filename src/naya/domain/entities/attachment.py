"""Attachment entities."""

from dataclasses import dataclass


@dataclass(frozen=True)
class DownloadedMedia:
    """Media as downloaded from the transport.

    Attributes:
        data: Base64-encoded payload.
        mimetype: MIME type reported by the transport.
    """

    data: str
    mimetype: str


@dataclass(frozen=True)
class AttachmentPart:
    """Attachment in the form the generation backend accepts.

    Attributes:
        data: Base64-encoded payload.
        mime_type: MIME type of the payload.
    """

    data: str
    mime_type: str

    def to_data_url(self) -> str:
        """Return the payload as a ``data:`` URL."""
        return f"data:{self.mime_type};base64,{self.data}"
