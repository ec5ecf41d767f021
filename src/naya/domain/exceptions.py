"""Domain exceptions."""


class GenerationError(Exception):
    """A reply could not be generated.

    Raised when the backend call fails or returns no usable text. Callers
    recover by sending the fallback message instead.
    """


class DeliveryError(Exception):
    """An outbound message could not be delivered to the transport."""

    def __init__(self, recipient: str, message: str = "") -> None:
        """Initialize.

        Args:
            recipient: Sender ID the message was addressed to.
            message: Error message (optional).
        """
        self.recipient = recipient
        super().__init__(message or f"Failed to deliver message to {recipient}")


class MediaDecodeError(Exception):
    """An attachment from the transport was missing or malformed."""
