"""Domain entities."""

from naya.domain.entities.attachment import AttachmentPart, DownloadedMedia
from naya.domain.entities.event import Event, EventType
from naya.domain.entities.message import InboundMessage, MediaLoader
from naya.domain.entities.prompt import PromptPart, PromptRequest
from naya.domain.entities.window import ConversationWindow

__all__ = [
    "AttachmentPart",
    "ConversationWindow",
    "DownloadedMedia",
    "Event",
    "EventType",
    "InboundMessage",
    "MediaLoader",
    "PromptPart",
    "PromptRequest",
]
