"""Domain services."""

from naya.domain.services.media_adapter import to_attachment_part
from naya.domain.services.protocols import (
    ConversationSession,
    MessagingService,
    PromptBuilder,
    ResponseGenerator,
)

__all__ = [
    "ConversationSession",
    "MessagingService",
    "PromptBuilder",
    "ResponseGenerator",
    "to_attachment_part",
]
