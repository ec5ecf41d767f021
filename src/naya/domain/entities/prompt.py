"""Prompt request entity."""

from dataclasses import dataclass

from naya.domain.entities.attachment import AttachmentPart

PromptPart = str | AttachmentPart


@dataclass(frozen=True)
class PromptRequest:
    """A single request to the generation backend.

    Attributes:
        preamble: Rendered persona instruction.
        context: Previous user messages joined by newlines.
        current: The user message being answered.
        attachment: Media sent with the current message, if any.
    """

    preamble: str
    context: str
    current: str
    attachment: AttachmentPart | None = None

    @property
    def text(self) -> str:
        """The rendered persona, context and current message."""
        return f"{self.preamble}\n\n{self.context}\n{self.current}"

    def parts(self) -> list[PromptPart]:
        """Return the ordered parts: text first, then the attachment."""
        parts: list[PromptPart] = [self.text]
        if self.attachment is not None:
            parts.append(self.attachment)
        return parts
