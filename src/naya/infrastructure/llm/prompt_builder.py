"""Prompt assembly from a conversation window."""

import logging

from naya.config import PersonaConfig
from naya.domain.entities import AttachmentPart, ConversationWindow, PromptRequest
from naya.infrastructure.llm.templates import load_persona_template

logger = logging.getLogger(__name__)


class JinjaPromptBuilder:
    """Builds prompts from the persona preamble and user-side history.

    The rendered text is the persona preamble, a blank line, the previous
    user messages joined by newlines, a newline and the current message.
    Bot replies are kept in the window but not rendered: they already live
    in the backend session's own history.
    """

    def __init__(self, persona: PersonaConfig) -> None:
        """Initialize the builder.

        Args:
            persona: Persona settings. ``persona.system_prompt``, when set,
                is used as the preamble template instead of the built-in one.
        """
        self._persona = persona
        self._template = load_persona_template(persona.system_prompt)
        self._preamble = self._render_preamble()

    @property
    def preamble(self) -> str:
        """Rendered persona preamble."""
        return self._preamble

    def build_prompt(
        self,
        window: ConversationWindow,
        attachment: AttachmentPart | None = None,
    ) -> PromptRequest:
        """Build a prompt for the current turn of a window.

        Args:
            window: The sender's window; its last user message is the
                current turn.
            attachment: Media sent with the current message.

        Returns:
            PromptRequest with the text first and the attachment second.

        Raises:
            ValueError: The window has no user messages.
        """
        if window.is_empty():
            raise ValueError("Cannot build a prompt from an empty window")

        logger.debug(
            "Building prompt: %d previous messages, attachment=%s",
            len(window.previous_messages),
            attachment.mime_type if attachment else None,
        )
        return PromptRequest(
            preamble=self._preamble,
            context="\n".join(window.previous_messages),
            current=window.current_message,
            attachment=attachment,
        )

    def _render_preamble(self) -> str:
        return self._template.render(
            name=self._persona.name,
            max_words=self._persona.max_words,
        ).strip()
