"""Handler for MESSAGE events.

Runs the relay pipeline for one inbound message: record it, attach media,
build the prompt, generate a reply and emit a REPLY event carrying either
the generated text or the fallback message.
"""

import logging

from naya.config import DEFAULT_FALLBACK_MESSAGE
from naya.domain.entities import AttachmentPart, Event, EventType, InboundMessage
from naya.domain.exceptions import GenerationError
from naya.domain.repositories import HistoryRepository
from naya.domain.services import PromptBuilder, ResponseGenerator, to_attachment_part
from naya.infrastructure.events.dispatcher import event_handler
from naya.infrastructure.events.queue import EventQueue

logger = logging.getLogger(__name__)


class MessageEventHandler:
    """Handler for MESSAGE events."""

    def __init__(
        self,
        history: HistoryRepository,
        prompt_builder: PromptBuilder,
        response_generator: ResponseGenerator,
        reply_queue: EventQueue,
        fallback_message: str = DEFAULT_FALLBACK_MESSAGE,
    ) -> None:
        """Initialize the handler.

        Args:
            history: Per-sender conversation windows.
            prompt_builder: Builds prompts from windows.
            response_generator: Sends prompts to the backend session.
            reply_queue: Queue that REPLY events are emitted to.
            fallback_message: Text sent when generation fails.
        """
        self._history = history
        self._prompt_builder = prompt_builder
        self._response_generator = response_generator
        self._reply_queue = reply_queue
        self._fallback_message = fallback_message

    @event_handler(EventType.MESSAGE)
    async def handle(self, event: Event) -> None:
        """Handle MESSAGE event.

        Processing flow:
        1. Record the user message in the sender's window
        2. Download and convert the attachment, if any
        3. Build the prompt from the window
        4. Generate the reply
        5. Record the reply and emit it (or emit the fallback on failure)

        Args:
            event: The MESSAGE event.
        """
        message: InboundMessage = event.payload["message"]
        sender = message.sender

        logger.info("Received message from %s: %s", sender, message.body)

        # 1. Record the user message
        window = self._history.record_user_message(sender, message.body)

        # 2. Attachment
        attachment: AttachmentPart | None = None
        if message.has_media:
            try:
                media = await message.download_media()
                attachment = to_attachment_part(media)
            except Exception:
                logger.exception("Failed to load media from %s", sender)
                await self._emit_reply(sender, self._fallback_message, fallback=True)
                return

        # 3. Build the prompt
        prompt = self._prompt_builder.build_prompt(window, attachment)

        # 4. Generate the reply
        try:
            text = await self._response_generator.send(prompt.parts(), sender=sender)
        except GenerationError as e:
            logger.error("Failed to generate reply for %s: %s", sender, e)
            await self._emit_reply(sender, self._fallback_message, fallback=True)
            return

        logger.info("Generated reply for %s: %s", sender, text)

        # 5. Record and emit the reply
        self._history.record_bot_message(sender, text)
        await self._emit_reply(sender, text)

    async def _emit_reply(self, sender: str, text: str, fallback: bool = False) -> None:
        await self._reply_queue.enqueue(Event.reply(sender, text, fallback=fallback))
