"""Routing of relay events to their pipeline stage."""

import logging
from collections.abc import Awaitable, Callable

from naya.domain.entities.event import Event, EventType

logger = logging.getLogger(__name__)

EventHandler = Callable[[Event], Awaitable[None]]


def event_handler(event_type: EventType) -> Callable[[EventHandler], EventHandler]:
    """Mark a coroutine as the stage for one event type.

    Usage:
        @event_handler(EventType.REPLY)
        async def handle(self, event: Event) -> None:
            ...
    """

    def decorator(func: EventHandler) -> EventHandler:
        func.handles = event_type  # type: ignore[attr-defined]
        return func

    return decorator


class EventDispatcher:
    """Routes each event to the single stage registered for its type.

    A stage that raises is logged with the event's recipient or sender;
    the error never reaches the loop that feeds the dispatcher.
    """

    def __init__(self, name: str = "events") -> None:
        self._name = name
        self._stages: dict[EventType, EventHandler] = {}

    @property
    def name(self) -> str:
        """Name used in log lines."""
        return self._name

    def handles(self, event_type: EventType) -> bool:
        """Check if a stage is registered for an event type."""
        return event_type in self._stages

    def register(self, handler: EventHandler) -> None:
        """Register a stage decorated with @event_handler.

        Raises:
            ValueError: The handler is not decorated, or its event type
                already has a stage.
        """
        event_type: EventType | None = getattr(handler, "handles", None)
        if event_type is None:
            raise ValueError(
                f"{getattr(handler, '__qualname__', handler)!r} is not "
                "decorated with @event_handler"
            )
        if event_type in self._stages:
            raise ValueError(
                f"{self._name}: {event_type.value} events already have a stage"
            )
        self._stages[event_type] = handler
        logger.debug(
            "%s: %s events -> %s",
            self._name,
            event_type.value,
            getattr(handler, "__qualname__", handler),
        )

    async def dispatch(self, event: Event) -> bool:
        """Run the stage for an event.

        Returns:
            True if the stage completed, False if there was no stage or
            it raised.
        """
        stage = self._stages.get(event.type)
        if stage is None:
            logger.warning(
                "%s: dropping %s event with no stage", self._name, event.type.value
            )
            return False

        try:
            await stage(event)
        except Exception:
            logger.exception(
                "%s: %s stage failed for %s",
                self._name,
                event.type.value,
                _party(event),
            )
            return False
        return True


def _party(event: Event) -> str:
    payload = event.payload
    if "recipient" in payload:
        return str(payload["recipient"])
    message = payload.get("message")
    return str(getattr(message, "sender", "unknown sender"))
