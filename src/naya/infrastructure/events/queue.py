"""Event queue for event-driven architecture."""

import asyncio
import logging

from naya.domain.entities.event import Event

logger = logging.getLogger(__name__)


class EventQueue:
    """In-memory FIFO event queue.

    Every enqueued event is delivered exactly once, in arrival order.
    Messages from the same sender are never merged or replaced.
    """

    def __init__(self) -> None:
        """Initialize the event queue."""
        self._queue: asyncio.Queue[Event] = asyncio.Queue()
        self._processing: Event | None = None

    def __len__(self) -> int:
        return self._queue.qsize()

    @property
    def processing(self) -> Event | None:
        """Event currently being processed, if any."""
        return self._processing

    async def enqueue(self, event: Event) -> None:
        """Add an event to the queue.

        Args:
            event: The event to enqueue.
        """
        await self._queue.put(event)
        logger.debug("Enqueued %s event (pending=%d)", event.type.value, len(self))

    async def dequeue(self) -> Event:
        """Get the next event from the queue.

        This method blocks until an event is available.

        Returns:
            The next event to process.
        """
        return await self._queue.get()

    async def join(self) -> None:
        """Wait until every enqueued event has been marked done."""
        await self._queue.join()

    def mark_processing(self, event: Event) -> None:
        """Mark an event as being processed.

        Args:
            event: The event being processed.
        """
        self._processing = event

    def mark_done(self, event: Event) -> None:
        """Mark an event as done processing.

        Args:
            event: The event that finished processing.
        """
        if self._processing is event:
            self._processing = None
        self._queue.task_done()

    def clear(self) -> None:
        """Drop all pending events."""
        dropped = 0
        while True:
            try:
                self._queue.get_nowait()
            except asyncio.QueueEmpty:
                break
            self._queue.task_done()
            dropped += 1
        self._processing = None
        logger.info("EventQueue cleared (dropped=%d)", dropped)
