"""Single consumer that drains an event queue into a dispatcher."""

import asyncio
import logging

from naya.domain.entities.event import Event
from naya.infrastructure.events.dispatcher import EventDispatcher
from naya.infrastructure.events.queue import EventQueue

logger = logging.getLogger(__name__)


class EventLoop:
    """Runs queued events through a dispatcher one at a time.

    Strict sequencing keeps one sender's messages in arrival order and
    means the per-sender window is never written by two turns at once.
    """

    def __init__(
        self,
        queue: EventQueue,
        dispatcher: EventDispatcher,
        poll_interval: float = 1.0,
    ) -> None:
        """Initialize the loop.

        Args:
            queue: Queue to consume.
            dispatcher: Dispatcher that runs each event.
            poll_interval: Seconds between checks for a stop request
                while the queue is idle.
        """
        self._queue = queue
        self._dispatcher = dispatcher
        self._poll_interval = poll_interval
        self._running = False
        self._processed = 0
        self._failed = 0

    @property
    def name(self) -> str:
        """Name of the dispatcher this loop feeds."""
        return self._dispatcher.name

    @property
    def is_running(self) -> bool:
        """Check if the loop is consuming events."""
        return self._running

    @property
    def processed_count(self) -> int:
        """Number of events run so far, including failed ones."""
        return self._processed

    @property
    def failed_count(self) -> int:
        """Number of events whose stage failed or was missing."""
        return self._failed

    async def start(self) -> None:
        """Consume events until stop() is called."""
        if self._running:
            logger.warning("%s loop is already running", self.name)
            return

        self._running = True
        logger.info("%s loop started", self.name)
        try:
            while self._running:
                try:
                    event = await asyncio.wait_for(
                        self._queue.dequeue(), timeout=self._poll_interval
                    )
                except asyncio.TimeoutError:
                    continue
                await self._run(event)
        except asyncio.CancelledError:
            logger.info("%s loop cancelled", self.name)
        finally:
            self._running = False
        logger.info(
            "%s loop stopped (processed=%d, failed=%d)",
            self.name,
            self._processed,
            self._failed,
        )

    async def stop(self, drain_timeout: float | None = None) -> None:
        """Stop consuming events.

        Args:
            drain_timeout: If set, wait up to this many seconds for the
                pending events, including one already being processed, to
                finish first. Whatever is still queued afterwards is dropped.
        """
        if drain_timeout is not None and self._running:
            logger.info(
                "Draining %s loop (pending=%d, in_flight=%s)",
                self.name,
                len(self._queue),
                self._queue.processing is not None,
            )
            try:
                await asyncio.wait_for(self._queue.join(), timeout=drain_timeout)
            except asyncio.TimeoutError:
                logger.warning("%s loop did not drain in time", self.name)
        self._running = False
        self._queue.clear()

    async def _run(self, event: Event) -> None:
        self._queue.mark_processing(event)
        try:
            if not await self._dispatcher.dispatch(event):
                self._failed += 1
        finally:
            self._processed += 1
            self._queue.mark_done(event)
