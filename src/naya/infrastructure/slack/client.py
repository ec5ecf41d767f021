"""Slack app construction and Socket Mode lifecycle."""

import asyncio
import logging

from slack_bolt.adapter.socket_mode.async_handler import AsyncSocketModeHandler
from slack_bolt.async_app import AsyncApp

from naya.config import SlackConfig

logger = logging.getLogger(__name__)


def create_slack_app(config: SlackConfig) -> AsyncApp:
    """Create the Bolt app that receives message events."""
    return AsyncApp(token=config.bot_token)


class SlackAppRunner:
    """Keeps one Socket Mode connection open until closed.

    ``start()`` connects and then parks until ``close()`` is called, so it
    can run as a background task next to the relay loops.
    """

    def __init__(self, app: AsyncApp, app_token: str) -> None:
        self._app = app
        self._app_token = app_token
        self._handler: AsyncSocketModeHandler | None = None
        self._closed = asyncio.Event()

    @property
    def is_connected(self) -> bool:
        """Check if the Socket Mode connection is open."""
        return self._handler is not None and not self._closed.is_set()

    async def start(self) -> None:
        """Connect and block until close() is called."""
        self._closed.clear()
        handler = AsyncSocketModeHandler(self._app, self._app_token)
        await handler.connect_async()
        self._handler = handler
        logger.info("Connected to Slack via Socket Mode")
        await self._closed.wait()

    async def close(self, timeout: float = 5.0) -> bool:
        """Disconnect from Slack.

        Args:
            timeout: Seconds to wait for the connection to close.

        Returns:
            False if closing timed out.
        """
        self._closed.set()
        handler, self._handler = self._handler, None
        if handler is None:
            return True
        try:
            await asyncio.wait_for(handler.close_async(), timeout=timeout)
        except asyncio.TimeoutError:
            logger.warning("Slack connection did not close within %.1fs", timeout)
            return False
        logger.info("Disconnected from Slack")
        return True
