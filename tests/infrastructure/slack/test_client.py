"""Tests for SlackAppRunner."""

import asyncio
from unittest.mock import AsyncMock, Mock, patch

import pytest

from naya.config import SlackConfig
from naya.infrastructure.slack.client import SlackAppRunner, create_slack_app


class TestCreateSlackApp:
    """create_slack_app tests."""

    def test_uses_bot_token(self) -> None:
        """Test that the app is built with the bot token."""
        with patch("naya.infrastructure.slack.client.AsyncApp") as mock_app:
            create_slack_app(SlackConfig(bot_token="xoxb-token", app_token="xapp"))

        mock_app.assert_called_once_with(token="xoxb-token")


class TestSlackAppRunner:
    """SlackAppRunner tests."""

    @pytest.fixture
    def handler(self) -> Mock:
        """Create a mock Socket Mode handler."""
        handler = Mock()
        handler.connect_async = AsyncMock()
        handler.close_async = AsyncMock()
        return handler

    @pytest.fixture
    def handler_cls(self, handler: Mock):
        """Patch the Socket Mode handler class."""
        with patch(
            "naya.infrastructure.slack.client.AsyncSocketModeHandler",
            return_value=handler,
        ) as mock_cls:
            yield mock_cls

    def test_not_connected_before_start(self) -> None:
        """Test that is_connected is False before start()."""
        runner = SlackAppRunner(Mock(), "xapp-token")

        assert runner.is_connected is False

    async def test_start_connects_and_close_disconnects(
        self, handler: Mock, handler_cls: Mock
    ) -> None:
        """Test the full connection lifecycle."""
        app = Mock()
        runner = SlackAppRunner(app, "xapp-token")

        task = asyncio.create_task(runner.start())
        await asyncio.sleep(0.01)

        handler_cls.assert_called_once_with(app, "xapp-token")
        handler.connect_async.assert_awaited_once()
        assert runner.is_connected is True
        assert not task.done()

        assert await runner.close() is True
        await asyncio.wait_for(task, timeout=1.0)

        handler.close_async.assert_awaited_once()
        assert runner.is_connected is False

    async def test_close_without_start(self) -> None:
        """Test that closing an unstarted runner succeeds."""
        runner = SlackAppRunner(Mock(), "xapp-token")

        assert await runner.close() is True

    async def test_close_timeout(self, handler: Mock, handler_cls: Mock) -> None:
        """Test that a hanging close returns False."""

        async def hang() -> None:
            await asyncio.sleep(10)

        handler.close_async = hang
        runner = SlackAppRunner(Mock(), "xapp-token")
        task = asyncio.create_task(runner.start())
        await asyncio.sleep(0.01)

        assert await runner.close(timeout=0.01) is False
        assert runner.is_connected is False
        await asyncio.wait_for(task, timeout=1.0)
