"""Tests for the entry point wiring."""

import asyncio
import logging
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from naya.__main__ import build_relay, configure_logging
from naya.config import (
    Config,
    HistoryConfig,
    LLMConfig,
    LoggingConfig,
    PersonaConfig,
    SessionConfig,
    SessionScope,
    SlackConfig,
)
from naya.domain.entities import Event, EventType, InboundMessage


@pytest.fixture
def config() -> Config:
    """Create a minimal config."""
    return Config(
        slack=SlackConfig(bot_token="xoxb-test", app_token="xapp-test"),
        llm=LLMConfig(model="gemini/gemini-1.5-flash-8b", api_key="test-key"),
    )


def completion(text: str) -> MagicMock:
    response = MagicMock()
    response.choices = [MagicMock()]
    response.choices[0].message.content = text
    return response


async def wait_for_call(mock: AsyncMock, count: int = 1) -> None:
    async def poll() -> None:
        while mock.await_count < count:
            await asyncio.sleep(0.01)

    await asyncio.wait_for(poll(), timeout=2.0)


class TestBuildRelay:
    """build_relay tests."""

    def test_loops_are_named(self, config: Config) -> None:
        """Test that inbound and outbound loops are separate."""
        relay = build_relay(config, AsyncMock())

        assert relay.inbound_loop.name == "inbound"
        assert relay.outbound_loop.name == "outbound"

    def test_session_cap_follows_history_cap(self, config: Config) -> None:
        """Test that per-sender sessions are bounded by history.max_senders."""
        config.session = SessionConfig(scope=SessionScope.PER_SENDER)
        config.history = HistoryConfig(max_senders=50)

        relay = build_relay(config, AsyncMock())

        assert relay.session_manager.max_sessions == 50

    def test_shared_scope_warns(
        self, config: Config, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Test that the shared session scope is called out at startup."""
        with caplog.at_level(logging.WARNING):
            build_relay(config, AsyncMock())

        assert "session.scope is shared" in caplog.text

    async def test_message_is_answered_end_to_end(self, config: Config) -> None:
        """Test a Slack message flowing through both loops to the transport."""
        messaging_service = AsyncMock()
        relay = build_relay(config, messaging_service)
        tasks = [
            asyncio.create_task(relay.inbound_loop.start()),
            asyncio.create_task(relay.outbound_loop.start()),
        ]

        with patch(
            "litellm.acompletion",
            new=AsyncMock(side_effect=[completion("hey!"), completion("great!")]),
        ) as mock_completion:
            for body in ("hi", "how are you"):
                await relay.inbound_queue.enqueue(
                    Event(
                        type=EventType.MESSAGE,
                        payload={"message": InboundMessage(sender="D1", body=body)},
                    )
                )
            await wait_for_call(messaging_service.send_message, count=2)

        await relay.inbound_loop.stop()
        await relay.outbound_loop.stop()
        await asyncio.gather(*tasks)

        messaging_service.send_message.assert_awaited_with(
            recipient="D1", text="great!"
        )
        second_request = mock_completion.call_args.kwargs["messages"]
        assert second_request[-1]["content"].endswith("\n\nhi\nhow are you")
        assert relay.history.get("D1").bot_messages == ("hey!", "great!")
        assert relay.session_manager.session_count == 1

    async def test_configured_fallback_reaches_transport(
        self, config: Config
    ) -> None:
        """Test that persona.fallback_message is what the sender receives."""
        config.persona = PersonaConfig(fallback_message="Sorry, try again!")
        messaging_service = AsyncMock()
        relay = build_relay(config, messaging_service)
        tasks = [
            asyncio.create_task(relay.inbound_loop.start()),
            asyncio.create_task(relay.outbound_loop.start()),
        ]

        with patch(
            "litellm.acompletion", new=AsyncMock(side_effect=RuntimeError("down"))
        ):
            await relay.inbound_queue.enqueue(
                Event.message(InboundMessage(sender="D1", body="hi"))
            )
            await wait_for_call(messaging_service.send_message)

        await relay.inbound_loop.stop()
        await relay.outbound_loop.stop()
        await asyncio.gather(*tasks)

        messaging_service.send_message.assert_awaited_once_with(
            recipient="D1", text="Sorry, try again!"
        )
        assert relay.history.get("D1").bot_messages == ()


class TestConfigureLogging:
    """configure_logging tests."""

    @pytest.fixture(autouse=True)
    def restore_logging(self):
        """Restore logger state changed by configure_logging."""
        names = ("LiteLLM", "httpx", "slack_bolt", "slack_sdk", "naya.example")
        levels = {name: logging.getLogger(name).level for name in names}
        yield
        for name, level in levels.items():
            logging.getLogger(name).setLevel(level)

    def test_quiets_third_party_loggers(self) -> None:
        """Test that noisy libraries default to WARNING."""
        configure_logging(None)

        assert logging.getLogger("LiteLLM").level == logging.WARNING

    def test_applies_per_logger_levels(self) -> None:
        """Test explicit logger levels, including overriding a quieted one."""
        config = LoggingConfig(
            level="DEBUG",
            loggers={"naya.example": "ERROR", "httpx": "INFO"},
        )
        with patch("naya.__main__.logging.basicConfig") as mock_basic_config:
            configure_logging(config)

        mock_basic_config.assert_called_once_with(
            level=logging.DEBUG, format=config.format, force=True
        )
        assert logging.getLogger("naya.example").level == logging.ERROR
        assert logging.getLogger("httpx").level == logging.INFO
