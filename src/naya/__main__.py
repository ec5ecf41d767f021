"""Entry point: wires Slack, the relay pipeline and the health server."""

import asyncio
import logging
import os
import signal
import sys
from dataclasses import dataclass
from pathlib import Path

from naya.application.handlers import MessageEventHandler, ReplyEventHandler
from naya.application.services import ReplyDispatcher
from naya.config import Config, ConfigError, LoggingConfig, SessionScope, load_config
from naya.domain.services import MessagingService
from naya.infrastructure.events import EventDispatcher, EventLoop, EventQueue
from naya.infrastructure.http import HealthServer
from naya.infrastructure.llm import ConversationSessionManager, JinjaPromptBuilder
from naya.infrastructure.persistence import InMemoryHistoryStore
from naya.infrastructure.slack import (
    SlackAppRunner,
    SlackEventAdapter,
    SlackMediaDownloader,
    SlackMessagingService,
    create_slack_app,
)
from naya.presentation import register_handlers

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
# Third-party loggers that are chatty at INFO
QUIET_LOGGERS = ("LiteLLM", "httpx", "slack_bolt", "slack_sdk")
REPLY_DRAIN_TIMEOUT = 5.0

logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)
logger = logging.getLogger(__name__)


def configure_logging(config: LoggingConfig | None) -> None:
    """Apply logging settings from config.yaml.

    Without a logging section the startup defaults stay in place apart
    from quieting third-party libraries.
    """
    overrides = dict(config.loggers or {}) if config else {}
    for name in QUIET_LOGGERS:
        overrides.setdefault(name, "WARNING")

    if config is not None:
        logging.basicConfig(
            level=getattr(logging, config.level.upper(), logging.INFO),
            format=config.format,
            force=True,
        )

    for name, level in overrides.items():
        logging.getLogger(name).setLevel(getattr(logging, level.upper(), logging.INFO))


@dataclass
class Relay:
    """The assembled relay pipeline."""

    history: InMemoryHistoryStore
    session_manager: ConversationSessionManager
    inbound_queue: EventQueue
    inbound_loop: EventLoop
    outbound_loop: EventLoop


def build_relay(config: Config, messaging_service: MessagingService) -> Relay:
    """Build the inbound (MESSAGE) and outbound (REPLY) pipelines."""
    history = InMemoryHistoryStore(config.history)
    session_manager = ConversationSessionManager(
        config.llm,
        scope=config.session.scope,
        max_sessions=config.history.max_senders,
        debug_llm_messages=bool(config.logging and config.logging.debug_llm_messages),
    )
    if config.session.scope is SessionScope.SHARED:
        logger.warning(
            "session.scope is shared: every sender talks to the same backend "
            "session and may see context from other conversations"
        )

    inbound_queue = EventQueue()
    outbound_queue = EventQueue()

    inbound = EventDispatcher("inbound")
    inbound.register(
        MessageEventHandler(
            history=history,
            prompt_builder=JinjaPromptBuilder(config.persona),
            response_generator=session_manager,
            reply_queue=outbound_queue,
            fallback_message=config.persona.fallback_message,
        ).handle
    )
    outbound = EventDispatcher("outbound")
    outbound.register(
        ReplyEventHandler(ReplyDispatcher(messaging_service)).handle
    )

    return Relay(
        history=history,
        session_manager=session_manager,
        inbound_queue=inbound_queue,
        inbound_loop=EventLoop(inbound_queue, inbound),
        outbound_loop=EventLoop(outbound_queue, outbound),
    )


def load_config_or_exit(path: Path) -> Config:
    if not path.exists():
        logger.error("Config file not found: %s", path)
        sys.exit(1)
    try:
        return load_config(path)
    except ConfigError as e:
        logger.error("Invalid config %s: %s", path, e)
        sys.exit(1)


async def main() -> None:
    """Run the bot until SIGINT or SIGTERM."""
    config = load_config_or_exit(Path(os.environ.get("NAYA_CONFIG", "config.yaml")))
    configure_logging(config.logging)

    app = create_slack_app(config.slack)
    messaging_service = SlackMessagingService(app.client)
    bot_user_id = await messaging_service.get_bot_user_id()

    relay = build_relay(config, messaging_service)
    register_handlers(
        app,
        relay.inbound_queue,
        SlackEventAdapter(SlackMediaDownloader(config.slack.bot_token)),
        bot_user_id,
    )

    runner = SlackAppRunner(app, config.slack.app_token)
    health_server = HealthServer(
        loops=[relay.inbound_loop, relay.outbound_loop],
        slack_runner=runner,
        session_manager=relay.session_manager,
        history=relay.history,
        port=config.server.port,
    )

    logger.info("Starting %s as %s", config.persona.name, bot_user_id)
    tasks = [
        asyncio.create_task(relay.inbound_loop.start()),
        asyncio.create_task(relay.outbound_loop.start()),
        asyncio.create_task(runner.start()),
    ]
    await health_server.start()

    stop_requested = asyncio.Event()
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig, stop_requested.set)

    await stop_requested.wait()
    logger.info("Shutting down")

    # Stop taking messages first, then flush replies that are already queued
    await runner.close()
    await relay.inbound_loop.stop()
    await relay.outbound_loop.stop(drain_timeout=REPLY_DRAIN_TIMEOUT)
    await health_server.stop()

    for task in tasks:
        task.cancel()
    await asyncio.gather(*tasks, return_exceptions=True)
    logger.info("Shutdown complete")


def run() -> None:
    """Console script entry point."""
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("Interrupted")


if __name__ == "__main__":
    run()
