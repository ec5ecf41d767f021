"""Liveness and readiness endpoints for the relay process."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any

from aiohttp import web

if TYPE_CHECKING:
    from naya.infrastructure.events.loop import EventLoop
    from naya.infrastructure.llm.session_manager import ConversationSessionManager
    from naya.infrastructure.persistence.history_store import InMemoryHistoryStore
    from naya.infrastructure.slack.client import SlackAppRunner

logger = logging.getLogger(__name__)


class HealthServer:
    """Serves ``GET /live`` and ``GET /ready``.

    The process is alive while every relay loop is consuming events. It
    is ready when it is alive and the Slack connection is up; the body of
    ``/ready`` also reports per-loop counters and how many senders and
    backend sessions are being tracked.
    """

    def __init__(
        self,
        loops: Sequence[EventLoop],
        slack_runner: SlackAppRunner,
        session_manager: ConversationSessionManager | None = None,
        history: InMemoryHistoryStore | None = None,
        host: str = "0.0.0.0",
        port: int = 5000,
    ) -> None:
        """Initialize the server.

        Args:
            loops: Inbound and outbound relay loops.
            slack_runner: Slack Socket Mode runner.
            session_manager: Reported in /ready when given.
            history: Reported in /ready when given.
            host: Interface to bind.
            port: Port to listen on. 0 picks a free port.
        """
        self._loops = list(loops)
        self._slack_runner = slack_runner
        self._session_manager = session_manager
        self._history = history
        self._host = host
        self._port = port
        self._runner: web.AppRunner | None = None

    @property
    def is_running(self) -> bool:
        """Check if the server is accepting requests."""
        return self._runner is not None

    @property
    def port(self) -> int:
        """Port actually bound (the configured one until started)."""
        if self._runner is not None and self._runner.addresses:
            return self._runner.addresses[0][1]
        return self._port

    def is_alive(self) -> bool:
        """Check if every relay loop is running."""
        return bool(self._loops) and all(loop.is_running for loop in self._loops)

    def liveness(self) -> dict[str, Any]:
        return {
            "status": "alive" if self.is_alive() else "dead",
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

    def readiness(self) -> dict[str, Any]:
        alive = self.is_alive()
        slack_ok = self._slack_runner.is_connected
        report: dict[str, Any] = {
            "ready": alive and slack_ok,
            "slack": slack_ok,
            "loops": {
                loop.name: {
                    "running": loop.is_running,
                    "processed": loop.processed_count,
                    "failed": loop.failed_count,
                }
                for loop in self._loops
            },
        }
        if self._session_manager is not None:
            report["sessions"] = self._session_manager.session_count
        if self._history is not None:
            report["senders"] = len(self._history)
        return report

    def create_app(self) -> web.Application:
        """Build the aiohttp application with both routes."""
        app = web.Application()
        app.add_routes(
            [
                web.get("/live", self._handle_live),
                web.get("/ready", self._handle_ready),
            ]
        )
        return app

    async def _handle_live(self, request: web.Request) -> web.Response:
        return web.json_response(self.liveness())

    async def _handle_ready(self, request: web.Request) -> web.Response:
        report = self.readiness()
        return web.json_response(report, status=200 if report["ready"] else 503)

    async def start(self) -> None:
        """Bind and start serving."""
        runner = web.AppRunner(self.create_app(), access_log=None)
        await runner.setup()
        await web.TCPSite(runner, self._host, self._port).start()
        self._runner = runner
        logger.info("Health server listening on %s:%d", self._host, self.port)

    async def stop(self) -> None:
        """Stop serving. Safe to call when not started."""
        if self._runner is None:
            return
        await self._runner.cleanup()
        self._runner = None
        logger.info("Health server stopped")
