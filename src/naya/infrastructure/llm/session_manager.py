"""Lifecycle of backend conversation sessions."""

import asyncio
import inspect
import logging
from collections import OrderedDict
from collections.abc import Awaitable, Callable

from naya.config import LLMConfig, SessionScope
from naya.domain.entities import PromptPart
from naya.domain.exceptions import GenerationError
from naya.domain.services import ConversationSession
from naya.infrastructure.llm.client import LLMClient
from naya.infrastructure.llm.session import LiteLLMChatSession

logger = logging.getLogger(__name__)

SessionFactory = Callable[
    [LLMConfig], ConversationSession | Awaitable[ConversationSession]
]

_SHARED_KEY = "__shared__"


class ConversationSessionManager:
    """Owns the backend conversation session(s) and sends prompts to them.

    Sessions are created lazily on first use. Each scope key moves from
    uninitialized to active exactly once; creation is serialized through
    a single lock so concurrent first messages cannot create two sessions.

    With ``SessionScope.SHARED`` one session serves every sender, so the
    backend sees all senders' turns as a single conversation. With
    ``SessionScope.PER_SENDER`` each sender gets its own session. With
    ``max_sessions`` set, the least recently used session is dropped once
    the cap is exceeded, the same LRU rule the history store applies.
    """

    def __init__(
        self,
        config: LLMConfig,
        scope: SessionScope = SessionScope.SHARED,
        session_factory: SessionFactory | None = None,
        *,
        max_sessions: int | None = None,
        debug_llm_messages: bool = False,
    ) -> None:
        """Initialize the manager.

        Args:
            config: Model and generation parameters for new sessions.
            scope: Whether sessions are shared or kept per sender.
            session_factory: Creates a session from the config. May return
                the session or an awaitable of it. Defaults to a LiteLLM
                chat session.
            max_sessions: Upper bound on live sessions. None keeps every
                sender's session for the life of the process.
            debug_llm_messages: If True, sessions log LLM messages at INFO.
        """
        self._config = config
        self._scope = scope
        self._debug_llm_messages = debug_llm_messages
        self._session_factory = session_factory or self._create_litellm_session
        self._max_sessions = max_sessions
        self._sessions: OrderedDict[str, ConversationSession] = OrderedDict()
        self._init_lock = asyncio.Lock()

    @property
    def scope(self) -> SessionScope:
        """Session scope."""
        return self._scope

    @property
    def max_sessions(self) -> int | None:
        """Cap on live sessions, or None if unbounded."""
        return self._max_sessions

    @property
    def session_count(self) -> int:
        """Number of active sessions."""
        return len(self._sessions)

    def is_active(self, sender: str | None = None) -> bool:
        """Check if the session for a sender (or the shared one) exists."""
        return self._key(sender) in self._sessions

    async def ensure_session(self, sender: str | None = None) -> ConversationSession:
        """Return the session for a sender, creating it on first use.

        Args:
            sender: Sender ID. Required for per-sender scope, ignored for
                the shared scope.

        Returns:
            The active session.

        Raises:
            ValueError: Per-sender scope and no sender given.
        """
        key = self._key(sender)
        session = self._sessions.get(key)
        if session is not None:
            self._sessions.move_to_end(key)
            return session

        async with self._init_lock:
            session = self._sessions.get(key)
            if session is None:
                logger.info(
                    "Starting conversation session: model=%s, max_tokens=%d, "
                    "temperature=%s, scope=%s",
                    self._config.model,
                    self._config.max_tokens,
                    self._config.temperature,
                    self._scope.value,
                )
                created = self._session_factory(self._config)
                if inspect.isawaitable(created):
                    created = await created
                session = created
                self._sessions[key] = session
                self._evict_overflow()
        return session

    async def send(self, parts: list[PromptPart], sender: str | None = None) -> str:
        """Send prompt parts to the active session.

        Args:
            parts: Ordered prompt parts (text first, optional attachment).
            sender: Sender ID the prompt belongs to.

        Returns:
            Non-empty generated text.

        Raises:
            GenerationError: Session creation or the backend call failed,
                or the backend returned no text.
        """
        try:
            session = await self.ensure_session(sender)
            text = await session.send(parts)
        except GenerationError:
            raise
        except Exception as e:
            raise GenerationError(str(e)) from e

        if not text or not text.strip():
            raise GenerationError("Backend returned an empty response")
        return text

    def _evict_overflow(self) -> None:
        if self._max_sessions is None:
            return
        while len(self._sessions) > self._max_sessions:
            evicted, _ = self._sessions.popitem(last=False)
            logger.info("Dropped conversation session for %s", evicted)

    def _key(self, sender: str | None) -> str:
        if self._scope is SessionScope.SHARED:
            return _SHARED_KEY
        if sender is None:
            raise ValueError("sender is required for per-sender sessions")
        return sender

    def _create_litellm_session(self, config: LLMConfig) -> ConversationSession:
        return LiteLLMChatSession(
            LLMClient(config),
            debug_llm_messages=self._debug_llm_messages,
        )
