"""Configuration dataclasses."""

from dataclasses import dataclass, field
from enum import Enum

DEFAULT_FALLBACK_MESSAGE = "Oops, an error occurred. Please try again later."


class SessionScope(Enum):
    """How backend conversation sessions are shared between senders."""

    SHARED = "shared"
    PER_SENDER = "per_sender"


@dataclass
class SlackConfig:
    """Slack connection settings."""

    bot_token: str
    app_token: str


@dataclass
class LLMConfig:
    """LLM settings (passed to LiteLLM completion)."""

    model: str
    api_key: str | None = None
    temperature: float = 1.4
    max_tokens: int = 70
    timeout: float = 30.0


@dataclass
class PersonaConfig:
    """Persona settings.

    Attributes:
        name: Name the bot answers as.
        system_prompt: Optional Jinja2 template that replaces the built-in
            preamble. ``name`` and ``max_words`` are available to it.
        max_words: Hard upper bound on reply length, in words.
        fallback_message: Text sent when a reply cannot be generated.
    """

    name: str = "Naya"
    system_prompt: str | None = None
    max_words: int = 25
    fallback_message: str = DEFAULT_FALLBACK_MESSAGE


@dataclass
class HistoryConfig:
    """Per-sender history window settings."""

    user_capacity: int = 3
    bot_capacity: int = 2
    max_senders: int | None = None


@dataclass
class SessionConfig:
    """Backend session settings."""

    scope: SessionScope = SessionScope.SHARED


@dataclass
class ServerConfig:
    """Auxiliary HTTP server settings."""

    port: int = 5000


@dataclass
class LoggingConfig:
    """Logging settings."""

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    loggers: dict[str, str] | None = None
    debug_llm_messages: bool = False


@dataclass
class Config:
    """Application settings."""

    slack: SlackConfig
    llm: LLMConfig
    persona: PersonaConfig = field(default_factory=PersonaConfig)
    history: HistoryConfig = field(default_factory=HistoryConfig)
    session: SessionConfig = field(default_factory=SessionConfig)
    server: ServerConfig = field(default_factory=ServerConfig)
    logging: LoggingConfig | None = None
