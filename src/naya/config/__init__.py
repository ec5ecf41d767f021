"""Configuration."""

from naya.config.loader import (
    ConfigError,
    ConfigValidationError,
    EnvironmentVariableError,
    expand_env_vars,
    load_config,
)
from naya.config.models import (
    DEFAULT_FALLBACK_MESSAGE,
    Config,
    HistoryConfig,
    LLMConfig,
    LoggingConfig,
    PersonaConfig,
    ServerConfig,
    SessionConfig,
    SessionScope,
    SlackConfig,
)

__all__ = [
    "Config",
    "ConfigError",
    "ConfigValidationError",
    "DEFAULT_FALLBACK_MESSAGE",
    "EnvironmentVariableError",
    "HistoryConfig",
    "LLMConfig",
    "LoggingConfig",
    "PersonaConfig",
    "ServerConfig",
    "SessionConfig",
    "SessionScope",
    "SlackConfig",
    "expand_env_vars",
    "load_config",
]
