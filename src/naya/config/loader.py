"""YAML config loading with environment variable expansion."""

import os
import re
from pathlib import Path
from typing import Any

import yaml

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


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigValidationError(ConfigError):
    """Invalid or missing configuration value."""


class EnvironmentVariableError(ConfigError):
    """Referenced environment variable is not set."""


# Environment variable pattern: ${VAR_NAME}
ENV_VAR_PATTERN = re.compile(r"\$\{([^}]+)\}")


def expand_env_vars(value: str) -> str:
    """Replace every ${VAR_NAME} in a string with the variable's value.

    Args:
        value: String to expand.

    Returns:
        The expanded string.

    Raises:
        EnvironmentVariableError: A referenced variable is not set.
    """
    if not value:
        return value

    def replace_var(match: re.Match[str]) -> str:
        var_name = match.group(1)
        env_value = os.environ.get(var_name)
        if env_value is None:
            raise EnvironmentVariableError(
                f"Environment variable '{var_name}' is not set"
            )
        return env_value

    return ENV_VAR_PATTERN.sub(replace_var, value)


def _expand_recursive(data: Any) -> Any:
    """Walk a parsed YAML structure and expand variables in every string."""
    if isinstance(data, dict):
        return {key: _expand_recursive(value) for key, value in data.items()}
    elif isinstance(data, list):
        return [_expand_recursive(item) for item in data]
    elif isinstance(data, str):
        return expand_env_vars(data)
    else:
        return data


def _validate_required_field(data: dict[str, Any], field: str, parent: str = "") -> Any:
    """Return a required field, raising if it is missing.

    Args:
        data: Mapping to look in.
        field: Field name.
        parent: Parent section name, for the error message.

    Returns:
        The field's value.

    Raises:
        ConfigValidationError: The field is missing or null.
    """
    if field not in data or data[field] is None:
        full_path = f"{parent}.{field}" if parent else field
        raise ConfigValidationError(f"Required field '{full_path}' is missing")
    return data[field]


def _validate_positive(value: Any, path: str) -> int:
    if not isinstance(value, int) or isinstance(value, bool) or value < 1:
        raise ConfigValidationError(f"'{path}' must be a positive integer")
    return value


def _validate_number(value: Any, path: str, minimum: float = 0.0) -> float:
    if (
        not isinstance(value, (int, float))
        or isinstance(value, bool)
        or value < minimum
    ):
        raise ConfigValidationError(f"'{path}' must be a number >= {minimum:g}")
    return value


def _load_llm(data: dict[str, Any]) -> LLMConfig:
    timeout = _validate_number(data.get("timeout", 30.0), "llm.timeout")
    if timeout == 0:
        raise ConfigValidationError("'llm.timeout' must be greater than 0")
    return LLMConfig(
        model=_validate_required_field(data, "model", "llm"),
        api_key=data.get("api_key"),
        temperature=_validate_number(
            data.get("temperature", 1.4), "llm.temperature"
        ),
        max_tokens=_validate_positive(data.get("max_tokens", 70), "llm.max_tokens"),
        timeout=timeout,
    )


def _load_history(data: dict[str, Any]) -> HistoryConfig:
    max_senders = data.get("max_senders")
    if max_senders is not None:
        max_senders = _validate_positive(max_senders, "history.max_senders")
    return HistoryConfig(
        user_capacity=_validate_positive(
            data.get("user_capacity", 3), "history.user_capacity"
        ),
        bot_capacity=_validate_positive(
            data.get("bot_capacity", 2), "history.bot_capacity"
        ),
        max_senders=max_senders,
    )


def _load_session(data: dict[str, Any]) -> SessionConfig:
    raw_scope = data.get("scope", SessionScope.SHARED.value)
    try:
        scope = SessionScope(raw_scope)
    except ValueError as e:
        choices = ", ".join(s.value for s in SessionScope)
        raise ConfigValidationError(
            f"'session.scope' must be one of: {choices} (got {raw_scope!r})"
        ) from e
    return SessionConfig(scope=scope)


def load_config(path: str | Path) -> Config:
    """Load the config file.

    Args:
        path: Path to config.yaml.

    Returns:
        Config object.

    Raises:
        FileNotFoundError: The file does not exist.
        ConfigValidationError: A required field is missing or invalid.
        EnvironmentVariableError: A referenced variable is not set.
        yaml.YAMLError: YAML syntax error.
    """
    path = Path(path)

    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path, encoding="utf-8") as f:
        raw_data = yaml.safe_load(f) or {}

    data = _expand_recursive(raw_data)

    slack_data = _validate_required_field(data, "slack")
    llm_data = _validate_required_field(data, "llm")

    slack = SlackConfig(
        bot_token=_validate_required_field(slack_data, "bot_token", "slack"),
        app_token=_validate_required_field(slack_data, "app_token", "slack"),
    )

    llm = _load_llm(llm_data)

    persona_data = data.get("persona") or {}
    persona = PersonaConfig(
        name=persona_data.get("name", "Naya"),
        system_prompt=persona_data.get("system_prompt"),
        max_words=_validate_positive(
            persona_data.get("max_words", 25), "persona.max_words"
        ),
        fallback_message=persona_data.get(
            "fallback_message", DEFAULT_FALLBACK_MESSAGE
        ),
    )

    history = _load_history(data.get("history") or {})
    session = _load_session(data.get("session") or {})

    server_data = data.get("server") or {}
    server = ServerConfig(port=server_data.get("port", 5000))

    # LoggingConfig (optional)
    logging_config: LoggingConfig | None = None
    logging_data = data.get("logging")
    if logging_data:
        logging_config = LoggingConfig(
            level=logging_data.get("level", "INFO"),
            format=logging_data.get(
                "format", "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
            ),
            loggers=logging_data.get("loggers"),
            debug_llm_messages=logging_data.get("debug_llm_messages", False),
        )

    return Config(
        slack=slack,
        llm=llm,
        persona=persona,
        history=history,
        session=session,
        server=server,
        logging=logging_config,
    )
