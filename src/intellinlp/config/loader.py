"""YAML config loading with environment variable expansion."""

import os
import re
from pathlib import Path
from typing import Any

import yaml

from intellinlp.config.models import (
    DEFAULT_LOG_FORMAT,
    DEFAULT_PERSONA_NAME,
    DEFAULT_SYSTEM_PROMPT,
    Config,
    ContextConfig,
    LoggingConfig,
    PersonaConfig,
    ResponseConfig,
)


class ConfigError(Exception):
    """Base exception for configuration problems."""


class ConfigValidationError(ConfigError):
    """A configuration value is missing or invalid."""


class EnvironmentVariableError(ConfigError):
    """A referenced environment variable is not set."""


# ${VAR_NAME}
ENV_VAR_PATTERN = re.compile(r"\$\{([^}]+)\}")


def expand_env_vars(value: str) -> str:
    """Replace ``${VAR_NAME}`` references with environment values.

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
    """Walk a parsed YAML structure and expand every string in it."""
    if isinstance(data, dict):
        return {key: _expand_recursive(value) for key, value in data.items()}
    elif isinstance(data, list):
        return [_expand_recursive(item) for item in data]
    elif isinstance(data, str):
        return expand_env_vars(data)
    else:
        return data


def _validate_required_field(data: dict[str, Any], field: str, parent: str = "") -> Any:
    """Return a required field, raising when it is absent.

    Args:
        data: Mapping to read from.
        field: Field name.
        parent: Parent path used in the error message.

    Returns:
        The field value.

    Raises:
        ConfigValidationError: The field is missing or null.
    """
    if field not in data or data[field] is None:
        full_path = f"{parent}.{field}" if parent else field
        raise ConfigValidationError(f"Required field '{full_path}' is missing")
    return data[field]


def _validate_positive_int(value: Any, path: str) -> int:
    if not isinstance(value, int) or isinstance(value, bool) or value < 1:
        raise ConfigValidationError(f"'{path}' must be a positive integer")
    return value


def default_config() -> Config:
    """Return the built-in configuration used when no file is given."""
    return Config(
        persona=PersonaConfig(
            name=DEFAULT_PERSONA_NAME,
            system_prompt=DEFAULT_SYSTEM_PROMPT,
        ),
    )


def load_config(path: str | Path) -> Config:
    """Load a configuration file.

    Args:
        path: Path to the YAML file.

    Returns:
        Config object.

    Raises:
        FileNotFoundError: The file does not exist.
        ConfigValidationError: A required field is missing or invalid.
        EnvironmentVariableError: A referenced variable is not set.
        yaml.YAMLError: The file is not valid YAML.
    """
    path = Path(path)

    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path, encoding="utf-8") as f:
        raw_data = yaml.safe_load(f) or {}

    data = _expand_recursive(raw_data)

    persona_data = _validate_required_field(data, "persona")
    persona = PersonaConfig(
        name=_validate_required_field(persona_data, "name", "persona"),
        system_prompt=_validate_required_field(
            persona_data, "system_prompt", "persona"
        ),
    )

    context_data = data.get("context") or {}
    context = ContextConfig(
        max_topics=_validate_positive_int(
            context_data.get("max_topics", 10), "context.max_topics"
        ),
        history_lookback=_validate_positive_int(
            context_data.get("history_lookback", 4), "context.history_lookback"
        ),
    )

    response_data = data.get("response") or {}
    delay = response_data.get("simulated_delay_seconds", 0.0)
    if not isinstance(delay, (int, float)) or delay < 0:
        raise ConfigValidationError(
            "'response.simulated_delay_seconds' must be a non-negative number"
        )
    response = ResponseConfig(simulated_delay_seconds=float(delay))

    # Optional
    logging_config: LoggingConfig | None = None
    logging_data = data.get("logging")
    if logging_data:
        logging_config = LoggingConfig(
            level=logging_data.get("level", "INFO"),
            format=logging_data.get("format", DEFAULT_LOG_FORMAT),
            loggers=logging_data.get("loggers"),
        )

    return Config(
        persona=persona,
        context=context,
        response=response,
        logging=logging_config,
    )
