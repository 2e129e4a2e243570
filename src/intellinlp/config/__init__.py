"""Configuration management."""

from intellinlp.config.loader import (
    ConfigError,
    ConfigValidationError,
    EnvironmentVariableError,
    default_config,
    expand_env_vars,
    load_config,
)
from intellinlp.config.models import (
    Config,
    ContextConfig,
    LoggingConfig,
    PersonaConfig,
    ResponseConfig,
)

__all__ = [
    "Config",
    "ConfigError",
    "ConfigValidationError",
    "ContextConfig",
    "EnvironmentVariableError",
    "LoggingConfig",
    "PersonaConfig",
    "ResponseConfig",
    "default_config",
    "expand_env_vars",
    "load_config",
]
