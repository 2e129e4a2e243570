"""Configuration dataclasses."""

from dataclasses import dataclass, field

DEFAULT_PERSONA_NAME = "IntelliNLP"
DEFAULT_SYSTEM_PROMPT = (
    "You are IntelliNLP, an advanced AI assistant capable of intelligent "
    "text processing, analysis, and natural conversation."
)
DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


@dataclass
class PersonaConfig:
    """Assistant persona.

    The system prompt becomes the first turn of every conversation.
    """

    name: str
    system_prompt: str


@dataclass
class ContextConfig:
    """Conversation context limits."""

    max_topics: int = 10
    history_lookback: int = 4


@dataclass
class ResponseConfig:
    """Response generation settings."""

    # Cosmetic latency applied before composing a reply.
    simulated_delay_seconds: float = 0.0


@dataclass
class LoggingConfig:
    """Logging settings."""

    level: str = "INFO"
    format: str = DEFAULT_LOG_FORMAT
    loggers: dict[str, str] | None = None


@dataclass
class Config:
    """Application configuration."""

    persona: PersonaConfig
    context: ContextConfig = field(default_factory=ContextConfig)
    response: ResponseConfig = field(default_factory=ResponseConfig)
    logging: LoggingConfig | None = None
