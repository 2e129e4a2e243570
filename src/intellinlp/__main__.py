"""Interactive console host."""

import argparse
import asyncio
import logging
import mimetypes
import sys
from pathlib import Path

from intellinlp.application import ConversationEngine
from intellinlp.config import (
    Config,
    ConfigError,
    LoggingConfig,
    default_config,
    load_config,
)
from intellinlp.domain.entities import Attachment, AttachmentCategory
from intellinlp.domain.exceptions import AttachmentError
from intellinlp.domain.services.attachment_intake import (
    build_attachment,
    infer_category,
)

# Default logging for early startup
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

PROMPT = "> "


def configure_logging(config: LoggingConfig | None) -> None:
    """Configure logging based on config.

    Args:
        config: Logging configuration. If None, uses defaults.
    """
    if config is None:
        return

    root_logger = logging.getLogger()

    level = getattr(logging, config.level.upper(), logging.INFO)
    root_logger.setLevel(level)

    if root_logger.handlers:
        formatter = logging.Formatter(config.format)
        for handler in root_logger.handlers:
            handler.setFormatter(formatter)

    if config.loggers:
        for logger_name, logger_level in config.loggers.items():
            individual_logger = logging.getLogger(logger_name)
            individual_level = getattr(logging, logger_level.upper(), logging.INFO)
            individual_logger.setLevel(individual_level)
            logger.debug(
                "Set logger '%s' to level %s", logger_name, logger_level.upper()
            )


def read_attachment(path: Path) -> Attachment:
    """Resolve a local file into an attachment.

    Images and binary documents are referenced by URL; everything else is
    decoded as UTF-8 text.

    Args:
        path: File to attach.

    Returns:
        The attachment.

    Raises:
        OSError: The file cannot be read.
        AttachmentError: The attachment is invalid.
    """
    mime_type = mimetypes.guess_type(path.name)[0] or ""
    category = infer_category(path.name, mime_type)
    size = path.stat().st_size

    if category in (AttachmentCategory.TEXT, AttachmentCategory.CODE):
        content = path.read_text(encoding="utf-8", errors="replace")
        return build_attachment(path.name, size, content=content, mime_type=mime_type)
    return build_attachment(
        path.name, size, url=path.resolve().as_uri(), mime_type=mime_type
    )


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="intellinlp", description="Chat with the rule-based assistant."
    )
    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        default=None,
        help="Path to a YAML configuration file",
    )
    return parser.parse_args(argv)


def load(path: Path | None) -> Config:
    """Load configuration from a file, or fall back to the built-in defaults."""
    if path is None:
        return default_config()
    return load_config(path)


async def chat(engine: ConversationEngine) -> None:
    """Read utterances from stdin until EOF or ``/quit``."""
    pending: list[Attachment] = []

    while True:
        try:
            line = await asyncio.to_thread(input, PROMPT)
        except EOFError:
            break

        line = line.strip()
        if not line:
            continue

        if line == "/quit":
            break
        if line == "/clear":
            engine.clear_history()
            pending.clear()
            print("Conversation cleared.")
            continue
        if line == "/context":
            context = engine.get_context()
            print(f"Topics: {', '.join(context.topics) or '-'}")
            print(f"Tone: {context.tone.value}")
            print(f"Questions asked: {len(context.previous_questions)}")
            continue
        if line.startswith("/attach "):
            path = Path(line.removeprefix("/attach ").strip()).expanduser()
            try:
                attachment = read_attachment(path)
            except (OSError, AttachmentError) as e:
                logger.error("Could not attach %s: %s", path, e)
                continue
            pending.append(attachment)
            print(f"Attached {attachment.name} ({attachment.category.value}).")
            continue

        reply = await engine.process_message(line, pending)
        pending = []
        print(reply)
        print()


def run(argv: list[str] | None = None) -> None:
    """Run the console host."""
    args = parse_args(argv)

    try:
        config = load(args.config)
    except (ConfigError, FileNotFoundError) as e:
        logger.error("Failed to load config: %s", e)
        sys.exit(1)

    configure_logging(config.logging)

    engine = ConversationEngine.from_config(config)
    logger.info("Starting %s...", config.persona.name)

    try:
        asyncio.run(chat(engine))
    except KeyboardInterrupt:
        logger.info("Shutting down...")


if __name__ == "__main__":
    run()
