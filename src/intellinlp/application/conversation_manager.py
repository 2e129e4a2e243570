"""Per-conversation engine registry."""

import logging
from collections.abc import Callable, Sequence

from intellinlp.application.conversation_engine import ConversationEngine
from intellinlp.domain.entities import Attachment

logger = logging.getLogger(__name__)


class ConversationManager:
    """Keeps one isolated engine per conversation identifier.

    No history or context is shared between conversations. Each
    conversation must still be driven serially.
    """

    def __init__(self, engine_factory: Callable[[], ConversationEngine]) -> None:
        """Initialize the manager.

        Args:
            engine_factory: Creates a fresh engine for a new conversation.
        """
        self._engine_factory = engine_factory
        self._engines: dict[str, ConversationEngine] = {}

    def get(self, conversation_id: str) -> ConversationEngine:
        """Return the engine for a conversation, creating it on first use."""
        engine = self._engines.get(conversation_id)
        if engine is None:
            logger.debug("Starting conversation %s", conversation_id)
            engine = self._engine_factory()
            self._engines[conversation_id] = engine
        return engine

    async def process_message(
        self,
        conversation_id: str,
        utterance: str,
        attachments: Sequence[Attachment] = (),
    ) -> str:
        """Process one turn in the given conversation.

        Args:
            conversation_id: Conversation identifier.
            utterance: Raw user text.
            attachments: Attachments uploaded with the utterance.

        Returns:
            Reply text.
        """
        return await self.get(conversation_id).process_message(utterance, attachments)

    def clear(self, conversation_id: str) -> None:
        """Reset a conversation if it exists."""
        engine = self._engines.get(conversation_id)
        if engine is not None:
            engine.clear_history()

    def remove(self, conversation_id: str) -> bool:
        """Forget a conversation.

        Returns:
            True if the conversation existed.
        """
        return self._engines.pop(conversation_id, None) is not None

    def conversation_ids(self) -> list[str]:
        """Return identifiers of the active conversations."""
        return list(self._engines)
