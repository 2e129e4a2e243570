"""Application layer."""

from intellinlp.application.conversation_engine import ConversationEngine
from intellinlp.application.conversation_manager import ConversationManager

__all__ = [
    "ConversationEngine",
    "ConversationManager",
]
