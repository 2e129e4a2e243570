"""Conversation context entity."""

from dataclasses import dataclass
from enum import Enum

from intellinlp.domain.entities.attachment import AttachmentCategory


class Tone(Enum):
    """Inferred tone of the latest user utterance."""

    FORMAL = "formal"
    CASUAL = "casual"
    TECHNICAL = "technical"
    FRIENDLY = "friendly"


@dataclass(frozen=True)
class ConversationContext:
    """Accumulated per-conversation state.

    A new value replaces the previous one after every user turn; the
    context tracker is the only producer of updated values.

    Attributes:
        topics: Distinct topics in insertion order, most recent last.
        tone: Tone of the latest utterance.
        previous_questions: Question-like utterances in the order received.
        attachment_categories_seen: Categories uploaded so far.
    """

    topics: tuple[str, ...] = ()
    tone: Tone = Tone.FRIENDLY
    previous_questions: tuple[str, ...] = ()
    attachment_categories_seen: frozenset[AttachmentCategory] = frozenset()

    def is_default(self) -> bool:
        """Check if every field still holds its initial value."""
        return self == ConversationContext()

    def previous_topic(self) -> str | None:
        """Return the second-most-recent topic, if two or more are tracked."""
        if len(self.topics) < 2:
            return None
        return self.topics[-2]
