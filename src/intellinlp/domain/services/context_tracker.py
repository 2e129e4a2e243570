"""Conversation context tracking."""

import logging
from collections.abc import Sequence
from dataclasses import replace

from intellinlp.domain.entities import Attachment, ConversationContext
from intellinlp.domain.services.text_features import (
    detect_tone,
    extract_context_topics,
    is_question,
)

logger = logging.getLogger(__name__)


class ContextTracker:
    """Derives the next context value from the current one and a user turn."""

    def __init__(self, max_topics: int = 10) -> None:
        """Initialize the tracker.

        Args:
            max_topics: Maximum number of topics retained.
        """
        if max_topics < 1:
            raise ValueError("max_topics must be positive")
        self._max_topics = max_topics

    def update(
        self,
        context: ConversationContext,
        utterance: str,
        attachments: Sequence[Attachment] = (),
    ) -> ConversationContext:
        """Fold one user turn into the context.

        - New topics are appended unless already tracked; a repeated topic
          keeps its original position. Only the most recent
          ``max_topics`` are kept.
        - Tone is recomputed from the utterance.
        - Question-like utterances are appended to previous questions.
        - Attachment categories are added to the seen set.

        Args:
            context: Current context.
            utterance: Raw user text.
            attachments: Attachments of the turn.

        Returns:
            The updated context.
        """
        topics = list(context.topics)
        for topic in extract_context_topics(utterance):
            if topic not in topics:
                topics.append(topic)
        topics = topics[-self._max_topics :]

        previous_questions = context.previous_questions
        if is_question(utterance):
            previous_questions = (*previous_questions, utterance)

        updated = replace(
            context,
            topics=tuple(topics),
            tone=detect_tone(utterance),
            previous_questions=previous_questions,
            attachment_categories_seen=context.attachment_categories_seen
            | {attachment.category for attachment in attachments},
        )
        logger.debug(
            "Context updated: topics=%s tone=%s questions=%d categories=%s",
            updated.topics,
            updated.tone.value,
            len(updated.previous_questions),
            sorted(c.value for c in updated.attachment_categories_seen),
        )
        return updated
