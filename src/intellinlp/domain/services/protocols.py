"""Domain service protocols."""

from collections.abc import Callable, Sequence
from typing import Protocol

from intellinlp.domain.entities import (
    Attachment,
    AttachmentReport,
    ConversationContext,
    Intent,
    Turn,
)

# Picks one entry from a non-empty sequence of candidate strings.
Chooser = Callable[[Sequence[str]], str]


class AttachmentAnalyzer(Protocol):
    """Per-attachment content analysis."""

    def analyze(self, attachment: Attachment) -> str:
        """Produce a textual report for one attachment.

        Implementations must not raise for empty or missing content.

        Args:
            attachment: Attachment to analyze.

        Returns:
            Report text.
        """
        ...


class IntentClassifier(Protocol):
    """Utterance intent classification."""

    def classify(self, utterance: str) -> Intent:
        """Classify an utterance.

        Args:
            utterance: Raw user text.

        Returns:
            The detected intent.
        """
        ...


class ResponseComposer(Protocol):
    """Reply composition from intent, reports and context."""

    def compose(
        self,
        utterance: str,
        intent: Intent,
        reports: Sequence[AttachmentReport],
        context: ConversationContext,
        history: Sequence[Turn],
    ) -> str:
        """Compose a reply.

        Args:
            utterance: Raw user text.
            intent: Classified intent of the utterance.
            reports: Analysis reports for the turn's attachments.
            context: Context already updated with the current turn.
            history: Turns recorded before the current utterance.

        Returns:
            Reply text.
        """
        ...
