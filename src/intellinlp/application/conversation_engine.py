"""Conversation engine."""

import asyncio
import logging
import random
from collections.abc import Sequence

from intellinlp.config import Config, PersonaConfig
from intellinlp.domain.entities import (
    Attachment,
    AttachmentReport,
    ConversationContext,
    Role,
    Turn,
)
from intellinlp.domain.services import (
    AttachmentAnalyzer,
    Chooser,
    ContextTracker,
    IntentClassifier,
    ResponseComposer,
    RuleBasedIntentClassifier,
)
from intellinlp.domain.services.replies import fallback_reply
from intellinlp.infrastructure.rendering import (
    TemplateAttachmentAnalyzer,
    TemplateResponseComposer,
)

logger = logging.getLogger(__name__)


class ConversationEngine:
    """Entry point for one conversation.

    Owns the conversation history and context. Each call to
    ``process_message`` handles one full turn before returning:

    1. Record the user turn
    2. Update the context
    3. Analyze attachments
    4. Classify the utterance
    5. Compose the reply
    6. Record the assistant turn

    A single engine must not be driven by concurrent calls.
    """

    def __init__(
        self,
        classifier: IntentClassifier,
        analyzer: AttachmentAnalyzer,
        composer: ResponseComposer,
        tracker: ContextTracker,
        persona: PersonaConfig,
        *,
        chooser: Chooser = random.choice,
        simulated_delay_seconds: float = 0.0,
    ) -> None:
        """Initialize the engine.

        Args:
            classifier: Intent classifier.
            analyzer: Attachment analyzer.
            composer: Response composer.
            tracker: Context tracker.
            persona: Persona whose system prompt opens the history.
            chooser: Picks fallback replies.
            simulated_delay_seconds: Cosmetic delay before composing.
        """
        self._classifier = classifier
        self._analyzer = analyzer
        self._composer = composer
        self._tracker = tracker
        self._persona = persona
        self._chooser = chooser
        self._simulated_delay_seconds = simulated_delay_seconds
        self._history: list[Turn] = []
        self._context = ConversationContext()
        self._start()

    @classmethod
    def from_config(
        cls, config: Config, chooser: Chooser = random.choice
    ) -> "ConversationEngine":
        """Build an engine with the default rule-based components.

        Args:
            config: Application configuration.
            chooser: Random selection used by the composer and fallbacks.

        Returns:
            A new engine.
        """
        return cls(
            classifier=RuleBasedIntentClassifier(),
            analyzer=TemplateAttachmentAnalyzer(),
            composer=TemplateResponseComposer(
                chooser,
                persona_name=config.persona.name,
                history_lookback=config.context.history_lookback,
            ),
            tracker=ContextTracker(max_topics=config.context.max_topics),
            persona=config.persona,
            chooser=chooser,
            simulated_delay_seconds=config.response.simulated_delay_seconds,
        )

    def _start(self) -> None:
        self._history = [Turn(role=Role.SYSTEM, content=self._persona.system_prompt)]
        self._context = ConversationContext()

    async def process_message(
        self,
        utterance: str,
        attachments: Sequence[Attachment] = (),
    ) -> str:
        """Process one user turn and return the reply.

        Never raises: any failure while handling the turn is logged and
        answered with an apologetic fallback. Both turns are recorded
        either way.

        Args:
            utterance: Raw user text.
            attachments: Attachments uploaded with the utterance.

        Returns:
            Reply text.
        """
        attachments = tuple(attachments)
        self._history.append(
            Turn(role=Role.USER, content=utterance, attachments=attachments)
        )

        try:
            reply = await self._respond(utterance, attachments)
        except Exception:
            logger.exception("Error processing message")
            reply = fallback_reply(self._chooser)

        self._history.append(Turn(role=Role.ASSISTANT, content=reply))
        return reply

    def process_message_sync(
        self,
        utterance: str,
        attachments: Sequence[Attachment] = (),
    ) -> str:
        """Blocking variant of ``process_message`` for non-async callers."""
        return asyncio.run(self.process_message(utterance, attachments))

    async def _respond(
        self, utterance: str, attachments: tuple[Attachment, ...]
    ) -> str:
        # Composition must see the context including this turn.
        self._context = self._tracker.update(self._context, utterance, attachments)

        reports = [
            AttachmentReport(
                attachment=attachment, text=self._analyzer.analyze(attachment)
            )
            for attachment in attachments
        ]
        intent = self._classifier.classify(utterance)
        logger.info(
            "Processing %s turn with %d attachment(s)", intent.value, len(reports)
        )

        if self._simulated_delay_seconds > 0:
            await asyncio.sleep(self._simulated_delay_seconds)

        return self._composer.compose(
            utterance, intent, reports, self._context, self._history[:-1]
        )

    def clear_history(self) -> None:
        """Reset history to the initial system turn and context to defaults."""
        logger.debug("Clearing conversation history")
        self._start()

    def get_history(self) -> list[Turn]:
        """Return a snapshot of the conversation history."""
        return list(self._history)

    def get_context(self) -> ConversationContext:
        """Return the current (immutable) context."""
        return self._context
