"""Rule-based intent classifier."""

import logging
import re
from dataclasses import dataclass

from intellinlp.domain.entities import Intent
from intellinlp.domain.services.text_features import QUESTION_OPENERS

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IntentRule:
    """A single classification rule.

    Attributes:
        intent: Intent assigned when the rule matches.
        pattern: Pattern searched in the lowercased, stripped utterance.
            Leading-anchored rules carry a ``^`` in the pattern.
    """

    intent: Intent
    pattern: re.Pattern[str]

    def matches(self, text: str) -> bool:
        return self.pattern.search(text) is not None


def _starts_with(*openers: str) -> re.Pattern[str]:
    return re.compile(r"^(?:" + "|".join(re.escape(o) for o in openers) + ")")


def _contains(*fragments: str) -> re.Pattern[str]:
    return re.compile("|".join(re.escape(f) for f in fragments))


# Order is precedence: the first matching rule wins.
DEFAULT_RULES: tuple[IntentRule, ...] = (
    IntentRule(
        Intent.GREETING,
        _starts_with(
            "hi", "hello", "hey", "good morning", "good afternoon", "good evening"
        ),
    ),
    IntentRule(
        Intent.QUESTION,
        re.compile(r"\?|" + _starts_with(*QUESTION_OPENERS).pattern),
    ),
    IntentRule(
        Intent.REQUEST,
        _starts_with(
            "please",
            "can you",
            "could you",
            "would you",
            "help me",
            "i need",
            "i want",
            "create",
            "make",
            "generate",
            "write",
            "explain",
            "analyze",
            "summarize",
        ),
    ),
    IntentRule(Intent.ANALYSIS, _contains("analyze", "review", "examine", "evaluate")),
    IntentRule(
        Intent.OPINION,
        _starts_with(
            "i think",
            "i believe",
            "in my opinion",
            "it seems",
            "i feel",
            "i noticed",
            "i found",
        ),
    ),
)


class RuleBasedIntentClassifier:
    """IntentClassifier implementation driven by an ordered rule table."""

    def __init__(
        self,
        rules: tuple[IntentRule, ...] = DEFAULT_RULES,
        default: Intent = Intent.CONVERSATION,
    ) -> None:
        """Initialize the classifier.

        Args:
            rules: Rules in precedence order.
            default: Intent used when no rule matches.
        """
        self._rules = rules
        self._default = default

    def classify(self, utterance: str) -> Intent:
        """Classify an utterance.

        Args:
            utterance: Raw user text.

        Returns:
            Intent of the first matching rule, or the default intent.
        """
        text = utterance.strip().lower()
        for rule in self._rules:
            if rule.matches(text):
                logger.debug("Classified %r as %s", utterance, rule.intent.value)
                return rule.intent
        return self._default
