"""Domain services."""

from intellinlp.domain.services.context_tracker import ContextTracker
from intellinlp.domain.services.intent_classifier import RuleBasedIntentClassifier
from intellinlp.domain.services.protocols import (
    AttachmentAnalyzer,
    Chooser,
    IntentClassifier,
    ResponseComposer,
)

__all__ = [
    "AttachmentAnalyzer",
    "Chooser",
    "ContextTracker",
    "IntentClassifier",
    "ResponseComposer",
    "RuleBasedIntentClassifier",
]
