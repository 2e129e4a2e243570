"""Intent entity."""

from enum import Enum


class Intent(Enum):
    """Communicative intent of a user utterance."""

    GREETING = "greeting"
    QUESTION = "question"
    REQUEST = "request"
    ANALYSIS = "analysis"
    OPINION = "opinion"
    CONVERSATION = "conversation"
