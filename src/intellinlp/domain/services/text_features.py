"""Utterance-level text features shared by the classifier, tracker and composer."""

import re

from intellinlp.domain.entities import Tone

DEFAULT_TOPIC = "this topic"

STOP_WORDS: frozenset[str] = frozenset(
    {
        "the",
        "a",
        "an",
        "and",
        "or",
        "but",
        "in",
        "on",
        "at",
        "to",
        "for",
        "of",
        "with",
        "by",
        "can",
        "you",
        "please",
        "help",
        "me",
        # interrogatives and auxiliaries
        "what",
        "how",
        "why",
        "when",
        "where",
        "who",
        "which",
        "are",
        "does",
        "did",
        "could",
        "would",
        "will",
        "should",
        "about",
        "this",
        "that",
    }
)

QUESTION_WORDS: tuple[str, ...] = (
    "what",
    "how",
    "why",
    "when",
    "where",
    "who",
    "which",
    "can you",
    "could you",
    "will you",
    "would you",
    "are you",
    "do you",
)

# Openers that also make an utterance read as a question.
QUESTION_OPENERS: tuple[str, ...] = QUESTION_WORDS + (
    "did you",
    "have you",
    "is it",
    "does it",
)

ACTION_WORDS: tuple[str, ...] = (
    "analyze",
    "create",
    "make",
    "generate",
    "explain",
    "summarize",
    "help",
)
DEFAULT_ACTION = "help"

# Evaluated in order; the first family with a keyword present wins.
TONE_RULES: tuple[tuple[tuple[str, ...], Tone], ...] = (
    (("please", "thank you", "appreciate"), Tone.FORMAL),
    (("hey", "cool", "awesome"), Tone.CASUAL),
    (("algorithm", "function", "implementation"), Tone.TECHNICAL),
)

QUESTION_OPENER = re.compile(
    "^(" + "|".join(dict.fromkeys(o.split()[0] for o in QUESTION_OPENERS)) + ")",
    re.IGNORECASE,
)

_PUNCTUATION = re.compile(r"[^\w\s]")
_CAPITALIZED_WORD = re.compile(r"\b[A-Z][a-z]+")
_TOPIC_SUFFIXES = ("tion", "ment", "ness", "ing")


def extract_main_topic(utterance: str, max_words: int = 3) -> str:
    """Extract a short topic phrase from an utterance.

    Args:
        utterance: Raw user text.
        max_words: Maximum number of words in the phrase.

    Returns:
        Up to ``max_words`` meaningful words joined by spaces, or
        ``"this topic"`` when nothing meaningful remains.
    """
    cleaned = _PUNCTUATION.sub("", utterance.lower())
    words = [
        word for word in cleaned.split() if len(word) > 2 and word not in STOP_WORDS
    ]
    return " ".join(words[:max_words]) or DEFAULT_TOPIC


def extract_context_topics(utterance: str, limit: int = 5) -> list[str]:
    """Extract candidate conversation topics from an utterance.

    Capitalized words come first, followed by long words carrying a
    nominal or gerund suffix. Stop words are never topics.

    Args:
        utterance: Raw user text.
        limit: Maximum number of topics returned.

    Returns:
        Distinct topics in order of appearance.
    """
    candidates = [
        word
        for word in _CAPITALIZED_WORD.findall(utterance)
        if word.lower() not in STOP_WORDS
    ]
    for word in _PUNCTUATION.sub("", utterance.lower()).split():
        if len(word) > 6 and any(suffix in word for suffix in _TOPIC_SUFFIXES):
            candidates.append(word)
    return list(dict.fromkeys(candidates))[:limit]


def detect_tone(utterance: str) -> Tone:
    """Infer the tone of an utterance from keyword families.

    Args:
        utterance: Raw user text.

    Returns:
        The first matching tone, or ``Tone.FRIENDLY``.
    """
    lowered = utterance.lower()
    for keywords, tone in TONE_RULES:
        if any(keyword in lowered for keyword in keywords):
            return tone
    return Tone.FRIENDLY


def is_question(utterance: str) -> bool:
    """Check if an utterance reads as a question."""
    return "?" in utterance or bool(QUESTION_OPENER.match(utterance.strip()))


def extract_question_word(utterance: str) -> str:
    """Return the leading question word, defaulting to ``"what"``."""
    lowered = utterance.strip().lower()
    return next((word for word in QUESTION_WORDS if lowered.startswith(word)), "what")


def extract_action_word(utterance: str) -> str:
    """Return the first action word found in an utterance, defaulting to ``"help"``."""
    lowered = utterance.lower()
    return next((word for word in ACTION_WORDS if word in lowered), DEFAULT_ACTION)
