"""Fixed replies used when a turn cannot be processed normally."""

from intellinlp.domain.services.protocols import Chooser

FALLBACK_REPLIES: tuple[str, ...] = (
    "I apologize, but I encountered a technical issue while processing your "
    "message. Let me try a different approach to help you.",
    "It seems there was a hiccup in my processing. Could you please rephrase "
    "your request so I can assist you better?",
    "I'm experiencing some difficulty with that particular request. Let me know "
    "how else I can help you today.",
    "There was an unexpected issue, but I'm still here to help! Please try "
    "rephrasing your question or request.",
)


def fallback_reply(chooser: Chooser) -> str:
    """Pick one of the apologetic fallback replies."""
    return chooser(FALLBACK_REPLIES)
