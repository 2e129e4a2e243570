"""Template-based response composer."""

import logging
import random
from collections.abc import Sequence
from dataclasses import dataclass

from intellinlp.config.models import DEFAULT_PERSONA_NAME
from intellinlp.domain.entities import (
    AttachmentCategory,
    AttachmentReport,
    ConversationContext,
    Intent,
    Turn,
)
from intellinlp.domain.services.protocols import Chooser
from intellinlp.domain.services.replies import fallback_reply
from intellinlp.domain.services.text_features import (
    extract_action_word,
    extract_main_topic,
    extract_question_word,
    is_question,
)
from intellinlp.infrastructure.rendering.templates import create_jinja_env

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Plan:
    """Action-specific plan shown in request replies."""

    heading: str
    steps: tuple[str, ...]
    closing: str


GREETINGS: tuple[str, ...] = (
    "Hello! I'm {name}, your intelligent text processing assistant.",
    "Hi there! Great to meet you. I'm here to help with all your text analysis "
    "and processing needs.",
    "Good to see you! I'm {name}, ready to assist with intelligent text "
    "processing and analysis.",
    "Hello! I'm excited to help you with text analysis, summarization, and "
    "intelligent processing.",
)

CONVERSATION_OPENERS: tuple[str, ...] = (
    "That's really interesting about {topic}!",
    "I find {topic} fascinating.",
    "You've brought up a great point about {topic}.",
    "{Topic} is definitely worth discussing.",
)

_CAN_YOU = (
    "Absolutely! I'd be delighted to help you with {topic}. Here's what I can do:"
)
_ABOUT_ME = (
    "That's a thoughtful question about my capabilities regarding {topic}. "
    "Let me clarify:"
)
QUESTION_OPENINGS: dict[str, str] = {
    "what": "Great question about {topic}! Let me explain this clearly for you.",
    "how": "I'd be happy to walk you through {topic}. Here's a comprehensive "
    "approach:",
    "why": "That's an insightful question about {topic}. The reasoning involves "
    "several key factors:",
    "when": "Regarding the timing of {topic}, here's what you need to know:",
    "where": "For the location or context of {topic}, let me provide you with "
    "detailed information:",
    "can you": _CAN_YOU,
    "could you": _CAN_YOU,
    "will you": _CAN_YOU,
    "would you": _CAN_YOU,
    "are you": _ABOUT_ME,
    "do you": _ABOUT_ME,
}
DEFAULT_QUESTION_OPENING = (
    "Excellent question about {topic}! Here's a detailed response:"
)

_CREATION_PLAN = Plan(
    heading="🛠️ Creation Process",
    steps=(
        "Requirements analysis",
        "Design and structure planning",
        "Implementation with best practices",
        "Quality review and refinement",
    ),
    closing="I'll create exactly what you need with attention to detail.",
)
REQUEST_PLANS: dict[str, Plan] = {
    "analyze": Plan(
        heading="📋 Analysis Plan",
        steps=(
            "Comprehensive data examination",
            "Pattern identification and insights",
            "Detailed findings report",
            "Actionable recommendations",
        ),
        closing="I'll provide a thorough analysis that covers all important aspects.",
    ),
    "create": _CREATION_PLAN,
    "make": _CREATION_PLAN,
    "generate": _CREATION_PLAN,
    "explain": Plan(
        heading="📚 Explanation Strategy",
        steps=(
            "Clear, step-by-step breakdown",
            "Real-world examples and context",
            "Visual aids where helpful",
            "Q&A to ensure understanding",
        ),
        closing="I'll make sure everything is crystal clear.",
    ),
    "summarize": Plan(
        heading="📝 Summarization Approach",
        steps=(
            "Key points extraction",
            "Logical structure organization",
            "Essential insights highlighting",
            "Concise yet comprehensive overview",
        ),
        closing="You'll get all the important information in a digestible format.",
    ),
    "help": Plan(
        heading="🤝 Assistance Plan",
        steps=(
            "Understanding your specific needs",
            "Tailored solution development",
            "Step-by-step guidance",
            "Ongoing support and clarification",
        ),
        closing="I'm here to help you succeed with this.",
    ),
}

# (fragments that must all occur, family), checked in order; anything else
# gets "other".
FILE_ANSWER_FAMILIES: tuple[tuple[tuple[str, ...], str], ...] = (
    (("what", "about"), "what"),
    (("how",), "how"),
    (("why",), "why"),
)
FILE_ANSWERS: dict[str, str] = {
    "what": "This {category} file contains detailed information that directly "
    "addresses your question. The content provides comprehensive insights into "
    "the topics you're asking about, with specific details and context that can "
    "help answer your inquiry thoroughly.",
    "how": "The file explains the processes and methodologies related to your "
    'question. It contains step-by-step information and detailed explanations '
    'that can guide you through the "how" aspects of your inquiry.',
    "why": "The document provides reasoning and explanations that address the "
    '"why" behind your question. It includes background information, rationale, '
    "and context that helps explain the underlying principles.",
    "other": "Based on the file content, I can provide detailed answers to your "
    "specific question. The document contains relevant information that directly "
    "relates to what you're asking about.",
}

CATEGORY_INSIGHTS: dict[AttachmentCategory, str] = {
    AttachmentCategory.IMAGE: "The image provides rich visual information that I "
    "can analyze and discuss. Whether it's charts, diagrams, screenshots, or other "
    "visual content, I can help you understand and extract insights from what's "
    "shown.",
    AttachmentCategory.TEXT: "This text document contains valuable written content "
    "that I can summarize, analyze for key themes, answer questions about, or help "
    "you process in various ways based on your needs.",
    AttachmentCategory.PDF: "The PDF document contains structured information that "
    "I can help you navigate, summarize, and analyze. Whether you need specific "
    "information extracted or a comprehensive overview, I'm ready to assist.",
    AttachmentCategory.CODE: "This code file contains programming logic that I can "
    "review, explain, debug, or help optimize. I can analyze the functionality, "
    "suggest improvements, or help you understand how it works.",
}
DEFAULT_CATEGORY_INSIGHT = (
    "This file contains structured information that I can help you analyze and "
    "understand based on your specific needs and questions."
)

# (categories that trigger the steps, steps)
NEXT_STEP_RULES: tuple[tuple[frozenset[AttachmentCategory], tuple[str, ...]], ...] = (
    (
        frozenset({AttachmentCategory.TEXT, AttachmentCategory.PDF}),
        (
            "**Summarize** the key points and main themes",
            "**Ask specific questions** about the content",
            "**Extract information** on particular topics",
        ),
    ),
    (
        frozenset({AttachmentCategory.CODE}),
        (
            "**Code review** and optimization suggestions",
            "**Explain functionality** and how it works",
            "**Debug issues** or improve performance",
        ),
    ),
    (
        frozenset({AttachmentCategory.IMAGE}),
        (
            "**Describe visual elements** and content",
            "**Analyze charts or diagrams** for insights",
            "**Extract text** or data from images",
        ),
    ),
)
COMMON_NEXT_STEPS: tuple[str, ...] = (
    "**Compare and contrast** information across files",
    "**Generate reports** or comprehensive analysis",
)


def next_steps(categories: set[AttachmentCategory]) -> list[str]:
    """Select follow-up suggestions for the categories present in a turn."""
    steps: list[str] = []
    for triggers, rule_steps in NEXT_STEP_RULES:
        if triggers & categories:
            steps.extend(rule_steps)
    steps.extend(COMMON_NEXT_STEPS)
    return steps


def file_answer_family(utterance: str) -> str:
    lowered = utterance.lower()
    for fragments, family in FILE_ANSWER_FAMILIES:
        if all(fragment in lowered for fragment in fragments):
            return family
    return "other"


class TemplateResponseComposer:
    """ResponseComposer implementation backed by Jinja2 templates.

    Attachment-focused replies take precedence over intent-based ones.
    Random selections go through the injected chooser so tests can make
    them deterministic.
    """

    def __init__(
        self,
        chooser: Chooser = random.choice,
        *,
        persona_name: str = DEFAULT_PERSONA_NAME,
        history_lookback: int = 4,
    ) -> None:
        """Initialize the composer.

        Args:
            chooser: Picks one entry from a sequence of candidates.
            persona_name: Name the assistant introduces itself with.
            history_lookback: Number of earlier non-system turns considered
                for conversational callbacks.
        """
        self._chooser = chooser
        self._persona_name = persona_name
        self._history_lookback = history_lookback
        self._jinja_env = create_jinja_env()
        self._builders = {
            Intent.GREETING: self._compose_greeting,
            Intent.QUESTION: self._compose_question,
            Intent.REQUEST: self._compose_request,
            Intent.ANALYSIS: self._compose_analysis,
            Intent.OPINION: self._compose_opinion,
            Intent.CONVERSATION: self._compose_conversation,
        }

    def compose(
        self,
        utterance: str,
        intent: Intent,
        reports: Sequence[AttachmentReport],
        context: ConversationContext,
        history: Sequence[Turn],
    ) -> str:
        """Compose a reply.

        Failures never propagate; an apologetic fallback reply is
        returned instead.

        Args:
            utterance: Raw user text.
            intent: Classified intent of the utterance.
            reports: Analysis reports for the turn's attachments.
            context: Context already updated with the current turn.
            history: Turns recorded before the current utterance.

        Returns:
            Reply text.
        """
        try:
            if reports:
                return self._compose_attachments(utterance, intent, reports)
            builder = self._builders[intent]
            logger.debug("Composing %s reply", intent.value)
            return builder(utterance, context, history)
        except Exception:
            logger.exception("Failed to compose reply")
            return fallback_reply(self._chooser)

    def _render(self, template_name: str, **variables: object) -> str:
        return self._jinja_env.get_template(template_name).render(**variables)

    def _recent_turns(self, history: Sequence[Turn]) -> list[Turn]:
        if self._history_lookback <= 0:
            return []
        turns = [turn for turn in history if not turn.is_system()]
        return turns[-self._history_lookback :]

    def _compose_attachments(
        self,
        utterance: str,
        intent: Intent,
        reports: Sequence[AttachmentReport],
    ) -> str:
        categories = list(dict.fromkeys(r.attachment.category for r in reports))
        answers_question = len(reports) == 1 and intent == Intent.QUESTION
        body = ""
        if len(reports) == 1:
            category = reports[0].attachment.category
            if answers_question:
                body = FILE_ANSWERS[file_answer_family(utterance)].format(
                    category=category.value
                )
            else:
                body = CATEGORY_INSIGHTS.get(category, DEFAULT_CATEGORY_INSIGHT)
        logger.debug("Composing attachment reply for %d attachment(s)", len(reports))
        return self._render(
            "reply_attachments.j2",
            reports=reports,
            categories=[c.value for c in categories],
            answers_question=answers_question,
            body=body,
            next_steps=next_steps(set(categories)),
        )

    def _compose_greeting(
        self, utterance: str, context: ConversationContext, history: Sequence[Turn]
    ) -> str:
        greeting = self._chooser(GREETINGS).format(name=self._persona_name)
        return self._render(
            "reply_greeting.j2",
            greeting=greeting,
            callback=bool(self._recent_turns(history)),
        )

    def _compose_question(
        self, utterance: str, context: ConversationContext, history: Sequence[Turn]
    ) -> str:
        topic = extract_main_topic(utterance)
        question_word = extract_question_word(utterance)
        opening = QUESTION_OPENINGS.get(question_word, DEFAULT_QUESTION_OPENING)
        return self._render(
            "reply_question.j2",
            opening=opening.format(topic=topic),
            topic=topic,
            previous_topic=context.previous_topic(),
        )

    def _compose_request(
        self, utterance: str, context: ConversationContext, history: Sequence[Turn]
    ) -> str:
        topic = extract_main_topic(utterance)
        action = extract_action_word(utterance)
        earlier_questions = context.previous_questions
        if is_question(utterance):
            # The tracker has already recorded the current utterance.
            earlier_questions = earlier_questions[:-1]
        return self._render(
            "reply_request.j2",
            action=action,
            topic=topic,
            plan=REQUEST_PLANS[action],
            building_on=bool(earlier_questions),
        )

    def _compose_analysis(
        self, utterance: str, context: ConversationContext, history: Sequence[Turn]
    ) -> str:
        return self._render(
            "reply_analysis.j2",
            topic=extract_main_topic(utterance),
            has_files=bool(context.attachment_categories_seen),
        )

    def _compose_opinion(
        self, utterance: str, context: ConversationContext, history: Sequence[Turn]
    ) -> str:
        lowered = utterance.lower()
        return self._render(
            "reply_opinion.j2",
            topic=extract_main_topic(utterance),
            acknowledges="i think" in lowered or "i believe" in lowered,
        )

    def _compose_conversation(
        self, utterance: str, context: ConversationContext, history: Sequence[Turn]
    ) -> str:
        topic = extract_main_topic(utterance)
        opener = self._chooser(CONVERSATION_OPENERS).format(
            topic=topic, Topic=topic[:1].upper() + topic[1:]
        )
        return self._render(
            "reply_conversation.j2",
            opener=opener,
            topic=topic,
            previous_topic=context.previous_topic(),
        )
