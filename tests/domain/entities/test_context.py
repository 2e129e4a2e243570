"""Tests for the ConversationContext entity."""

from dataclasses import replace

from intellinlp.domain.entities import AttachmentCategory, ConversationContext, Tone


class TestConversationContext:
    """ConversationContext tests."""

    def test_defaults(self) -> None:
        context = ConversationContext()

        assert context.topics == ()
        assert context.tone == Tone.FRIENDLY
        assert context.previous_questions == ()
        assert context.attachment_categories_seen == frozenset()
        assert context.is_default()

    def test_is_default_false_after_change(self) -> None:
        context = replace(
            ConversationContext(),
            attachment_categories_seen=frozenset({AttachmentCategory.IMAGE}),
        )
        assert not context.is_default()

    def test_previous_topic(self) -> None:
        context = ConversationContext(topics=("Python", "recursion", "Lists"))
        assert context.previous_topic() == "recursion"

    def test_previous_topic_needs_two_topics(self) -> None:
        assert ConversationContext().previous_topic() is None
        assert ConversationContext(topics=("Python",)).previous_topic() is None
