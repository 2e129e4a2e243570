"""Tests for ConversationManager."""

from collections.abc import Sequence

import pytest

from intellinlp.application import ConversationEngine, ConversationManager
from intellinlp.config import default_config


def first(candidates: Sequence[str]) -> str:
    return candidates[0]


@pytest.fixture
def manager() -> ConversationManager:
    return ConversationManager(
        lambda: ConversationEngine.from_config(default_config(), chooser=first)
    )


class TestConversationManager:
    """ConversationManager tests."""

    def test_get_creates_engine_once(self, manager: ConversationManager) -> None:
        engine = manager.get("a")

        assert manager.get("a") is engine
        assert manager.conversation_ids() == ["a"]

    @pytest.mark.asyncio
    async def test_conversations_are_isolated(
        self, manager: ConversationManager
    ) -> None:
        await manager.process_message("a", "about Python?")
        await manager.process_message("b", "hello")

        assert len(manager.get("a").get_history()) == 3
        assert len(manager.get("b").get_history()) == 3
        assert manager.get("a").get_context().topics == ("Python",)
        assert manager.get("b").get_context().topics == ()

    @pytest.mark.asyncio
    async def test_clear(self, manager: ConversationManager) -> None:
        await manager.process_message("a", "hello")

        manager.clear("a")
        manager.clear("missing")

        assert len(manager.get("a").get_history()) == 1

    def test_remove(self, manager: ConversationManager) -> None:
        manager.get("a")

        assert manager.remove("a") is True
        assert manager.remove("a") is False
        assert manager.conversation_ids() == []
