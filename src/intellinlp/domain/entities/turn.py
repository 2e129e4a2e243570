"""Turn entity."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from intellinlp.domain.entities.attachment import Attachment


class Role(Enum):
    """Author of a turn."""

    USER = "user"
    ASSISTANT = "assistant"
    SYSTEM = "system"


@dataclass(frozen=True)
class Turn:
    """One message exchanged in a conversation.

    Attributes:
        role: Who produced the turn.
        content: Message text.
        attachments: Attachments introduced with the turn, in upload order.
        timestamp: When the turn was created.
    """

    role: Role
    content: str
    attachments: tuple[Attachment, ...] = ()
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def is_system(self) -> bool:
        """Check if this is the initial system turn.

        Returns:
            True for system turns.
        """
        return self.role == Role.SYSTEM
