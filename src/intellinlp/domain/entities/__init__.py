"""Domain entities."""

from intellinlp.domain.entities.attachment import Attachment, AttachmentCategory
from intellinlp.domain.entities.context import ConversationContext, Tone
from intellinlp.domain.entities.intent import Intent
from intellinlp.domain.entities.report import AttachmentReport
from intellinlp.domain.entities.turn import Role, Turn

__all__ = [
    "Attachment",
    "AttachmentCategory",
    "AttachmentReport",
    "ConversationContext",
    "Intent",
    "Role",
    "Tone",
    "Turn",
]
