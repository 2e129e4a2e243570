"""Template-based rendering of attachment reports and replies."""

from intellinlp.infrastructure.rendering.attachment_analyzer import (
    TemplateAttachmentAnalyzer,
)
from intellinlp.infrastructure.rendering.response_composer import (
    TemplateResponseComposer,
)

__all__ = [
    "TemplateAttachmentAnalyzer",
    "TemplateResponseComposer",
]
