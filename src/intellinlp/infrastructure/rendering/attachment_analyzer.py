"""Template-based attachment analyzer."""

import logging
from collections.abc import Callable
from typing import Any

from intellinlp.domain.entities import Attachment, AttachmentCategory
from intellinlp.domain.services.attachment_analysis import (
    analyze_code,
    analyze_document,
    analyze_generic,
    analyze_image,
    analyze_text,
    has_minimal_content,
)
from intellinlp.infrastructure.rendering.templates import create_jinja_env

logger = logging.getLogger(__name__)

# (icon, label, noun) for the minimal content notice
_MINIMAL_NOTICES: dict[AttachmentCategory, tuple[str, str, str]] = {
    AttachmentCategory.TEXT: ("📄", "Text File", "text content"),
    AttachmentCategory.CODE: ("💻", "Code File", "code content"),
}


class TemplateAttachmentAnalyzer:
    """AttachmentAnalyzer implementation rendering facts through Jinja2.

    Fact extraction is delegated to the domain; this class only selects
    the template for the attachment's category and renders it.
    """

    def __init__(self) -> None:
        self._jinja_env = create_jinja_env()
        self._minimal_template = self._jinja_env.get_template("minimal_content.j2")
        self._handlers: dict[
            AttachmentCategory, tuple[str, Callable[[Attachment], Any]]
        ] = {
            AttachmentCategory.IMAGE: ("image_report.j2", analyze_image),
            AttachmentCategory.TEXT: (
                "text_report.j2",
                lambda attachment: analyze_text(attachment.content or ""),
            ),
            AttachmentCategory.PDF: ("document_report.j2", analyze_document),
            AttachmentCategory.CODE: ("code_report.j2", analyze_code),
        }

    def analyze(self, attachment: Attachment) -> str:
        """Produce a report for one attachment.

        Text and code attachments whose content is missing or shorter than
        ten characters get a short notice instead of a full report.

        Args:
            attachment: Attachment to analyze.

        Returns:
            Report text.
        """
        notice = _MINIMAL_NOTICES.get(attachment.category)
        if notice and has_minimal_content(attachment.content):
            logger.debug("Attachment %s has minimal content", attachment.name)
            icon, label, noun = notice
            return self._minimal_template.render(
                attachment=attachment, icon=icon, label=label, noun=noun
            )

        template_name, extract = self._handlers.get(
            attachment.category, ("generic_report.j2", analyze_generic)
        )
        logger.debug("Analyzing %s with %s", attachment.name, template_name)
        template = self._jinja_env.get_template(template_name)
        return template.render(attachment=attachment, facts=extract(attachment))
