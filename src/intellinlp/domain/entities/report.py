"""Attachment report entity."""

from dataclasses import dataclass

from intellinlp.domain.entities.attachment import Attachment


@dataclass(frozen=True)
class AttachmentReport:
    """Analysis report produced for one attachment.

    Attributes:
        attachment: The analyzed attachment.
        text: Rendered report.
    """

    attachment: Attachment
    text: str
