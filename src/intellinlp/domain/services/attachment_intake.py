"""Helpers for turning resolved uploads into attachments."""

import re

from intellinlp.domain.entities import Attachment, AttachmentCategory
from intellinlp.domain.exceptions import AttachmentError

CODE_EXTENSIONS = frozenset(
    {"js", "ts", "py", "java", "cpp", "c", "cs", "php", "rb", "go", "rs"}
)

_CONTROL_CHARACTERS = re.compile(r"[\x00-\x08\x0B\x0C\x0E-\x1F\x7F]")


def infer_category(name: str, mime_type: str = "") -> AttachmentCategory:
    """Infer an attachment category from a file name and MIME type.

    Args:
        name: File name.
        mime_type: MIME type reported by the upload layer, if any.

    Returns:
        The inferred category; anything unrecognised is treated as text.
    """
    _, dot, extension = name.rpartition(".")
    extension = extension.lower() if dot else ""

    if mime_type.startswith("image/"):
        return AttachmentCategory.IMAGE
    if "pdf" in mime_type or extension == "pdf":
        return AttachmentCategory.PDF
    if "document" in mime_type or extension in ("doc", "docx"):
        return AttachmentCategory.DOCUMENT
    if "presentation" in mime_type or extension in ("ppt", "pptx"):
        return AttachmentCategory.PRESENTATION
    if extension in CODE_EXTENSIONS:
        return AttachmentCategory.CODE
    return AttachmentCategory.TEXT


def clean_text_content(content: str) -> str:
    """Remove control characters and normalise line endings.

    Args:
        content: Decoded text.

    Returns:
        Cleaned, stripped text.
    """
    content = _CONTROL_CHARACTERS.sub("", content)
    return content.replace("\r\n", "\n").replace("\r", "\n").strip()


def build_attachment(
    name: str,
    size: int,
    content: str | None = None,
    url: str | None = None,
    mime_type: str = "",
) -> Attachment:
    """Build an attachment from an upload resolved by the host.

    Text content is cleaned before it is stored.

    Args:
        name: File name.
        size: Size in bytes.
        content: Decoded text content, if any.
        url: Locator for binary content, if any.
        mime_type: MIME type reported by the upload layer.

    Returns:
        Attachment with id ``"{name}-{size}"``.

    Raises:
        AttachmentError: The size is negative.
    """
    if size < 0:
        raise AttachmentError(name, f"Attachment {name} has a negative size: {size}")
    return Attachment(
        id=f"{name}-{size}",
        name=name,
        category=infer_category(name, mime_type),
        size=size,
        content=clean_text_content(content) if content is not None else None,
        url=url,
    )
