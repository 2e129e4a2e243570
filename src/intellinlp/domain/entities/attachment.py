"""Attachment entity."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


class AttachmentCategory(Enum):
    """Declared category of an uploaded content item."""

    TEXT = "text"
    IMAGE = "image"
    PDF = "pdf"
    PRESENTATION = "ppt"
    DOCUMENT = "doc"
    CODE = "code"


@dataclass(frozen=True)
class Attachment:
    """Uploaded content item, already resolved by the upload layer.

    Attributes:
        id: Unique identifier.
        name: Display (file) name.
        category: Declared category.
        size: Size in bytes.
        content: Decoded text for text and code attachments.
        url: Locator for binary or image content.
        created_at: When the attachment was created.
    """

    id: str
    name: str
    category: AttachmentCategory
    size: int
    content: str | None = None
    url: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self) -> None:
        if self.size < 0:
            raise ValueError(f"Attachment size must be non-negative: {self.size}")

    @property
    def extension(self) -> str:
        """Lowercase file extension without the dot, or an empty string."""
        _, dot, extension = self.name.rpartition(".")
        return extension.lower() if dot else ""
