"""Tests for attachment intake helpers."""

import pytest

from intellinlp.domain.entities import AttachmentCategory
from intellinlp.domain.exceptions import AttachmentError
from intellinlp.domain.services.attachment_intake import (
    build_attachment,
    clean_text_content,
    infer_category,
)


class TestInferCategory:
    """infer_category tests."""

    @pytest.mark.parametrize(
        ("name", "mime_type", "category"),
        [
            ("photo.png", "image/png", AttachmentCategory.IMAGE),
            ("paper.pdf", "", AttachmentCategory.PDF),
            ("blob", "application/pdf", AttachmentCategory.PDF),
            ("memo.DOCX", "", AttachmentCategory.DOCUMENT),
            ("deck.pptx", "", AttachmentCategory.PRESENTATION),
            ("main.rs", "", AttachmentCategory.CODE),
            ("notes.txt", "text/plain", AttachmentCategory.TEXT),
            ("README", "", AttachmentCategory.TEXT),
        ],
    )
    def test_category(
        self, name: str, mime_type: str, category: AttachmentCategory
    ) -> None:
        assert infer_category(name, mime_type) == category


class TestCleanTextContent:
    """clean_text_content tests."""

    def test_removes_control_characters(self) -> None:
        assert clean_text_content("a\x00b\x07c") == "abc"

    def test_normalises_line_endings(self) -> None:
        assert clean_text_content("one\r\ntwo\rthree\n") == "one\ntwo\nthree"

    def test_keeps_tabs(self) -> None:
        assert clean_text_content("\tindented") == "indented"
        assert clean_text_content("a\tb") == "a\tb"


class TestBuildAttachment:
    """build_attachment tests."""

    def test_text_attachment(self) -> None:
        attachment = build_attachment("notes.txt", 14, content="  hello world\r\n")

        assert attachment.id == "notes.txt-14"
        assert attachment.category == AttachmentCategory.TEXT
        assert attachment.content == "hello world"
        assert attachment.url is None

    def test_image_attachment(self) -> None:
        attachment = build_attachment(
            "cat.jpg", 2048, url="file:///tmp/cat.jpg", mime_type="image/jpeg"
        )

        assert attachment.category == AttachmentCategory.IMAGE
        assert attachment.content is None
        assert attachment.url == "file:///tmp/cat.jpg"

    def test_negative_size(self) -> None:
        with pytest.raises(AttachmentError) as exc_info:
            build_attachment("bad.txt", -1)
        assert exc_info.value.name == "bad.txt"
