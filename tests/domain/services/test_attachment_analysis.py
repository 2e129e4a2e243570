"""Tests for attachment fact extraction."""

import re
from datetime import datetime, timezone

import pytest

from intellinlp.domain.entities import Attachment, AttachmentCategory
from intellinlp.domain.services.attachment_analysis import (
    AcademicFacts,
    CodeComplexity,
    DocumentKind,
    DocumentScale,
    FileFamily,
    ImageKind,
    LetterFacts,
    ProseFacts,
    SizeBucket,
    TechnicalDocFacts,
    TextKind,
    WritingComplexity,
    WritingTone,
    analyze_code,
    analyze_document,
    analyze_generic,
    analyze_image,
    analyze_text,
    content_fingerprint,
    estimate_pages,
    format_file_size,
    has_minimal_content,
    identify_themes,
    round_half_up,
    sniff_language,
    split_sentences,
)

CREATED_AT = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


def make_attachment(
    name: str,
    category: AttachmentCategory,
    size: int = 1000,
    content: str | None = None,
) -> Attachment:
    return Attachment(
        id=f"{name}-{size}",
        name=name,
        category=category,
        size=size,
        content=content,
        created_at=CREATED_AT,
    )


class TestHelpers:
    """Shared helper tests."""

    @pytest.mark.parametrize(
        ("size", "expected"),
        [
            (0, "0 Bytes"),
            (500, "500 Bytes"),
            (1024, "1 KB"),
            (1536, "1.5 KB"),
            (1024 * 1024, "1 MB"),
            (3 * 1024**3, "3 GB"),
        ],
    )
    def test_format_file_size(self, size: int, expected: str) -> None:
        assert format_file_size(size) == expected

    @pytest.mark.parametrize(
        ("content", "expected"),
        [(None, True), ("", True), ("too short", True), ("long enough", False)],
    )
    def test_has_minimal_content(self, content: str | None, expected: bool) -> None:
        assert has_minimal_content(content) is expected

    def test_fingerprint_is_deterministic(self) -> None:
        first = make_attachment("a.png", AttachmentCategory.IMAGE)
        second = make_attachment("a.png", AttachmentCategory.IMAGE)

        assert content_fingerprint(first) == content_fingerprint(second)
        assert re.fullmatch(r"[0-9a-f]+", content_fingerprint(first))

    def test_fingerprint_depends_on_name(self) -> None:
        first = make_attachment("a.png", AttachmentCategory.IMAGE)
        second = make_attachment("b.png", AttachmentCategory.IMAGE)

        assert content_fingerprint(first) != content_fingerprint(second)

    @pytest.mark.parametrize(
        ("name", "category", "expected"),
        [
            ("chart.png", AttachmentCategory.IMAGE, "fc9daaf9"),
            ("report.pdf", AttachmentCategory.PDF, "38e9e091"),
            ("deck.pptx", AttachmentCategory.PRESENTATION, "fd156202"),
        ],
    )
    def test_fingerprint_value(
        self, name: str, category: AttachmentCategory, expected: str
    ) -> None:
        """Folds "{name}-{size}-{category}-{created_at ms}" with h * 31 + ord(ch)."""
        attachment = make_attachment(name, category, size=2048)

        assert content_fingerprint(attachment) == expected

    def test_fingerprint_fits_32_bits(self) -> None:
        attachment = make_attachment("x" * 200 + ".png", AttachmentCategory.IMAGE)
        assert int(content_fingerprint(attachment), 16) <= 0xFFFFFFFF

    @pytest.mark.parametrize(
        ("value", "expected"),
        [(0.5, 1), (2.4, 2), (2.5, 3), (4.5, 5), (7.0, 7)],
    )
    def test_round_half_up(self, value: float, expected: int) -> None:
        assert round_half_up(value) == expected


class TestImageAnalysis:
    """analyze_image tests."""

    @pytest.mark.parametrize(
        ("name", "kind"),
        [
            ("sales_chart.png", ImageKind.CHART),
            ("Screenshot 2024.png", ImageKind.SCREENSHOT),
            ("page_scan.jpg", ImageKind.SCAN),
            ("flow.svg", ImageKind.DIAGRAM),
            ("holiday.jpg", ImageKind.GENERAL),
        ],
    )
    def test_kind_from_name(self, name: str, kind: ImageKind) -> None:
        facts = analyze_image(make_attachment(name, AttachmentCategory.IMAGE))
        assert facts.kind == kind

    @pytest.mark.parametrize(
        ("size", "bucket"),
        [
            (2_000_000, SizeBucket.LARGE),
            (500_000, SizeBucket.MEDIUM),
            (1_000_000, SizeBucket.MEDIUM),
            (1_000_001, SizeBucket.LARGE),
            (100_000, SizeBucket.SMALL),
        ],
    )
    def test_size_bucket(self, size: int, bucket: SizeBucket) -> None:
        facts = analyze_image(make_attachment("a.png", AttachmentCategory.IMAGE, size))
        assert facts.size_bucket == bucket

    def test_extension_and_fingerprint(self) -> None:
        attachment = make_attachment("photo.JPG", AttachmentCategory.IMAGE)

        facts = analyze_image(attachment)

        assert facts.extension == "jpg"
        assert facts.fingerprint == content_fingerprint(attachment)


class TestTextAnalysis:
    """analyze_text tests."""

    def test_basic_metrics(self) -> None:
        facts = analyze_text("Hello world. This is a test.")

        assert facts.word_count == 6
        assert facts.sentence_count == 2
        assert facts.line_count == 1
        assert facts.char_count == 28
        assert facts.words_per_sentence == 3.0
        assert facts.kind == TextKind.GENERAL
        assert isinstance(facts.details, ProseFacts)

    def test_no_sentence_punctuation(self) -> None:
        """Text without sentence breaks still produces an average."""
        facts = analyze_text("word " * 30)

        assert facts.word_count == 30
        assert facts.words_per_sentence == 30.0
        assert facts.complexity == WritingComplexity.COMPLEX

    def test_sentences_per_paragraph_rounds_half_up(self) -> None:
        facts = analyze_text(
            "The first sentence. The second sentence.\n\n"
            "The third sentence. The fourth sentence. The fifth sentence."
        )

        assert isinstance(facts.details, ProseFacts)
        assert facts.details.paragraphs == 2
        assert facts.details.sentences_per_paragraph == 3

    def test_split_sentences_drops_short_fragments(self) -> None:
        assert split_sentences("Hi. Okay. This is a sentence!") == [
            " This is a sentence"
        ]

    def test_code_kind(self) -> None:
        facts = analyze_text("import os\n\ndef main():\n    return os.getcwd()\n")

        assert facts.kind == TextKind.CODE
        assert facts.details.functions == 1  # type: ignore[union-attr]
        assert facts.details.imports == 1  # type: ignore[union-attr]

    def test_academic_kind(self) -> None:
        content = (
            "Abstract. This study presents research data.\n\n"
            "Introduction. Prior work (Smith, 2020) showed a correlation.\n\n"
            "Conclusion. The results are significant."
        )

        facts = analyze_text(content)

        assert facts.kind == TextKind.ACADEMIC
        assert isinstance(facts.details, AcademicFacts)
        assert facts.details.sections == [
            "Abstract",
            "Introduction",
            "Results",
            "Conclusion",
        ]
        assert facts.details.citations == 1

    def test_letter_kind(self) -> None:
        facts = analyze_text("Dear Ms. Smith,\n\nSee you on March 3.\n\nSincerely, Bob")

        assert facts.kind == TextKind.LETTER
        assert facts.details == LetterFacts(
            has_greeting=True, has_closing=True, has_date=True
        )

    def test_technical_kind(self) -> None:
        content = "Setup notes\n\n- install deps\n- run `make`\n1. TODO: add tests\n"

        facts = analyze_text(content)

        assert facts.kind == TextKind.TECHNICAL
        assert isinstance(facts.details, TechnicalDocFacts)
        assert facts.details.action_items == 1
        assert facts.details.code_spans == 1
        assert facts.details.bullet_lines == 2
        assert facts.details.numbered_lines == 1

    def test_formal_tone(self) -> None:
        content = (
            "The plan works. Therefore we proceed. Furthermore it scales. "
            "Moreover it is cheap."
        )
        assert analyze_text(content).tone == WritingTone.FORMAL

    def test_conversational_tone(self) -> None:
        assert analyze_text("I think it's fine, you know.").tone == (
            WritingTone.CONVERSATIONAL
        )

    def test_topics(self) -> None:
        facts = analyze_text('We visited New York and read "The Great Book" there.')

        assert "New York" in facts.topics
        assert "The Great Book" in facts.topics

    def test_themes_need_two_keywords(self) -> None:
        assert identify_themes("software and internet") == ["Technology"]
        assert identify_themes("software only") == []


class TestDocumentAnalysis:
    """analyze_document tests."""

    @pytest.mark.parametrize(
        ("size", "pages"), [(1, 1), (50_000, 1), (50_001, 2), (0, 0)]
    )
    def test_estimate_pages(self, size: int, pages: int) -> None:
        assert estimate_pages(size) == pages

    def test_kind_and_scale(self) -> None:
        facts = analyze_document(
            make_attachment("Annual_Report.pdf", AttachmentCategory.PDF, 3_000_000)
        )

        assert facts.kind == DocumentKind.REPORT
        assert facts.estimated_pages == 60
        assert facts.scale == DocumentScale.COMPREHENSIVE

    def test_general_document(self) -> None:
        facts = analyze_document(make_attachment("notes.pdf", AttachmentCategory.PDF))

        assert facts.kind == DocumentKind.GENERAL
        assert facts.scale == DocumentScale.CONCISE


class TestCodeAnalysis:
    """analyze_code tests."""

    def test_javascript(self) -> None:
        content = (
            "const axios = require('axios');\n"
            "\n"
            "// fetch users\n"
            "async function load() {\n"
            "  try {\n"
            "    const res = await axios.get(URL_BASE);\n"
            "    return res.data.map(u => u.name);\n"
            "  } catch (e) {\n"
            "    return [];\n"
            "  }\n"
            "}\n"
        )

        facts = analyze_code(
            make_attachment("users.js", AttachmentCategory.CODE, content=content)
        )

        assert facts.language == "JavaScript"
        assert facts.total_lines == 12
        assert facts.empty_lines == 2
        assert facts.functions == 1
        assert facts.has_comments
        assert facts.has_constants
        assert "Error handling implemented" in facts.best_practices
        assert "Uses const for immutable variables" in facts.best_practices
        assert "Modern async/await patterns" in facts.best_practices
        assert "API communication and data fetching" in facts.functionalities
        assert "Asynchronous programming" in facts.patterns
        assert "Functional programming" in facts.patterns
        assert facts.complexity == CodeComplexity.LOW

    def test_average_line_length_rounds_half_up(self) -> None:
        """Lines of 5 and 8 characters average 6.5, shown as 7."""
        facts = analyze_code(
            make_attachment(
                "calc.py", AttachmentCategory.CODE, content="x = 1\nprint(x)"
            )
        )

        assert facts.average_line_length == 7

    def test_language_from_content_when_extension_unknown(self) -> None:
        facts = analyze_code(
            make_attachment(
                "script.txt",
                AttachmentCategory.CODE,
                content="import os\ndef f(): pass",
            )
        )
        assert facts.language == "Python"

    def test_high_complexity(self) -> None:
        content = "\n".join("if x:\n    y()\nelse:\n    z()" for _ in range(8))

        facts = analyze_code(
            make_attachment("a.py", AttachmentCategory.CODE, content=content)
        )

        assert facts.complexity == CodeComplexity.HIGH

    def test_sniff_unknown(self) -> None:
        assert sniff_language("plain words") == "Unknown"


class TestGenericAnalysis:
    """analyze_generic tests."""

    @pytest.mark.parametrize(
        ("name", "family"),
        [
            ("deck.pptx", FileFamily.PRESENTATION),
            ("memo.docx", FileFamily.DOCUMENT),
            ("sheet.xlsx", FileFamily.SPREADSHEET),
            ("data.csv", FileFamily.DELIMITED),
            ("blob.bin", FileFamily.OTHER),
        ],
    )
    def test_family(self, name: str, family: FileFamily) -> None:
        facts = analyze_generic(make_attachment(name, AttachmentCategory.DOCUMENT))
        assert facts.family == family
