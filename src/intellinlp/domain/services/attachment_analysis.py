"""Fact extraction for attachment analysis.

Every function here is a pure function of an attachment's name, size,
category, creation time and decoded content. The rendering layer turns the
resulting facts into report text.
"""

import math
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import TypeVar

from intellinlp.domain.entities import Attachment

MINIMAL_CONTENT_LENGTH = 10
LARGE_IMAGE_BYTES = 1_000_000
MEDIUM_IMAGE_BYTES = 100_000
BYTES_PER_PAGE = 50_000

T = TypeVar("T")


def content_fingerprint(attachment: Attachment) -> str:
    """Compute a deterministic fingerprint for an attachment.

    Folds ``name-size-category-<created_at in ms>`` through a 32-bit
    rolling hash (``h * 31 + ord(ch)``) and renders it as hex.

    Args:
        attachment: Attachment to fingerprint.

    Returns:
        Lowercase hexadecimal digest without leading zeros.
    """
    instant = int(attachment.created_at.timestamp() * 1000)
    source = (
        f"{attachment.name}-{attachment.size}-{attachment.category.value}-{instant}"
    )
    value = 0
    for char in source:
        value = ((value << 5) - value + ord(char)) & 0xFFFFFFFF
    return format(value, "x")


def format_file_size(size: int) -> str:
    """Format a byte count for display (``0 Bytes``, ``1.5 KB``, ...)."""
    if size <= 0:
        return "0 Bytes"
    units = ["Bytes", "KB", "MB", "GB"]
    exponent = 0
    while size >= 1024 ** (exponent + 1) and exponent < len(units) - 1:
        exponent += 1
    value = round(size / 1024**exponent, 2)
    return f"{value:g} {units[exponent]}"


def round_half_up(value: float) -> int:
    """Round to the nearest integer, with halves going up (2.5 -> 3)."""
    return math.floor(value + 0.5)


def has_minimal_content(content: str | None) -> bool:
    """Check if decoded content is too short to analyze."""
    return not content or len(content) < MINIMAL_CONTENT_LENGTH


def _first_match(
    text: str, table: tuple[tuple[tuple[str, ...], T], ...]
) -> T | None:
    for keywords, result in table:
        if any(keyword in text for keyword in keywords):
            return result
    return None


# Images


class ImageKind(Enum):
    CHART = "chart"
    SCREENSHOT = "screenshot"
    SCAN = "scan"
    DIAGRAM = "diagram"
    GENERAL = "general"


class SizeBucket(Enum):
    LARGE = "large"
    MEDIUM = "medium"
    SMALL = "small"


IMAGE_KIND_RULES: tuple[tuple[tuple[str, ...], ImageKind], ...] = (
    (("chart", "graph", "plot"), ImageKind.CHART),
    (("screenshot", "screen", "capture"), ImageKind.SCREENSHOT),
    (("document", "scan", "page"), ImageKind.SCAN),
    (("diagram", "flow", "schema"), ImageKind.DIAGRAM),
)


@dataclass(frozen=True)
class ImageFacts:
    kind: ImageKind
    size_bucket: SizeBucket
    extension: str
    fingerprint: str


def size_bucket(size: int) -> SizeBucket:
    if size > LARGE_IMAGE_BYTES:
        return SizeBucket.LARGE
    if size > MEDIUM_IMAGE_BYTES:
        return SizeBucket.MEDIUM
    return SizeBucket.SMALL


def analyze_image(attachment: Attachment) -> ImageFacts:
    kind = _first_match(attachment.name.lower(), IMAGE_KIND_RULES)
    return ImageFacts(
        kind=kind or ImageKind.GENERAL,
        size_bucket=size_bucket(attachment.size),
        extension=attachment.extension,
        fingerprint=content_fingerprint(attachment),
    )


# Text


class TextKind(Enum):
    CODE = "Programming Code"
    ACADEMIC = "Academic Document"
    LETTER = "Formal Correspondence"
    TECHNICAL = "Technical Documentation"
    GENERAL = "General Text"


class WritingComplexity(Enum):
    COMPLEX = "complex"
    MODERATE = "moderate"
    CONCISE = "concise"


class WritingTone(Enum):
    FORMAL = "formal"
    CONVERSATIONAL = "conversational"
    NEUTRAL = "neutral"


# (triggers, kind, case sensitive)
TEXT_KIND_RULES: tuple[tuple[tuple[str, ...], TextKind, bool], ...] = (
    (("function", "class", "import", "def "), TextKind.CODE, True),
    (("abstract", "introduction", "methodology"), TextKind.ACADEMIC, False),
    (("dear", "sincerely", "regards"), TextKind.LETTER, False),
    (("TODO", "FIXME", "NOTE:"), TextKind.TECHNICAL, True),
)

ACADEMIC_SECTIONS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("Abstract", ("abstract",)),
    ("Introduction", ("introduction",)),
    ("Methodology", ("methodology", "methods")),
    ("Results", ("results",)),
    ("Discussion", ("discussion",)),
    ("Conclusion", ("conclusion",)),
    ("References", ("references", "bibliography")),
)
ACADEMIC_TERMS = (
    "hypothesis",
    "methodology",
    "analysis",
    "significant",
    "correlation",
    "data",
    "research",
    "study",
)
FORMAL_CONNECTIVES = (
    "therefore",
    "furthermore",
    "consequently",
    "moreover",
    "nevertheless",
)
CONTENT_THEMES: dict[str, tuple[str, ...]] = {
    "Technology": (
        "technology",
        "digital",
        "software",
        "computer",
        "internet",
        "data",
        "algorithm",
    ),
    "Business": (
        "business",
        "company",
        "market",
        "strategy",
        "management",
        "profit",
        "revenue",
    ),
    "Science": ("research", "study", "experiment", "theory", "analysis", "discovery"),
    "Education": (
        "learning",
        "education",
        "teaching",
        "student",
        "knowledge",
        "training",
    ),
    "Health": ("health", "medical", "treatment", "patient", "therapy", "clinical"),
    "Environment": (
        "environment",
        "climate",
        "nature",
        "sustainability",
        "conservation",
    ),
}


_SENTENCE_SPLIT = re.compile(r"[.!?]+")
_PARAGRAPH_SPLIT = re.compile(r"\n\s*\n")
_CITATION = re.compile(r"\([^)]*\d{4}[^)]*\)")
_LETTER_DATE = re.compile(
    r"\d{1,2}/\d{1,2}/\d{4}|\d{1,2}-\d{1,2}-\d{4}|january|february|march|april"
    r"|may|june|july|august|september|october|november|december",
    re.IGNORECASE,
)
_ACTION_MARKERS = re.compile(r"TODO|FIXME|HACK|NOTE:")
_CODE_SPANS = re.compile(r"```|`[^`]+`")
_BULLET_LINE = re.compile(r"^\s*[-*+]\s", re.MULTILINE)
_NUMBERED_LINE = re.compile(r"^\s*\d+\.\s", re.MULTILINE)
_CAPITALIZED_PHRASE = re.compile(r"\b[A-Z][a-z]+(?:\s+[A-Z][a-z]+)*\b")
_QUOTED = re.compile(r'"([^"]+)"')
_TECHNICAL_TERM = re.compile(r"\b\w+(?:tion|ment|ness|ity|ism|ology|graphy)\b")


@dataclass(frozen=True)
class CodeSnippetFacts:
    language: str
    code_lines: int
    functions: int
    classes: int
    imports: int


@dataclass(frozen=True)
class AcademicFacts:
    sections: list[str]
    citations: int
    academic_terms: int
    academic_terms_total: int = len(ACADEMIC_TERMS)


@dataclass(frozen=True)
class LetterFacts:
    has_greeting: bool
    has_closing: bool
    has_date: bool


@dataclass(frozen=True)
class TechnicalDocFacts:
    action_items: int
    code_spans: int
    bullet_lines: int
    numbered_lines: int


@dataclass(frozen=True)
class ProseFacts:
    paragraphs: int
    sentences_per_paragraph: int
    themes: list[str]


TextDetails = (
    CodeSnippetFacts | AcademicFacts | LetterFacts | TechnicalDocFacts | ProseFacts
)


@dataclass(frozen=True)
class TextFacts:
    line_count: int
    word_count: int
    sentence_count: int
    char_count: int
    words_per_sentence: float
    kind: TextKind
    details: TextDetails
    topics: list[str] = field(default_factory=list)
    complexity: WritingComplexity = WritingComplexity.CONCISE
    tone: WritingTone = WritingTone.NEUTRAL


def split_sentences(content: str) -> list[str]:
    """Split on sentence punctuation, keeping fragments longer than 5 characters."""
    return [s for s in _SENTENCE_SPLIT.split(content) if len(s.strip()) > 5]


def detect_text_kind(content: str) -> TextKind:
    lowered = content.lower()
    for triggers, kind, case_sensitive in TEXT_KIND_RULES:
        haystack = content if case_sensitive else lowered
        if any(trigger in haystack for trigger in triggers):
            return kind
    return TextKind.GENERAL


def _count_code_lines(lines: list[str], comment_prefixes: tuple[str, ...]) -> int:
    return sum(
        1
        for line in lines
        if line.strip() and not line.strip().startswith(comment_prefixes)
    )


def analyze_code_snippet(content: str) -> CodeSnippetFacts:
    return CodeSnippetFacts(
        language=sniff_language(content),
        code_lines=_count_code_lines(content.split("\n"), ("//", "#")),
        functions=len(re.findall(r"function|def |public |private ", content)),
        classes=len(re.findall(r"class |interface ", content)),
        imports=len(re.findall(r"import |require|#include", content)),
    )


def analyze_academic(content: str) -> AcademicFacts:
    lowered = content.lower()
    return AcademicFacts(
        sections=[
            name
            for name, markers in ACADEMIC_SECTIONS
            if any(marker in lowered for marker in markers)
        ],
        citations=len(_CITATION.findall(content)),
        academic_terms=sum(1 for term in ACADEMIC_TERMS if term in lowered),
    )


def analyze_letter(content: str) -> LetterFacts:
    lowered = content.lower()
    return LetterFacts(
        has_greeting="dear" in lowered or "to whom" in lowered,
        has_closing=any(w in lowered for w in ("sincerely", "regards", "yours")),
        has_date=_LETTER_DATE.search(content) is not None,
    )


def analyze_technical_doc(content: str) -> TechnicalDocFacts:
    return TechnicalDocFacts(
        action_items=len(_ACTION_MARKERS.findall(content)),
        code_spans=len(_CODE_SPANS.findall(content)),
        bullet_lines=len(_BULLET_LINE.findall(content)),
        numbered_lines=len(_NUMBERED_LINE.findall(content)),
    )


def identify_themes(content: str) -> list[str]:
    """Return themes with at least two keywords present."""
    lowered = content.lower()
    return [
        theme
        for theme, keywords in CONTENT_THEMES.items()
        if sum(1 for keyword in keywords if keyword in lowered) >= 2
    ]


def analyze_prose(content: str) -> ProseFacts:
    sentences = split_sentences(content)
    paragraphs = [p for p in _PARAGRAPH_SPLIT.split(content) if p.strip()]
    return ProseFacts(
        paragraphs=len(paragraphs),
        sentences_per_paragraph=round_half_up(
            len(sentences) / max(len(paragraphs), 1)
        ),
        themes=identify_themes(content),
    )


def extract_salient_topics(content: str, limit: int = 5) -> list[str]:
    """Extract salient topics from document text.

    Capitalized phrases (first 5), quoted strings (first 3) and words with
    technical suffixes (first 3), de-duplicated in order and kept when
    between 4 and 49 characters long.

    Args:
        content: Document text.
        limit: Maximum number of topics returned.

    Returns:
        Topics in order of discovery.
    """
    candidates = [
        *_CAPITALIZED_PHRASE.findall(content)[:5],
        *_QUOTED.findall(content)[:3],
        *_TECHNICAL_TERM.findall(content)[:3],
    ]
    unique = dict.fromkeys(candidates)
    return [topic for topic in unique if 3 < len(topic) < 50][:limit]


def writing_complexity(words_per_sentence: float) -> WritingComplexity:
    if words_per_sentence > 20:
        return WritingComplexity.COMPLEX
    if words_per_sentence > 15:
        return WritingComplexity.MODERATE
    return WritingComplexity.CONCISE


def writing_tone(content: str) -> WritingTone:
    lowered = content.lower()
    if sum(1 for word in FORMAL_CONNECTIVES if word in lowered) > 2:
        return WritingTone.FORMAL
    if "i think" in lowered or "you know" in lowered:
        return WritingTone.CONVERSATIONAL
    return WritingTone.NEUTRAL


_TEXT_DETAIL_ANALYZERS = {
    TextKind.CODE: analyze_code_snippet,
    TextKind.ACADEMIC: analyze_academic,
    TextKind.LETTER: analyze_letter,
    TextKind.TECHNICAL: analyze_technical_doc,
    TextKind.GENERAL: analyze_prose,
}


def analyze_text(content: str) -> TextFacts:
    """Compute metrics and a sub-type analysis for document text.

    Args:
        content: Decoded text, at least ``MINIMAL_CONTENT_LENGTH`` long.

    Returns:
        Text facts.
    """
    words = content.split()
    sentences = split_sentences(content)
    # Text without sentence punctuation counts as one sentence for averages.
    words_per_sentence = len(words) / max(len(sentences), 1)
    kind = detect_text_kind(content)
    return TextFacts(
        line_count=len(content.split("\n")),
        word_count=len(words),
        sentence_count=len(sentences),
        char_count=len(content),
        words_per_sentence=words_per_sentence,
        kind=kind,
        details=_TEXT_DETAIL_ANALYZERS[kind](content),
        topics=extract_salient_topics(content),
        complexity=writing_complexity(words_per_sentence),
        tone=writing_tone(content),
    )


# PDF-like documents


class DocumentKind(Enum):
    REPORT = "Analytical Report"
    MANUAL = "Instructional Manual"
    RESEARCH = "Research Publication"
    LEGAL = "Legal Document"
    PRESENTATION = "Presentation Document"
    GENERAL = "General Document"


class DocumentScale(Enum):
    COMPREHENSIVE = "comprehensive"
    SUBSTANTIAL = "substantial"
    CONCISE = "concise"


DOCUMENT_KIND_RULES: tuple[tuple[tuple[str, ...], DocumentKind], ...] = (
    (("report", "analysis"), DocumentKind.REPORT),
    (("manual", "guide", "instruction"), DocumentKind.MANUAL),
    (("research", "study", "paper"), DocumentKind.RESEARCH),
    (("contract", "agreement", "legal"), DocumentKind.LEGAL),
    (("presentation", "slide"), DocumentKind.PRESENTATION),
)


@dataclass(frozen=True)
class DocumentFacts:
    estimated_pages: int
    kind: DocumentKind
    scale: DocumentScale
    fingerprint: str


def estimate_pages(size: int) -> int:
    return math.ceil(size / BYTES_PER_PAGE)


def document_scale(pages: int) -> DocumentScale:
    if pages > 50:
        return DocumentScale.COMPREHENSIVE
    if pages > 10:
        return DocumentScale.SUBSTANTIAL
    return DocumentScale.CONCISE


def analyze_document(attachment: Attachment) -> DocumentFacts:
    pages = estimate_pages(attachment.size)
    kind = _first_match(attachment.name.lower(), DOCUMENT_KIND_RULES)
    return DocumentFacts(
        estimated_pages=pages,
        kind=kind or DocumentKind.GENERAL,
        scale=document_scale(pages),
        fingerprint=content_fingerprint(attachment),
    )


# Source code

LANGUAGE_BY_EXTENSION: dict[str, str] = {
    "js": "JavaScript",
    "jsx": "JavaScript (React)",
    "ts": "TypeScript",
    "tsx": "TypeScript (React)",
    "py": "Python",
    "java": "Java",
    "cpp": "C++",
    "c": "C",
    "cs": "C#",
    "php": "PHP",
    "rb": "Ruby",
    "go": "Go",
    "rs": "Rust",
    "swift": "Swift",
    "kt": "Kotlin",
}

# Both tokens of a pair must be present.
LANGUAGE_SIGNATURES: tuple[tuple[tuple[str, str], str], ...] = (
    (("def ", "import "), "Python"),
    (("function", "const "), "JavaScript"),
    (("public class", "System.out"), "Java"),
    (("interface ", ": "), "TypeScript"),
    (("#include", "int main"), "C++"),
    (("func ", "package "), "Go"),
    (("fn ", "let "), "Rust"),
)

FUNCTION_TOKENS = ("function", "def ", "func ", "fn ")
CLASS_TOKENS = ("class ", "interface ", "struct ")
IMPORT_TOKENS = ("import ", "require", "#include", "using ", "from ")
VARIABLE_TOKENS = ("let ", "const ", "var ", "int ", "String ", "double ")
CONTROL_FLOW_KEYWORDS = ("if", "else", "for", "while", "switch", "case", "try", "catch")

FUNCTIONALITY_RULES: tuple[tuple[tuple[str, ...], str], ...] = (
    (("fetch", "axios", "requests"), "API communication and data fetching"),
    (("useState", "useEffect"), "React state management and lifecycle"),
    (("express", "app.get", "app.post"), "Web server and API endpoints"),
    (("database", "sql", "query"), "Database operations and data management"),
    (("test", "expect", "assert"), "Testing and quality assurance"),
)
PATTERN_RULES: tuple[tuple[tuple[str, ...], str], ...] = (
    (("module.exports", "export "), "Modular architecture"),
    (("Promise", "async"), "Asynchronous programming"),
    (("map", "filter", "reduce"), "Functional programming"),
)

_CONTROL_FLOW = re.compile(r"\b(?:" + "|".join(CONTROL_FLOW_KEYWORDS) + r")\b")
_NAMED_CONSTANT = re.compile(r"[A-Z_]{3,}")


class CodeComplexity(Enum):
    LOW = "Low - Simple linear logic"
    MEDIUM = "Medium - Moderate branching and loops"
    HIGH = "High - Complex control flow and logic"


@dataclass(frozen=True)
class CodeFacts:
    language: str
    total_lines: int
    code_lines: int
    functions: int
    classes: int
    imports: int
    variables: int
    has_comments: bool
    has_docstrings: bool
    has_constants: bool
    average_line_length: int
    long_lines: int
    empty_lines: int
    best_practices: list[str]
    functionalities: list[str]
    complexity: CodeComplexity
    patterns: list[str]


def sniff_language(content: str) -> str:
    """Guess a programming language from distinctive token pairs."""
    for (first, second), language in LANGUAGE_SIGNATURES:
        if first in content and second in content:
            return language
    return "Unknown"


def detect_language(extension: str, content: str) -> str:
    return LANGUAGE_BY_EXTENSION.get(extension) or sniff_language(content)


def count_tokens(content: str, tokens: tuple[str, ...]) -> int:
    return sum(content.count(token) for token in tokens)


def code_complexity(content: str) -> CodeComplexity:
    branches = len(_CONTROL_FLOW.findall(content))
    if branches < 5:
        return CodeComplexity.LOW
    if branches < 15:
        return CodeComplexity.MEDIUM
    return CodeComplexity.HIGH


def _matching_labels(
    content: str, rules: tuple[tuple[tuple[str, ...], str], ...]
) -> list[str]:
    return [
        label for keywords, label in rules if any(k in content for k in keywords)
    ]


def analyze_code(attachment: Attachment) -> CodeFacts:
    """Analyze source code.

    Args:
        attachment: Code attachment with at least minimal content.

    Returns:
        Code facts.
    """
    content = attachment.content or ""
    language = detect_language(attachment.extension, content)
    lines = content.split("\n")

    best_practices = []
    if "try" in content and "catch" in content:
        best_practices.append("Error handling implemented")
    if language == "JavaScript" and "const " in content:
        best_practices.append("Uses const for immutable variables")
    if "async" in content and "await" in content:
        best_practices.append("Modern async/await patterns")

    functionalities = _matching_labels(content, FUNCTIONALITY_RULES)
    if "class" in content and "constructor" in content:
        functionalities.append("Object-oriented programming patterns")

    return CodeFacts(
        language=language,
        total_lines=len(lines),
        code_lines=_count_code_lines(lines, ("//", "#", "/*")),
        functions=count_tokens(content, FUNCTION_TOKENS),
        classes=count_tokens(content, CLASS_TOKENS),
        imports=count_tokens(content, IMPORT_TOKENS),
        variables=count_tokens(content, VARIABLE_TOKENS),
        has_comments=any(marker in content for marker in ("//", "#", "/*")),
        has_docstrings=any(marker in content for marker in ('"""', "'''", "/**")),
        has_constants=_NAMED_CONSTANT.search(content) is not None,
        average_line_length=round_half_up(
            sum(len(line) for line in lines) / len(lines)
        ),
        long_lines=sum(1 for line in lines if len(line) > 100),
        empty_lines=sum(1 for line in lines if not line.strip()),
        best_practices=best_practices,
        functionalities=functionalities,
        complexity=code_complexity(content),
        patterns=_matching_labels(content, PATTERN_RULES),
    )


# Everything else


class FileFamily(Enum):
    DOCUMENT = "document"
    PRESENTATION = "presentation"
    SPREADSHEET = "spreadsheet"
    DELIMITED = "delimited"
    OTHER = "other"


FILE_FAMILY_BY_EXTENSION: dict[str, FileFamily] = {
    "doc": FileFamily.DOCUMENT,
    "docx": FileFamily.DOCUMENT,
    "ppt": FileFamily.PRESENTATION,
    "pptx": FileFamily.PRESENTATION,
    "xls": FileFamily.SPREADSHEET,
    "xlsx": FileFamily.SPREADSHEET,
    "csv": FileFamily.DELIMITED,
}


@dataclass(frozen=True)
class GenericFacts:
    family: FileFamily
    fingerprint: str


def analyze_generic(attachment: Attachment) -> GenericFacts:
    return GenericFacts(
        family=FILE_FAMILY_BY_EXTENSION.get(attachment.extension, FileFamily.OTHER),
        fingerprint=content_fingerprint(attachment),
    )
