"""Shared data models for manuscript parsing."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

SECTION_FIELDS = (
    "abstract",
    "introduction",
    "literature_review",
    "methods",
    "results",
    "discussion",
    "conclusion",
    "acknowledgments",
    "appendix",
)


# ── Inputs ───────────────────────────────────────────────────────────


class RawDocument(BaseModel):
    """An uploaded file: raw bytes plus its declared type metadata."""

    model_config = ConfigDict(frozen=True)

    data: bytes
    file_name: str
    mime_type: Optional[str] = None

    @property
    def extension(self) -> str:
        """Lower-cased extension without the dot, or "" if the name has none."""
        name = self.file_name.rsplit("/", 1)[-1]
        if "." not in name:
            return ""
        return name.rsplit(".", 1)[-1].strip().lower()

    @property
    def stem(self) -> str:
        name = self.file_name.rsplit("/", 1)[-1]
        return name.rsplit(".", 1)[0] if "." in name else name


class ParserOptions(BaseModel):
    """Per-call parsing options."""

    model_config = ConfigDict(frozen=True)

    extract_title: bool = True
    enhance_with_ai: bool = False


# ── Outputs ──────────────────────────────────────────────────────────


class StructuredDocument(BaseModel):
    """Normalized, section-oriented result of parsing one manuscript.

    ``error`` is the sole failure signal. When it is set, only ``warnings``
    carries meaning and every content field is empty.
    """

    model_config = ConfigDict(frozen=True)

    title: Optional[str] = None
    abstract: Optional[str] = None
    introduction: Optional[str] = None
    literature_review: Optional[str] = None
    methods: Optional[str] = None
    results: Optional[str] = None
    discussion: Optional[str] = None
    conclusion: Optional[str] = None
    acknowledgments: Optional[str] = None
    appendix: Optional[str] = None
    references: list[str] = Field(default_factory=list)
    keywords: list[str] = Field(default_factory=list)
    content: Optional[str] = None
    warnings: list[str] = Field(default_factory=list)
    error: Optional[str] = None

    @model_validator(mode="after")
    def error_excludes_content(self) -> "StructuredDocument":
        if self.error is None:
            return self
        populated = [name for name in SECTION_FIELDS if getattr(self, name)]
        if self.title or self.content or self.keywords or self.references:
            populated.append("content")
        if populated:
            raise ValueError(
                f"Failed document must not carry extracted fields: {', '.join(populated)}"
            )
        return self

    @classmethod
    def failure(cls, error: str, warnings: Optional[list[str]] = None) -> "StructuredDocument":
        return cls(error=error, warnings=list(warnings or []))

    @property
    def ok(self) -> bool:
        return self.error is None

    def section_fields(self) -> dict[str, str]:
        """Named sections that were populated, in manuscript order."""
        return {
            name: getattr(self, name) for name in SECTION_FIELDS if getattr(self, name)
        }


class EnhancedDocument(StructuredDocument):
    """StructuredDocument plus the output of the content enhancer."""

    ai_enhanced: bool = False
    enhanced_keywords: list[str] = Field(default_factory=list)
    summary: Optional[str] = None
    research_questions: list[str] = Field(default_factory=list)
