"""Tests for shared document models."""

import pytest

from manuscript.core.models import (
    EnhancedDocument,
    ParserOptions,
    RawDocument,
    StructuredDocument,
)


# ── RawDocument ──────────────────────────────────────────────────────


@pytest.mark.parametrize(
    "name, ext",
    [
        ("paper.pdf", "pdf"),
        ("Final.Draft.DOCX", "docx"),
        ("uploads/notes.txt", "txt"),
        ("README", ""),
        ("archive.", ""),
    ],
)
def test_extension(name, ext):
    assert RawDocument(data=b"", file_name=name).extension == ext


def test_stem():
    assert RawDocument(data=b"", file_name="crispr-review.v2.md").stem == "crispr-review.v2"
    assert RawDocument(data=b"", file_name="README").stem == "README"


def test_raw_document_frozen():
    raw = RawDocument(data=b"x", file_name="a.txt")
    with pytest.raises(Exception):
        raw.file_name = "b.txt"


def test_parser_options_defaults():
    opts = ParserOptions()
    assert opts.extract_title is True
    assert opts.enhance_with_ai is False


# ── StructuredDocument ───────────────────────────────────────────────


def test_failure_document():
    doc = StructuredDocument.failure("Unsupported file type: xyz")
    assert not doc.ok
    assert doc.warnings == []
    assert doc.section_fields() == {}


def test_error_with_content_rejected():
    with pytest.raises(Exception):
        StructuredDocument(error="boom", abstract="partial abstract")


def test_error_with_warnings_allowed():
    doc = StructuredDocument(error="boom", warnings=["page 2 unreadable"])
    assert doc.warnings == ["page 2 unreadable"]


def test_section_fields_in_manuscript_order():
    doc = StructuredDocument(
        content="...", conclusion="C", abstract="A", methods="M"
    )
    assert list(doc.section_fields()) == ["abstract", "methods", "conclusion"]


def test_structured_document_frozen():
    doc = StructuredDocument(content="text")
    with pytest.raises(Exception):
        doc.title = "New"


def test_enhanced_document_extends_structured():
    doc = EnhancedDocument(content="text", ai_enhanced=True, summary="Short.")
    assert isinstance(doc, StructuredDocument)
    assert doc.enhanced_keywords == []
    assert doc.research_questions == []
