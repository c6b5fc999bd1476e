"""PDF manuscript parser: page-ordered text and metadata via PyMuPDF."""

import logging
import re
from typing import Optional

import fitz  # PyMuPDF

from manuscript.core.errors import DocumentParseError
from manuscript.core.models import ParserOptions, RawDocument, StructuredDocument
from manuscript.extractor.section_extractor import extract_keywords, first_nonblank_line
from manuscript.parsers.base import BaseDocumentParser

logger = logging.getLogger(__name__)

_SCANNED_THRESHOLD = 100  # chars per page; below this, assume scanned
_PAGE_SEPARATOR = "\n\n"
_WS_RE = re.compile(r"\s+")


# ── Page Text ────────────────────────────────────────────────────────


def extract_page_text(page) -> str:
    """Text of one page: runs on a line joined by single spaces, one line per row."""
    layout = page.get_text("dict")
    lines: list[str] = []
    for block in layout.get("blocks", []):
        if block.get("type", 0) != 0:  # image block
            continue
        for line in block.get("lines", []):
            runs = " ".join(span.get("text", "") for span in line.get("spans", []))
            text = _WS_RE.sub(" ", runs).strip()
            if text:
                lines.append(text)
    return "\n".join(lines)


def read_metadata_title(doc) -> Optional[str]:
    """Title from the PDF info dictionary, or None if absent/blank."""
    metadata = doc.metadata or {}
    title = (metadata.get("title") or "").strip()
    return title or None


def looks_scanned(total_chars: int, num_pages: int, threshold: int = _SCANNED_THRESHOLD) -> bool:
    """True when the average chars per page falls below ``threshold`` (or there are no pages)."""
    if num_pages == 0:
        return True
    return total_chars / num_pages < threshold


# ── Parser ───────────────────────────────────────────────────────────


class PdfParser(BaseDocumentParser):
    format_name = "PDF"
    supported_mime_types = frozenset({"application/pdf"})
    supported_extensions = frozenset({"pdf"})
    # fitz.FileDataError and EmptyFileError are RuntimeError subclasses
    expected_errors = BaseDocumentParser.expected_errors + (RuntimeError,)

    def __init__(self, scanned_chars_per_page: int = _SCANNED_THRESHOLD) -> None:
        self.scanned_chars_per_page = scanned_chars_per_page

    def _parse(self, raw: RawDocument, options: ParserOptions) -> StructuredDocument:
        warnings: list[str] = []
        doc = fitz.open(stream=raw.data, filetype="pdf")
        try:
            if doc.needs_pass:
                raise DocumentParseError("PDF is password protected")

            num_pages = len(doc)
            if num_pages == 0:
                raise DocumentParseError("PDF has no pages")

            pages_text: list[str] = []
            failed_pages = 0
            for page_num in range(num_pages):
                try:
                    page_text = extract_page_text(doc[page_num])
                except (RuntimeError, ValueError) as exc:
                    failed_pages += 1
                    logger.warning(
                        "%s: text extraction failed on page %d: %s",
                        raw.file_name, page_num + 1, exc,
                    )
                    warnings.append(f"Could not extract text from page {page_num + 1}: {exc}")
                    continue
                if page_text:
                    pages_text.append(page_text)

            if failed_pages == num_pages:
                raise DocumentParseError(f"could not decode any of {num_pages} page(s)")

            metadata_title = None
            try:
                metadata_title = read_metadata_title(doc)
            except (RuntimeError, ValueError) as exc:
                logger.warning("%s: metadata unavailable: %s", raw.file_name, exc)
                warnings.append(f"Could not read PDF metadata: {exc}")
        finally:
            doc.close()

        logger.info("PDF %s: extracted %d/%d page(s)", raw.file_name, len(pages_text), num_pages)

        content = _PAGE_SEPARATOR.join(pages_text)
        if looks_scanned(len(content), num_pages, self.scanned_chars_per_page):
            warnings.append(
                "PDF appears to be scanned or image-based; extracted text may be incomplete"
            )

        lines = content.split("\n")
        title = None
        if options.extract_title:
            title = metadata_title or first_nonblank_line(lines)

        return StructuredDocument(
            title=title,
            content=content,
            keywords=extract_keywords(lines),
            warnings=warnings,
        )

    def __repr__(self) -> str:
        return f"PdfParser(scanned_chars_per_page={self.scanned_chars_per_page})"
