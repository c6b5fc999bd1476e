"""Format parser contract shared by every supported manuscript format."""

import logging
from abc import ABC, abstractmethod
from typing import ClassVar, Optional

from manuscript.core.errors import DocumentParseError
from manuscript.core.models import ParserOptions, RawDocument, StructuredDocument
from manuscript.extractor.section_extractor import (
    extract_keywords,
    extract_sections,
    first_nonblank_line,
    split_lines,
)

logger = logging.getLogger(__name__)


class BaseDocumentParser(ABC):
    """Converts one file format into a StructuredDocument.

    Subclasses declare their capability record as class attributes and
    implement ``_parse``. Expected failures are raised from ``_parse`` as
    DocumentParseError, or as one of ``expected_errors`` when they come from a
    decode library; ``parse_file`` turns them into an ``error`` result.
    """

    format_name: ClassVar[str] = "document"
    supported_mime_types: ClassVar[frozenset[str]] = frozenset()
    supported_extensions: ClassVar[frozenset[str]] = frozenset()
    expected_errors: ClassVar[tuple[type[Exception], ...]] = (DocumentParseError,)

    def supports(self, raw: RawDocument) -> bool:
        """True if the declared MIME type or the file extension is ours."""
        mime = (raw.mime_type or "").split(";", 1)[0].strip().lower()
        if mime in self.supported_mime_types:
            return True
        return raw.extension in self.supported_extensions

    def parse_file(
        self, raw: RawDocument, options: Optional[ParserOptions] = None
    ) -> StructuredDocument:
        """Parse ``raw``; never raises for corrupt or unsupported content."""
        options = options or ParserOptions()
        try:
            return self._parse(raw, options)
        except self.expected_errors as exc:
            logger.warning(
                "%s parser failed on %s: %s", self.format_name, raw.file_name, exc
            )
            return StructuredDocument.failure(
                f"Failed to parse {self.format_name} file: {exc}"
            )

    @abstractmethod
    def _parse(self, raw: RawDocument, options: ParserOptions) -> StructuredDocument:
        ...

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


def structure_text(text: str, options: ParserOptions) -> dict:
    """Line heuristics shared by the text-based formats.

    Returns StructuredDocument fields: title (first non-blank line, when
    titles are honored), the extracted sections and keywords.
    """
    lines = split_lines(text)
    fields = extract_sections(lines)
    keywords = extract_keywords(lines)
    if keywords:
        fields["keywords"] = keywords
    if options.extract_title:
        title = first_nonblank_line(lines)
        if title:
            fields["title"] = title
    return fields
