"""Parser registry: picks the format parser for a file and dispatches to it."""

import logging
import threading
from typing import Iterable, Optional

from manuscript.core.models import ParserOptions, RawDocument, StructuredDocument
from manuscript.core.settings import EngineSettings
from manuscript.parsers.base import BaseDocumentParser
from manuscript.parsers.pages_parser import PagesParser
from manuscript.parsers.pdf_parser import PdfParser
from manuscript.parsers.text_parser import TextParser
from manuscript.parsers.word_parser import WordParser

logger = logging.getLogger(__name__)


def default_parsers(settings: Optional[EngineSettings] = None) -> tuple[BaseDocumentParser, ...]:
    """Text, Word, PDF, Pages. The order is the tie-break for ambiguous files."""
    settings = settings or EngineSettings()
    pdf_parser = PdfParser(scanned_chars_per_page=settings.scanned_chars_per_page)
    return (TextParser(), WordParser(), pdf_parser, PagesParser(pdf_parser=pdf_parser))


def unsupported_label(raw: RawDocument) -> str:
    return raw.extension or (raw.mime_type or "").strip() or "unknown"


class ParserRegistry:
    """Ordered, read-only collection of format parsers. First match wins."""

    def __init__(self, parsers: Optional[Iterable[BaseDocumentParser]] = None) -> None:
        self._parsers = tuple(parsers) if parsers is not None else default_parsers()
        logger.info(
            "Initialized parser registry with %d parsers: %s",
            len(self._parsers),
            ", ".join(type(p).__name__ for p in self._parsers),
        )

    @classmethod
    def from_settings(cls, settings: EngineSettings) -> "ParserRegistry":
        return cls(default_parsers(settings))

    @property
    def parsers(self) -> tuple[BaseDocumentParser, ...]:
        return self._parsers

    def find_parser(self, raw: RawDocument) -> Optional[BaseDocumentParser]:
        for parser in self._parsers:
            if parser.supports(raw):
                return parser
        return None

    def parse(
        self, raw: RawDocument, options: Optional[ParserOptions] = None
    ) -> StructuredDocument:
        """Parse with the first matching parser; unsupported types yield an error."""
        parser = self.find_parser(raw)
        if parser is None:
            logger.warning("No parser found for file: %s (%s)", raw.file_name, raw.mime_type)
            return StructuredDocument.failure(f"Unsupported file type: {unsupported_label(raw)}")

        logger.info("Using %s to parse: %s", type(parser).__name__, raw.file_name)
        return parser.parse_file(raw, options)


# ── Process-wide Registry ────────────────────────────────────────────

_registry: Optional[ParserRegistry] = None
_registry_lock = threading.Lock()


def get_registry() -> ParserRegistry:
    """The shared registry, built on first use. Later calls are no-ops."""
    global _registry
    if _registry is None:
        with _registry_lock:
            if _registry is None:
                _registry = ParserRegistry()
    return _registry


def parse_document(
    raw: RawDocument, options: Optional[ParserOptions] = None
) -> StructuredDocument:
    """Parse with the shared registry."""
    return get_registry().parse(raw, options)
