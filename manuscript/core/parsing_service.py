"""Parsing service: registry dispatch, section post-processing, optional enhancement."""

import asyncio
import logging
import threading
from typing import Optional

from manuscript.agents.enhancer import ContentEnhancer, OllamaEnhancer
from manuscript.core.models import (
    SECTION_FIELDS,
    EnhancedDocument,
    ParserOptions,
    RawDocument,
    StructuredDocument,
)
from manuscript.core.settings import EngineSettings
from manuscript.extractor.section_extractor import (
    extract_keywords,
    extract_sections,
    first_nonblank_line,
    split_lines,
)
from manuscript.parsers.registry import ParserRegistry, get_registry

logger = logging.getLogger(__name__)

_TITLE_SEARCH_LINES = 10


# ── Post-processing ──────────────────────────────────────────────────


def merge_sections(
    document: StructuredDocument, options: ParserOptions
) -> StructuredDocument:
    """Fill fields the parser left unset from a Section Extractor pass over content.

    Parser-set fields always win. The extractor's title (first non-blank line
    near the top) is used only when titles are honored and the parser found none.
    """
    lines = split_lines(document.content or "")
    extracted = extract_sections(lines)

    updates: dict = {}
    for field in SECTION_FIELDS:
        if not getattr(document, field) and extracted.get(field):
            updates[field] = extracted[field]
    if not document.references and extracted.get("references"):
        updates["references"] = extracted["references"]
    if not document.keywords:
        keywords = extract_keywords(lines)
        if keywords:
            updates["keywords"] = keywords
    if options.extract_title and not document.title:
        title = first_nonblank_line(lines, limit=_TITLE_SEARCH_LINES)
        if title:
            updates["title"] = title

    if updates:
        logger.debug("Post-processing filled: %s", ", ".join(updates))
    return document.model_copy(update=updates)


def enhancement_failed(document: StructuredDocument, reason: str) -> EnhancedDocument:
    return EnhancedDocument(
        **document.model_dump(exclude={"warnings"}),
        warnings=[*document.warnings, f"AI enhancement failed: {reason}"],
        ai_enhanced=False,
    )


# ── Service ──────────────────────────────────────────────────────────


class DocumentParsingService:
    """Facade over the parser registry. Always returns a document, never raises."""

    def __init__(
        self,
        registry: Optional[ParserRegistry] = None,
        enhancer: Optional[ContentEnhancer] = None,
        settings: Optional[EngineSettings] = None,
    ) -> None:
        self.settings = settings or EngineSettings()
        if registry is None:
            registry = ParserRegistry.from_settings(settings) if settings else get_registry()
        self.registry = registry
        self._enhancer = enhancer

    @property
    def enhancer(self) -> ContentEnhancer:
        if self._enhancer is None:
            self._enhancer = OllamaEnhancer(self.settings)
        return self._enhancer

    def parse(
        self, raw: RawDocument, options: Optional[ParserOptions] = None
    ) -> StructuredDocument:
        """Parse, structure and optionally enhance one manuscript."""
        options = options or ParserOptions()
        logger.info("Parsing document: %s (%s)", raw.file_name, raw.mime_type)
        try:
            document = self.registry.parse(raw, options)
            if not document.ok:
                logger.warning("Error parsing %s: %s", raw.file_name, document.error)
                return document

            document = merge_sections(document, options)

            if options.enhance_with_ai:
                document = self._enhance(document)
            return document
        except Exception as exc:
            logger.exception("Unexpected error parsing %s", raw.file_name)
            return StructuredDocument.failure(f"Failed to parse document: {exc}")

    async def aparse(
        self, raw: RawDocument, options: Optional[ParserOptions] = None
    ) -> StructuredDocument:
        """Awaitable ``parse``; decoding runs in a worker thread."""
        return await asyncio.to_thread(self.parse, raw, options)

    def _enhance(self, document: StructuredDocument) -> StructuredDocument:
        logger.info("Applying AI enhancement")
        try:
            return self.enhancer.enhance(document)
        except Exception as exc:
            logger.error("AI enhancement failed: %s", exc)
            return enhancement_failed(document, str(exc))


# ── Convenience ──────────────────────────────────────────────────────

_default_service: Optional[DocumentParsingService] = None
_default_service_lock = threading.Lock()


def get_default_service() -> DocumentParsingService:
    """The shared service, built on first use."""
    global _default_service
    if _default_service is None:
        with _default_service_lock:
            if _default_service is None:
                _default_service = DocumentParsingService()
    return _default_service


def parse_document(
    data: bytes,
    file_name: str,
    mime_type: Optional[str] = None,
    options: Optional[ParserOptions] = None,
) -> StructuredDocument:
    """Parse raw upload bytes with a shared default service."""
    raw = RawDocument(data=data, file_name=file_name, mime_type=mime_type)
    return get_default_service().parse(raw, options)
