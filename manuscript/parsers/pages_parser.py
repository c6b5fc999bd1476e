"""Apple Pages manuscript parser: XML entries or QuickLook preview from the zip bundle."""

import logging
import zipfile
import zlib
from io import BytesIO
from typing import Optional

from manuscript.core.errors import DocumentParseError
from manuscript.core.models import ParserOptions, RawDocument, StructuredDocument
from manuscript.parsers.base import BaseDocumentParser, structure_text
from manuscript.parsers.markup import markup_to_text
from manuscript.parsers.pdf_parser import PdfParser

logger = logging.getLogger(__name__)

ZIP_SIGNATURE = b"PK\x03\x04"
XML_ENTRIES = ("document.xml", "index.xml")
PREVIEW_ENTRY = "QuickLook/Preview.pdf"
PREVIEW_WARNING = "Using Preview.pdf from Pages document - text extraction may be limited"


def looks_like_zip(data: bytes) -> bool:
    return data[:4] == ZIP_SIGNATURE


class PagesParser(BaseDocumentParser):
    format_name = "Pages"
    supported_mime_types = frozenset(
        {"application/vnd.apple.pages", "application/x-iwork-pages-sffpages"}
    )
    supported_extensions = frozenset({"pages"})
    # zipfile raises RuntimeError (encrypted entry), NotImplementedError
    # (unknown compression) and EOFError (truncated entry data)
    expected_errors = BaseDocumentParser.expected_errors + (
        zipfile.BadZipFile,
        zlib.error,
        RuntimeError,
        NotImplementedError,
        EOFError,
    )

    def __init__(self, pdf_parser: Optional[PdfParser] = None) -> None:
        self.pdf_parser = pdf_parser or PdfParser()

    def _parse(self, raw: RawDocument, options: ParserOptions) -> StructuredDocument:
        if not looks_like_zip(raw.data):
            raise DocumentParseError("Not a valid Pages document (missing zip signature)")

        with zipfile.ZipFile(BytesIO(raw.data)) as archive:
            names = set(archive.namelist())

            for entry in XML_ENTRIES:
                if entry in names:
                    logger.info("Pages %s: reading %s", raw.file_name, entry)
                    xml = archive.read(entry).decode("utf-8", errors="replace")
                    return self._from_text(markup_to_text(xml), entry, options)

            if PREVIEW_ENTRY in names:
                logger.warning("Pages %s: falling back to %s", raw.file_name, PREVIEW_ENTRY)
                return self._from_preview(raw, archive.read(PREVIEW_ENTRY), options)

        raise DocumentParseError("Could not find content in Pages document")

    def _from_text(
        self,
        text: str,
        entry: str,
        options: ParserOptions,
        warnings: Optional[list[str]] = None,
    ) -> StructuredDocument:
        warnings = list(warnings or [])
        if not text:
            warnings.append(f"No text found in {entry}")
        fields = structure_text(text, options)
        return StructuredDocument(content=text, warnings=warnings, **fields)

    def _from_preview(
        self, raw: RawDocument, pdf_data: bytes, options: ParserOptions
    ) -> StructuredDocument:
        preview = RawDocument(
            data=pdf_data,
            file_name=f"{raw.stem}.pdf",
            mime_type="application/pdf",
        )
        result = self.pdf_parser.parse_file(preview, options)
        if not result.ok:
            raise DocumentParseError(f"Could not extract text from {PREVIEW_ENTRY}: {result.error}")
        return self._from_text(
            result.content or "",
            PREVIEW_ENTRY,
            options,
            warnings=[PREVIEW_WARNING, *result.warnings],
        )
