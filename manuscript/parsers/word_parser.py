"""Word manuscript parser: Docling DOCX conversion to HTML, then plain text."""

import logging
import zipfile
from io import BytesIO

from docling.datamodel.base_models import ConversionStatus, DocumentStream, InputFormat
from docling.document_converter import DocumentConverter
from docling.exceptions import ConversionError

from manuscript.core.errors import DocumentParseError
from manuscript.core.models import ParserOptions, RawDocument, StructuredDocument
from manuscript.parsers.base import BaseDocumentParser, structure_text
from manuscript.parsers.markup import markup_to_text

logger = logging.getLogger(__name__)

_USABLE_STATUSES = (ConversionStatus.SUCCESS, ConversionStatus.PARTIAL_SUCCESS)


def convert_docx_to_html(data: bytes, file_name: str) -> tuple[str, list[str]]:
    """Convert DOCX bytes to HTML with Docling.

    Returns the HTML and the non-fatal conversion messages Docling reported.
    Raises DocumentParseError when no usable document was produced.
    """
    converter = DocumentConverter(allowed_formats=[InputFormat.DOCX])
    source = DocumentStream(name=file_name, stream=BytesIO(data))
    result = converter.convert(source, raises_on_error=False)

    messages = [err.error_message for err in (result.errors or [])]
    if result.status not in _USABLE_STATUSES:
        detail = "; ".join(messages) or f"conversion status {result.status}"
        raise DocumentParseError(detail)

    return result.document.export_to_html(), messages


class WordParser(BaseDocumentParser):
    format_name = "Word"
    supported_mime_types = frozenset(
        {
            "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
            "application/msword",
        }
    )
    supported_extensions = frozenset({"docx", "doc"})
    expected_errors = BaseDocumentParser.expected_errors + (
        ConversionError,
        zipfile.BadZipFile,
    )

    def _parse(self, raw: RawDocument, options: ParserOptions) -> StructuredDocument:
        html, messages = convert_docx_to_html(raw.data, raw.file_name)
        if messages:
            logger.info(
                "Docling reported %d message(s) converting %s", len(messages), raw.file_name
            )

        text = markup_to_text(html)
        fields = structure_text(text, options)
        return StructuredDocument(content=text, warnings=messages, **fields)
