"""Plain-text and Markdown manuscript parser."""

import logging
import re

from manuscript.core.models import ParserOptions, RawDocument, StructuredDocument
from manuscript.parsers.base import BaseDocumentParser, structure_text

logger = logging.getLogger(__name__)

_BOM = "\ufeff"
_FILENAME_SPLIT_RE = re.compile(r"[-_\s]+")
_FILENAME_STOP_WORDS = frozenset(
    {
        "the", "and", "that", "this", "with", "for", "from",
        "file", "document", "paper", "research", "study", "draft",
    }
)


def keywords_from_filename(stem: str) -> list[str]:
    """Candidate keywords from a file name stem ("crispr-gene-editing_draft")."""
    return [
        token
        for token in _FILENAME_SPLIT_RE.split(stem)
        if len(token) > 3 and token.lower() not in _FILENAME_STOP_WORDS
    ]


class TextParser(BaseDocumentParser):
    format_name = "text"
    supported_mime_types = frozenset({"text/plain", "text/markdown"})
    supported_extensions = frozenset({"txt", "text", "md", "markdown"})
    expected_errors = BaseDocumentParser.expected_errors + (UnicodeDecodeError,)

    def _parse(self, raw: RawDocument, options: ParserOptions) -> StructuredDocument:
        text = raw.data.decode("utf-8")
        if text.startswith(_BOM):
            text = text[1:]

        fields = structure_text(text, options)
        if not fields.get("keywords"):
            from_name = keywords_from_filename(raw.stem)
            if from_name:
                logger.debug("No Keywords: line in %s, using file name", raw.file_name)
                fields["keywords"] = from_name

        return StructuredDocument(content=text, **fields)
