"""Reduce HTML/XML markup to plain text lines."""

import html
import re

# Elements whose content is never document text
_DROP_ELEMENTS_RE = re.compile(
    r"<(head|style|script)\b[^>]*>.*?</\1\s*>", re.IGNORECASE | re.DOTALL
)
_COMMENT_RE = re.compile(r"<!--.*?-->", re.DOTALL)
_DECLARATION_RE = re.compile(r"<[?!][^>]*>")
_CDATA_RE = re.compile(r"<!\[CDATA\[(.*?)\]\]>", re.DOTALL)

# Tags that end a line of text: paragraphs, headings, list items, breaks,
# table rows. Namespace prefixes (sf:p, w:p) are accepted.
_BLOCK_TAG_RE = re.compile(
    r"</?(?:[\w-]+:)?(?:p|h[1-6]|li|br|div|tr|title|blockquote|pre|section|table|ul|ol)\b[^>]*>",
    re.IGNORECASE,
)
_TAG_RE = re.compile(r"<[^>]*>")
_HSPACE_RE = re.compile(r"[^\S\n]+")
_BLANK_RUN_RE = re.compile(r"\n{3,}")


def markup_to_text(markup: str) -> str:
    """Strip tags, unescape entities and normalize whitespace.

    Block-level tags become line breaks so that headings and paragraphs land
    on their own lines; inline tags are removed without adding spaces.
    Runs of blank lines collapse to a single blank line.
    """
    text = _CDATA_RE.sub(r"\1", markup)
    text = _COMMENT_RE.sub("", text)
    text = _DROP_ELEMENTS_RE.sub("", text)
    text = _DECLARATION_RE.sub("", text)
    text = _BLOCK_TAG_RE.sub("\n", text)
    text = _TAG_RE.sub("", text)
    text = html.unescape(text)

    lines = [_HSPACE_RE.sub(" ", line).strip() for line in text.split("\n")]
    text = "\n".join(lines)
    return _BLANK_RUN_RE.sub("\n\n", text).strip()
