"""Heuristic section extractor: maps manuscript lines to named sections."""

import logging
import re
from typing import Iterable, Optional

logger = logging.getLogger(__name__)

# Heading term -> StructuredDocument field. Order matters only for reporting;
# matching is exact, colon-suffixed, or term-plus-space.
HEADING_VOCABULARY: dict[str, str] = {
    "abstract": "abstract",
    "summary": "abstract",
    "introduction": "introduction",
    "background": "literature_review",
    "literature review": "literature_review",
    "related work": "literature_review",
    "materials and methods": "methods",
    "methods": "methods",
    "methodology": "methods",
    "results": "results",
    "findings": "results",
    "discussion": "discussion",
    "conclusion": "conclusion",
    "conclusions": "conclusion",
    "acknowledgments": "acknowledgments",
    "acknowledgements": "acknowledgments",
    "references": "references",
    "bibliography": "references",
    "appendix": "appendix",
    "appendices": "appendix",
}

_SECTION_NUMBER_RE = re.compile(r"^\d+(?:\.\d+)*\.?\s+")
_KEYWORD_MARKER = "keywords:"
_KEYWORD_SPLIT_RE = re.compile(r"[,;]")
_NUMBERED_REF_RE = re.compile(r"^(?:\[\d+\]|\d+\.)\s")
_APA_REF_RE = re.compile(r"^[A-Z][a-z]+,\s[A-Z]\.")


# ── Line Helpers ─────────────────────────────────────────────────────


def split_lines(text: str) -> list[str]:
    """Split on any newline convention and strip each line."""
    return [line.strip() for line in text.splitlines()]


def first_nonblank_line(lines: Iterable[str], limit: Optional[int] = None) -> Optional[str]:
    """First non-empty stripped line, looking at no more than ``limit`` lines."""
    for i, line in enumerate(lines):
        if limit is not None and i >= limit:
            break
        stripped = line.strip()
        if stripped:
            return stripped
    return None


# ── Headings ─────────────────────────────────────────────────────────


def match_heading(line: str) -> Optional[str]:
    """Return the section field a heading line opens, or None.

    Case-insensitive. A heading is a vocabulary term on its own, the term
    followed by a colon, or a line starting with the term and a space.
    Numbered headings ("2. Methods", "3.1 Results:") must match the term
    exactly after the number, so prose such as "2019 results ..." is not a
    heading.
    """
    stripped = line.strip().lower()
    numbered = _SECTION_NUMBER_RE.match(stripped)
    normalized = stripped[numbered.end():] if numbered else stripped
    if not normalized:
        return None
    for term, field in HEADING_VOCABULARY.items():
        if normalized == term or normalized == term + ":":
            return field
        if not numbered and normalized.startswith(term + " "):
            return field
    return None


def extract_sections(lines: Iterable[str]) -> dict:
    """Partition lines into named sections in a single forward pass.

    Returns only the populated fields. ``references`` maps to a list of
    entries, every other field to stripped text. Lines before the first
    heading belong to no section.
    """
    sections: dict[str, str] = {}
    current: Optional[str] = None
    buffer: list[str] = []

    def flush() -> None:
        if current is None:
            return
        text = "".join(buffer).strip()
        if not text:
            return
        if current in sections:
            sections[current] = sections[current] + "\n\n" + text
        else:
            sections[current] = text

    for raw_line in lines:
        line = raw_line.strip()
        heading = match_heading(line)
        if heading is not None:
            flush()
            current = heading
            buffer = []
            continue
        buffer.append(line + "\n")
    flush()

    result: dict = dict(sections)
    if "references" in result:
        result["references"] = split_references(result["references"].split("\n"))
        if not result["references"]:
            del result["references"]

    logger.debug("Extracted sections: %s", ", ".join(result) or "none")
    return result


# ── Keywords ─────────────────────────────────────────────────────────


def parse_keyword_list(text: str) -> list[str]:
    """Split on commas/semicolons, trim, drop empties; order preserved."""
    return [kw.strip() for kw in _KEYWORD_SPLIT_RE.split(text) if kw.strip()]


def extract_keywords(lines: Iterable[str]) -> list[str]:
    """Keywords from the first line containing "keywords:" (any case)."""
    for line in lines:
        idx = line.lower().find(_KEYWORD_MARKER)
        if idx >= 0:
            return parse_keyword_list(line[idx + len(_KEYWORD_MARKER):])
    return []


# ── References ───────────────────────────────────────────────────────


def split_references(lines: Iterable[str]) -> list[str]:
    """Group reference-section lines into individual entries.

    A numbered ("[3] ", "3. ") or APA-style ("Smith, J.") line opens a new
    entry; anything else continues the current one.
    """
    references: list[str] = []
    current = ""

    for i, raw_line in enumerate(lines):
        line = raw_line.strip()
        if not line:
            continue
        starts_entry = bool(_NUMBERED_REF_RE.match(line)) or (
            i > 0 and bool(_APA_REF_RE.match(line))
        )
        if starts_entry and current:
            references.append(current.strip())
            current = line
        elif starts_entry:
            current = line
        else:
            current = f"{current} {line}" if current else line

    if current:
        references.append(current.strip())
    return references
