"""Content enhancement agent: keywords, summary and research questions via Ollama."""

import logging
import re
from typing import Optional, Protocol

import ollama
from pydantic import ValidationError

from manuscript.agents.models import EnhancementOutput
from manuscript.core.errors import EnhancementError
from manuscript.core.models import EnhancedDocument, StructuredDocument
from manuscript.core.settings import EngineSettings

logger = logging.getLogger(__name__)

NOT_ENOUGH_CONTENT = "Not enough content to enhance with AI"

_PROMPT_SECTIONS = (
    ("Abstract", "abstract"),
    ("Introduction", "introduction"),
    ("Methods", "methods"),
    ("Results", "results"),
    ("Conclusion", "conclusion"),
)
_BULLET_RE = re.compile(r"^(?:[•\-*]|\d+[.)]|\[\d+\])\s*")


class ContentEnhancer(Protocol):
    """Anything that can turn a StructuredDocument into an EnhancedDocument."""

    def enhance(self, document: StructuredDocument) -> EnhancedDocument:
        ...


# ── Content Preparation ──────────────────────────────────────────────


def prepare_content(document: StructuredDocument, settings: EngineSettings) -> Optional[str]:
    """Text to send to the model, or None if the manuscript is too thin.

    Uses the key sections when they carry enough text, otherwise the full
    content, truncated to ``settings.max_enhancement_chars``.
    """
    parts = [
        f"{label}:\n{getattr(document, field)}"
        for label, field in _PROMPT_SECTIONS
        if getattr(document, field)
    ]
    text = "\n\n".join(parts)

    if len(text) < settings.section_content_chars and document.content:
        text = document.content
    if len(text) < settings.min_enhancement_chars:
        return None

    if len(text) > settings.max_enhancement_chars:
        text = text[: settings.max_enhancement_chars] + "..."
    return text


def clean_items(items: list[str], max_length: Optional[int] = None) -> list[str]:
    """Strip bullets/numbering, drop empties and case-insensitive duplicates."""
    cleaned: list[str] = []
    seen: set[str] = set()
    for item in items:
        value = _BULLET_RE.sub("", item.strip()).strip()
        if not value or value.lower() in seen:
            continue
        if max_length is not None and len(value) >= max_length:
            continue
        seen.add(value.lower())
        cleaned.append(value)
    return cleaned


def build_enhancement_prompt(document: StructuredDocument, content: str) -> str:
    existing = (
        f"Existing keywords: {', '.join(document.keywords)}"
        if document.keywords
        else "No existing keywords."
    )
    title = f"Title: {document.title}\n\n" if document.title else ""

    return f"""/no_think
Analyze the following research manuscript.

1. Extract 5-10 relevant academic keywords. {existing}
2. Write a concise summary (2-3 paragraphs) focusing on the research
   questions, methods, findings, and implications.
3. List the main research questions addressed. If none are stated
   explicitly, formulate them from the content.

MANUSCRIPT:
{title}{content}

Respond with JSON only: {{"keywords": [...], "summary": "...", "research_questions": [...]}}"""


# ── Enhancer ─────────────────────────────────────────────────────────


class OllamaEnhancer:
    """Single structured-output Ollama call per manuscript."""

    def __init__(self, settings: Optional[EngineSettings] = None) -> None:
        self.settings = settings or EngineSettings()

    def enhance(self, document: StructuredDocument) -> EnhancedDocument:
        content = prepare_content(document, self.settings)
        if content is None:
            logger.info("Skipping enhancement: only thin content available")
            return EnhancedDocument(
                **document.model_dump(exclude={"warnings"}),
                warnings=[*document.warnings, NOT_ENOUGH_CONTENT],
                ai_enhanced=True,
            )

        output = self._generate(build_enhancement_prompt(document, content))
        return EnhancedDocument(
            **document.model_dump(),
            ai_enhanced=True,
            enhanced_keywords=clean_items(
                output.keywords, max_length=self.settings.max_keyword_length
            ),
            summary=output.summary.strip() or None,
            research_questions=clean_items(output.research_questions),
        )

    def _generate(self, prompt: str) -> EnhancementOutput:
        model = self.settings.enhancement_model
        logger.info("Requesting enhancement from %s", model)
        try:
            response = ollama.chat(
                model=model,
                messages=[
                    {
                        "role": "system",
                        "content": (
                            "You are an academic editor's assistant. Summarize "
                            "manuscripts faithfully and never invent findings. "
                            "Respond ONLY with the requested JSON."
                        ),
                    },
                    {"role": "user", "content": prompt},
                ],
                format=EnhancementOutput.model_json_schema(),
                options={"temperature": 0},
                think=False,
            )
        except (ollama.ResponseError, ConnectionError) as exc:
            raise EnhancementError(f"{model} request failed: {exc}") from exc

        raw = response.message.content or ""
        try:
            return EnhancementOutput.model_validate_json(raw)
        except ValidationError as exc:
            raise EnhancementError(f"{model} returned invalid JSON: {exc}") from exc
