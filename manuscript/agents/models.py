"""Structured-output schema for the content enhancement agent."""

from pydantic import BaseModel, Field


class EnhancementOutput(BaseModel):
    """Schema used for Ollama structured output."""

    keywords: list[str] = Field(description="5-10 academic keywords for the manuscript")
    summary: str = Field(description="Concise 2-3 paragraph summary")
    research_questions: list[str] = Field(
        description="Main research questions, stated or inferred from the content"
    )
