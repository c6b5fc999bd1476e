"""Engine settings: YAML loader and Pydantic model."""

from pathlib import Path

import yaml
from pydantic import BaseModel, Field, model_validator


class EngineSettings(BaseModel):
    """Tunable thresholds for PDF heuristics and AI enhancement."""

    enhancement_model: str = "qwen3:8b"
    max_enhancement_chars: int = Field(default=6000, ge=500)
    min_enhancement_chars: int = Field(default=100, ge=0)
    section_content_chars: int = Field(
        default=200,
        ge=0,
        description="Below this many chars of section text, enhance the full content instead",
    )
    max_keyword_length: int = Field(default=50, ge=1)
    scanned_chars_per_page: int = Field(
        default=100, ge=0, description="Below this average, a PDF is assumed scanned"
    )

    @model_validator(mode="after")
    def ordered_thresholds(self) -> "EngineSettings":
        if not (
            self.min_enhancement_chars
            < self.section_content_chars
            <= self.max_enhancement_chars
        ):
            raise ValueError(
                "Expected min_enhancement_chars < section_content_chars "
                f"<= max_enhancement_chars, got {self.min_enhancement_chars}, "
                f"{self.section_content_chars}, {self.max_enhancement_chars}"
            )
        return self


def load_settings(path: str | Path | None = None) -> EngineSettings:
    """Load settings from a YAML file; defaults when no path is given."""
    if path is None:
        return EngineSettings()
    path = Path(path)
    with open(path) as f:
        raw = yaml.safe_load(f) or {}
    return EngineSettings.model_validate(raw)
