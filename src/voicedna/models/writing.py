"""Writing sample models."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

from voicedna.models.profile import SentenceLength


class ExtractedWritingPatterns(BaseModel):
    """Heuristic patterns extracted from a single writing sample."""

    vocabulary_complexity: float = Field(default=0.5, ge=0.0, le=1.0)
    sentence_variation: float = Field(default=0.5, ge=0.0, le=1.0)
    paragraph_structure: SentenceLength = "medium"
    tone_indicators: list[str] = Field(default_factory=list)
    key_phrases: list[str] = Field(default_factory=list)


class WritingSample(BaseModel):
    """A stored writing sample and its extraction result."""

    id: str
    source_type: Literal["paste", "url", "file"] = "paste"
    content: str
    word_count: int = 0
    source_url: str | None = None
    file_name: str | None = None
    extracted_patterns: ExtractedWritingPatterns | None = None
    created_at: datetime | None = None

    @property
    def is_analyzed(self) -> bool:
        return self.extracted_patterns is not None
