"""Transcript data models."""

from __future__ import annotations

from pydantic import BaseModel, Field


class WordTimestamp(BaseModel):
    """A single transcribed word with timing."""

    word: str
    start: float
    end: float
    confidence: float = Field(default=0.0, ge=0.0, le=1.0)

    @property
    def duration(self) -> float:
        return self.end - self.start


class TranscriptionResult(BaseModel):
    """Output of the speech-to-text service for one voice session."""

    transcript: str = ""
    duration_seconds: float = 0.0
    words: list[WordTimestamp] = Field(default_factory=list)
    language: str = "en"

    @property
    def word_count(self) -> int:
        return len(self.words) if self.words else len(self.transcript.split())
