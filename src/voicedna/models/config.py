"""Configuration models."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field

from voicedna.utils.io import read_yaml

DEFAULT_SETTINGS_FILE = "voicedna.yaml"


class AnalysisConfig(BaseModel):
    """Configuration for transcript and writing-sample analysis."""

    llm_model: str = "claude-sonnet-4-6"
    llm_max_tokens: int = Field(default=1500, ge=256, le=8192)
    llm_temperature: float = Field(default=0.3, ge=0.0, le=1.0)
    llm_max_attempts: int = Field(default=3, ge=1, le=10)
    min_transcript_chars: int = Field(default=50, ge=0)
    min_sample_words: int = Field(default=50, ge=1)


class MergeConfig(BaseModel):
    """Merge weights by profile event."""

    first_session_weight: float = Field(default=1.0, gt=0.0, le=1.0)
    session_weight: float = Field(default=0.3, gt=0.0, le=1.0)
    follow_up_weight: float = Field(default=0.2, gt=0.0, le=1.0)


class Settings(BaseModel):
    """All settings for a Voice DNA workspace."""

    store_path: str = ".voicedna"
    analysis: AnalysisConfig = Field(default_factory=AnalysisConfig)
    merge: MergeConfig = Field(default_factory=MergeConfig)


def load_settings(path: Path | str | None = None) -> Settings:
    """Load settings from YAML; a missing file yields the defaults."""
    path = Path(path or DEFAULT_SETTINGS_FILE)
    if not path.exists():
        return Settings()
    return Settings(**read_yaml(path))
