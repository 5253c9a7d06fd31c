"""Calibration round models."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

InsightType = Literal["style_preference", "tone_adjustment", "vocabulary", "structure"]


class CalibrationInsight(BaseModel):
    type: InsightType
    insight: str
    confidence: float = Field(default=0.5, ge=0.0, le=1.0)


class CalibrationRound(BaseModel):
    """One prompt → generated sample → rating cycle."""

    round_number: int = Field(ge=1)
    prompt_text: str = ""
    user_response: str | None = None
    generated_sample: str | None = None
    rating: int | None = Field(default=None, ge=1, le=5)
    feedback_text: str | None = None
    insights: list[CalibrationInsight] = Field(default_factory=list)
    created_at: datetime | None = None

    @property
    def is_completed(self) -> bool:
        return self.rating is not None
