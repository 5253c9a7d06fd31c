"""Enthusiasm analysis models — output of the energy segmenter."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

Indicator = Literal["pace_increase", "dense_speech", "emphasis_words", "repetition"]
PeakUse = Literal["hook", "quote", "key_point", "conclusion"]


class EnergySegment(BaseModel):
    """A contiguous span of words scored as one unit."""

    model_config = ConfigDict(frozen=True)

    start_time: float
    end_time: float
    text: str
    words_per_second: float = 0.0
    emphasis_count: int = 0
    repetition_count: int = 0
    energy_score: float = Field(default=0.0, ge=0.0, le=1.0)
    indicators: tuple[Indicator, ...] = ()

    @property
    def duration(self) -> float:
        return self.end_time - self.start_time


class PeakMoment(BaseModel):
    """A top-ranked high-energy moment for downstream use."""

    model_config = ConfigDict(frozen=True)

    timestamp: float
    text: str
    reason: str
    use_as: PeakUse = "key_point"


class EnthusiasmAnalysis(BaseModel):
    """Energy analysis attached to a voice session."""

    model_config = ConfigDict(frozen=True)

    overall_energy: float = Field(default=0.0, ge=0.0, le=1.0)
    segments: tuple[EnergySegment, ...] = ()
    peak_moments: tuple[PeakMoment, ...] = ()
