"""Profile record — the whole-row unit persisted per user."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from voicedna.models.calibration import CalibrationRound
from voicedna.models.enthusiasm import EnthusiasmAnalysis
from voicedna.models.profile import VoiceProfile
from voicedna.models.writing import WritingSample


class SessionSummary(BaseModel):
    """A voice session that has been merged into the profile."""

    session_id: str
    duration_seconds: float = 0.0
    word_count: int = 0
    merge_weight: float = 1.0
    enthusiasm: EnthusiasmAnalysis = Field(default_factory=EnthusiasmAnalysis)
    analyzed_at: datetime | None = None


class ProfileRecord(BaseModel):
    """Everything stored for one user, replaced as a whole on every write."""

    version: str = "1.0"
    user_id: str
    profile: VoiceProfile = Field(default_factory=VoiceProfile)
    voice_sessions_analyzed: int = Field(default=0, ge=0)
    writing_samples_analyzed: int = Field(default=0, ge=0)
    calibration_rounds_completed: int = Field(default=0, ge=0)
    sessions: list[SessionSummary] = Field(default_factory=list)
    writing_samples: list[WritingSample] = Field(default_factory=list)
    calibration_rounds: list[CalibrationRound] = Field(default_factory=list)
    updated_at: datetime | None = None

    def analyzed_samples(self) -> list[WritingSample]:
        return [s for s in self.writing_samples if s.is_analyzed]

    def completed_ratings(self) -> list[int]:
        return [r.rating for r in self.calibration_rounds if r.rating is not None]

    def get_round(self, round_number: int) -> CalibrationRound | None:
        for r in self.calibration_rounds:
            if r.round_number == round_number:
                return r
        return None
