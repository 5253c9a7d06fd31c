"""Pydantic data models for Voice DNA."""

from voicedna.models.config import AnalysisConfig, MergeConfig, Settings
from voicedna.models.enthusiasm import EnergySegment, EnthusiasmAnalysis, PeakMoment
from voicedna.models.profile import (
    LearnedRule,
    LinguisticAnalysis,
    ReferentInfluences,
    SpokenPatterns,
    TonalAttributes,
    VoiceProfile,
    WrittenPatterns,
)
from voicedna.models.record import ProfileRecord
from voicedna.models.transcript import TranscriptionResult, WordTimestamp

__all__ = [
    "AnalysisConfig",
    "MergeConfig",
    "Settings",
    "EnergySegment",
    "EnthusiasmAnalysis",
    "PeakMoment",
    "LearnedRule",
    "LinguisticAnalysis",
    "ReferentInfluences",
    "SpokenPatterns",
    "TonalAttributes",
    "VoiceProfile",
    "WrittenPatterns",
    "ProfileRecord",
    "TranscriptionResult",
    "WordTimestamp",
]
