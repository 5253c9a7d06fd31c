"""Voice profile models — the persisted per-user fingerprint."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, model_validator

SentenceLength = Literal["short", "medium", "long"]
PaceVariation = Literal["consistent", "varied", "dynamic"]
PausePattern = Literal["frequent", "moderate", "rare"]
StorytellingStyle = Literal["anecdotal", "hypothetical", "personal", "mixed"]
StructurePreference = Literal["linear", "modular", "narrative"]
OpeningStyle = Literal["hook", "context", "question", "story"]
ClosingStyle = Literal["cta", "summary", "question", "reflection"]
RuleType = Literal["prefer", "avoid", "adjust"]

MIN_USER_WEIGHT = 50
MAX_USER_WEIGHT = 100
MAX_REFERENTS = 3
MAX_LEARNED_RULES = 20


class Vocabulary(BaseModel):
    frequent_words: list[str] = Field(default_factory=list)
    unique_phrases: list[str] = Field(default_factory=list)
    filler_words: list[str] = Field(default_factory=list)
    preserve_fillers: bool = False


class Rhythm(BaseModel):
    avg_sentence_length: SentenceLength = "medium"
    pace_variation: PaceVariation = "consistent"
    pause_patterns: PausePattern = "moderate"


class Rhetoric(BaseModel):
    uses_questions: bool = False
    uses_analogies: bool = False
    storytelling_style: StorytellingStyle = "mixed"


class Enthusiasm(BaseModel):
    topics_that_excite: list[str] = Field(default_factory=list)
    emphasis_patterns: list[str] = Field(default_factory=list)
    energy_baseline: float = Field(default=0.5, ge=0.0, le=1.0)


class SpokenPatterns(BaseModel):
    """How the user speaks, built up from voice sessions."""

    vocabulary: Vocabulary = Field(default_factory=Vocabulary)
    rhythm: Rhythm = Field(default_factory=Rhythm)
    rhetoric: Rhetoric = Field(default_factory=Rhetoric)
    enthusiasm: Enthusiasm = Field(default_factory=Enthusiasm)


class WrittenPatterns(BaseModel):
    """How the user writes, derived only from writing samples."""

    structure_preference: StructurePreference = "linear"
    formality: float = Field(default=0.5, ge=0.0, le=1.0)
    paragraph_length: SentenceLength = "medium"
    opening_style: OpeningStyle = "context"
    closing_style: ClosingStyle = "summary"


class TonalAttributes(BaseModel):
    warmth: float = Field(default=0.5, ge=0.0, le=1.0)
    authority: float = Field(default=0.5, ge=0.0, le=1.0)
    humor: float = Field(default=0.3, ge=0.0, le=1.0)
    directness: float = Field(default=0.5, ge=0.0, le=1.0)
    empathy: float = Field(default=0.5, ge=0.0, le=1.0)

    def as_tuple(self) -> tuple[float, float, float, float, float]:
        return (self.warmth, self.authority, self.humor, self.directness, self.empathy)


class ReferentInfluence(BaseModel):
    """A named external style blended into generation."""

    id: str
    name: str
    weight: int = Field(ge=0, le=MAX_USER_WEIGHT - MIN_USER_WEIGHT)
    active_traits: list[str] = Field(default_factory=list)


class ReferentInfluences(BaseModel):
    user_weight: int = Field(default=80, ge=MIN_USER_WEIGHT, le=MAX_USER_WEIGHT)
    referents: list[ReferentInfluence] = Field(default_factory=list, max_length=MAX_REFERENTS)

    @model_validator(mode="after")
    def _check_total(self) -> ReferentInfluences:
        if self.referents:
            total = self.user_weight + sum(r.weight for r in self.referents)
            if total != 100:
                raise ValueError(f"Referent blend must total 100, got {total}")
        return self


class LearnedRule(BaseModel):
    type: RuleType
    content: str
    confidence: float = Field(default=0.5, ge=0.0, le=1.0)
    source_count: int = Field(default=1, ge=1)


class LinguisticAnalysis(BaseModel):
    """Sanitized output of the linguistic analyst for one text."""

    spoken_patterns: SpokenPatterns = Field(default_factory=SpokenPatterns)
    tonal_attributes: TonalAttributes = Field(default_factory=TonalAttributes)
    suggested_topics: list[str] = Field(default_factory=list)


class VoiceProfile(BaseModel):
    """The merged voice profile consumed by content generation."""

    spoken_patterns: SpokenPatterns | None = None
    written_patterns: WrittenPatterns | None = None
    tonal_attributes: TonalAttributes | None = None
    referent_influences: ReferentInfluences | None = None
    learned_rules: list[LearnedRule] = Field(default_factory=list, max_length=MAX_LEARNED_RULES)
    calibration_score: int = Field(default=0, ge=0, le=100)
