"""Voice profile orchestrator — turns profile events into stored updates.

Every event is one read → compute → whole-record write against the store
and ends by recomputing the calibration score:

- new_voice_session: enthusiasm + linguistic analysis, merged at 1.0 for
  the first session and 0.3 afterwards
- follow_up_responses: onboarding answers merged at 0.2
- new_writing_sample / sample_deleted / full_rebuild: written patterns
  re-derived from every stored analyzed sample
- calibration_round_completed: rating, insights and learned rules
- referent_or_rule_edit: referent blend or a manual learned rule
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Literal, Sequence

from voicedna.analysis.enthusiasm import (
    MIN_WINDOW_WORDS,
    detect_enthusiasm,
    extract_enthusiastic_topics,
)
from voicedna.analysis.linguistic import LinguisticAnalyst, analyze_linguistics
from voicedna.analysis.sanitize import sanitize_analysis
from voicedna.analysis.writing import derive_written_patterns, extract_writing_patterns
from voicedna.errors import CalibrationRoundError, ProfileNotFoundError, SampleNotFoundError
from voicedna.models.calibration import CalibrationInsight, CalibrationRound
from voicedna.models.config import Settings
from voicedna.models.enthusiasm import EnthusiasmAnalysis
from voicedna.models.profile import LearnedRule, LinguisticAnalysis, RuleType, VoiceProfile
from voicedna.models.record import ProfileRecord, SessionSummary
from voicedna.models.transcript import TranscriptionResult
from voicedna.models.writing import WritingSample
from voicedna.pipeline.store import ProfileStore
from voicedna.profile.merge import TOPICS_CAP, bound_spoken_patterns, merge_analysis, merge_lists
from voicedna.profile.rules import (
    add_learned_rule,
    blend_referents,
    default_insights,
    insights_to_rules,
)
from voicedna.profile.scoring import score_record
from voicedna.utils.progress import log_score, log_step, log_success, log_warning

ProfileEvent = Literal[
    "new_voice_session",
    "follow_up_responses",
    "new_writing_sample",
    "sample_deleted",
    "calibration_round_completed",
    "referent_or_rule_edit",
    "full_rebuild",
]


@dataclass
class ProfileUpdate:
    """Outcome of one profile event."""

    event: ProfileEvent
    record: ProfileRecord
    old_score: int
    new_score: int
    enthusiasm: EnthusiasmAnalysis | None = None

    @property
    def user_id(self) -> str:
        return self.record.user_id

    @property
    def score_change(self) -> int:
        return self.new_score - self.old_score


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _current_analysis(profile: VoiceProfile) -> LinguisticAnalysis | None:
    if profile.spoken_patterns is None or profile.tonal_attributes is None:
        return None
    return LinguisticAnalysis(
        spoken_patterns=profile.spoken_patterns,
        tonal_attributes=profile.tonal_attributes,
    )


def enrich_with_enthusiasm(
    analysis: LinguisticAnalysis,
    enthusiasm: EnthusiasmAnalysis,
) -> LinguisticAnalysis:
    """Fold the segmenter's topics and overall energy into a session analysis."""
    sp = analysis.spoken_patterns
    topics = merge_lists(
        extract_enthusiastic_topics(enthusiasm),
        sp.enthusiasm.topics_that_excite,
        TOPICS_CAP,
    )
    baseline = (sp.enthusiasm.energy_baseline + enthusiasm.overall_energy) / 2
    enthusiasm_patterns = sp.enthusiasm.model_copy(update={
        "topics_that_excite": topics,
        "energy_baseline": max(0.0, min(baseline, 1.0)),
    })
    return analysis.model_copy(update={
        "spoken_patterns": sp.model_copy(update={"enthusiasm": enthusiasm_patterns}),
    })


class VoiceProfileOrchestrator:
    """Applies profile events for one store.

    The analyst is optional: without one every linguistic analysis falls
    back to the neutral default (degraded mode), while enthusiasm detection,
    writing samples and scoring still run.
    """

    def __init__(
        self,
        store: ProfileStore,
        analyst: LinguisticAnalyst | None = None,
        settings: Settings | None = None,
    ) -> None:
        self.store = store
        self.analyst = analyst
        self.settings = settings or Settings()

    # --- record handling ---

    def _load(self, user_id: str) -> ProfileRecord:
        record = self.store.load(user_id)
        if record is None:
            raise ProfileNotFoundError(user_id)
        return record

    def _load_or_create(self, user_id: str) -> ProfileRecord:
        return self.store.load(user_id) or ProfileRecord(user_id=user_id)

    def _commit(
        self,
        record: ProfileRecord,
        event: ProfileEvent,
        old_score: int,
        enthusiasm: EnthusiasmAnalysis | None = None,
    ) -> ProfileUpdate:
        new_score = score_record(record)
        record.profile = record.profile.model_copy(update={"calibration_score": new_score})
        record.updated_at = _now()
        self.store.save(record)

        log_score(record.user_id, old_score, new_score)
        log_success(f"Profile saved for {record.user_id} ({event})")
        return ProfileUpdate(
            event=event,
            record=record,
            old_score=old_score,
            new_score=new_score,
            enthusiasm=enthusiasm,
        )

    def _rederive_written_patterns(self, record: ProfileRecord) -> None:
        analyzed = record.analyzed_samples()
        written = derive_written_patterns([s.extracted_patterns for s in analyzed])
        record.profile = record.profile.model_copy(update={"written_patterns": written})
        record.writing_samples_analyzed = len(analyzed)
        log_step("Written", f"Re-derived from {len(analyzed)} analyzed samples")

    # --- voice ---

    def process_voice_session(
        self,
        user_id: str,
        session_id: str,
        transcription: TranscriptionResult,
    ) -> ProfileUpdate:
        """Analyze one transcribed session and merge it into the profile."""
        record = self._load_or_create(user_id)
        old_score = record.profile.calibration_score

        enthusiasm = detect_enthusiasm(transcription.words)
        analysis = analyze_linguistics(
            transcription.transcript,
            self.analyst,
            min_chars=self.settings.analysis.min_transcript_chars,
        )
        if len(transcription.words) >= MIN_WINDOW_WORDS:
            analysis = enrich_with_enthusiasm(analysis, enthusiasm)
        analysis = analysis.model_copy(update={
            "spoken_patterns": bound_spoken_patterns(analysis.spoken_patterns),
        })

        existing = _current_analysis(record.profile)
        weights = self.settings.merge
        weight = weights.first_session_weight if existing is None else weights.session_weight
        merged = merge_analysis(existing, analysis, weight)

        record.profile = record.profile.model_copy(update={
            "spoken_patterns": merged.spoken_patterns,
            "tonal_attributes": merged.tonal_attributes,
        })
        record.voice_sessions_analyzed += 1
        record.sessions.append(SessionSummary(
            session_id=session_id,
            duration_seconds=transcription.duration_seconds,
            word_count=transcription.word_count,
            merge_weight=weight,
            enthusiasm=enthusiasm,
            analyzed_at=_now(),
        ))
        log_step("Session", f"{session_id} merged at weight {weight:.2f}")
        return self._commit(record, "new_voice_session", old_score, enthusiasm)

    def merge_follow_up_responses(
        self,
        user_id: str,
        responses: Sequence[str],
    ) -> ProfileUpdate | None:
        """Merge onboarding follow-up answers at the supplementary weight.

        Returns None (nothing written) unless the analyst produced a real
        analysis of the answers: a neutral default is never merged over a
        spoken profile.
        """
        record = self._load(user_id)
        existing = _current_analysis(record.profile)
        text = "\n\n".join(r.strip() for r in responses if r and r.strip())
        if existing is None or not text:
            return None
        if self.analyst is None:
            log_warning("No linguistic analyst configured, follow-up responses not merged")
            return None
        if len(text) < self.settings.analysis.min_transcript_chars:
            log_warning(f"Follow-up responses too short to analyze ({len(text)} chars)")
            return None

        raw = self.analyst.analyze(text)
        if raw is None:
            log_warning("Analyst returned nothing for follow-up responses, not merged")
            return None

        old_score = record.profile.calibration_score
        analysis = sanitize_analysis(raw)
        merged = merge_analysis(existing, analysis, self.settings.merge.follow_up_weight)
        record.profile = record.profile.model_copy(update={
            "spoken_patterns": bound_spoken_patterns(merged.spoken_patterns),
            "tonal_attributes": merged.tonal_attributes,
        })
        return self._commit(record, "follow_up_responses", old_score)

    # --- writing samples ---

    def add_writing_sample(
        self,
        user_id: str,
        content: str,
        *,
        source_type: Literal["paste", "url", "file"] = "paste",
        source_url: str | None = None,
        file_name: str | None = None,
    ) -> ProfileUpdate:
        """Store and analyze a writing sample, then re-derive written patterns."""
        word_count = len(content.split())
        min_words = self.settings.analysis.min_sample_words
        if word_count < min_words:
            raise ValueError(
                f"Writing sample must have at least {min_words} words, got {word_count}"
            )

        record = self._load_or_create(user_id)
        old_score = record.profile.calibration_score

        sample = WritingSample(
            id=uuid.uuid4().hex[:12],
            source_type=source_type,
            content=content,
            word_count=word_count,
            source_url=source_url,
            file_name=file_name,
            extracted_patterns=extract_writing_patterns(content),
            created_at=_now(),
        )
        record.writing_samples.append(sample)
        log_step("Sample", f"Added {sample.id} ({word_count} words)")

        self._rederive_written_patterns(record)
        return self._commit(record, "new_writing_sample", old_score)

    def remove_writing_sample(self, user_id: str, sample_id: str) -> ProfileUpdate:
        record = self._load(user_id)
        remaining = [s for s in record.writing_samples if s.id != sample_id]
        if len(remaining) == len(record.writing_samples):
            raise SampleNotFoundError(sample_id)

        old_score = record.profile.calibration_score
        record.writing_samples = remaining
        log_step("Sample", f"Removed {sample_id}")

        self._rederive_written_patterns(record)
        return self._commit(record, "sample_deleted", old_score)

    # --- calibration ---

    def record_calibration_round(
        self,
        user_id: str,
        round_number: int,
        rating: int,
        *,
        feedback: str | None = None,
        insights: Sequence[CalibrationInsight] | None = None,
        prompt_text: str = "",
        user_response: str | None = None,
        generated_sample: str | None = None,
    ) -> ProfileUpdate:
        """Complete a calibration round and learn rules from its insights.

        Without explicit insights, a default one is derived from the rating
        and feedback. A round can only be completed once.
        """
        if isinstance(rating, bool) or not isinstance(rating, int) or not 1 <= rating <= 5:
            raise CalibrationRoundError(f"Rating must be an integer from 1 to 5, got {rating!r}")
        if round_number < 1:
            raise CalibrationRoundError(f"Round number must be positive, got {round_number}")

        record = self._load(user_id)
        existing = record.get_round(round_number)
        if existing is not None and existing.is_completed:
            raise CalibrationRoundError(f"Round {round_number} is already completed")

        old_score = record.profile.calibration_score
        if insights is None:
            insights = default_insights(rating, feedback)

        completed = CalibrationRound(
            round_number=round_number,
            prompt_text=prompt_text or (existing.prompt_text if existing else ""),
            user_response=user_response or (existing.user_response if existing else None),
            generated_sample=generated_sample or (existing.generated_sample if existing else None),
            rating=rating,
            feedback_text=feedback,
            insights=list(insights),
            created_at=existing.created_at if existing and existing.created_at else _now(),
        )
        record.calibration_rounds = [
            r for r in record.calibration_rounds if r.round_number != round_number
        ]
        record.calibration_rounds.append(completed)
        record.calibration_rounds.sort(key=lambda r: r.round_number)

        rules = record.profile.learned_rules
        for rule in insights_to_rules(completed.insights, rating):
            rules = add_learned_rule(rules, rule)
        record.profile = record.profile.model_copy(update={"learned_rules": rules})

        record.calibration_rounds_completed = max(
            record.calibration_rounds_completed,
            len(record.completed_ratings()),
        )
        log_step("Calibration", f"Round {round_number} rated {rating}/5")
        return self._commit(record, "calibration_round_completed", old_score)

    # --- referents and rules ---

    def add_rule(
        self,
        user_id: str,
        rule_type: RuleType,
        content: str,
        confidence: float = 0.5,
    ) -> ProfileUpdate:
        content = content.strip()
        if not content:
            raise ValueError("Rule content must not be empty")

        record = self._load_or_create(user_id)
        old_score = record.profile.calibration_score
        rules = add_learned_rule(
            record.profile.learned_rules,
            LearnedRule(type=rule_type, content=content, confidence=confidence),
        )
        record.profile = record.profile.model_copy(update={"learned_rules": rules})
        log_step("Rules", f"{len(rules)} learned rules")
        return self._commit(record, "referent_or_rule_edit", old_score)

    def set_referents(
        self,
        user_id: str,
        user_weight: int,
        referents: Sequence[tuple[str, str]],
    ) -> ProfileUpdate:
        """Replace the referent blend; ``referents`` are ``(id, name)`` pairs."""
        influences = blend_referents(user_weight, referents)

        record = self._load_or_create(user_id)
        old_score = record.profile.calibration_score
        record.profile = record.profile.model_copy(update={"referent_influences": influences})
        log_step(
            "Referents",
            f"User {influences.user_weight}%, {len(influences.referents)} referents",
        )
        return self._commit(record, "referent_or_rule_edit", old_score)

    # --- rebuild ---

    def full_rebuild(self, user_id: str) -> ProfileUpdate:
        """Re-derive written patterns and counters from stored samples.

        Spoken patterns and tonal attributes are left as merged.
        """
        record = self._load(user_id)
        old_score = record.profile.calibration_score
        log_step("Rebuild", f"Rebuilding profile for {user_id}")
        self._rederive_written_patterns(record)
        return self._commit(record, "full_rebuild", old_score)
