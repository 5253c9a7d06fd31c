"""Tests for the voice profile orchestrator event flows."""

from __future__ import annotations

import pytest

from voicedna.errors import CalibrationRoundError, ProfileNotFoundError, SampleNotFoundError
from voicedna.models.calibration import CalibrationInsight
from voicedna.models.transcript import TranscriptionResult
from voicedna.pipeline.orchestrator import VoiceProfileOrchestrator

USER = "ada"


def test_first_session_creates_profile(orchestrator, store, transcription, analyst) -> None:
    update = orchestrator.process_voice_session(USER, "s1", transcription)

    assert update.event == "new_voice_session"
    assert update.old_score == 0
    # 12 for the session, 8 spoken richness, 2 tonal
    assert update.new_score == 22
    assert update.enthusiasm is not None and len(update.enthusiasm.segments) == 1
    assert analyst.calls == [transcription.transcript]

    record = store.load(USER)
    assert record is not None
    assert record.voice_sessions_analyzed == 1
    assert record.profile.calibration_score == 22
    assert record.profile.tonal_attributes.warmth == 0.9
    assert record.sessions[0].session_id == "s1"
    assert record.sessions[0].merge_weight == 1.0

    enthusiasm = record.profile.spoken_patterns.enthusiasm
    assert enthusiasm.topics_that_excite == ["compilers", "language design", "tooling", "things"]
    assert enthusiasm.energy_baseline == pytest.approx((0.8 + 0.45) / 2)


def test_later_sessions_merge_at_lower_weight(orchestrator, store, transcription, analyst) -> None:
    orchestrator.process_voice_session(USER, "s1", transcription)
    analyst.payload = {"tonal_attributes": {"warmth": 0.2}}
    update = orchestrator.process_voice_session(USER, "s2", transcription)

    record = update.record
    assert record.voice_sessions_analyzed == 2
    assert record.sessions[1].merge_weight == 0.3
    assert record.profile.tonal_attributes.warmth == pytest.approx(0.9 * 0.7 + 0.2 * 0.3)
    # sticky rhetoric flags survive a neutral analysis
    assert record.profile.spoken_patterns.rhetoric.uses_analogies is True
    assert store.load(USER) == record


def test_session_without_analyst_uses_neutral_analysis(store, transcription) -> None:
    orchestrator = VoiceProfileOrchestrator(store)
    update = orchestrator.process_voice_session(USER, "s1", transcription)

    profile = update.record.profile
    assert profile.tonal_attributes.warmth == 0.5
    assert profile.spoken_patterns.enthusiasm.energy_baseline == pytest.approx((0.5 + 0.45) / 2)
    assert profile.spoken_patterns.enthusiasm.topics_that_excite == ["compilers", "things"]
    assert update.new_score == 12


def test_session_without_word_timings_keeps_llm_energy(orchestrator) -> None:
    transcription = TranscriptionResult(transcript="x" * 80, duration_seconds=5.0)
    update = orchestrator.process_voice_session(USER, "s1", transcription)
    assert update.record.profile.spoken_patterns.enthusiasm.energy_baseline == 0.8
    assert update.enthusiasm.segments == ()


def test_short_writing_sample_is_rejected(orchestrator, store) -> None:
    with pytest.raises(ValueError):
        orchestrator.add_writing_sample(USER, "Far too short to learn anything from.")
    assert store.load(USER) is None


def test_writing_sample_derives_written_patterns(orchestrator, essay) -> None:
    update = orchestrator.add_writing_sample(USER, essay)

    record = update.record
    assert update.event == "new_writing_sample"
    assert record.writing_samples_analyzed == 1
    assert record.writing_samples[0].is_analyzed
    written = record.profile.written_patterns
    assert written.structure_preference == "modular"
    assert written.opening_style == "question"
    # 8 for the sample, 5 + 3 for distinctive written patterns
    assert update.new_score == 16


def test_deleting_only_sample_then_rebuild_clears_written_patterns(
    orchestrator, store, transcription, essay
) -> None:
    orchestrator.process_voice_session(USER, "s1", transcription)
    added = orchestrator.add_writing_sample(USER, essay)
    assert added.new_score == 38
    sample_id = added.record.writing_samples[0].id

    removed = orchestrator.remove_writing_sample(USER, sample_id)
    assert removed.event == "sample_deleted"
    assert removed.record.profile.written_patterns is None
    assert removed.record.writing_samples_analyzed == 0

    rebuilt = orchestrator.full_rebuild(USER)
    assert rebuilt.record.profile.written_patterns is None
    assert rebuilt.record.writing_samples_analyzed == 0
    assert rebuilt.new_score == 22
    assert rebuilt.new_score < added.new_score


def test_remove_unknown_sample(orchestrator, essay) -> None:
    with pytest.raises(ProfileNotFoundError):
        orchestrator.remove_writing_sample(USER, "nope")
    orchestrator.add_writing_sample(USER, essay)
    with pytest.raises(SampleNotFoundError):
        orchestrator.remove_writing_sample(USER, "nope")


def test_full_rebuild_keeps_spoken_patterns(orchestrator, store, transcription, essay) -> None:
    orchestrator.process_voice_session(USER, "s1", transcription)
    orchestrator.add_writing_sample(USER, essay)
    before = store.load(USER)

    rebuilt = orchestrator.full_rebuild(USER).record
    assert rebuilt.profile.spoken_patterns == before.profile.spoken_patterns
    assert rebuilt.profile.tonal_attributes == before.profile.tonal_attributes
    assert rebuilt.profile.written_patterns == before.profile.written_patterns
    assert rebuilt.profile.calibration_score == before.profile.calibration_score


def test_full_rebuild_requires_profile(orchestrator) -> None:
    with pytest.raises(ProfileNotFoundError):
        orchestrator.full_rebuild(USER)


def test_calibration_round_learns_rules(orchestrator, transcription) -> None:
    orchestrator.process_voice_session(USER, "s1", transcription)
    first = orchestrator.record_calibration_round(USER, 1, 5)
    assert first.event == "calibration_round_completed"
    assert first.record.calibration_rounds_completed == 1

    [rule] = first.record.profile.learned_rules
    assert rule.type == "prefer"
    assert rule.content == "Current voice style is well-calibrated"

    second = orchestrator.record_calibration_round(USER, 2, 5)
    [rule] = second.record.profile.learned_rules
    assert rule.source_count == 2
    assert rule.confidence == 1.0
    # 22 + 2 rounds at 8 + 1 rule with the confidence bonus
    assert second.new_score == 22 + 16 + 3


def test_calibration_round_with_explicit_insights(orchestrator, transcription) -> None:
    orchestrator.process_voice_session(USER, "s1", transcription)
    update = orchestrator.record_calibration_round(
        USER,
        1,
        2,
        feedback="Too formal",
        insights=[CalibrationInsight(type="tone_adjustment", insight="Loosen up", confidence=0.7)],
    )
    [rule] = update.record.profile.learned_rules
    assert (rule.type, rule.content) == ("adjust", "Loosen up")
    assert update.record.calibration_rounds[0].feedback_text == "Too formal"


@pytest.mark.parametrize("rating", [0, 6, True, 3.5])
def test_invalid_rating_is_rejected(orchestrator, transcription, rating) -> None:
    orchestrator.process_voice_session(USER, "s1", transcription)
    with pytest.raises(CalibrationRoundError):
        orchestrator.record_calibration_round(USER, 1, rating)
    with pytest.raises(ValueError):
        orchestrator.record_calibration_round(USER, 1, rating)


def test_round_cannot_be_completed_twice(orchestrator, transcription) -> None:
    orchestrator.process_voice_session(USER, "s1", transcription)
    orchestrator.record_calibration_round(USER, 1, 4)
    with pytest.raises(CalibrationRoundError):
        orchestrator.record_calibration_round(USER, 1, 5)


def test_calibration_requires_profile(orchestrator) -> None:
    with pytest.raises(ProfileNotFoundError):
        orchestrator.record_calibration_round(USER, 1, 4)


def test_follow_up_responses_merge_at_supplementary_weight(
    orchestrator, transcription, analyst
) -> None:
    orchestrator.process_voice_session(USER, "s1", transcription)
    analyst.payload = {"tonal_attributes": {"warmth": 0.0}}

    update = orchestrator.merge_follow_up_responses(
        USER, ["I mostly talk about compilers and the people who build them.", ""]
    )
    assert update is not None
    assert update.event == "follow_up_responses"
    assert update.record.profile.tonal_attributes.warmth == pytest.approx(0.9 * 0.8)
    assert update.record.voice_sessions_analyzed == 1


def test_follow_up_responses_need_a_spoken_profile(orchestrator, store, essay) -> None:
    orchestrator.add_writing_sample(USER, essay)
    assert orchestrator.merge_follow_up_responses(USER, ["some answer"]) is None


def test_follow_up_responses_need_an_analyst(store, transcription) -> None:
    orchestrator = VoiceProfileOrchestrator(store)
    orchestrator.process_voice_session(USER, "s1", transcription)
    assert orchestrator.merge_follow_up_responses(USER, ["An answer long enough to analyze, surely."]) is None


def test_follow_up_responses_skip_merge_when_analyst_returns_nothing(
    orchestrator, store, transcription, analyst
) -> None:
    """A failed analysis must not replace observed patterns with neutral defaults."""
    orchestrator.process_voice_session(USER, "s1", transcription)
    before = store.load(USER)
    analyst.payload = None

    update = orchestrator.merge_follow_up_responses(
        USER, ["I mostly talk about compilers and the people who build them, every week."]
    )
    assert update is None
    after = store.load(USER)
    assert after.profile.spoken_patterns.rhythm.pace_variation == "dynamic"
    assert after == before


def test_follow_up_responses_too_short_are_not_merged(
    orchestrator, store, transcription, analyst
) -> None:
    orchestrator.process_voice_session(USER, "s1", transcription)
    calls = len(analyst.calls)

    assert orchestrator.merge_follow_up_responses(USER, ["Compilers.", "Parsers."]) is None
    assert len(analyst.calls) == calls
    assert store.load(USER).profile.spoken_patterns.rhythm.pace_variation == "dynamic"


def test_referents_and_rules_edits(orchestrator, store) -> None:
    update = orchestrator.set_referents(USER, 70, [("r1", "Ann"), ("r2", "Bo")])
    assert update.event == "referent_or_rule_edit"
    influences = update.record.profile.referent_influences
    assert influences.user_weight == 70
    assert [r.weight for r in influences.referents] == [15, 15]

    update = orchestrator.add_rule(USER, "avoid", "corporate jargon", 0.9)
    assert update.record.profile.learned_rules[0].content == "corporate jargon"
    # one rule plus the confidence bonus
    assert update.new_score == 3
    assert store.load(USER).profile.referent_influences == influences


def test_empty_rule_is_rejected(orchestrator) -> None:
    with pytest.raises(ValueError):
        orchestrator.add_rule(USER, "prefer", "   ")
