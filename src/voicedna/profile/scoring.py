"""Calibration score — how well the profile is grounded in real evidence.

The score is derived state: a pure function of the usage counters, the
richness of the merged profile and the average calibration rating. It is
recomputed after every profile event and by ``recalculate_all``, and is
never edited by hand.
"""

from __future__ import annotations

from typing import Literal, Sequence

from voicedna.models.profile import VoiceProfile
from voicedna.models.record import ProfileRecord

CalibrationLevel = Literal["low", "medium", "high"]

# (minimum count, points); tiers are additive
SESSION_TIERS = [(1, 12), (2, 9), (3, 7), (5, 5), (10, 2)]
SAMPLE_TIERS = [(1, 8), (2, 4), (3, 3)]

ROUND_BASE_POINTS = 6
ROUNDS_CAP = 25
DEFAULT_RATING = 3.0

RICHNESS_POINTS = 2
TONAL_DEVIATION_THRESHOLD = 1.0

WRITTEN_PRESENT_POINTS = 5
BLAND_STRUCTURE = "linear"
BLAND_OPENING = "context"
BLAND_CLOSING = "summary"

RULES_COUNT_CAP = 3
RULES_CONFIDENCE_THRESHOLD = 0.7
RULES_CONFIDENCE_BONUS = 2

QUALITY_BONUS = 2

HIGH_BAND = 70
GATED_SCORE = 69
MEDIUM_BAND = 30


def _tier_points(count: int, tiers: list[tuple[int, int]]) -> int:
    return sum(points for minimum, points in tiers if count >= minimum)


def average_rating(ratings: Sequence[float]) -> float:
    """Mean of 1–5 ratings; the neutral 3 when there are none."""
    if not ratings:
        return DEFAULT_RATING
    return sum(ratings) / len(ratings)


def rating_bonus(avg_rating: float) -> int:
    if avg_rating >= 4:
        return 2
    if avg_rating >= 3:
        return 1
    return 0


def spoken_richness_points(profile: VoiceProfile) -> int:
    points = 0
    sp = profile.spoken_patterns
    if sp is not None:
        if len(sp.vocabulary.frequent_words) >= 5:
            points += RICHNESS_POINTS
        if len(sp.vocabulary.unique_phrases) >= 3:
            points += RICHNESS_POINTS
        if len(sp.enthusiasm.topics_that_excite) >= 3:
            points += RICHNESS_POINTS
        if sp.rhetoric.uses_questions or sp.rhetoric.uses_analogies:
            points += RICHNESS_POINTS

    ta = profile.tonal_attributes
    if ta is not None:
        deviation = sum(abs(v - 0.5) for v in ta.as_tuple())
        if deviation > TONAL_DEVIATION_THRESHOLD:
            points += RICHNESS_POINTS
    return points


def written_points(profile: VoiceProfile) -> int:
    wp = profile.written_patterns
    if wp is None:
        return 0
    points = WRITTEN_PRESENT_POINTS
    if wp.structure_preference != BLAND_STRUCTURE:
        points += 1
    if wp.opening_style != BLAND_OPENING:
        points += 1
    if wp.closing_style != BLAND_CLOSING:
        points += 1
    return points


def rules_points(profile: VoiceProfile) -> int:
    rules = profile.learned_rules
    if not rules:
        return 0
    points = min(len(rules), RULES_COUNT_CAP)
    if sum(r.confidence for r in rules) / len(rules) > RULES_CONFIDENCE_THRESHOLD:
        points += RULES_CONFIDENCE_BONUS
    return points


def meets_evidence_baseline(
    voice_sessions: int, writing_samples: int, calibration_rounds: int
) -> bool:
    """Whether enough real evidence exists to enter the high band."""
    return voice_sessions >= 3 and (writing_samples >= 1 or calibration_rounds >= 2)


def calculate_calibration_score(
    voice_sessions_analyzed: int = 0,
    writing_samples_analyzed: int = 0,
    calibration_rounds_completed: int = 0,
    profile: VoiceProfile | None = None,
    average_calibration_rating: float | None = None,
) -> int:
    """Compute the 0–100 calibration score.

    Profile richness alone cannot reach the high band: a raw score of 70 or
    more without the evidence baseline (3 sessions plus a writing sample or
    two calibration rounds) is capped at 69.
    """
    sessions = max(voice_sessions_analyzed or 0, 0)
    samples = max(writing_samples_analyzed or 0, 0)
    rounds = max(calibration_rounds_completed or 0, 0)
    profile = profile or VoiceProfile()
    avg = DEFAULT_RATING if average_calibration_rating is None else average_calibration_rating

    score = _tier_points(sessions, SESSION_TIERS)
    score += _tier_points(samples, SAMPLE_TIERS)
    score += min(rounds * (ROUND_BASE_POINTS + rating_bonus(avg)), ROUNDS_CAP)
    score += spoken_richness_points(profile)
    score += written_points(profile)
    score += rules_points(profile)
    if sessions >= 2 and samples >= 1:
        score += QUALITY_BONUS

    if score >= HIGH_BAND and not meets_evidence_baseline(sessions, samples, rounds):
        score = GATED_SCORE

    return max(0, min(score, 100))


def calibration_level(score: int) -> CalibrationLevel:
    if score >= HIGH_BAND:
        return "high"
    if score >= MEDIUM_BAND:
        return "medium"
    return "low"


def score_record(record: ProfileRecord) -> int:
    """Score a stored record from its counters, profile and round ratings."""
    return calculate_calibration_score(
        voice_sessions_analyzed=record.voice_sessions_analyzed,
        writing_samples_analyzed=record.writing_samples_analyzed,
        calibration_rounds_completed=record.calibration_rounds_completed,
        profile=record.profile,
        average_calibration_rating=average_rating(record.completed_ratings()),
    )
