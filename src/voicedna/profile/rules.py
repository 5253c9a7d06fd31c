"""Learned rules and referent blending."""

from __future__ import annotations

from collections.abc import Sequence

from voicedna.models.calibration import CalibrationInsight
from voicedna.models.profile import (
    MAX_LEARNED_RULES,
    MAX_REFERENTS,
    MAX_USER_WEIGHT,
    MIN_USER_WEIGHT,
    LearnedRule,
    ReferentInfluence,
    ReferentInfluences,
    RuleType,
)

REINFORCEMENT_FACTOR = 0.2


def add_learned_rule(rules: Sequence[LearnedRule], rule: LearnedRule) -> list[LearnedRule]:
    """Add ``rule``, reinforcing an existing rule with the same type and content.

    A repeat raises confidence by a fifth of the new rule's confidence (capped
    at 1) and bumps the source count. New rules are appended and only the most
    recent ``MAX_LEARNED_RULES`` are kept.
    """
    updated = list(rules)
    for i, existing in enumerate(updated):
        if existing.type == rule.type and existing.content == rule.content:
            updated[i] = existing.model_copy(update={
                "confidence": min(1.0, existing.confidence + rule.confidence * REINFORCEMENT_FACTOR),
                "source_count": existing.source_count + 1,
            })
            return updated

    updated.append(rule)
    return updated[-MAX_LEARNED_RULES:]


def insights_to_rules(insights: Sequence[CalibrationInsight], rating: int) -> list[LearnedRule]:
    """Turn calibration insights into learned rules.

    Well-rated rounds (4+) confirm what the generator did, so their style,
    vocabulary and structure insights become ``prefer`` rules; everything
    else is something to ``adjust``.
    """
    rules = []
    for insight in insights:
        content = insight.insight.strip()
        if not content:
            continue
        rule_type: RuleType = "adjust"
        if rating >= 4 and insight.type != "tone_adjustment":
            rule_type = "prefer"
        rules.append(LearnedRule(type=rule_type, content=content, confidence=insight.confidence))
    return rules


def default_insights(rating: int, feedback: str | None = None) -> list[CalibrationInsight]:
    """Insights for a round when no analyst extracted any."""
    feedback = (feedback or "").strip()
    if rating >= 4 and not feedback:
        return [CalibrationInsight(
            type="style_preference",
            insight="Current voice style is well-calibrated",
            confidence=rating / 5,
        )]
    if not feedback:
        return [CalibrationInsight(
            type="tone_adjustment",
            insight=f"Voice match rated {rating}/5 - needs refinement",
            confidence=0.5,
        )]
    return [CalibrationInsight(type="tone_adjustment", insight=feedback[:200], confidence=0.6)]


def blend_referents(
    user_weight: int,
    referents: Sequence[tuple[str, str]],
) -> ReferentInfluences:
    """Split the non-user weight evenly across up to three referents.

    ``referents`` is a sequence of ``(id, name)`` pairs. The user weight is
    clamped to [50, 100]; integer remainders go to the first referents so
    the blend always totals exactly 100.
    """
    if len(referents) > MAX_REFERENTS:
        raise ValueError(f"At most {MAX_REFERENTS} referents can be blended, got {len(referents)}")

    user_weight = max(MIN_USER_WEIGHT, min(MAX_USER_WEIGHT, int(user_weight)))
    if not referents:
        return ReferentInfluences(user_weight=user_weight, referents=[])

    remaining = 100 - user_weight
    share, remainder = divmod(remaining, len(referents))
    influences = [
        ReferentInfluence(id=ref_id, name=name, weight=share + (1 if i < remainder else 0))
        for i, (ref_id, name) in enumerate(referents)
    ]
    return ReferentInfluences(user_weight=user_weight, referents=influences)
