"""Merge newly analyzed patterns into an existing profile.

Scalars blend as an exponential moving average, lists as a bounded union
with the newest entries first, categories take the newest value, and
"ever observed" traits are OR-ed so a single miss never clears them.
"""

from __future__ import annotations

from voicedna.models.profile import (
    Enthusiasm,
    LinguisticAnalysis,
    Rhetoric,
    Rhythm,
    SpokenPatterns,
    TonalAttributes,
    Vocabulary,
)
from voicedna.utils.progress import log_step

FREQUENT_WORDS_CAP = 10
UNIQUE_PHRASES_CAP = 5
FILLER_WORDS_CAP = 5
TOPICS_CAP = 8
EMPHASIS_PATTERNS_CAP = 5
SUGGESTED_TOPICS_CAP = 5

DEFAULT_WEIGHT = 0.3


def check_weight(weight: float) -> float:
    if not 0.0 < weight <= 1.0:
        raise ValueError(f"Merge weight must be in (0, 1], got {weight}")
    return weight


def merge_lists(existing: list[str], new: list[str], cap: int) -> list[str]:
    """Ordered union, new entries first, truncated to ``cap``."""
    return list(dict.fromkeys([*new, *existing]))[:cap]


def weighted_average(existing: float, new: float, weight: float) -> float:
    value = existing * (1 - weight) + new * weight
    # keep float rounding from stepping outside the inputs' range
    return min(max(value, min(existing, new)), max(existing, new))


def bound_spoken_patterns(patterns: SpokenPatterns) -> SpokenPatterns:
    """Truncate every list field to its cap (used before a cold-start merge)."""
    vocab = patterns.vocabulary
    enthusiasm = patterns.enthusiasm
    return patterns.model_copy(update={
        "vocabulary": vocab.model_copy(update={
            "frequent_words": merge_lists([], vocab.frequent_words, FREQUENT_WORDS_CAP),
            "unique_phrases": merge_lists([], vocab.unique_phrases, UNIQUE_PHRASES_CAP),
            "filler_words": merge_lists([], vocab.filler_words, FILLER_WORDS_CAP),
        }),
        "enthusiasm": enthusiasm.model_copy(update={
            "topics_that_excite": merge_lists([], enthusiasm.topics_that_excite, TOPICS_CAP),
            "emphasis_patterns": merge_lists(
                [], enthusiasm.emphasis_patterns, EMPHASIS_PATTERNS_CAP
            ),
        }),
    })


def merge_spoken_patterns(
    existing: SpokenPatterns | None,
    new: SpokenPatterns,
    weight: float = DEFAULT_WEIGHT,
) -> SpokenPatterns:
    check_weight(weight)
    if existing is None:
        return new

    return SpokenPatterns(
        vocabulary=Vocabulary(
            frequent_words=merge_lists(
                existing.vocabulary.frequent_words,
                new.vocabulary.frequent_words,
                FREQUENT_WORDS_CAP,
            ),
            unique_phrases=merge_lists(
                existing.vocabulary.unique_phrases,
                new.vocabulary.unique_phrases,
                UNIQUE_PHRASES_CAP,
            ),
            filler_words=merge_lists(
                existing.vocabulary.filler_words,
                new.vocabulary.filler_words,
                FILLER_WORDS_CAP,
            ),
            preserve_fillers=(
                new.vocabulary.preserve_fillers or existing.vocabulary.preserve_fillers
            ),
        ),
        rhythm=Rhythm(
            avg_sentence_length=new.rhythm.avg_sentence_length,
            pace_variation=new.rhythm.pace_variation,
            pause_patterns=new.rhythm.pause_patterns,
        ),
        rhetoric=Rhetoric(
            uses_questions=new.rhetoric.uses_questions or existing.rhetoric.uses_questions,
            uses_analogies=new.rhetoric.uses_analogies or existing.rhetoric.uses_analogies,
            storytelling_style=new.rhetoric.storytelling_style,
        ),
        enthusiasm=Enthusiasm(
            topics_that_excite=merge_lists(
                existing.enthusiasm.topics_that_excite,
                new.enthusiasm.topics_that_excite,
                TOPICS_CAP,
            ),
            emphasis_patterns=merge_lists(
                existing.enthusiasm.emphasis_patterns,
                new.enthusiasm.emphasis_patterns,
                EMPHASIS_PATTERNS_CAP,
            ),
            energy_baseline=weighted_average(
                existing.enthusiasm.energy_baseline,
                new.enthusiasm.energy_baseline,
                weight,
            ),
        ),
    )


def merge_tonal_attributes(
    existing: TonalAttributes | None,
    new: TonalAttributes,
    weight: float = DEFAULT_WEIGHT,
) -> TonalAttributes:
    check_weight(weight)
    if existing is None:
        return new

    return TonalAttributes(
        warmth=weighted_average(existing.warmth, new.warmth, weight),
        authority=weighted_average(existing.authority, new.authority, weight),
        humor=weighted_average(existing.humor, new.humor, weight),
        directness=weighted_average(existing.directness, new.directness, weight),
        empathy=weighted_average(existing.empathy, new.empathy, weight),
    )


def merge_analysis(
    existing: LinguisticAnalysis | None,
    new: LinguisticAnalysis,
    weight: float = DEFAULT_WEIGHT,
) -> LinguisticAnalysis:
    """Merge two whole analyses (spoken patterns, tone and suggested topics)."""
    check_weight(weight)
    if existing is None:
        return new

    merged = LinguisticAnalysis(
        spoken_patterns=merge_spoken_patterns(
            existing.spoken_patterns, new.spoken_patterns, weight
        ),
        tonal_attributes=merge_tonal_attributes(
            existing.tonal_attributes, new.tonal_attributes, weight
        ),
        suggested_topics=merge_lists(
            existing.suggested_topics, new.suggested_topics, SUGGESTED_TOPICS_CAP
        ),
    )
    log_step("Merge", f"Blended new analysis at weight {weight:.2f}")
    return merged
