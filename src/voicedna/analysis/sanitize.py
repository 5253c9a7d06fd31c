"""Sanitize untrusted linguistic analysis into a valid, bounded structure.

The analyst's JSON is never trusted past this boundary: every field is
type-checked, numbers are clamped to [0, 1], enums are checked against
their allowed values, and anything malformed falls back to the default.
This function never raises.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any

from voicedna.models.profile import (
    Enthusiasm,
    LinguisticAnalysis,
    Rhetoric,
    Rhythm,
    SpokenPatterns,
    TonalAttributes,
    Vocabulary,
)

SENTENCE_LENGTHS = ("short", "medium", "long")
PACE_VARIATIONS = ("consistent", "varied", "dynamic")
PAUSE_PATTERNS = ("frequent", "moderate", "rare")
STORYTELLING_STYLES = ("anecdotal", "hypothetical", "personal", "mixed")


def default_analysis() -> LinguisticAnalysis:
    """Neutral analysis used when the analyst fails or the text is too short."""
    return LinguisticAnalysis()


def clamp_unit(value: Any, default: float) -> float:
    """Clamp a number to [0, 1]; non-numbers (and bools) give ``default``."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return default
    if isinstance(value, float) and math.isnan(value):
        return default
    # Compare before converting: huge ints overflow float()
    if value <= 0:
        return 0.0
    if value >= 1:
        return 1.0
    return float(value)


def ensure_str_list(value: Any, default: list[str]) -> list[str]:
    if not isinstance(value, (list, tuple)):
        return list(default)
    return [v for v in value if isinstance(v, str)]


def ensure_enum(value: Any, allowed: tuple[str, ...], default: str) -> str:
    if isinstance(value, str) and value in allowed:
        return value
    return default


def ensure_bool(value: Any, default: bool) -> bool:
    return value if isinstance(value, bool) else default


def _section(data: Any, key: str) -> Mapping:
    if not isinstance(data, Mapping):
        return {}
    value = data.get(key)
    return value if isinstance(value, Mapping) else {}


def sanitize_spoken_patterns(data: Any) -> SpokenPatterns:
    d = SpokenPatterns()
    vocab = _section(data, "vocabulary")
    rhythm = _section(data, "rhythm")
    rhetoric = _section(data, "rhetoric")
    enthusiasm = _section(data, "enthusiasm")

    return SpokenPatterns(
        vocabulary=Vocabulary(
            frequent_words=ensure_str_list(
                vocab.get("frequent_words"), d.vocabulary.frequent_words
            ),
            unique_phrases=ensure_str_list(
                vocab.get("unique_phrases"), d.vocabulary.unique_phrases
            ),
            filler_words=ensure_str_list(
                vocab.get("filler_words"), d.vocabulary.filler_words
            ),
            preserve_fillers=ensure_bool(
                vocab.get("preserve_fillers"), d.vocabulary.preserve_fillers
            ),
        ),
        rhythm=Rhythm(
            avg_sentence_length=ensure_enum(
                rhythm.get("avg_sentence_length"),
                SENTENCE_LENGTHS,
                d.rhythm.avg_sentence_length,
            ),
            pace_variation=ensure_enum(
                rhythm.get("pace_variation"),
                PACE_VARIATIONS,
                d.rhythm.pace_variation,
            ),
            pause_patterns=ensure_enum(
                rhythm.get("pause_patterns"),
                PAUSE_PATTERNS,
                d.rhythm.pause_patterns,
            ),
        ),
        rhetoric=Rhetoric(
            uses_questions=ensure_bool(
                rhetoric.get("uses_questions"), d.rhetoric.uses_questions
            ),
            uses_analogies=ensure_bool(
                rhetoric.get("uses_analogies"), d.rhetoric.uses_analogies
            ),
            storytelling_style=ensure_enum(
                rhetoric.get("storytelling_style"),
                STORYTELLING_STYLES,
                d.rhetoric.storytelling_style,
            ),
        ),
        enthusiasm=Enthusiasm(
            topics_that_excite=ensure_str_list(
                enthusiasm.get("topics_that_excite"),
                d.enthusiasm.topics_that_excite,
            ),
            emphasis_patterns=ensure_str_list(
                enthusiasm.get("emphasis_patterns"),
                d.enthusiasm.emphasis_patterns,
            ),
            energy_baseline=clamp_unit(
                enthusiasm.get("energy_baseline"), d.enthusiasm.energy_baseline
            ),
        ),
    )


def sanitize_tonal_attributes(data: Any) -> TonalAttributes:
    d = TonalAttributes()
    if not isinstance(data, Mapping):
        return d
    return TonalAttributes(
        warmth=clamp_unit(data.get("warmth"), d.warmth),
        authority=clamp_unit(data.get("authority"), d.authority),
        humor=clamp_unit(data.get("humor"), d.humor),
        directness=clamp_unit(data.get("directness"), d.directness),
        empathy=clamp_unit(data.get("empathy"), d.empathy),
    )


def sanitize_analysis(candidate: Any) -> LinguisticAnalysis:
    """Turn an arbitrary analyst payload into a complete ``LinguisticAnalysis``."""
    if not isinstance(candidate, Mapping):
        return default_analysis()

    return LinguisticAnalysis(
        spoken_patterns=sanitize_spoken_patterns(candidate.get("spoken_patterns")),
        tonal_attributes=sanitize_tonal_attributes(candidate.get("tonal_attributes")),
        suggested_topics=ensure_str_list(candidate.get("suggested_topics"), []),
    )
