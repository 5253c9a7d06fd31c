"""Tests for the linguistic analysis sanitizer."""

from __future__ import annotations

import math

import pytest

from voicedna.analysis.sanitize import clamp_unit, default_analysis, sanitize_analysis


@pytest.mark.parametrize("candidate", [None, [], "not json", 42, 3.5, True, object()])
def test_non_mapping_input_yields_default(candidate) -> None:
    assert sanitize_analysis(candidate) == default_analysis()


def test_default_analysis_values() -> None:
    """Neutral defaults: scalars at 0.5 except humor at 0.3."""
    analysis = default_analysis()
    tonal = analysis.tonal_attributes
    assert (tonal.warmth, tonal.authority, tonal.humor, tonal.directness, tonal.empathy) == (
        0.5, 0.5, 0.3, 0.5, 0.5,
    )
    sp = analysis.spoken_patterns
    assert sp.rhythm.avg_sentence_length == "medium"
    assert sp.rhythm.pace_variation == "consistent"
    assert sp.rhythm.pause_patterns == "moderate"
    assert sp.rhetoric.storytelling_style == "mixed"
    assert sp.vocabulary.preserve_fillers is False
    assert sp.vocabulary.frequent_words == []
    assert sp.enthusiasm.energy_baseline == 0.5


def test_well_formed_payload_passes_through(rich_payload) -> None:
    analysis = sanitize_analysis(rich_payload)
    assert analysis.tonal_attributes.warmth == 0.9
    assert analysis.spoken_patterns.rhythm.pace_variation == "dynamic"
    assert analysis.spoken_patterns.rhetoric.uses_analogies is True
    assert analysis.spoken_patterns.vocabulary.unique_phrases[0] == "here's the thing"
    assert analysis.suggested_topics == ["compilers", "parsing"]


def test_numbers_are_clamped_to_unit_range() -> None:
    analysis = sanitize_analysis({
        "tonal_attributes": {
            "warmth": 70,
            "authority": -3,
            "humor": 10**400,
            "directness": float("inf"),
            "empathy": 0.25,
        },
        "spoken_patterns": {"enthusiasm": {"energy_baseline": 1.5}},
    })
    tonal = analysis.tonal_attributes
    assert tonal.warmth == 1.0
    assert tonal.authority == 0.0
    assert tonal.humor == 1.0
    assert tonal.directness == 1.0
    assert tonal.empathy == 0.25
    assert analysis.spoken_patterns.enthusiasm.energy_baseline == 1.0


@pytest.mark.parametrize("value", ["0.7", None, True, False, [0.7], {"v": 1}, float("nan")])
def test_non_numeric_scalars_use_default(value) -> None:
    analysis = sanitize_analysis({"tonal_attributes": {"warmth": value, "humor": value}})
    assert analysis.tonal_attributes.warmth == 0.5
    assert analysis.tonal_attributes.humor == 0.3


def test_clamp_unit_never_returns_nan() -> None:
    assert not math.isnan(clamp_unit(float("nan"), 0.5))


def test_invalid_enums_fall_back() -> None:
    analysis = sanitize_analysis({
        "spoken_patterns": {
            "rhythm": {
                "avg_sentence_length": "enormous",
                "pace_variation": "DYNAMIC",
                "pause_patterns": 3,
            },
            "rhetoric": {"storytelling_style": ["personal"]},
        },
    })
    sp = analysis.spoken_patterns
    assert sp.rhythm.avg_sentence_length == "medium"
    assert sp.rhythm.pace_variation == "consistent"
    assert sp.rhythm.pause_patterns == "moderate"
    assert sp.rhetoric.storytelling_style == "mixed"


def test_lists_are_filtered_to_strings() -> None:
    analysis = sanitize_analysis({
        "spoken_patterns": {
            "vocabulary": {
                "frequent_words": ["parser", 3, None, "lexer", {"x": 1}],
                "unique_phrases": "not a list",
            },
        },
        "suggested_topics": ("a", 1, "b"),
    })
    vocab = analysis.spoken_patterns.vocabulary
    assert vocab.frequent_words == ["parser", "lexer"]
    assert vocab.unique_phrases == []
    assert analysis.suggested_topics == ["a", "b"]


def test_booleans_must_be_explicit() -> None:
    analysis = sanitize_analysis({
        "spoken_patterns": {
            "vocabulary": {"preserve_fillers": "yes"},
            "rhetoric": {"uses_questions": 1, "uses_analogies": True},
        },
    })
    sp = analysis.spoken_patterns
    assert sp.vocabulary.preserve_fillers is False
    assert sp.rhetoric.uses_questions is False
    assert sp.rhetoric.uses_analogies is True


def test_malformed_sections_are_replaced() -> None:
    analysis = sanitize_analysis({
        "spoken_patterns": ["vocabulary"],
        "tonal_attributes": "warm",
    })
    assert analysis == default_analysis()
