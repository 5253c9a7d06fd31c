"""Enthusiasm detection from word-level timestamps.

Scores fixed windows of words on three signals taken purely from timing
metadata and the words themselves:

- pace (words per second above a conversational baseline)
- emphasis words ("really", "absolutely", ...)
- near-adjacent repetition of content words

High-energy windows are merged into segments, and the strongest segments
are surfaced as peak moments (hooks, quotes, key points, conclusions).
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Sequence

from voicedna.models.enthusiasm import (
    EnergySegment,
    EnthusiasmAnalysis,
    Indicator,
    PeakMoment,
    PeakUse,
)
from voicedna.models.transcript import WordTimestamp
from voicedna.utils.progress import log_step

EMPHASIS_WORDS = frozenset({
    "really",
    "absolutely",
    "incredible",
    "amazing",
    "crucial",
    "essential",
    "love",
    "hate",
    "brilliant",
    "terrible",
    "fantastic",
    "definitely",
    "exactly",
    "totally",
    "completely",
    "actually",
    "seriously",
    "literally",
    "honestly",
    "huge",
    "massive",
    "critical",
    "vital",
    "important",
    "fascinating",
    "exciting",
    "passionate",
})

EXCITED_PACE = 3.0  # words per second
THOUGHTFUL_PACE = 2.0
WINDOW_SIZE = 5  # words
MIN_WINDOW_WORDS = 2
MIN_SEGMENT_SECONDS = 2.0
MERGE_GAP_SECONDS = 2.0
BASE_THRESHOLD = 0.3
REPETITION_LOOKAHEAD = 3
DENSE_SPEECH_RATIO = 0.7
HOOK_SCORE = 0.7
MAX_PEAK_MOMENTS = 5
MAX_TOPICS = 5

PACE_WEIGHT = 0.4
PARTIAL_PACE_WEIGHT = 0.2
EMPHASIS_CAP = 0.35
EMPHASIS_SCALE = 3.5
REPETITION_CAP = 0.25
REPETITION_SCALE = 2.5

_NON_WORD = re.compile(r"[^\w]")
_TOPIC_SPLIT = re.compile(r"[\s,.\-!?]+")


def _clean(word: str) -> str:
    return _NON_WORD.sub("", word.lower())


@dataclass
class _Window:
    """Working representation of a span of words during analysis."""

    words: list[WordTimestamp] = field(default_factory=list)

    @property
    def start_time(self) -> float:
        return self.words[0].start

    @property
    def end_time(self) -> float:
        return self.words[-1].end

    @property
    def text(self) -> str:
        return " ".join(w.word for w in self.words)

    @property
    def words_per_second(self) -> float:
        return calculate_pace(self.words)

    @property
    def emphasis_count(self) -> int:
        return count_emphasis_words(self.words)

    @property
    def repetition_count(self) -> int:
        return count_repetitions(self.words)


def calculate_pace(words: Sequence[WordTimestamp]) -> float:
    """Words per second over the span of ``words`` (0 for < 2 words)."""
    if len(words) < 2:
        return 0.0
    duration = words[-1].end - words[0].start
    if duration <= 0:
        return 0.0
    return len(words) / duration


def count_emphasis_words(words: Sequence[WordTimestamp]) -> int:
    return sum(1 for w in words if _clean(w.word) in EMPHASIS_WORDS)


def count_repetitions(words: Sequence[WordTimestamp]) -> int:
    """Count content words that recur within the next few words.

    Each word counts at most once; words of two characters or fewer are
    ignored ("a", "to", "it").
    """
    cleaned = [_clean(w.word) for w in words]
    count = 0
    for i, current in enumerate(cleaned):
        if len(current) <= 2:
            continue
        lookahead = cleaned[i + 1:i + 1 + REPETITION_LOOKAHEAD]
        if current in lookahead:
            count += 1
    return count


def _energy_score(window: _Window) -> float:
    n = len(window.words)
    if n == 0:
        return 0.0

    score = 0.0
    wps = window.words_per_second
    if wps > EXCITED_PACE:
        score += PACE_WEIGHT
    elif wps > THOUGHTFUL_PACE:
        score += PARTIAL_PACE_WEIGHT * (
            (wps - THOUGHTFUL_PACE) / (EXCITED_PACE - THOUGHTFUL_PACE)
        )

    score += min(window.emphasis_count / n * EMPHASIS_SCALE, EMPHASIS_CAP)
    score += min(window.repetition_count / n * REPETITION_SCALE, REPETITION_CAP)

    return min(score, 1.0)


def _indicators(window: _Window) -> tuple[Indicator, ...]:
    indicators: list[Indicator] = []

    if window.words_per_second > EXCITED_PACE:
        indicators.append("pace_increase")

    # Share of the span actually covered by spoken words
    span = window.end_time - window.start_time
    if window.words and span > 0:
        avg_word_duration = sum(w.duration for w in window.words) / len(window.words)
        if avg_word_duration * len(window.words) / span > DENSE_SPEECH_RATIO:
            indicators.append("dense_speech")

    if window.emphasis_count > 0:
        indicators.append("emphasis_words")
    if window.repetition_count > 0:
        indicators.append("repetition")

    return tuple(indicators)


def _split_windows(words: Sequence[WordTimestamp]) -> list[_Window]:
    windows = []
    for i in range(0, len(words), WINDOW_SIZE):
        chunk = list(words[i:i + WINDOW_SIZE])
        if len(chunk) < MIN_WINDOW_WORDS:
            continue
        windows.append(_Window(words=chunk))
    return windows


def _merge_high_energy(windows: list[_Window], threshold: float) -> list[_Window]:
    """Merge consecutive above-threshold windows separated by short gaps."""
    high = [w for w in windows if _energy_score(w) >= threshold]
    if not high:
        return []

    merged: list[_Window] = [_Window(words=list(high[0].words))]
    for window in high[1:]:
        current = merged[-1]
        if window.start_time - current.end_time < MERGE_GAP_SECONDS:
            current.words.extend(window.words)
        else:
            merged.append(_Window(words=list(window.words)))

    return [w for w in merged if w.end_time - w.start_time >= MIN_SEGMENT_SECONDS]


def _peak_reason(indicators: tuple[Indicator, ...]) -> str:
    if "pace_increase" in indicators:
        return "Fast-paced, excited delivery"
    if "emphasis_words" in indicators:
        return "Strong emphasis and conviction"
    if "repetition" in indicators:
        return "Repeated emphasis on key points"
    return "High energy detected"


def _identify_peak_moments(segments: list[EnergySegment]) -> list[PeakMoment]:
    ranked = sorted(segments, key=lambda s: -s.energy_score)[:MAX_PEAK_MOMENTS]

    moments = []
    for index, segment in enumerate(ranked):
        use_as: PeakUse = "key_point"
        if index == 0 and segment.energy_score > HOOK_SCORE:
            use_as = "hook"
        elif "?" in segment.text:
            use_as = "quote"
        elif len(segment.indicators) >= 2:
            use_as = "conclusion"

        moments.append(PeakMoment(
            timestamp=segment.start_time,
            text=segment.text,
            reason=_peak_reason(segment.indicators),
            use_as=use_as,
        ))
    return moments


def detect_enthusiasm(words: Sequence[WordTimestamp] | None) -> EnthusiasmAnalysis:
    """Analyze word timestamps for high-energy segments and peak moments.

    Degenerate input (no words, a single word) yields an empty analysis
    rather than an error; callers treat no segments as "not enough signal".
    """
    if not words or len(words) < MIN_WINDOW_WORDS:
        return EnthusiasmAnalysis()

    windows = _split_windows(words)
    scores = [_energy_score(w) for w in windows]
    overall = min(sum(scores) / len(scores), 1.0) if scores else 0.0

    threshold = max(BASE_THRESHOLD, overall)
    merged = _merge_high_energy(windows, threshold)

    segments = [
        EnergySegment(
            start_time=w.start_time,
            end_time=w.end_time,
            text=w.text,
            words_per_second=w.words_per_second,
            emphasis_count=w.emphasis_count,
            repetition_count=w.repetition_count,
            energy_score=_energy_score(w),
            indicators=_indicators(w),
        )
        for w in merged
    ]
    peaks = _identify_peak_moments(segments)

    log_step(
        "Enthusiasm",
        f"{len(windows)} windows, overall energy {overall:.2f}, "
        f"{len(segments)} segments, {len(peaks)} peak moments",
    )

    return EnthusiasmAnalysis(
        overall_energy=overall,
        segments=tuple(segments),
        peak_moments=tuple(peaks),
    )


def extract_enthusiastic_topics(analysis: EnthusiasmAnalysis) -> list[str]:
    """Pull candidate topic words out of the peak moments."""
    topics: list[str] = []
    for moment in analysis.peak_moments:
        words = [
            w for w in _TOPIC_SPLIT.split(moment.text.lower())
            if len(w) > 4 and w not in EMPHASIS_WORDS
        ]
        for word in words[:2]:
            if word not in topics:
                topics.append(word)
    return topics[:MAX_TOPICS]
