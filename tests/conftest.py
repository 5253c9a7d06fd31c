"""Shared fixtures for Voice DNA tests."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Callable

import pytest

from voicedna.models.config import Settings
from voicedna.models.transcript import TranscriptionResult, WordTimestamp
from voicedna.pipeline.orchestrator import VoiceProfileOrchestrator
from voicedna.pipeline.store import JsonProfileStore

RICH_PAYLOAD = {
    "spoken_patterns": {
        "vocabulary": {
            "frequent_words": ["compilers", "parsers", "grammar", "tokens", "types"],
            "unique_phrases": ["here's the thing", "under the hood", "let's dig in"],
            "filler_words": ["so", "like"],
            "preserve_fillers": True,
        },
        "rhythm": {
            "avg_sentence_length": "short",
            "pace_variation": "dynamic",
            "pause_patterns": "rare",
        },
        "rhetoric": {
            "uses_questions": True,
            "uses_analogies": True,
            "storytelling_style": "anecdotal",
        },
        "enthusiasm": {
            "topics_that_excite": ["compilers", "language design", "tooling"],
            "emphasis_patterns": ["really"],
            "energy_baseline": 0.8,
        },
    },
    "tonal_attributes": {
        "warmth": 0.9,
        "authority": 0.9,
        "humor": 0.8,
        "directness": 0.9,
        "empathy": 0.2,
    },
    "suggested_topics": ["compilers", "parsing"],
}

TRANSCRIPT = (
    "So here's the thing about compilers. They are really absolutely amazing "
    "pieces of software, and honestly I think everyone should write one."
)


class FakeAnalyst:
    """Analyst stub returning a fixed payload and recording its inputs."""

    def __init__(self, payload: Mapping | None = None) -> None:
        self.payload = payload
        self.calls: list[str] = []

    def analyze(self, text: str) -> Mapping | None:
        self.calls.append(text)
        return self.payload


@pytest.fixture
def make_words() -> Callable[..., list[WordTimestamp]]:
    """Build word timestamps: one word every ``step`` seconds lasting ``length``."""

    def _make(
        tokens: list[str],
        *,
        start: float = 0.0,
        step: float = 1.0,
        length: float = 0.5,
    ) -> list[WordTimestamp]:
        return [
            WordTimestamp(
                word=token,
                start=start + i * step,
                end=start + i * step + length,
                confidence=0.95,
            )
            for i, token in enumerate(tokens)
        ]

    return _make


@pytest.fixture
def calm_and_excited_words(make_words) -> list[WordTimestamp]:
    """Ten slow words followed by fifteen fast, emphatic ones."""
    calm = make_words(["we", "talked", "about", "the", "plan"] * 2)
    excited = make_words(
        ["compilers", "really", "absolutely", "amazing", "things"] * 3,
        start=12.0,
        step=0.2,
        length=0.18,
    )
    return calm + excited


@pytest.fixture
def transcription(calm_and_excited_words) -> TranscriptionResult:
    return TranscriptionResult(
        transcript=TRANSCRIPT,
        duration_seconds=15.0,
        words=calm_and_excited_words,
    )


@pytest.fixture
def store(tmp_path) -> JsonProfileStore:
    return JsonProfileStore(tmp_path / "store")


@pytest.fixture
def settings() -> Settings:
    return Settings()


@pytest.fixture
def analyst() -> FakeAnalyst:
    return FakeAnalyst(RICH_PAYLOAD)


@pytest.fixture
def orchestrator(store, analyst, settings) -> VoiceProfileOrchestrator:
    return VoiceProfileOrchestrator(store, analyst=analyst, settings=settings)


@pytest.fixture
def essay() -> str:
    """A structured writing sample comfortably above the minimum length."""
    return (
        "Have you ever wondered why some tools feel effortless?\n\n"
        "First, they respect your time. Second, they fail loudly. "
        "Third, they explain themselves. For example, a good compiler "
        "points at the exact token that confused it and suggests a fix.\n\n"
        "I remember the first parser I wrote. It was slow and clumsy, "
        "but it taught me that clear error messages matter more than speed. "
        "We have all been there, staring at a cryptic message at midnight.\n\n"
        "So what should you do next? Pick one tool you use every day and "
        "write down the moment it last confused you."
    )


@pytest.fixture
def analyst_factory() -> type[FakeAnalyst]:
    return FakeAnalyst


@pytest.fixture
def rich_payload() -> dict:
    return RICH_PAYLOAD
