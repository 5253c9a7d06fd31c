"""Tests for recomputing every stored score."""

from __future__ import annotations

from voicedna.pipeline.recalculate import ScoreChange, recalculate_all
from voicedna.pipeline.store import JsonProfileStore


class CountingStore(JsonProfileStore):
    def __init__(self, root) -> None:
        super().__init__(root)
        self.saved: list[str] = []

    def save(self, record) -> None:
        self.saved.append(record.user_id)
        super().save(record)


def test_recalculate_fixes_stale_scores(orchestrator, store, transcription, essay) -> None:
    orchestrator.process_voice_session("ada", "s1", transcription)
    orchestrator.add_writing_sample("bob", essay)

    stale = store.load("ada")
    stale.profile = stale.profile.model_copy(update={"calibration_score": 3})
    store.save(stale)

    counting = CountingStore(store.root)
    changes = recalculate_all(counting)
    assert changes == [ScoreChange("ada", 3, 22)]
    assert changes[0].change == 19
    assert counting.saved == ["ada"]
    assert store.load("ada").profile.calibration_score == 22


def test_recalculate_recounts_analyzed_samples(orchestrator, store, essay) -> None:
    orchestrator.add_writing_sample("bob", essay)
    record = store.load("bob")
    record.writing_samples_analyzed = 4
    store.save(record)

    changes = recalculate_all(store)
    assert changes == []
    assert store.load("bob").writing_samples_analyzed == 1


def test_second_run_is_a_no_op(orchestrator, store, transcription) -> None:
    orchestrator.process_voice_session("ada", "s1", transcription)
    stale = store.load("ada")
    stale.profile = stale.profile.model_copy(update={"calibration_score": 90})
    store.save(stale)

    assert recalculate_all(store) != []

    counting = CountingStore(store.root)
    assert recalculate_all(counting) == []
    assert counting.saved == []


def test_empty_store(store) -> None:
    assert recalculate_all(store) == []
