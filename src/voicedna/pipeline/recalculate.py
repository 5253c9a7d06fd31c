"""Recompute every stored calibration score after a scoring change."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone

from voicedna.pipeline.store import ProfileStore
from voicedna.profile.scoring import score_record
from voicedna.utils.progress import log_step, log_success


@dataclass(frozen=True)
class ScoreChange:
    user_id: str
    old_score: int
    new_score: int

    @property
    def change(self) -> int:
        return self.new_score - self.old_score


def recalculate_all(store: ProfileStore) -> list[ScoreChange]:
    """Re-count analyzed samples and rescore every profile in ``store``.

    Only records whose counter or score actually changed are written, so a
    second run over the same data writes nothing and returns no changes.
    """
    user_ids = store.list_user_ids()
    changes: list[ScoreChange] = []
    written = 0

    for user_id in user_ids:
        record = store.load(user_id)
        if record is None:
            continue

        old_score = record.profile.calibration_score
        analyzed = len(record.analyzed_samples())
        dirty = analyzed != record.writing_samples_analyzed
        record.writing_samples_analyzed = analyzed

        new_score = score_record(record)
        if new_score != old_score:
            changes.append(ScoreChange(user_id, old_score, new_score))
            record.profile = record.profile.model_copy(update={"calibration_score": new_score})
            dirty = True

        if dirty:
            record.updated_at = datetime.now(timezone.utc)
            store.save(record)
            written += 1

    log_step("Recalculate", f"{len(user_ids)} profiles checked, {written} updated")
    if changes:
        log_success(f"{len(changes)} calibration scores changed")
    return changes
