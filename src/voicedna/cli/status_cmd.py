"""voicedna status — show stored voice profiles."""

from __future__ import annotations

import click
from rich.console import Console
from rich.table import Table

from voicedna.cli.common import open_store, settings_option
from voicedna.models.config import load_settings
from voicedna.models.record import ProfileRecord
from voicedna.profile.scoring import calibration_level
from voicedna.profile.summary import summarize_profile
from voicedna.utils.progress import log, log_error

console = Console()

LEVEL_COLORS = {"low": "red", "medium": "yellow", "high": "green"}


def _score_cell(score: int) -> str:
    color = LEVEL_COLORS[calibration_level(score)]
    return f"[{color}]{score}[/{color}]"


def _show_profile(record: ProfileRecord) -> None:
    profile = record.profile
    summary = summarize_profile(profile)

    console.print(f"\n[bold]{record.user_id}[/bold] — calibration "
                  f"{_score_cell(profile.calibration_score)} ({summary['calibration_level']})")
    if record.updated_at:
        console.print(f"[dim]Updated {record.updated_at:%Y-%m-%d %H:%M}[/dim]")
    console.print()

    table = Table(title="Voice Profile", show_lines=True)
    table.add_column("Part", style="bold")
    table.add_column("Details")

    table.add_row("Voice sessions", str(record.voice_sessions_analyzed))
    table.add_row(
        "Writing samples",
        f"{record.writing_samples_analyzed} analyzed"
        + "".join(f"\n[dim]{s.id}[/dim] {s.word_count} words" for s in record.writing_samples),
    )
    table.add_row("Calibration rounds", str(record.calibration_rounds_completed))
    if profile.tonal_attributes:
        ta = profile.tonal_attributes
        table.add_row(
            "Tone",
            f"warmth {ta.warmth:.2f}, authority {ta.authority:.2f}, humor {ta.humor:.2f}, "
            f"directness {ta.directness:.2f}, empathy {ta.empathy:.2f}",
        )
    if profile.written_patterns:
        wp = profile.written_patterns
        table.add_row(
            "Writing",
            f"{wp.structure_preference}, {wp.opening_style} opening, "
            f"{wp.closing_style} closing, formality {wp.formality:.2f}",
        )
    if profile.referent_influences and profile.referent_influences.referents:
        ri = profile.referent_influences
        table.add_row(
            "Referents",
            f"you {ri.user_weight}%, " + ", ".join(f"{r.name} {r.weight}%" for r in ri.referents),
        )
    if profile.learned_rules:
        table.add_row("Rules", "\n".join(
            f"{r.type}: {r.content} [dim]({r.confidence:.2f} ×{r.source_count})[/dim]"
            for r in profile.learned_rules
        ))
    table.add_row("Strengths", ", ".join(summary["strengths"]) or "—")
    table.add_row("Characteristics", ", ".join(summary["characteristics"]) or "—")
    console.print(table)


@click.command()
@click.option("--user", "-u", "user_id", default=None, help="Show one profile in detail")
@settings_option
def status_cmd(user_id: str | None, settings: str) -> None:
    """Show stored voice profiles."""
    store = open_store(load_settings(settings))

    if user_id:
        record = store.load(user_id)
        if record is None:
            log_error(f"No voice profile for user: {user_id}")
            raise SystemExit(1)
        _show_profile(record)
        return

    user_ids = store.list_user_ids()
    if not user_ids:
        log("No voice profiles yet.", style="")
        return

    table = Table(title="Voice Profiles")
    table.add_column("User", style="bold")
    table.add_column("Score", justify="right")
    table.add_column("Sessions", justify="right")
    table.add_column("Samples", justify="right")
    table.add_column("Rounds", justify="right")
    for uid in user_ids:
        record = store.load(uid)
        if record is None:
            continue
        table.add_row(
            uid,
            _score_cell(record.profile.calibration_score),
            str(record.voice_sessions_analyzed),
            str(record.writing_samples_analyzed),
            str(record.calibration_rounds_completed),
        )
    console.print(table)
