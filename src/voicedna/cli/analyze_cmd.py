"""voicedna analyze — merge a transcribed voice session into a profile."""

from __future__ import annotations

from pathlib import Path

import click

from voicedna.cli.common import build_orchestrator, settings_option, show_update, user_option
from voicedna.models.transcript import TranscriptionResult
from voicedna.utils.io import read_json
from voicedna.utils.progress import log, log_error


@click.command()
@click.argument("transcription", type=click.Path(exists=True, dir_okay=False))
@user_option
@click.option("--session", "session_id", default=None, help="Session id (defaults to file name)")
@click.option("--no-llm", is_flag=True, help="Skip the Claude linguistic analysis")
@settings_option
def analyze_cmd(
    transcription: str,
    user_id: str,
    session_id: str | None,
    no_llm: bool,
    settings: str,
) -> None:
    """Analyze a transcription JSON file as a new voice session."""
    path = Path(transcription)
    try:
        result = TranscriptionResult(**read_json(path))
    except Exception as e:
        log_error(f"Invalid transcription file {path}: {e}")
        raise SystemExit(1)

    orchestrator = build_orchestrator(settings, use_llm=not no_llm)
    try:
        update = orchestrator.process_voice_session(user_id, session_id or path.stem, result)
    except Exception as e:
        log_error(f"Session analysis failed: {e}")
        raise SystemExit(1)

    show_update(update)
    for moment in update.enthusiasm.peak_moments if update.enthusiasm else ():
        log(f"[cyan]{moment.use_as}[/cyan] @ {moment.timestamp:.1f}s — {moment.text[:80]}", style="")
