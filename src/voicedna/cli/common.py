"""Shared options and wiring for the CLI commands."""

from __future__ import annotations

from pathlib import Path

import click

from voicedna.models.config import DEFAULT_SETTINGS_FILE, Settings, load_settings
from voicedna.pipeline.orchestrator import ProfileUpdate, VoiceProfileOrchestrator
from voicedna.pipeline.store import JsonProfileStore
from voicedna.profile.scoring import calibration_level
from voicedna.utils.progress import show_summary

settings_option = click.option(
    "--settings", "-s",
    default=DEFAULT_SETTINGS_FILE,
    type=click.Path(dir_okay=False),
    help="Path to voicedna.yaml",
)

user_option = click.option(
    "--user", "-u",
    "user_id",
    required=True,
    help="User id of the profile",
)


def open_store(settings: Settings) -> JsonProfileStore:
    return JsonProfileStore(Path(settings.store_path))


def build_orchestrator(settings_path: str, *, use_llm: bool = False) -> VoiceProfileOrchestrator:
    """Orchestrator over the configured store, with the Claude analyst if asked."""
    settings = load_settings(settings_path)
    analyst = None
    if use_llm:
        from voicedna.analysis.linguistic import AnthropicAnalyst
        analyst = AnthropicAnalyst(settings.analysis)
    return VoiceProfileOrchestrator(open_store(settings), analyst=analyst, settings=settings)


def show_update(update: ProfileUpdate) -> None:
    record = update.record
    show_summary(f"Voice profile — {record.user_id}", {
        "Event": update.event,
        "Calibration score": f"{update.new_score} ({update.score_change:+d}, "
                             f"{calibration_level(update.new_score)})",
        "Voice sessions": record.voice_sessions_analyzed,
        "Writing samples": record.writing_samples_analyzed,
        "Calibration rounds": record.calibration_rounds_completed,
    })
