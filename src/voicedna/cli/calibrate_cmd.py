"""voicedna calibrate — record a calibration round rating."""

from __future__ import annotations

import click

from voicedna.cli.common import build_orchestrator, settings_option, show_update, user_option
from voicedna.utils.progress import log_error


@click.command()
@user_option
@click.option("--round", "round_number", required=True, type=click.IntRange(min=1),
              help="Calibration round number")
@click.option("--rating", required=True, type=click.IntRange(1, 5), help="Voice match, 1-5")
@click.option("--feedback", default=None, help="Free-text feedback on the generated sample")
@settings_option
def calibrate_cmd(
    user_id: str,
    round_number: int,
    rating: int,
    feedback: str | None,
    settings: str,
) -> None:
    """Complete a calibration round."""
    orchestrator = build_orchestrator(settings)
    try:
        update = orchestrator.record_calibration_round(
            user_id, round_number, rating, feedback=feedback
        )
    except Exception as e:
        log_error(str(e))
        raise SystemExit(1)
    show_update(update)
