"""voicedna rebuild / recalculate — re-derive profiles and scores."""

from __future__ import annotations

import click
from rich.console import Console
from rich.table import Table

from voicedna.cli.common import build_orchestrator, open_store, settings_option, show_update, user_option
from voicedna.models.config import load_settings
from voicedna.utils.progress import log, log_error

console = Console()


@click.command()
@user_option
@settings_option
def rebuild_cmd(user_id: str, settings: str) -> None:
    """Rebuild written patterns and counters from stored samples."""
    orchestrator = build_orchestrator(settings)
    try:
        update = orchestrator.full_rebuild(user_id)
    except Exception as e:
        log_error(str(e))
        raise SystemExit(1)
    show_update(update)


@click.command()
@settings_option
def recalculate_cmd(settings: str) -> None:
    """Recompute every stored calibration score."""
    from voicedna.pipeline.recalculate import recalculate_all

    changes = recalculate_all(open_store(load_settings(settings)))
    if not changes:
        log("All calibration scores are up to date.", style="")
        return

    table = Table(title="Calibration Score Changes")
    table.add_column("User", style="bold")
    table.add_column("Old", justify="right")
    table.add_column("New", justify="right")
    table.add_column("Change", justify="right")
    for c in changes:
        color = "green" if c.change > 0 else "red"
        table.add_row(c.user_id, str(c.old_score), str(c.new_score),
                      f"[{color}]{c.change:+d}[/{color}]")
    console.print(table)
