"""voicedna sample — add or remove writing samples."""

from __future__ import annotations

from pathlib import Path

import click

from voicedna.cli.common import build_orchestrator, settings_option, show_update, user_option
from voicedna.utils.progress import log_error


@click.group()
def sample_cmd() -> None:
    """Manage writing samples."""


@sample_cmd.command("add")
@click.argument("file", required=False, type=click.Path(exists=True, dir_okay=False))
@click.option("--text", default=None, help="Sample text (instead of a file)")
@click.option("--url", default=None, help="Source URL of the sample")
@user_option
@settings_option
def add(
    file: str | None,
    text: str | None,
    url: str | None,
    user_id: str,
    settings: str,
) -> None:
    """Add a writing sample from FILE or --text."""
    if (file is None) == (text is None):
        log_error("Provide exactly one of FILE or --text")
        raise SystemExit(1)

    file_name = None
    source_type = "url" if url else "paste"
    if file is not None:
        text = Path(file).read_text(encoding="utf-8")
        file_name = Path(file).name
        source_type = "file"

    orchestrator = build_orchestrator(settings)
    try:
        update = orchestrator.add_writing_sample(
            user_id,
            text,
            source_type=source_type,
            source_url=url,
            file_name=file_name,
        )
    except Exception as e:
        log_error(str(e))
        raise SystemExit(1)
    show_update(update)


@sample_cmd.command("remove")
@click.argument("sample_id")
@user_option
@settings_option
def remove(sample_id: str, user_id: str, settings: str) -> None:
    """Remove a writing sample and re-derive written patterns."""
    orchestrator = build_orchestrator(settings)
    try:
        update = orchestrator.remove_writing_sample(user_id, sample_id)
    except Exception as e:
        log_error(str(e))
        raise SystemExit(1)
    show_update(update)
