"""Root CLI group for Voice DNA."""

from __future__ import annotations

import click

from voicedna import __version__


@click.group()
@click.version_option(version=__version__, prog_name="voicedna")
def cli() -> None:
    """Voice DNA — build and calibrate per-user voice profiles."""


# Import and register subcommands
from voicedna.cli.analyze_cmd import analyze_cmd  # noqa: E402
from voicedna.cli.sample_cmd import sample_cmd  # noqa: E402
from voicedna.cli.calibrate_cmd import calibrate_cmd  # noqa: E402
from voicedna.cli.rebuild_cmd import rebuild_cmd, recalculate_cmd  # noqa: E402
from voicedna.cli.status_cmd import status_cmd  # noqa: E402
from voicedna.cli.edit_cmd import referents_cmd, rules_cmd  # noqa: E402

cli.add_command(analyze_cmd, "analyze")
cli.add_command(sample_cmd, "sample")
cli.add_command(calibrate_cmd, "calibrate")
cli.add_command(rebuild_cmd, "rebuild")
cli.add_command(recalculate_cmd, "recalculate")
cli.add_command(status_cmd, "status")
cli.add_command(rules_cmd, "rules")
cli.add_command(referents_cmd, "referents")
