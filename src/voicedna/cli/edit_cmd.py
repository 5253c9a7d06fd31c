"""voicedna rules / referents — manual profile edits."""

from __future__ import annotations

import click

from voicedna.cli.common import build_orchestrator, settings_option, show_update, user_option
from voicedna.utils.progress import log_error


@click.group()
def rules_cmd() -> None:
    """Manage learned rules."""


@rules_cmd.command("add")
@click.argument("content")
@click.option("--type", "rule_type", default="prefer",
              type=click.Choice(["prefer", "avoid", "adjust"]), help="Rule type")
@click.option("--confidence", default=0.5, type=click.FloatRange(0.0, 1.0), help="Rule confidence")
@user_option
@settings_option
def add_rule(content: str, rule_type: str, confidence: float, user_id: str, settings: str) -> None:
    """Add (or reinforce) a learned rule."""
    orchestrator = build_orchestrator(settings)
    try:
        update = orchestrator.add_rule(user_id, rule_type, content, confidence)
    except Exception as e:
        log_error(str(e))
        raise SystemExit(1)
    show_update(update)


@click.group()
def referents_cmd() -> None:
    """Manage referent influences."""


def _parse_referent(value: str) -> tuple[str, str]:
    ref_id, sep, name = value.partition(":")
    if not sep or not ref_id.strip() or not name.strip():
        raise click.BadParameter(f"Expected ID:NAME, got {value!r}")
    return ref_id.strip(), name.strip()


@referents_cmd.command("set")
@click.option("--user-weight", default=80, type=int, help="User's own weight (50-100)")
@click.option("--referent", "-r", "referents", multiple=True, help="Referent as ID:NAME (up to 3)")
@user_option
@settings_option
def set_referents(user_weight: int, referents: tuple[str, ...], user_id: str, settings: str) -> None:
    """Replace the referent blend."""
    try:
        pairs = [_parse_referent(r) for r in referents]
    except click.BadParameter as e:
        log_error(str(e))
        raise SystemExit(1)

    orchestrator = build_orchestrator(settings)
    try:
        update = orchestrator.set_referents(user_id, user_weight, pairs)
    except Exception as e:
        log_error(str(e))
        raise SystemExit(1)
    show_update(update)
