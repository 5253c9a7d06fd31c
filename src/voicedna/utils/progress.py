"""Console logging helpers using Rich.

Everything goes to stderr so command output (tables, JSON) stays clean on
stdout.
"""

from __future__ import annotations

from datetime import datetime

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

console = Console(stderr=True)


def _stamp() -> str:
    return f"[dim]\\[{datetime.now():%H:%M:%S}][/dim]"


def log(message: str, *, style: str = "bold") -> None:
    """Log a timestamped message."""
    console.print(f"{_stamp()} {message}", style=style, highlight=False)


def log_step(step: str, message: str) -> None:
    """Log one analysis or profile-update step."""
    console.print(f"{_stamp()} [bold magenta]{step}[/bold magenta] {message}", highlight=False)


def log_success(message: str) -> None:
    log(f"[green]✓[/green] {message}", style="")


def log_warning(message: str) -> None:
    log(f"[yellow]⚠[/yellow] {message}", style="")


def log_error(message: str) -> None:
    log(f"[red]✗[/red] {message}", style="")


def log_score(user_id: str, old_score: int, new_score: int) -> None:
    """Log a calibration score update, colored by direction."""
    delta = new_score - old_score
    color = "green" if delta > 0 else "red" if delta < 0 else "dim"
    log_step(
        "Score",
        f"{user_id}: {old_score} → [bold]{new_score}[/bold] [{color}]({delta:+d})[/{color}]",
    )


def show_summary(title: str, details: dict) -> None:
    """Show a key/value panel, e.g. after a profile update."""
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column(style="bold")
    table.add_column()

    for key, value in details.items():
        table.add_row(key, str(value))

    console.print(Panel(table, title=f"[bold]{title}[/bold]", border_style="magenta"))
