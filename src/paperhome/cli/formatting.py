"""
CLI output formatting utilities.

This module provides helpers for consistent terminal output using the
Rich library.
"""

from typing import Optional, Sequence

from rich.console import Console
from rich.table import Table

from paperhome.core.models import Candidate, ScoredCandidate

# Global console instance
console = Console()


def print_header(title: str, subtitle: Optional[str] = None) -> None:
    """Print a formatted header."""
    console.print()
    console.rule(f"[bold blue]{title}[/bold blue]")
    if subtitle:
        console.print(f"[dim]{subtitle}[/dim]")
    console.print()


def print_success(message: str) -> None:
    console.print(f"[green]✓[/green] {message}")


def print_error(message: str) -> None:
    console.print(f"[red]✗[/red] {message}", style="red")


def print_warning(message: str) -> None:
    console.print(f"[yellow]⚠[/yellow] {message}")


def print_info(message: str) -> None:
    console.print(f"[blue]ℹ[/blue] {message}")


def score_style(score: int) -> str:
    """Color for a match score."""
    if score >= 80:
        return "bold green"
    if score >= 50:
        return "yellow"
    return "dim"


def _join_scope(scope: Sequence[str], limit: int = 3) -> str:
    shown = ", ".join(scope[:limit])
    if len(scope) > limit:
        shown += f" (+{len(scope) - limit})"
    return shown or "-"


def print_results_table(
    title: str, candidates: Sequence[ScoredCandidate], limit: Optional[int] = None
) -> None:
    """Print ranked journals as a table."""
    if not candidates:
        print_info(f"{title}: no journals found")
        return

    shown = candidates[:limit] if limit else candidates

    table = Table(title=title)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Journal", style="cyan")
    table.add_column("Rank")
    table.add_column("Publisher", style="dim")
    table.add_column("Scope")
    table.add_column("Match", justify="right")

    for position, journal in enumerate(shown, 1):
        table.add_row(
            str(position),
            journal.name,
            journal.rank,
            journal.publisher,
            _join_scope(journal.scope),
            f"[{score_style(journal.match_score)}]{journal.match_score}%[/]",
        )

    console.print(table)
    if len(shown) < len(candidates):
        console.print(f"[dim]... {len(candidates) - len(shown)} more[/dim]")


def print_directory_table(title: str, journals: Sequence[Candidate]) -> None:
    """Print raw directory entries as a table."""
    table = Table(title=title)
    table.add_column("ID", style="dim")
    table.add_column("Journal", style="cyan")
    table.add_column("Rank")
    table.add_column("Field", style="magenta")
    table.add_column("Scope")

    for journal in journals:
        table.add_row(
            journal.identifier,
            journal.name,
            journal.rank,
            journal.broad_field,
            _join_scope(journal.scope),
        )

    console.print(table)
