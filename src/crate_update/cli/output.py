"""Output formatting helpers for the crate-update CLI.

Plain line-oriented messages (queued names, per-dependency results) go
through ``click.echo`` so they stay stable for scripts. Tables use Rich.
"""

from __future__ import annotations

import json
from typing import Any

import click
from rich.console import Console
from rich.table import Table
from rich.text import Text

from crate_update.core.applier import ApplyOutcome, ApplySummary
from crate_update.core.resolution import ResolutionReport, UpdateCandidate

console = Console()


def print_queued(candidates: list[UpdateCandidate]) -> None:
    """Print which dependencies are about to be updated."""
    if not candidates:
        click.echo("All dependencies are up to date.")
        return
    names = ", ".join(c.name for c in candidates)
    click.echo(f"Queued for update: {names}")


def print_failures(report: ResolutionReport) -> None:
    """Print a one-line summary of failed lookups to stderr."""
    if not report.failures:
        return
    names = ", ".join(f.name for f in report.failures)
    click.echo(
        f"Could not resolve {len(report.failures)} dependencies: {names}",
        err=True,
    )


def outcome_line(outcome: ApplyOutcome) -> str:
    """``"<name> update to <version> success|failed"``"""
    candidate = outcome.candidate
    status = "success" if outcome.success else "failed"
    return f"{candidate.name} update to {candidate.resolved_version} {status}"


def print_apply_summary(summary: ApplySummary) -> None:
    """Print one result line per attempted update."""
    for outcome in summary.outcomes:
        click.echo(outcome_line(outcome))
        if outcome.launch_error is not None:
            click.echo(f"  {outcome.launch_error.cause}", err=True)


def print_check_table(report: ResolutionReport) -> None:
    """Print outdated dependencies as a table, followed by a summary line."""
    if report.candidates:
        table = Table(title="Outdated Dependencies", show_header=True, header_style="bold")
        table.add_column("Crate", style="bold")
        table.add_column("Declared")
        table.add_column("Latest", style="green")
        table.add_column("Features", style="dim")
        for c in report.candidates:
            table.add_row(
                c.name,
                c.declared_constraint or Text("-", style="dim"),
                c.resolved_version,
                c.features_arg or "-",
            )
        console.print(table)
    else:
        console.print("[green]All dependencies are up to date.[/green]")

    parts = [f"[bold]{report.total}[/bold] dependencies checked"]
    if report.candidates:
        parts.append(f"[yellow]{len(report.candidates)} outdated[/yellow]")
    parts.append(f"{len(report.unchanged)} up to date")
    if report.failures:
        parts.append(f"[red]{len(report.failures)} failed[/red]")
    console.print(" | ".join(parts))


def print_json(data: Any) -> None:
    """Print data as formatted JSON to stdout."""
    click.echo(json.dumps(data, indent=2, default=str))
